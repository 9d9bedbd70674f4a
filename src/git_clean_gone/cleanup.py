"""Deletion of planned branches."""

import logging
from dataclasses import dataclass, field

from git_clean_gone.branches import DeletionPlan
from git_clean_gone.git import GitError, GitRepo

logger = logging.getLogger(__name__)


@dataclass
class DeletionResult:
    """Outcome of executing a deletion plan.

    In dry-run mode ``deleted`` holds the branches that would have been deleted.
    """

    deleted: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)
    dry_run: bool = False


def execute_plan(repo: GitRepo, plan: DeletionPlan, dry_run: bool = False) -> DeletionResult:
    """Force-delete every branch in the plan, or only report them in dry-run mode.

    A failed deletion is recorded and logged; the remaining branches are
    still processed.

    Args:
        repo: Repository to delete branches from
        plan: Branches to delete, in order
        dry_run: Report without deleting

    Returns:
        The deleted (or would-be deleted) and failed branches
    """
    result = DeletionResult(dry_run=dry_run)
    if dry_run:
        result.deleted.extend(plan.to_delete)
        return result

    for name in plan.to_delete:
        logger.debug("Deleting branch %s", name)
        try:
            repo.delete_branch_forced(name)
        except GitError as err:
            logger.warning("Could not delete %s: %s", name, err)
            result.failed[name] = str(err)
            continue
        result.deleted.append(name)
    return result
