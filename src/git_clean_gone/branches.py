"""Branch listing parser and deletion planning.

Everything in this module works on the text printed by ``git branch -vv``,
for example::

    * main        abc1234 [origin/main] Latest commit
      feature-x   def5678 [origin/feature-x: gone] Old work
      feature-y   aaa0000 No tracking info
    + other-wt    bbb1111 (/path/to/worktree) [origin/other-wt] Checked out elsewhere
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

CURRENT_MARKER = "*"
WORKTREE_MARKER = "+"
GONE_MARKER = "gone"

# Pseudo entries git lists for a detached HEAD or an in-progress rebase
DETACHED_PREFIXES = ("(HEAD", "(no branch")

# Only the annotation directly after the commit id counts; the commit subject is opaque.
_TRACKING_RE = re.compile(r"\[(?P<annotation>[^\]]*)\]")


class TrackingStatus(Enum):
    """Remote-tracking state of a local branch."""

    TRACKED = "tracked"
    GONE = "gone"
    UNTRACKED = "untracked"


@dataclass(frozen=True)
class BranchRecord:
    """One parsed line of a branch listing."""

    name: str
    is_current: bool = False
    tracking_status: TrackingStatus = TrackingStatus.UNTRACKED
    upstream: Optional[str] = None
    in_worktree: bool = False

    @property
    def is_gone(self) -> bool:
        """Whether the upstream of this branch was deleted on the remote."""
        return self.tracking_status == TrackingStatus.GONE


@dataclass(frozen=True)
class DeletionPlan:
    """Branches selected for deletion, in listing order."""

    to_delete: tuple[str, ...] = ()
    records: tuple[BranchRecord, ...] = ()

    def __len__(self) -> int:
        return len(self.to_delete)

    def __bool__(self) -> bool:
        return bool(self.to_delete)


def _parse_tracking(annotation: str) -> tuple[str, TrackingStatus]:
    """Split ``origin/foo: ahead 1, gone`` into upstream and status."""
    upstream, _, state = annotation.partition(":")
    statuses = [part.strip() for part in state.split(",")]
    if GONE_MARKER in statuses:
        return upstream.strip(), TrackingStatus.GONE
    return upstream.strip(), TrackingStatus.TRACKED


def parse_branch_line(line: str) -> Optional[BranchRecord]:
    """Parse a single line of ``git branch -vv`` output.

    Args:
        line: One line of the listing

    Returns:
        The parsed record, or None if the line is blank or has no branch name
    """
    text = line.strip()
    if not text:
        return None

    is_current = text.startswith(CURRENT_MARKER)
    in_worktree = text.startswith(WORKTREE_MARKER)
    if is_current or in_worktree:
        text = text[1:].lstrip()

    # Detached HEAD and rebase states show up as "(HEAD detached at ...)"
    if text.startswith(DETACHED_PREFIXES):
        logger.debug("Skipping entry without a branch name: %s", line.strip())
        return None

    parts = text.split(None, 2)
    if not parts:
        logger.debug("Skipping line without a branch name: %s", line.strip())
        return None

    name = parts[0]
    detail = parts[2] if len(parts) > 2 else ""

    # Branches checked out elsewhere carry the worktree path before the annotation
    if in_worktree and detail.startswith("("):
        detail = detail.partition(")")[2].lstrip()

    upstream = None
    status = TrackingStatus.UNTRACKED
    match = _TRACKING_RE.match(detail)
    if match:
        upstream, status = _parse_tracking(match.group("annotation"))

    return BranchRecord(
        name=name,
        is_current=is_current,
        tracking_status=status,
        upstream=upstream,
        in_worktree=in_worktree,
    )


def parse_branch_listing(text: str) -> list[BranchRecord]:
    """Parse the full output of ``git branch -vv``.

    Lines that cannot be parsed are skipped, so this never raises on
    malformed input; it only returns fewer records.
    """
    records = []
    for line in text.splitlines():
        record = parse_branch_line(line)
        if record is not None:
            records.append(record)
    logger.debug("Parsed %d branch record(s)", len(records))
    return records


def select_branches(records: Iterable[BranchRecord]) -> DeletionPlan:
    """Select gone branches that are safe to delete.

    The current branch and branches checked out in another worktree are
    never selected, even when their upstream is gone.
    """
    records = tuple(records)
    to_delete = []
    for record in records:
        if not record.is_gone:
            continue
        if record.is_current:
            logger.debug("Keeping %s: it is the current branch", record.name)
            continue
        if record.in_worktree:
            logger.debug("Keeping %s: it is checked out in another worktree", record.name)
            continue
        to_delete.append(record.name)
    return DeletionPlan(to_delete=tuple(to_delete), records=records)


def plan_deletions(text: str) -> DeletionPlan:
    """Build the deletion plan for a ``git branch -vv`` listing."""
    return select_branches(parse_branch_listing(text))
