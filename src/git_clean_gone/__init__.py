"""Clean up local git branches whose upstream was deleted on the remote.

Features:
- Fetch and prune all remotes before deciding anything
- Parse `git branch -vv` and find branches marked as gone
- Never touch the current branch or a branch checked out in another worktree
- Dry-run mode that only reports what would be deleted
"""

__version__ = "0.1.0"
