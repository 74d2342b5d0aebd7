"""Branch option source backed by the git CLI.

Prefers branches recently checked out according to the reflog and falls
back to all local branches. Query failures never escape this module: they
are logged and degrade to an empty option list.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from .errors import QueryFailure

logger = logging.getLogger(__name__)

GIT_QUERY_TIMEOUT_SECONDS = 5.0
DEFAULT_RECENT_LIMIT = 17
CHECKOUT_MARKER = "checkout:"


def run_git_query(
    args: list[str],
    *,
    cwd: Path | None = None,
    timeout_seconds: float = GIT_QUERY_TIMEOUT_SECONDS,
) -> str:
    """Run a read-only git command and return its stdout.

    Raises ``QueryFailure`` when git cannot be started, times out, or exits
    non-zero.
    """
    command = ["git", *args]
    logger.info("running %s", " ".join(command))
    try:
        proc = subprocess.run(
            command,
            cwd=str(cwd) if cwd is not None else None,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout_seconds,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        raise QueryFailure(command, str(exc)) from exc
    if proc.returncode != 0:
        raise QueryFailure(command, (proc.stderr or "").strip() or f"exit status {proc.returncode}")
    return proc.stdout


def _split_lines(output: str) -> list[str]:
    return [line.strip() for line in output.splitlines() if line.strip()]


def current_branch(cwd: Path | None = None) -> str:
    """Return the checked-out branch name, or ``""`` on a detached HEAD."""
    return run_git_query(["branch", "--show-current"], cwd=cwd).strip()


def parse_reflog_checkouts(reflog: str, current: str, limit: int) -> list[str]:
    """Extract distinct checkout targets from ``%gs`` reflog subjects.

    Subjects look like ``checkout: moving from main to feature/a``; the last
    word is the target. Order is most-recent-first, ``current`` is skipped,
    and at most ``limit`` names are returned.
    """
    branches: list[str] = []
    seen: set[str] = set()
    for line in _split_lines(reflog):
        if CHECKOUT_MARKER not in line:
            continue
        target = line.split()[-1]
        if target == current or target in seen:
            continue
        seen.add(target)
        branches.append(target)
        if len(branches) >= limit:
            break
    return branches


def recent_branches(current: str, limit: int = DEFAULT_RECENT_LIMIT, cwd: Path | None = None) -> list[str]:
    reflog = run_git_query(["reflog", "show", "--pretty=format:%gs"], cwd=cwd)
    return parse_reflog_checkouts(reflog, current, max(1, limit))


def local_branches(current: str, cwd: Path | None = None) -> list[str]:
    output = run_git_query(["branch", "--format=%(refname:short)"], cwd=cwd)
    return [branch for branch in _split_lines(output) if branch != current]


def list_branch_options(
    limit: int = DEFAULT_RECENT_LIMIT,
    *,
    include_recent: bool = True,
    cwd: Path | None = None,
) -> list[str]:
    """Return branch names to offer, most relevant first.

    Recently checked-out branches win; when the reflog yields nothing (or
    ``include_recent`` is false) every local branch except the current one
    is offered instead. Any git failure yields an empty list.
    """
    try:
        current = current_branch(cwd)
    except QueryFailure as exc:
        logger.debug("branch query failed: %s", exc)
        return []

    if include_recent:
        try:
            recent = recent_branches(current, limit, cwd)
        except QueryFailure as exc:
            logger.debug("reflog query failed, falling back to local branches: %s", exc)
            recent = []
        if recent:
            return recent

    try:
        return local_branches(current, cwd)
    except QueryFailure as exc:
        logger.debug("local branch query failed: %s", exc)
        return []
