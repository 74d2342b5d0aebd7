"""Stash-and-switch completion action for a selected branch.

Runs after the selector has released the terminal. Returns the process exit
status instead of exiting, so the CLI stays the only place that terminates.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from collections.abc import Callable
from pathlib import Path
from typing import TextIO

from .errors import ActionFailure, QueryFailure
from .git_branches import run_git_query
from .ui_theme import DEFAULT_THEME, UITheme, styled

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def worktree_has_unstaged_changes(porcelain: str) -> bool:
    """Return whether ``git status --porcelain=v1`` output lists a modified, unstaged file."""
    for line in porcelain.splitlines():
        if len(line) >= 2 and line[1] == "M":
            return True
    return False


def is_worktree_dirty(cwd: Path | None = None) -> bool:
    """Check for unstaged modifications; unknown status counts as clean."""
    try:
        status = run_git_query(["status", "--porcelain=v1"], cwd=cwd)
    except QueryFailure as exc:
        logger.debug("dirty check failed, assuming clean tree: %s", exc)
        return False
    return worktree_has_unstaged_changes(status)


def run_git_action(args: list[str], *, cwd: Path | None = None) -> None:
    """Run a side-effecting git command with inherited stdio.

    Raises ``ActionFailure`` when git cannot be started or exits non-zero.
    """
    command = ["git", *args]
    logger.info("running %s", " ".join(command))
    try:
        proc = subprocess.run(command, cwd=str(cwd) if cwd is not None else None, check=False)
    except OSError as exc:
        raise ActionFailure(command, None) from exc
    if proc.returncode != 0:
        raise ActionFailure(command, proc.returncode)


def parse_yes_no(answer: str, default: bool) -> bool:
    """Interpret a y/n answer; anything not clearly contrary keeps ``default``."""
    normalized = answer.strip().lower()
    if default:
        return not normalized.startswith("n")
    return normalized.startswith("y")


def confirm_stash(
    *,
    default: bool = True,
    prompt: Callable[[str], str] = input,
    out: TextIO | None = None,
    theme: UITheme = DEFAULT_THEME,
) -> bool | None:
    """Ask whether to stash before switching.

    Returns ``None`` when the prompt is interrupted or input is closed.
    """
    stream = out if out is not None else sys.stdout
    stream.write(styled(theme.message_warning, "\nYour working directory has uncommitted changes.\n", theme))
    stream.flush()
    choices = "(Y/n)" if default else "(y/N)"
    try:
        answer = prompt(styled(theme.message_prompt, f"Stash changes before switching? {choices}: ", theme))
    except (EOFError, KeyboardInterrupt):
        stream.write("\n")
        return None
    return parse_yes_no(answer, default)


def switch_branch(
    branch: str,
    *,
    cwd: Path | None = None,
    stash_default: bool = True,
    prompt: Callable[[str], str] = input,
    out: TextIO | None = None,
    err: TextIO | None = None,
    theme: UITheme = DEFAULT_THEME,
) -> int:
    """Stash (if needed and confirmed) then check out ``branch``.

    Returns ``EXIT_OK`` after a successful checkout or a cancelled prompt,
    and ``EXIT_FAILURE`` when the stash is declined or a git command fails.
    """
    stdout = out if out is not None else sys.stdout
    stderr = err if err is not None else sys.stderr

    if is_worktree_dirty(cwd):
        should_stash = confirm_stash(default=stash_default, prompt=prompt, out=stdout, theme=theme)
        if should_stash is None:
            logger.debug("stash prompt cancelled")
            return EXIT_OK
        if not should_stash:
            stderr.write(styled(theme.message_error, "\nBranch switch canceled due to uncommitted changes.\n", theme))
            return EXIT_FAILURE
        stdout.write(styled(theme.message_info, "\nStashing changes...\n", theme))
        stdout.flush()
        try:
            run_git_action(["stash"], cwd=cwd)
        except ActionFailure as exc:
            logger.warning("stash failed: %s", exc)
            stderr.write(styled(theme.message_error, "\nFailed to stash changes. Aborting branch switch.\n", theme))
            return EXIT_FAILURE

    stdout.write(styled(theme.message_success, f"\nSwitching to branch: {branch}...\n", theme))
    stdout.flush()
    try:
        run_git_action(["checkout", branch], cwd=cwd)
    except ActionFailure as exc:
        logger.warning("checkout failed: %s", exc)
        stderr.write(styled(theme.message_error, f"\nFailed to checkout branch: {branch}\n", theme))
        return EXIT_FAILURE
    return EXIT_OK
