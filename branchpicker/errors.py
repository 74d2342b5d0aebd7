"""Exception types shared by the selector and its git collaborators.

Query failures are absorbed by option sources; empty input and action
failures surface to the CLI, which reports them and exits non-zero.
"""

from __future__ import annotations


class BranchPickerError(Exception):
    """Base class for errors raised by branchpicker."""


class EmptyInputError(BranchPickerError):
    """Raised when a selector session is started without any options."""

    def __init__(self, message: str = "no selectable options") -> None:
        super().__init__(message)


class QueryFailure(BranchPickerError):
    """A list-producing git command could not be run or exited non-zero."""

    def __init__(self, command: list[str], detail: str = "") -> None:
        self.command = list(command)
        self.detail = detail
        text = " ".join(self.command)
        super().__init__(f"{text}: {detail}" if detail else text)


class ActionFailure(BranchPickerError):
    """A side-effecting git command failed after a selection was made."""

    def __init__(self, command: list[str], returncode: int | None) -> None:
        self.command = list(command)
        self.returncode = returncode
        status = "could not be started" if returncode is None else f"exited with status {returncode}"
        super().__init__(f"{' '.join(self.command)} {status}")


__all__ = [
    "BranchPickerError",
    "EmptyInputError",
    "QueryFailure",
    "ActionFailure",
]
