"""Command-line front door for branchpicker.

``branchpicker`` offers recent git branches and switches to the chosen one.
``branchpicker pick OPTION...`` offers the given options and prints the
chosen one, so the picker composes with shell substitution.
"""

from __future__ import annotations

import argparse
import contextlib
import logging
import os
import sys
import termios
from collections.abc import Iterator, Sequence

from .config import load_settings, save_theme_name
from .errors import EmptyInputError
from .git_branches import list_branch_options
from .git_switch import EXIT_FAILURE, EXIT_OK, switch_branch
from .input import KeyReader
from .log import configure_logging
from .selector import BRANCH_SELECTOR_CONFIG, SelectorConfig, SelectorSession, SessionOutcome
from .terminal import TerminalController
from .ui_theme import UITheme, available_theme_names, resolve_theme

logger = logging.getLogger(__name__)

TTY_PATH = "/dev/tty"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _add_display_arguments(parser: argparse.ArgumentParser, *, keep_parent_values: bool = False) -> None:
    """Add display and logging flags.

    With ``keep_parent_values`` the flags default to ``SUPPRESS`` so a
    subcommand only overrides values that were actually given to it.
    """

    def default(value):
        return argparse.SUPPRESS if keep_parent_values else value

    parser.add_argument(
        "--theme",
        default=default(None),
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--save-theme", action="store_true", default=default(False), help="Remember --theme as the default.")
    parser.add_argument("--no-color", action="store_true", default=default(False), help="Disable color output.")
    parser.add_argument(
        "--min-width",
        type=_positive_int,
        default=default(None),
        help="Minimum inner width of the box.",
    )
    parser.add_argument("--log-file", default=default(None), help="Append logs to this file.")
    parser.add_argument("-v", "--verbose", action="store_true", default=default(False), help="Log at debug level.")


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser; without a subcommand it runs the branch switcher."""
    parser = argparse.ArgumentParser(
        prog="branchpicker",
        description="Pick a recently used git branch and switch to it. "
        "Use 'branchpicker pick OPTION...' to pick from arbitrary options.",
    )
    parser.add_argument("--limit", type=_positive_int, default=None, help="Maximum recent branches to offer.")
    parser.add_argument("--all", action="store_true", help="Offer every local branch instead of recent ones.")
    _add_display_arguments(parser)

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")
    pick = commands.add_parser(
        "pick",
        help="Pick one of OPTION... and print it on stdout.",
        description="Pick one of OPTION... and print it on stdout.",
    )
    pick.add_argument("options", nargs="*", metavar="OPTION", help="Options to choose from, in display order.")
    pick.add_argument("--title", default="Select an option:", help="Title shown above the filter.")
    pick.add_argument("--allow-space", action="store_true", help="Accept spaces in the filter text.")
    _add_display_arguments(pick, keep_parent_values=True)
    return parser


def _resolve_display(args: argparse.Namespace, saved_theme: str | None) -> UITheme:
    if args.save_theme and args.theme:
        save_theme_name(args.theme)
    no_color = args.no_color or bool(os.environ.get("NO_COLOR"))
    return resolve_theme(args.theme or saved_theme, no_color=no_color)


@contextlib.contextmanager
def _interactive_terminal() -> Iterator[tuple[TerminalController, KeyReader]]:
    """Yield terminal control bound to the user's tty.

    Uses stdin/stdout when both are terminals and ``/dev/tty`` otherwise, so
    stdout can be captured while the picker still draws on the screen.
    """
    if sys.stdin.isatty() and sys.stdout.isatty():
        stdin_fd = sys.stdin.fileno()
        yield TerminalController(stdin_fd, sys.stdout.fileno()), KeyReader(stdin_fd)
        return
    tty_fd = os.open(TTY_PATH, os.O_RDWR)
    try:
        yield TerminalController(tty_fd, tty_fd), KeyReader(tty_fd)
    finally:
        os.close(tty_fd)


def _run_session(
    options: Sequence[str],
    config: SelectorConfig,
    theme: UITheme,
    empty_message: str,
) -> SessionOutcome | int:
    """Run one session; return its outcome, or an exit status when none can start."""
    try:
        session = SelectorSession(options, config, theme=theme)
    except EmptyInputError:
        sys.stderr.write(f"{empty_message}\n")
        return EXIT_FAILURE

    with contextlib.ExitStack() as stack:
        try:
            terminal, reader = stack.enter_context(_interactive_terminal())
        except (OSError, termios.error) as exc:
            logger.debug("no interactive terminal: %s", exc)
            sys.stderr.write("branchpicker needs an interactive terminal.\n")
            return EXIT_FAILURE
        return session.run(terminal=terminal, key_reader=reader)


def run_branch_switch(args: argparse.Namespace) -> int:
    settings = load_settings()
    theme = _resolve_display(args, settings.theme)
    limit = args.limit if args.limit is not None else settings.recent_limit
    config = BRANCH_SELECTOR_CONFIG.with_options(
        min_width=args.min_width if args.min_width is not None else settings.min_width,
        allow_space=settings.allow_space,
    )

    branches = list_branch_options(limit, include_recent=not args.all)
    outcome = _run_session(branches, config, theme, "No branches found.")
    if isinstance(outcome, int):
        return outcome
    if outcome.is_cancellation:
        return EXIT_OK
    assert outcome.value is not None
    return switch_branch(outcome.value, stash_default=settings.stash_default, theme=theme)


def run_pick(args: argparse.Namespace) -> int:
    settings = load_settings()
    theme = _resolve_display(args, settings.theme)
    config = SelectorConfig(
        title=args.title,
        min_width=args.min_width if args.min_width is not None else settings.min_width,
        allow_space=args.allow_space or settings.allow_space,
    )

    outcome = _run_session(args.options, config, theme, "No options given.")
    if isinstance(outcome, int):
        return outcome
    if outcome.is_selection:
        sys.stdout.write(f"{outcome.value}\n")
        sys.stdout.flush()
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    """Parse CLI arguments, run the picker, and return the exit status."""
    parser = build_parser()
    args = parser.parse_args(list(sys.argv[1:] if argv is None else argv))
    action = run_pick if args.command == "pick" else run_branch_switch

    try:
        configure_logging(args.log_file, verbose=args.verbose)
    except OSError as exc:
        parser.error(f"cannot open log file: {exc}")

    try:
        return action(args)
    except KeyboardInterrupt:
        logger.debug("interrupted outside the selector session")
        return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
