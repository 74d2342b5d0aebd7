"""Key dispatch tests for the selector.

Verifies the key table: charset filtering, redraw requests, and the
two terminal transitions (confirm and interrupt).
"""

from __future__ import annotations

import unittest

from branchpicker.selector.config import BRANCH_SELECTOR_CONFIG, SelectorConfig
from branchpicker.selector.keys import handle_selector_key
from branchpicker.selector.state import SelectorState, SessionOutcome


def _press(state: SelectorState, keys: list[str], config: SelectorConfig | None = None) -> list[tuple[bool, bool]]:
    cfg = config or SelectorConfig()
    return [handle_selector_key(key, state, cfg) for key in keys]


class SelectorKeyTests(unittest.TestCase):
    def test_branch_scenario_filters_moves_and_selects(self) -> None:
        state = SelectorState.create(["main", "feature/a", "feature/b"])

        _press(state, ["f", "e", "a"])
        self.assertEqual(state.matches, ["feature/a", "feature/b"])
        self.assertEqual(state.selected, 0)

        _press(state, ["DOWN"])
        self.assertEqual(state.selected, 1)

        results = _press(state, ["ENTER"])
        self.assertEqual(results, [(False, True)])
        self.assertEqual(state.outcome, SessionOutcome.selection("feature/b"))

    def test_enter_with_no_matches_is_absorbed_and_redraws(self) -> None:
        state = SelectorState.create(["x"])
        _press(state, ["z", "z"])
        self.assertEqual(state.matches, [])

        self.assertEqual(_press(state, ["ENTER"]), [(True, False)])
        self.assertIsNone(state.outcome)

    def test_ctrl_c_cancels_without_redraw(self) -> None:
        state = SelectorState.create(["a", "b"])
        _press(state, ["a"])
        self.assertEqual(_press(state, ["CTRL_C"]), [(False, True)])
        self.assertTrue(state.outcome.is_cancellation)

    def test_keys_after_outcome_are_ignored(self) -> None:
        state = SelectorState.create(["a", "b"])
        _press(state, ["ENTER"])
        self.assertEqual(_press(state, ["DOWN", "b", "BACKSPACE", "ENTER"]), [(False, True)] * 4)
        self.assertEqual(state.query, "")
        self.assertEqual(state.outcome, SessionOutcome.selection("a"))

    def test_disallowed_characters_do_not_reach_filter(self) -> None:
        state = SelectorState.create(["a b", "a/b"])
        results = _press(state, [" ", "/", ".", "é", "TAB", "LEFT", "MOUSE", "ESC"])
        self.assertEqual(state.query, "")
        # Unhandled keys still end with a redraw.
        self.assertTrue(all(result == (True, False) for result in results))

    def test_hyphen_underscore_and_digits_are_accepted(self) -> None:
        state = SelectorState.create(["fix-1_a"])
        _press(state, ["x", "-", "1", "_"])
        self.assertEqual(state.query, "x-1_")
        self.assertEqual(state.matches, ["fix-1_a"])

    def test_allow_space_extends_charset(self) -> None:
        state = SelectorState.create(["hello world", "helloworld"])
        _press(state, ["o", " ", "w"], SelectorConfig(allow_space=True))
        self.assertEqual(state.matches, ["hello world"])

    def test_branch_config_accepts_slash_and_dot(self) -> None:
        state = SelectorState.create(["feature/a", "release-1.2", "main"])
        _press(state, ["e", "/"], BRANCH_SELECTOR_CONFIG)
        self.assertEqual(state.matches, ["feature/a"])
        _press(state, ["BACKSPACE", "BACKSPACE", "1", ".", "2"], BRANCH_SELECTOR_CONFIG)
        self.assertEqual(state.matches, ["release-1.2"])

    def test_backspace_resets_cursor(self) -> None:
        state = SelectorState.create(["aa", "ab", "ac"])
        _press(state, ["a", "DOWN", "DOWN"])
        self.assertEqual(state.selected, 2)
        _press(state, ["BACKSPACE"])
        self.assertEqual(state.selected, 0)
        self.assertEqual(state.matches, ["aa", "ab", "ac"])

    def test_up_wraps_from_top(self) -> None:
        state = SelectorState.create(["a", "b", "c"])
        _press(state, ["UP"])
        self.assertEqual(state.selected, 2)
        _press(state, ["DOWN"])
        self.assertEqual(state.selected, 0)


class SelectorConfigTests(unittest.TestCase):
    def test_box_width_uses_longest_option_plus_padding(self) -> None:
        config = SelectorConfig(min_width=20)
        self.assertEqual(config.box_width(["a" * 50, "b"]), 64)

    def test_box_width_is_floored_at_min_width(self) -> None:
        self.assertEqual(SelectorConfig().box_width(["short"]), 60)

    def test_with_options_returns_modified_copy(self) -> None:
        base = SelectorConfig()
        changed = base.with_options(allow_space=True, title="Pick")
        self.assertFalse(base.allow_space)
        self.assertTrue(changed.allow_space)
        self.assertEqual(changed.title, "Pick")
        self.assertIn(" ", changed.filter_charset)
        self.assertNotIn(" ", base.filter_charset)


if __name__ == "__main__":
    unittest.main()
