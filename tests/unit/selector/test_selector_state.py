"""Selector state-machine tests.

Covers derived filtering, cursor reset/wrap rules, and outcome finality.
These run without a terminal: the state object is the whole model.
"""

from __future__ import annotations

import unittest

from branchpicker.errors import EmptyInputError
from branchpicker.selector.state import SelectorState, SessionOutcome, filter_options


class FilterOptionsTests(unittest.TestCase):
    def test_empty_query_returns_every_option_in_order(self) -> None:
        options = ["zeta", "alpha", "Main", "alpha"]
        self.assertEqual(filter_options(options, ""), options)

    def test_matches_are_case_insensitive_substrings_in_original_order(self) -> None:
        options = ["Feature/A", "main", "hotfix-feat", "feature/b", "release"]
        matches = filter_options(options, "FEAT")
        self.assertEqual(matches, ["Feature/A", "hotfix-feat", "feature/b"])
        for option in options:
            self.assertEqual(option in matches, "feat" in option.lower())

    def test_duplicates_stay_separate_rows(self) -> None:
        self.assertEqual(filter_options(["dup", "dup", "other"], "du"), ["dup", "dup"])


class SelectorStateTests(unittest.TestCase):
    def test_create_rejects_empty_option_list(self) -> None:
        with self.assertRaises(EmptyInputError):
            SelectorState.create([])

    def test_initial_state_shows_all_options_with_cursor_at_top(self) -> None:
        state = SelectorState.create(["main", "dev"])
        self.assertEqual(state.query, "")
        self.assertEqual(state.matches, ["main", "dev"])
        self.assertEqual(state.selected, 0)
        self.assertIsNone(state.outcome)

    def test_query_edits_reset_cursor_and_refilter_from_full_list(self) -> None:
        state = SelectorState.create(["abc", "abd", "xyz", "abx"])
        state.move(1)
        state.move(1)
        self.assertEqual(state.selected, 2)

        self.assertTrue(state.append_char("a"))
        self.assertEqual(state.matches, ["abc", "abd", "abx"])
        self.assertEqual(state.selected, 0)

        state.move(1)
        state.append_char("z")
        self.assertEqual(state.matches, [])
        self.assertIsNone(state.selected)

        state.backspace()
        # Recomputed from the option list, not from the empty previous view.
        self.assertEqual(state.matches, ["abc", "abd", "abx"])
        self.assertEqual(state.selected, 0)

    def test_backspace_on_empty_query_is_noop(self) -> None:
        state = SelectorState.create(["a", "b"])
        state.move(1)
        self.assertFalse(state.backspace())
        self.assertEqual(state.selected, 1)

    def test_navigation_wraps_in_both_directions(self) -> None:
        state = SelectorState.create(["a", "b", "c"])
        state.move(-1)
        self.assertEqual(state.selected, 2)
        state.move(1)
        self.assertEqual(state.selected, 0)

    def test_navigation_is_noop_without_matches(self) -> None:
        state = SelectorState.create(["a"])
        state.append_char("z")
        self.assertFalse(state.move(1))
        self.assertFalse(state.move(-1))
        self.assertIsNone(state.selected)

    def test_single_match_navigation_stays_put(self) -> None:
        state = SelectorState.create(["only"])
        self.assertFalse(state.move(1))
        self.assertEqual(state.selected, 0)

    def test_confirm_with_empty_view_produces_no_outcome(self) -> None:
        state = SelectorState.create(["x"])
        state.append_char("z")
        state.append_char("z")
        self.assertFalse(state.confirm())
        self.assertIsNone(state.outcome)
        self.assertEqual(state.query, "zz")

    def test_confirm_fixes_selection_outcome(self) -> None:
        state = SelectorState.create(["main", "feature/a", "feature/b"])
        for ch in "fea":
            state.append_char(ch)
        state.move(1)
        self.assertTrue(state.confirm())
        self.assertEqual(state.outcome, SessionOutcome.selection("feature/b"))
        self.assertTrue(state.outcome.is_selection)

    def test_no_mutation_after_outcome_is_fixed(self) -> None:
        state = SelectorState.create(["a", "b"])
        state.cancel()
        snapshot = (state.query, list(state.matches), state.selected, state.outcome)

        self.assertFalse(state.append_char("a"))
        self.assertFalse(state.move(1))
        self.assertFalse(state.confirm())
        self.assertFalse(state.cancel())

        self.assertEqual((state.query, state.matches, state.selected, state.outcome), snapshot)
        self.assertTrue(state.outcome.is_cancellation)
        self.assertIsNone(state.outcome.value)


if __name__ == "__main__":
    unittest.main()
