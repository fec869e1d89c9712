import unittest

from relnote.config import CommitCategoryConfig, CommitMatcherConfig
from relnote.releasenote import category_for, matches


class TestMatches(unittest.TestCase):

    def test_match_cases(self) -> None:
        text = "Add hello endpoint\napp/hello\n- change-category/new-feature"
        cases = [
            (CommitMatcherConfig(), False),
            (CommitMatcherConfig(contains=("app/hello",)), True),
            (CommitMatcherConfig(contains=("app/world",)), False),
            (CommitMatcherConfig(contains=("APP/HELLO",)), False),
            (CommitMatcherConfig(prefixes=("Add ",)), True),
            (CommitMatcherConfig(prefixes=("app/hello",)), False),
            (CommitMatcherConfig(suffixes=("new-feature",)), True),
            (CommitMatcherConfig(suffixes=("Add hello endpoint",)), False),
            (CommitMatcherConfig(contains=("nope",), suffixes=("new-feature",)), True),
            (CommitMatcherConfig(contains=("nope",), prefixes=("nope",), suffixes=("nope",)), False),
        ]
        for rule, expected in cases:
            with self.subTest(rule=rule):
                self.assertEqual(matches(text, rule), expected)

    def test_no_pattern_syntax(self) -> None:
        rule = CommitMatcherConfig(contains=("fix.*",))
        self.assertFalse(matches("fix the bug", rule))
        self.assertTrue(matches("revert fix.* rename", rule))

    def test_empty_text(self) -> None:
        self.assertFalse(matches("", CommitMatcherConfig(contains=("a",))))
        self.assertTrue(matches("", CommitMatcherConfig(prefixes=("",))))


class TestCategoryFor(unittest.TestCase):

    def setUp(self) -> None:
        self.categories = (
            CommitCategoryConfig(id="breaking", title="Breaking", contains=("breaking",)),
            CommitCategoryConfig(id="feature", title="Features", contains=("feature", "breaking")),
            CommitCategoryConfig(id="other", title="Other"),
        )

    def test_first_matching_category_wins(self) -> None:
        self.assertEqual(category_for("a breaking feature", self.categories), "breaking")
        self.assertEqual(category_for("a feature", self.categories), "feature")

    def test_catch_all(self) -> None:
        self.assertEqual(category_for("chore: bump deps", self.categories), "other")

    def test_catch_all_only_reached_in_order(self) -> None:
        categories = (
            CommitCategoryConfig(id="other", title="Other"),
            CommitCategoryConfig(id="feature", title="Features", contains=("feature",)),
        )
        self.assertEqual(category_for("a feature", categories), "other")

    def test_first_of_several_catch_alls_wins(self) -> None:
        categories = (
            CommitCategoryConfig(id="first", title="First"),
            CommitCategoryConfig(id="second", title="Second"),
        )
        self.assertEqual(category_for("anything", categories), "first")

    def test_no_match(self) -> None:
        self.assertEqual(category_for("chore", self.categories[:2]), "")
        self.assertEqual(category_for("chore", ()), "")


if __name__ == "__main__":
    unittest.main()
