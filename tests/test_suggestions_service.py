# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest

from peptide_api.suggestions.catalog import DEFAULT_NOTE, GOALS, PEPTIDES, PERSONALIZED_NOTES
from peptide_api.suggestions.pdf import render_suggestions_pdf
from peptide_api.suggestions.service import (
    MAX_SUGGESTIONS,
    UnknownGoalError,
    available_goals,
    get_age_group,
    get_personalized_note,
    get_suggestions,
)


class TestSuggestions(unittest.TestCase):
    def test_filters_by_age_range(self) -> None:
        names = [s.name for s in get_suggestions(22, "energy")]
        self.assertEqual(names, ["Ipamorelin"])

        names = [s.name for s in get_suggestions(32, "longevity")]
        self.assertEqual(names, ["GHK-Cu"])

    def test_falls_back_to_whole_goal_when_no_age_fits(self) -> None:
        names = [s.name for s in get_suggestions(90, "longevity")]
        self.assertEqual(names, [p["name"] for p in PEPTIDES["longevity"]])

    def test_never_more_than_max(self) -> None:
        for goal in PEPTIDES:
            for age in (18, 30, 45, 60, 120):
                self.assertLessEqual(len(get_suggestions(age, goal)), MAX_SUGGESTIONS)

    def test_personalized_note_attached(self) -> None:
        suggestions = get_suggestions(45, "sleep")
        self.assertTrue(suggestions)
        for s in suggestions:
            self.assertEqual(s.personalized_note, PERSONALIZED_NOTES["middle"]["sleep"])

    def test_unknown_goal(self) -> None:
        with self.assertRaises(UnknownGoalError) as ctx:
            get_suggestions(30, "telepathy")
        self.assertEqual(ctx.exception.goal, "telepathy")
        self.assertIn("telepathy", str(ctx.exception))

    def test_age_groups(self) -> None:
        self.assertEqual(get_age_group(18), "young")
        self.assertEqual(get_age_group(34), "young")
        self.assertEqual(get_age_group(35), "middle")
        self.assertEqual(get_age_group(54), "middle")
        self.assertEqual(get_age_group(55), "mature")

    def test_note_default_for_unknown_goal(self) -> None:
        self.assertEqual(get_personalized_note(40, "telepathy"), DEFAULT_NOTE)

    def test_goal_options_cover_catalog(self) -> None:
        values = [g.value for g in available_goals()]
        self.assertEqual(values, [g["value"] for g in GOALS])
        self.assertEqual(set(values), set(PEPTIDES))

    def test_camel_case_serialization(self) -> None:
        data = get_suggestions(30, "focus")[0].model_dump(by_alias=True)
        self.assertIn("ageRecommendation", data)
        self.assertIn("personalizedNote", data)


class TestSuggestionsPdf(unittest.TestCase):
    def test_renders_pdf_bytes(self) -> None:
        pdf = render_suggestions_pdf(40, "recovery", get_suggestions(40, "recovery"))
        self.assertTrue(pdf.startswith(b"%PDF"))

    def test_escapes_markup_in_text(self) -> None:
        suggestion = get_suggestions(40, "recovery")[0].model_copy(update={"description": "<b>a & b</b>"})
        pdf = render_suggestions_pdf(40, "recovery", [suggestion])
        self.assertTrue(pdf.startswith(b"%PDF"))


if __name__ == "__main__":
    unittest.main()
