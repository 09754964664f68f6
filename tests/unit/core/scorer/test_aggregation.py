#!/usr/bin/env python3
"""
Test suite for aggregation, tiering and explanation.
"""

import unittest

from core.scorer.aggregation import (
    INTERVIEW_FOCUS_BY_CATEGORY,
    aggregate_category_scores,
    build_summary,
    derive_interview_focus,
    tier_from_score,
)
from core.scorer.models import TIER_ORDER, CategoryScores, ScoringFlags, SkillMatchResult
from core.scorer.policy import CategoryWeights, TierThresholds


class TestAggregate(unittest.TestCase):

    def test_neutral(self):
        self.assertEqual(aggregate_category_scores(CategoryScores(), CategoryWeights()), 70)

    def test_weighted_average(self):
        scores = CategoryScores(core_competencies=100, experience_quality=50, education=50,
                                achievements=50, cultural_fit=50)
        self.assertEqual(aggregate_category_scores(scores, CategoryWeights()), 65)

    def test_weights_need_not_sum_to_100(self):
        scores = CategoryScores(core_competencies=100, experience_quality=0, education=0,
                                achievements=0, cultural_fit=0)
        weights = CategoryWeights(core_competencies=1, experience_quality=1, education=0,
                                  achievements=0, cultural_fit=0)
        self.assertEqual(aggregate_category_scores(scores, weights), 50)

    def test_zero_weights_use_unweighted_mean(self):
        scores = CategoryScores(core_competencies=100, experience_quality=50, education=50,
                                achievements=50, cultural_fit=50)
        weights = CategoryWeights(core_competencies=0, experience_quality=0, education=0,
                                  achievements=0, cultural_fit=0)
        self.assertEqual(aggregate_category_scores(scores, weights), 60)

    def test_half_rounds_up(self):
        scores = CategoryScores(core_competencies=71, experience_quality=70)
        weights = CategoryWeights(core_competencies=50, experience_quality=50, education=0,
                                  achievements=0, cultural_fit=0)
        self.assertEqual(aggregate_category_scores(scores, weights), 71)


class TestTiering(unittest.TestCase):

    def test_boundaries(self):
        thresholds = TierThresholds(A=80, B=65, C=50)
        cases = [(100, "A"), (80, "A"), (79, "B"), (65, "B"), (64, "C"), (50, "C"), (49, "D"), (0, "D")]
        for score, tier in cases:
            with self.subTest(score=score):
                self.assertEqual(tier_from_score(score, thresholds), tier)

    def test_missing_thresholds_use_defaults(self):
        self.assertEqual(tier_from_score(80, None), "A")
        self.assertEqual(tier_from_score(79, None), "B")

    def test_custom_thresholds(self):
        self.assertEqual(tier_from_score(85, TierThresholds(A=90, B=70, C=40)), "B")

    def test_monotonic(self):
        for thresholds in (TierThresholds(), TierThresholds(A=95, B=60, C=10)):
            ranks = [TIER_ORDER[tier_from_score(s, thresholds)] for s in range(0, 101)]
            self.assertEqual(ranks, sorted(ranks))


class TestExplanation(unittest.TestCase):

    def test_focus_in_category_order(self):
        scores = CategoryScores(education=60, achievements=69)
        flags = ScoringFlags()
        derive_interview_focus(scores, flags)
        self.assertEqual(flags.interview_focus, [
            INTERVIEW_FOCUS_BY_CATEGORY["education"],
            INTERVIEW_FOCUS_BY_CATEGORY["achievements"],
        ])

    def test_no_focus_at_70(self):
        flags = ScoringFlags()
        derive_interview_focus(CategoryScores(), flags)
        self.assertEqual(flags.interview_focus, [])

    def test_summary_sections(self):
        scores = CategoryScores(core_competencies=65)
        match = SkillMatchResult(total=2, matched=["sql"], missing=["python"])
        flags = ScoringFlags(risk_flags=["Risk one"])
        summary = build_summary("B", 74, scores, match, flags)
        self.assertTrue(summary.startswith("Tier B (74/100). Core competencies 65/100"))
        self.assertIn("Matched skills: sql.", summary)
        self.assertIn("Missing skills: python.", summary)
        self.assertIn("Risks: Risk one.", summary)
        self.assertNotIn("Red flags:", summary)
        self.assertNotIn("Interview focus:", summary)

    def test_summary_without_required_skills(self):
        summary = build_summary("C", 55, CategoryScores(), SkillMatchResult(), ScoringFlags())
        self.assertNotIn("skills:", summary)


if __name__ == '__main__':
    unittest.main()
