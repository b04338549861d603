#!/usr/bin/env python3
"""
Unit tests for salary range alignment.
"""

import unittest

from jobmatch.config_loader import NeutralScores, ScoringConstants
from jobmatch.models import Opportunity, Profile, SalaryRange
from jobmatch.scorer.compensation import annualize, calculate_compensation_match, salary_alignment


class TestCompensationMatch(unittest.TestCase):

    def setUp(self):
        self.constants = ScoringConstants()
        self.neutral = NeutralScores()

    def _score(self, offer, expected):
        opportunity = Opportunity(id="o", salary=offer)
        profile = Profile(id="p", salary=expected)
        return calculate_compensation_match(opportunity, profile, self.constants, self.neutral)

    def test_partial_overlap(self):
        # overlap 65k-80k over a 20k wide expectation
        score, details = self._score({"min": 60000, "max": 80000}, {"min": 65000, "max": 85000})

        self.assertAlmostEqual(score, 0.875)
        self.assertEqual(details['alignment'], 'within')

    def test_identical_ranges(self):
        score, _ = self._score({"min": 60000, "max": 80000}, {"min": 60000, "max": 80000})
        self.assertEqual(score, 1.0)

    def test_offer_entirely_above_expectation(self):
        score, details = self._score({"min": 120000, "max": 140000}, {"min": 80000, "max": 100000})

        self.assertEqual(score, 1.0)
        self.assertEqual(details['alignment'], 'above')

    def test_offer_far_below_expectation(self):
        score, details = self._score({"min": 60000, "max": 80000}, {"min": 150000, "max": 200000})

        self.assertAlmostEqual(score, 0.0625)
        self.assertLess(score, 0.3)
        self.assertEqual(details['alignment'], 'below')

    def test_gap_larger_than_offer_scores_zero(self):
        score, _ = self._score({"min": 20000, "max": 30000}, {"min": 100000, "max": 120000})
        self.assertEqual(score, 0.0)

    def test_point_expectation_inside_offer(self):
        score, _ = self._score({"min": 60000, "max": 80000}, {"min": 70000})
        self.assertEqual(score, 1.0)

    def test_hourly_offer_is_annualized(self):
        # 50-60/h * 2080 = 104k-124.8k; overlap 16k of a 20k expectation
        score, details = self._score({"min": 50, "max": 60, "period": "hourly"}, {"min": 100000, "max": 120000})

        self.assertEqual(details['offer_yearly'], [104000.0, 124800.0])
        self.assertAlmostEqual(score, 0.9)

    def test_monthly_offer_is_annualized(self):
        score, _ = self._score({"min": 5000, "max": 6000, "period": "monthly"}, {"min": 60000, "max": 72000})
        self.assertEqual(score, 1.0)

    def test_missing_range_is_neutral(self):
        for offer, expected in ((None, {"min": 1}), ({"min": 1}, None), ({}, {"min": 1})):
            score, details = self._score(offer, expected)
            self.assertAlmostEqual(score, 0.7)
            self.assertTrue(details['skipped'])

    def test_currency_mismatch_is_neutral(self):
        score, details = self._score({"min": 50000, "max": 60000, "currency": "EUR"}, {"min": 50000, "max": 60000})

        self.assertAlmostEqual(score, 0.7)
        self.assertIn('Currency mismatch', details['reason'])

    def test_unknown_period_is_neutral(self):
        score, details = self._score({"min": 1, "max": 2, "period": "per-sprint"}, {"min": 1, "max": 2})

        self.assertAlmostEqual(score, 0.7)
        self.assertTrue(details['skipped'])

    def test_annualize_swaps_reversed_bounds(self):
        low, high = annualize(SalaryRange(min=80000, max=60000), self.constants)
        self.assertEqual((low, high), (60000, 80000))

    def test_salary_alignment_zero_offer(self):
        self.assertEqual(salary_alignment(0, 0, 1000, 2000, 0.5), (0.0, 'below'))


if __name__ == '__main__':
    unittest.main()
