#!/usr/bin/env python3
"""
Unit tests for the Opportunity/Profile input models and lenient enums.
"""

import unittest
from datetime import date

from pydantic import ValidationError

from jobmatch.models import (
    AvailabilityBand,
    EmploymentType,
    Opportunity,
    Profile,
    RemotePreference,
    SeniorityLevel,
)


class TestLenientEnums(unittest.TestCase):

    def test_employment_type_aliases(self):
        self.assertEqual(EmploymentType.parse("Full Time"), EmploymentType.FULL_TIME)
        self.assertEqual(EmploymentType.parse("fulltime"), EmploymentType.FULL_TIME)
        self.assertEqual(EmploymentType.parse("full_time"), EmploymentType.FULL_TIME)
        self.assertEqual(EmploymentType.parse("REMOTE"), EmploymentType.REMOTE_ONLY)
        self.assertEqual(EmploymentType.parse("freelance"), EmploymentType.CONTRACT)

    def test_missing_values(self):
        self.assertIsNone(EmploymentType.parse(None))
        self.assertIsNone(EmploymentType.parse("   "))

    def test_unknown_value_warns(self):
        with self.assertLogs('jobmatch.models', level='WARNING') as logs:
            self.assertIsNone(SeniorityLevel.parse("wizard"))
        self.assertIn("wizard", logs.output[0])

    def test_member_passthrough(self):
        self.assertIs(RemotePreference.parse(RemotePreference.HYBRID), RemotePreference.HYBRID)

    def test_seniority_tables(self):
        self.assertEqual(SeniorityLevel.parse("Lead"), SeniorityLevel.SENIOR)
        self.assertEqual(SeniorityLevel.SENIOR.years_band, (5.0, 10.0))
        self.assertEqual(SeniorityLevel.ENTRY.required_skill_level, 2)
        self.assertEqual(SeniorityLevel.EXECUTIVE.required_skill_level, 5)

    def test_remote_preference(self):
        self.assertTrue(RemotePreference.parse("flexible").accepts_remote)
        self.assertFalse(RemotePreference.parse("on-site").accepts_remote)

    def test_availability_band_edges(self):
        expected = {
            0: AvailabilityBand.IMMEDIATE,
            7: AvailabilityBand.IMMEDIATE,
            8: AvailabilityBand.WITHIN_2_WEEKS,
            14: AvailabilityBand.WITHIN_2_WEEKS,
            15: AvailabilityBand.WITHIN_MONTH,
            30: AvailabilityBand.WITHIN_MONTH,
            31: AvailabilityBand.WITHIN_QUARTER,
            90: AvailabilityBand.WITHIN_QUARTER,
            91: AvailabilityBand.NOT_LOOKING,
        }
        for days, band in expected.items():
            self.assertEqual(AvailabilityBand.from_days(days), band, days)


class TestOpportunity(unittest.TestCase):

    def test_location_string(self):
        opportunity = Opportunity(id="o", location="Lusaka, Zambia")
        self.assertEqual(opportunity.location.text, "Lusaka, Zambia")

    def test_is_remote(self):
        self.assertTrue(Opportunity(id="o", location={"remote": True}).is_remote)
        self.assertTrue(Opportunity(id="o", employment_type="remote-only").is_remote)
        self.assertFalse(Opportunity(id="o", location="Lusaka").is_remote)

    def test_seniority_text(self):
        opportunity = Opportunity(id="o", title="Engineer", description="Build things", requirements=["Go"])
        self.assertEqual(opportunity.seniority_text, "Engineer Build things Go")

    def test_id_required(self):
        with self.assertRaises(ValidationError):
            Opportunity(id="")

    def test_extra_fields_ignored(self):
        opportunity = Opportunity.model_validate({"id": "o", "source": "linkedin"})
        self.assertFalse(hasattr(opportunity, "source"))

    def test_frozen(self):
        opportunity = Opportunity(id="o")
        with self.assertRaises(ValidationError):
            opportunity.title = "changed"


class TestProfile(unittest.TestCase):

    def test_skill_strings(self):
        profile = Profile(id="p", skills=["Python", {"name": "SQL", "level": 4}])

        self.assertEqual(profile.skill_names, ["Python", "SQL"])
        self.assertIsNone(profile.skills[0].level)
        self.assertEqual(profile.skills[1].level, 4)

    def test_skill_level_bounds(self):
        for level in (0, 6):
            with self.assertRaises(ValidationError):
                Profile(id="p", skills=[{"name": "SQL", "level": level}])
        self.assertEqual(Profile(id="p", skills=[{"name": "SQL", "level": 5}]).skills[0].level, 5)

    def test_location_string(self):
        self.assertEqual(Profile(id="p", location="Lusaka").location.city, "Lusaka")

    def test_years_from_history(self):
        profile = Profile(id="p", work_history=[
            {"title": "Dev", "start_date": "2018-01-01", "end_date": "2020-01-01"},
            {"title": "Senior Dev", "start_date": "2021-01-01", "is_current": True},
            {"title": "Undated"},
        ])
        self.assertEqual(profile.years_from_history(date(2022, 7, 1)), 3.5)

    def test_years_from_history_subset(self):
        profile = Profile(id="p", work_history=[
            {"title": "Dev", "start_date": "2018-01-01", "end_date": "2020-01-01"},
            {"title": "Chef", "start_date": "2020-01-01", "end_date": "2021-07-01"},
        ])
        self.assertEqual(profile.work_history[1].months(date(2022, 7, 1)), 18)
        self.assertEqual(profile.years_from_history(date(2022, 7, 1), profile.work_history[:1]), 2.0)
        self.assertIsNone(profile.years_from_history(date(2022, 7, 1), []))

    def test_years_from_history_without_dates(self):
        profile = Profile(id="p", work_history=[{"title": "Dev"}])
        self.assertIsNone(profile.years_from_history(date(2022, 7, 1)))

    def test_total_years_precedence(self):
        as_of = date(2025, 1, 1)
        history = [{"start_date": "2023-01-01", "is_current": True}]

        self.assertEqual(Profile(id="p", years_experience=9, work_history=history, seniority="entry").total_years(as_of), 9.0)
        self.assertEqual(Profile(id="p", work_history=history, seniority="senior").total_years(as_of), 2.0)
        self.assertEqual(Profile(id="p", seniority="executive").total_years(as_of), 10.0)
        self.assertIsNone(Profile(id="p").total_years(as_of))

    def test_negative_years_rejected(self):
        with self.assertRaises(ValidationError):
            Profile(id="p", years_experience=-1)


if __name__ == '__main__':
    unittest.main()
