#!/usr/bin/env python3
"""
Input records for the matching engine.

Opportunity and Profile are validated, immutable pydantic models. They are
hydrated by whoever owns the data (ingestion, profile management) before the
engine sees them; the engine never mutates them.

Enumerated values (employment type, seniority, remote preference, requested
availability) are kept as plain strings on the records and parsed leniently
with the `parse` helpers below, so an unknown label degrades a single
criterion instead of rejecting the whole record.
"""

from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
import logging

from dateutil.relativedelta import relativedelta
from pydantic import BaseModel, ConfigDict, Field, field_validator

from jobmatch.utils import normalize_text

logger = logging.getLogger(__name__)


# ----------------------------
# Enumerations
# ----------------------------
class _LenientEnum(str, Enum):
    """str Enum with an alias-aware, non-raising parse()."""

    @classmethod
    def _aliases(cls) -> Dict[str, str]:
        return {}

    @classmethod
    def parse(cls, value: Any) -> Optional['_LenientEnum']:
        """Return the member for value, or None if it is missing or unknown."""
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        key = normalize_text(value).replace("_", "-").replace(" ", "-")
        if not key:
            return None
        key = cls._aliases().get(key, key)
        for member in cls:
            if member.value == key:
                return member
        logger.warning(f"Unknown {cls.__name__} value {value!r}; treating as unspecified")
        return None


class EmploymentType(_LenientEnum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    REMOTE_ONLY = "remote-only"
    INTERNSHIP = "internship"

    @classmethod
    def _aliases(cls) -> Dict[str, str]:
        return {
            'fulltime': 'full-time',
            'permanent': 'full-time',
            'parttime': 'part-time',
            'contractor': 'contract',
            'freelance': 'contract',
            'temporary': 'contract',
            'remote': 'remote-only',
            'intern': 'internship',
        }


class SeniorityLevel(_LenientEnum):
    ENTRY = "entry"
    MID = "mid"
    SENIOR = "senior"
    EXECUTIVE = "executive"

    @classmethod
    def _aliases(cls) -> Dict[str, str]:
        return {
            'junior': 'entry',
            'entry-level': 'entry',
            'graduate': 'entry',
            'intern': 'entry',
            'mid-level': 'mid',
            'intermediate': 'mid',
            'lead': 'senior',
            'principal': 'senior',
            'staff': 'senior',
            'director': 'executive',
            'vp': 'executive',
            'head': 'executive',
            'c-level': 'executive',
        }

    @property
    def years_band(self) -> Tuple[float, float]:
        """Expected experience years (floor, ceiling)."""
        return SENIORITY_YEARS[self]

    @property
    def required_skill_level(self) -> int:
        """Proficiency (1-5) expected for a required skill at this seniority."""
        return SENIORITY_SKILL_LEVEL[self]


SENIORITY_YEARS: Dict[SeniorityLevel, Tuple[float, float]] = {
    SeniorityLevel.ENTRY: (0.0, 2.0),
    SeniorityLevel.MID: (2.0, 5.0),
    SeniorityLevel.SENIOR: (5.0, 10.0),
    SeniorityLevel.EXECUTIVE: (10.0, 20.0),
}

SENIORITY_SKILL_LEVEL: Dict[SeniorityLevel, int] = {
    SeniorityLevel.ENTRY: 2,
    SeniorityLevel.MID: 3,
    SeniorityLevel.SENIOR: 4,
    SeniorityLevel.EXECUTIVE: 5,
}


class RemotePreference(_LenientEnum):
    REMOTE_ONLY = "remote-only"
    HYBRID = "hybrid"
    ONSITE = "onsite"
    FLEXIBLE = "flexible"

    @classmethod
    def _aliases(cls) -> Dict[str, str]:
        return {
            'remote': 'remote-only',
            'on-site': 'onsite',
            'office': 'onsite',
            'any': 'flexible',
        }

    @property
    def accepts_remote(self) -> bool:
        return self is not RemotePreference.ONSITE


class AvailabilityBand(_LenientEnum):
    IMMEDIATE = "immediate"
    WITHIN_2_WEEKS = "within-2-weeks"
    WITHIN_MONTH = "within-month"
    WITHIN_QUARTER = "within-quarter"
    NOT_LOOKING = "not-looking"

    @classmethod
    def _aliases(cls) -> Dict[str, str]:
        return {
            'asap': 'immediate',
            'now': 'immediate',
            'two-weeks': 'within-2-weeks',
            'within-two-weeks': 'within-2-weeks',
            'month': 'within-month',
            'within-a-month': 'within-month',
        }

    @classmethod
    def from_days(cls, days: float) -> 'AvailabilityBand':
        """Urgency band for a candidate available `days` from the reference date."""
        if days <= 7:
            return cls.IMMEDIATE
        if days <= 14:
            return cls.WITHIN_2_WEEKS
        if days <= 30:
            return cls.WITHIN_MONTH
        if days <= 90:
            return cls.WITHIN_QUARTER
        return cls.NOT_LOOKING


# ----------------------------
# Value objects
# ----------------------------
class SalaryRange(BaseModel):
    """Compensation range. Period is one of hourly / monthly / yearly (lenient)."""
    model_config = ConfigDict(frozen=True, extra='ignore')

    min: Optional[float] = Field(default=None, ge=0)
    max: Optional[float] = Field(default=None, ge=0)
    currency: str = "USD"
    period: str = "yearly"

    @property
    def is_complete(self) -> bool:
        return self.min is not None or self.max is not None


class OpportunityLocation(BaseModel):
    model_config = ConfigDict(frozen=True, extra='ignore')

    city: Optional[str] = None
    region: Optional[str] = None
    country: Optional[str] = None
    text: Optional[str] = None  # free-form location as posted
    remote: bool = False
    hybrid: bool = False


class ProfileLocation(BaseModel):
    model_config = ConfigDict(frozen=True, extra='ignore')

    city: Optional[str] = None
    region: Optional[str] = None
    country: Optional[str] = None
    remote_preference: Optional[str] = None
    willing_to_relocate: bool = False


class ProfileSkill(BaseModel):
    """A possessed skill with optional proficiency (1=beginner .. 5=expert)."""
    model_config = ConfigDict(frozen=True, extra='ignore')

    name: str
    level: Optional[int] = Field(default=None, ge=1, le=5)
    years: Optional[float] = Field(default=None, ge=0)


class WorkExperience(BaseModel):
    model_config = ConfigDict(frozen=True, extra='ignore')

    title: str = ""
    company: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_current: bool = False
    skills: List[str] = Field(default_factory=list)

    def months(self, as_of: date) -> Optional[int]:
        """Whole months covered by this entry; open-ended entries run to `as_of`."""
        if not self.start_date:
            return None
        end_date = as_of if (self.is_current or not self.end_date) else self.end_date
        diff = relativedelta(end_date, self.start_date)
        return max(0, diff.years * 12 + diff.months)


# ----------------------------
# Records
# ----------------------------
class Opportunity(BaseModel):
    """A job posting as supplied by the ingestion side."""
    model_config = ConfigDict(frozen=True, extra='ignore')

    id: str = Field(min_length=1)
    title: str = ""
    company: Optional[str] = None
    required_skills: List[str] = Field(default_factory=list)
    preferred_skills: List[str] = Field(default_factory=list)
    location: OpportunityLocation = Field(default_factory=OpportunityLocation)
    salary: Optional[SalaryRange] = None
    employment_type: Optional[str] = None
    seniority: Optional[str] = None
    description: str = ""
    requirements: List[str] = Field(default_factory=list)
    industry: Optional[str] = None
    company_size: Optional[str] = None
    availability_requirement: Optional[str] = None
    posted_date: Optional[date] = None

    @field_validator('location', mode='before')
    @classmethod
    def coerce_opportunity_location(cls, value: Any) -> Any:
        # A bare string is the posted location text
        if isinstance(value, str):
            return {'text': value}
        return value

    @property
    def is_remote(self) -> bool:
        return self.location.remote or EmploymentType.parse(self.employment_type) is EmploymentType.REMOTE_ONLY

    @property
    def seniority_text(self) -> str:
        """Text searched for seniority keywords when no explicit label is set."""
        parts = [self.title, self.description] + list(self.requirements)
        return " ".join(p for p in parts if p)


class Profile(BaseModel):
    """A job seeker or recruiter-side candidate."""
    model_config = ConfigDict(frozen=True, extra='ignore')

    id: str = Field(min_length=1)
    skills: List[ProfileSkill] = Field(default_factory=list)
    years_experience: Optional[float] = Field(default=None, ge=0)
    seniority: Optional[str] = None
    work_history: List[WorkExperience] = Field(default_factory=list)
    location: ProfileLocation = Field(default_factory=ProfileLocation)
    salary: Optional[SalaryRange] = None
    employment_types: List[str] = Field(default_factory=list)
    availability_date: Optional[date] = None
    industries: List[str] = Field(default_factory=list)
    company_sizes: List[str] = Field(default_factory=list)
    summary: Optional[str] = None

    @field_validator('skills', mode='before')
    @classmethod
    def coerce_skills(cls, value: Any) -> Any:
        # Plain strings are skills without proficiency data
        if isinstance(value, (list, tuple)):
            return [{'name': v} if isinstance(v, str) else v for v in value]
        return value

    @field_validator('location', mode='before')
    @classmethod
    def coerce_profile_location(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {'city': value}
        return value

    @property
    def skill_names(self) -> List[str]:
        return [s.name for s in self.skills]

    def years_from_history(
        self,
        as_of: date,
        entries: Optional[List[WorkExperience]] = None
    ) -> Optional[float]:
        """Calculate years of experience from work history date ranges.

        `entries` restricts the sum to a subset of the history; by default
        every entry counts. Undated entries are ignored.
        """
        total_months = 0
        counted = False

        for entry in (self.work_history if entries is None else entries):
            months = entry.months(as_of)
            if months is None:
                continue
            total_months += months
            counted = True

        if not counted:
            return None
        return round(total_months / 12, 1)

    def total_years(self, as_of: date) -> Optional[float]:
        """
        Best available total experience, in order of preference:
        explicit years, work-history dates, floor of the declared seniority band.
        """
        if self.years_experience is not None:
            return float(self.years_experience)

        from_history = self.years_from_history(as_of)
        if from_history is not None:
            return from_history

        level = SeniorityLevel.parse(self.seniority)
        if level is not None:
            return level.years_band[0]
        return None
