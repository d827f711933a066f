"""
Business classification enums: company stage, size tier, risk, priority
buckets and plan-task categories.

Ordered enums expose a ``rank`` so callers sort on an integer rather than
on the string value.
"""

from __future__ import annotations

from enum import StrEnum


class CompanyStage(StrEnum):
    """Coarse maturity stage derived from monthly revenue."""

    STARTUP = "startup"
    GROWTH = "growth"
    MATURE = "mature"
    ENTERPRISE = "enterprise"


class SizeTier(StrEnum):
    """Benchmark tier a head-count band maps onto."""

    STARTUP = "startup"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class RiskLevel(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class PriorityBucket(StrEnum):
    """Recommendation bucket derived from the defuzzified score."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NOT_RECOMMENDED = "not_recommended"

    @property
    def rank(self) -> int:
        return _BUCKET_RANK[self]

    @classmethod
    def from_score(cls, score: float) -> "PriorityBucket":
        """Bucket a 0-100 score using the 90 / 70 / 45 / 25 thresholds."""
        if score >= 90:
            return cls.CRITICAL
        if score >= 70:
            return cls.HIGH
        if score >= 45:
            return cls.MEDIUM
        if score >= 25:
            return cls.LOW
        return cls.NOT_RECOMMENDED


_BUCKET_RANK: dict[PriorityBucket, int] = {
    PriorityBucket.CRITICAL: 4,
    PriorityBucket.HIGH: 3,
    PriorityBucket.MEDIUM: 2,
    PriorityBucket.LOW: 1,
    PriorityBucket.NOT_RECOMMENDED: 0,
}


class TaskPriority(StrEnum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _TASK_RANK[self]


_TASK_RANK: dict[TaskPriority, int] = {
    TaskPriority.CRITICAL: 4,
    TaskPriority.HIGH: 3,
    TaskPriority.MEDIUM: 2,
    TaskPriority.LOW: 1,
}


class TaskCategory(StrEnum):
    FOUNDATION = "foundation"
    """Onboarding gaps: tracking, channels, CRM."""

    ACTIVATION = "activation"
    """Launching a top-ranked recommended activity."""

    OPTIMIZATION = "optimization"
    """Fixing weak conversion or unit economics."""

    SCALING = "scaling"
    """Growing team and automation once market fit is proven."""


class ReadinessLevel(StrEnum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class TechStack(StrEnum):
    BASIC = "basic"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class TargetMarket(StrEnum):
    B2B = "b2b"
    B2C = "b2c"
    BOTH = "both"
