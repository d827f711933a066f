"""
Activity catalogue: ROI and cost baselines plus industry and company-size
multipliers.

``ACTIVITY_BASELINES`` is the single source of truth for each activity's
untuned economics.  The multiplier tables list only overrides; any
(industry, activity) or (tier, activity) pair not listed multiplies by 1.0.
Adding an activity is a data edit here plus one ``Activity`` member.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from roi_advisor.benchmarks.industry import size_tier
from roi_advisor.taxonomy.activity_taxonomy import Activity
from roi_advisor.taxonomy.business_taxonomy import RiskLevel, SizeTier


@dataclass(frozen=True)
class ActivityBaseline:
    """Untuned economics for one activity.

    Attributes:
        activity:           Activity key.
        base_roi:           Expected ROI, in percent.
        base_cost:          One-off implementation cost.
        months_to_implement: Months before the activity produces results.
        risk:               Execution risk.
    """

    activity: Activity
    base_roi: float
    base_cost: float
    months_to_implement: int
    risk: RiskLevel

    @property
    def name(self) -> str:
        return self.activity.display_name


_LOW, _MED, _HIGH = RiskLevel.LOW, RiskLevel.MEDIUM, RiskLevel.HIGH

ACTIVITY_BASELINES: Mapping[Activity, ActivityBaseline] = MappingProxyType({
    b.activity: b
    for b in (
        ActivityBaseline(Activity.COLD_CALLS,             120,  2_000,  1, _LOW),
        ActivityBaseline(Activity.PERSONALIZED_FOLLOW_UP, 180,  3_000,  2, _LOW),
        ActivityBaseline(Activity.VIDEO_CALLS,            200,  1_500,  1, _LOW),
        ActivityBaseline(Activity.TRANSACTIONAL_EMAILS,   300,  5_000,  3, _MED),
        ActivityBaseline(Activity.SOCIAL_SELLING,         250,  4_000,  2, _MED),
        ActivityBaseline(Activity.CONTENT_MARKETING,      400,  8_000,  6, _MED),
        ActivityBaseline(Activity.REFERRAL_PROGRAM,       350,  6_000,  3, _LOW),
        ActivityBaseline(Activity.WEBINARS_EVENTS,        280,  7_000,  2, _MED),
        ActivityBaseline(Activity.PAID_ADS,               150, 10_000,  1, _HIGH),
        ActivityBaseline(Activity.SEO_CONTENT,            500, 12_000, 12, _LOW),
        ActivityBaseline(Activity.PARTNERSHIPS,           600, 15_000,  6, _MED),
        ActivityBaseline(Activity.DIRECT_MAIL,            130,  8_000,  2, _MED),
        ActivityBaseline(Activity.TRADE_SHOWS,            220, 20_000,  3, _HIGH),
        ActivityBaseline(Activity.INFLUENCER_MARKETING,   180, 12_000,  3, _HIGH),
        ActivityBaseline(Activity.RETARGETING,            250,  6_000,  2, _MED),
        ActivityBaseline(Activity.ACTIVATIONS,            300, 25_000,  4, _HIGH),
        ActivityBaseline(Activity.PHYSICAL_VISITS,        400,  5_000,  1, _LOW),
        ActivityBaseline(Activity.PERSONAL_BRAND,         450,  8_000, 12, _LOW),
    )
})

INDUSTRY_MULTIPLIERS: Mapping[str, Mapping[Activity, float]] = MappingProxyType({
    "technology": MappingProxyType({
        Activity.CONTENT_MARKETING: 1.5,
        Activity.SEO_CONTENT:       1.4,
        Activity.PERSONAL_BRAND:    1.3,
        Activity.PAID_ADS:          1.2,
        Activity.SOCIAL_SELLING:    1.3,
    }),
    "healthcare": MappingProxyType({
        Activity.PERSONAL_BRAND:    1.6,
        Activity.PHYSICAL_VISITS:   1.4,
        Activity.REFERRAL_PROGRAM:  1.3,
        Activity.CONTENT_MARKETING: 1.2,
    }),
    "finance": MappingProxyType({
        Activity.PERSONAL_BRAND:  1.5,
        Activity.PHYSICAL_VISITS: 1.3,
        Activity.PARTNERSHIPS:    1.4,
        Activity.COLD_CALLS:      1.2,
    }),
    "retail": MappingProxyType({
        Activity.PAID_ADS:             1.4,
        Activity.ACTIVATIONS:          1.5,
        Activity.INFLUENCER_MARKETING: 1.3,
        Activity.RETARGETING:          1.3,
    }),
    "manufacturing": MappingProxyType({
        Activity.TRADE_SHOWS:     1.5,
        Activity.PHYSICAL_VISITS: 1.4,
        Activity.PARTNERSHIPS:    1.3,
        Activity.DIRECT_MAIL:     1.2,
    }),
})

SIZE_MULTIPLIERS: Mapping[SizeTier, Mapping[Activity, float]] = MappingProxyType({
    SizeTier.STARTUP: MappingProxyType({
        Activity.PERSONAL_BRAND:    1.4,
        Activity.SOCIAL_SELLING:    1.3,
        Activity.CONTENT_MARKETING: 1.2,
        Activity.COLD_CALLS:        1.3,
    }),
    SizeTier.SMALL: MappingProxyType({
        Activity.SEO_CONTENT:            1.3,
        Activity.REFERRAL_PROGRAM:       1.4,
        Activity.PERSONALIZED_FOLLOW_UP: 1.2,
        Activity.PHYSICAL_VISITS:        1.3,
    }),
    SizeTier.MEDIUM: MappingProxyType({
        Activity.PAID_ADS:        1.3,
        Activity.PARTNERSHIPS:    1.2,
        Activity.WEBINARS_EVENTS: 1.3,
        Activity.TRADE_SHOWS:     1.2,
    }),
    SizeTier.LARGE: MappingProxyType({
        Activity.ACTIVATIONS:          1.4,
        Activity.TRADE_SHOWS:          1.3,
        Activity.PARTNERSHIPS:         1.3,
        Activity.INFLUENCER_MARKETING: 1.2,
    }),
})


def get_industry_multiplier(industry: str, activity: Activity) -> float:
    key = (industry or "").strip().lower()
    return INDUSTRY_MULTIPLIERS.get(key, {}).get(activity, 1.0)


def get_company_size_multiplier(company_size: str, activity: Activity) -> float:
    tier = size_tier(company_size)
    if tier is None:
        return 1.0
    return SIZE_MULTIPLIERS[tier].get(activity, 1.0)
