"""
Static playbook text per activity: prerequisites, risks, resources and
how well each activity suits a company stage.

Stage and industry refinements are applied by the accessor functions, so
the tables themselves stay plain data.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from roi_advisor.taxonomy.activity_taxonomy import Activity
from roi_advisor.taxonomy.business_taxonomy import CompanyStage

A = Activity

PREREQUISITES: Mapping[Activity, tuple[str, ...]] = MappingProxyType({
    A.COLD_CALLS:             ("Sales team training", "CRM system"),
    A.PERSONALIZED_FOLLOW_UP: ("Customer data collection", "CRM integration"),
    A.VIDEO_CALLS:            ("Video conferencing tools", "Sales presentation materials"),
    A.TRANSACTIONAL_EMAILS:   ("Email marketing platform", "Customer segmentation"),
    A.SOCIAL_SELLING:         ("LinkedIn Sales Navigator", "Social media training"),
    A.CONTENT_MARKETING:      ("Content strategy", "Content creation resources"),
    A.REFERRAL_PROGRAM:       ("Customer satisfaction baseline", "Referral tracking system"),
    A.WEBINARS_EVENTS:        ("Webinar platform", "Event planning resources"),
    A.PAID_ADS:               ("Ad account setup", "Landing page optimization"),
    A.SEO_CONTENT:            ("SEO audit", "Content management system"),
    A.PARTNERSHIPS:           ("Partnership strategy", "Legal framework"),
    A.DIRECT_MAIL:            ("Mailing list", "Design and printing resources"),
    A.TRADE_SHOWS:            ("Event selection", "Booth design and materials"),
    A.INFLUENCER_MARKETING:   ("Influencer research", "Campaign management tools"),
    A.RETARGETING:            ("Website pixel installation", "Ad creative development"),
    A.ACTIVATIONS:            ("Event planning team", "Brand experience design"),
    A.PHYSICAL_VISITS:        ("Sales territory planning", "Travel budget"),
    A.PERSONAL_BRAND:         ("Personal branding strategy", "Content calendar"),
})

RISKS: Mapping[Activity, tuple[str, ...]] = MappingProxyType({
    A.COLD_CALLS:             ("Low response rates", "Regulatory compliance"),
    A.PERSONALIZED_FOLLOW_UP: ("Resource intensive", "Data privacy concerns"),
    A.VIDEO_CALLS:            ("Technology barriers", "Scheduling challenges"),
    A.TRANSACTIONAL_EMAILS:   ("Spam filters", "Email deliverability"),
    A.SOCIAL_SELLING:         ("Platform algorithm changes", "Time investment"),
    A.CONTENT_MARKETING:      ("Long ROI timeline", "Content quality consistency"),
    A.REFERRAL_PROGRAM:       ("Customer participation rates", "Program management complexity"),
    A.WEBINARS_EVENTS:        ("Technical difficulties", "Audience engagement"),
    A.PAID_ADS:               ("Budget burn rate", "Ad platform changes"),
    A.SEO_CONTENT:            ("Algorithm updates", "Competitive landscape"),
    A.PARTNERSHIPS:           ("Partner reliability", "Revenue sharing complexity"),
    A.DIRECT_MAIL:            ("Response rate decline", "Environmental concerns"),
    A.TRADE_SHOWS:            ("High upfront costs", "Event cancellation risks"),
    A.INFLUENCER_MARKETING:   ("Influencer reputation risks", "ROI measurement challenges"),
    A.RETARGETING:            ("Privacy regulations", "Ad fatigue"),
    A.ACTIVATIONS:            ("High execution complexity", "Weather/location dependencies"),
    A.PHYSICAL_VISITS:        ("Travel restrictions", "Scalability limitations"),
    A.PERSONAL_BRAND:         ("Time to build credibility", "Personal reputation risks"),
})

RESOURCES: Mapping[Activity, tuple[str, ...]] = MappingProxyType({
    A.COLD_CALLS:             ("Sales team", "CRM system", "Phone system"),
    A.PERSONALIZED_FOLLOW_UP: ("Marketing automation", "Data analyst", "CRM"),
    A.VIDEO_CALLS:            ("Video platform", "Sales team", "Presentation materials"),
    A.TRANSACTIONAL_EMAILS:   ("Email platform", "Designer", "Copywriter"),
    A.SOCIAL_SELLING:         ("LinkedIn licenses", "Sales training", "Social media manager"),
    A.CONTENT_MARKETING:      ("Content team", "SEO tools", "Design resources"),
    A.REFERRAL_PROGRAM:       ("Program manager", "Tracking system", "Incentive budget"),
    A.WEBINARS_EVENTS:        ("Event platform", "Marketing team", "Technical support"),
    A.PAID_ADS:               ("Ad budget", "PPC specialist", "Landing pages"),
    A.SEO_CONTENT:            ("SEO specialist", "Content writers", "Technical developer"),
    A.PARTNERSHIPS:           ("Business development", "Legal support", "Partnership manager"),
    A.DIRECT_MAIL:            ("Design team", "Printing budget", "Mailing lists"),
    A.TRADE_SHOWS:            ("Event budget", "Booth materials", "Sales team"),
    A.INFLUENCER_MARKETING:   ("Influencer budget", "Campaign manager", "Content approval"),
    A.RETARGETING:            ("Ad budget", "Creative team", "Analytics setup"),
    A.ACTIVATIONS:            ("Event team", "Experience design", "Logistics coordinator"),
    A.PHYSICAL_VISITS:        ("Sales team", "Travel budget", "Territory planning"),
    A.PERSONAL_BRAND:         ("Personal time", "Content creator", "Social media management"),
})

# Stage → activity → fit in [0, 1]; unlisted pairs are a neutral 0.5.
MATURITY_ALIGNMENT: Mapping[CompanyStage, Mapping[Activity, float]] = MappingProxyType({
    CompanyStage.STARTUP: MappingProxyType({
        A.PERSONAL_BRAND: 0.9,
        A.SOCIAL_SELLING: 0.8,
        A.CONTENT_MARKETING: 0.7,
        A.COLD_CALLS: 0.8,
        A.VIDEO_CALLS: 0.9,
    }),
    CompanyStage.GROWTH: MappingProxyType({
        A.PAID_ADS: 0.9,
        A.SEO_CONTENT: 0.8,
        A.REFERRAL_PROGRAM: 0.8,
        A.WEBINARS_EVENTS: 0.7,
        A.PARTNERSHIPS: 0.6,
    }),
    CompanyStage.MATURE: MappingProxyType({
        A.TRADE_SHOWS: 0.8,
        A.ACTIVATIONS: 0.7,
        A.PARTNERSHIPS: 0.9,
        A.INFLUENCER_MARKETING: 0.7,
        A.RETARGETING: 0.8,
    }),
    CompanyStage.ENTERPRISE: MappingProxyType({
        A.ACTIVATIONS: 0.9,
        A.TRADE_SHOWS: 0.9,
        A.PARTNERSHIPS: 0.9,
        A.PHYSICAL_VISITS: 0.8,
        A.DIRECT_MAIL: 0.7,
    }),
})

_STAGE_PREREQUISITES: Mapping[CompanyStage, tuple[str, ...]] = MappingProxyType({
    CompanyStage.STARTUP: ("Founder time allocation",),
    CompanyStage.ENTERPRISE: ("Cross-team stakeholder sign-off",),
})

_REGULATED_INDUSTRIES = frozenset({"finance", "healthcare"})


def get_prerequisites(activity: Activity, stage: CompanyStage) -> list[str]:
    return [*PREREQUISITES.get(activity, ()), *_STAGE_PREREQUISITES.get(stage, ())]


def get_risks(activity: Activity, stage: CompanyStage, industry: str) -> list[str]:
    """Common risks for ``activity``, plus stage- and industry-specific ones.

    Startups carry a budget-overrun risk on high-cost launches; regulated
    industries (finance, healthcare) add a compliance review.
    """
    risks = list(RISKS.get(activity, ()))
    if stage == CompanyStage.STARTUP and activity in (A.TRADE_SHOWS, A.ACTIVATIONS, A.PAID_ADS):
        risks.append("Budget strain for an early-stage company")
    if (industry or "").strip().lower() in _REGULATED_INDUSTRIES:
        risks.append("Industry compliance review required")
    return risks


def get_required_resources(activity: Activity) -> list[str]:
    return list(RESOURCES.get(activity, ()))


def get_maturity_alignment(activity: Activity, stage: CompanyStage) -> float:
    return MATURITY_ALIGNMENT.get(stage, {}).get(activity, 0.5)
