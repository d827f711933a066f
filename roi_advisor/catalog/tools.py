"""
Tooling each activity depends on, with setup and monthly costs.

Tool keys match the field names of ``AvailableTools``.  ``is_required``
separates hard prerequisites from nice-to-haves: a missing optional tool
still adds its cost but does not clear ``has_all_required_tools``.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from roi_advisor.models.inputs import AvailableTools
from roi_advisor.models.outputs import ToolRequirement, ToolValidation
from roi_advisor.taxonomy.activity_taxonomy import Activity


def _tool(key: str, name: str, setup: float, monthly: float, required: bool) -> ToolRequirement:
    return ToolRequirement(
        tool_key=key, name=name, setup_cost=setup, monthly_cost=monthly, is_required=required
    )


_CRM = _tool("crm_system", "CRM System", 2000, 150, True)
_CRM_OPTIONAL = _tool("crm_system", "CRM System", 2000, 150, False)
_EMAIL = _tool("email_marketing", "Email Marketing Platform", 500, 50, True)
_DESIGN_OPTIONAL = _tool("design_software", "Design Software", 600, 50, False)
_CONVERSION = _tool("conversion_tracking", "Conversion Tracking", 200, 20, True)
_CMS = _tool("content_management", "Content Management System", 1500, 100, True)
_SEO = _tool("seo_tools", "SEO Tools", 300, 100, True)
_SOCIAL = _tool("social_media_tools", "Social Media Management", 800, 80, True)
_MARKETING_AUTOMATION = _tool("marketing_automation", "Marketing Automation", 3000, 200, True)
_PROJECTS_OPTIONAL = _tool("project_management", "Project Management", 300, 50, False)
_ANALYTICS = _tool("web_analytics", "Web Analytics", 0, 0, True)

TOOL_REQUIREMENTS: Mapping[Activity, tuple[ToolRequirement, ...]] = MappingProxyType({
    Activity.COLD_CALLS: (
        _CRM,
        _tool("phone_system", "Phone System", 500, 80, True),
        _tool("sales_automation", "Sales Automation", 1000, 100, False),
    ),
    Activity.PERSONALIZED_FOLLOW_UP: (_CRM, _MARKETING_AUTOMATION, _EMAIL),
    Activity.VIDEO_CALLS: (
        _tool("video_conferencing", "Video Conferencing", 200, 30, True),
        _CRM,
    ),
    Activity.TRANSACTIONAL_EMAILS: (_EMAIL, _DESIGN_OPTIONAL),
    Activity.SOCIAL_SELLING: (
        _SOCIAL,
        _CRM,
        _tool("linkedin_ads", "LinkedIn Sales Navigator", 0, 80, False),
    ),
    Activity.CONTENT_MARKETING: (_CMS, _SEO, _DESIGN_OPTIONAL),
    Activity.REFERRAL_PROGRAM: (_CRM, _MARKETING_AUTOMATION, _CONVERSION),
    Activity.WEBINARS_EVENTS: (
        _tool("video_conferencing", "Webinar Platform", 1000, 150, True),
        _EMAIL,
        _CRM,
    ),
    Activity.PAID_ADS: (
        _tool("google_ads", "Google Ads Account", 0, 0, True),
        _tool("facebook_ads", "Facebook Ads Manager", 0, 0, False),
        _CONVERSION,
        _ANALYTICS,
    ),
    Activity.SEO_CONTENT: (_SEO, _CMS, _ANALYTICS),
    Activity.PARTNERSHIPS: (
        _CRM,
        _tool("document_management", "Document Management", 500, 30, True),
        _PROJECTS_OPTIONAL,
    ),
    Activity.DIRECT_MAIL: (
        _tool("design_software", "Design Software", 600, 50, True),
        _CRM,
        _CONVERSION,
    ),
    Activity.TRADE_SHOWS: (
        _CRM,
        _tool("lead_scoring_tool", "Lead Scoring Tool", 1000, 100, False),
        _PROJECTS_OPTIONAL,
    ),
    Activity.INFLUENCER_MARKETING: (_SOCIAL, _CONVERSION, _CRM_OPTIONAL),
    Activity.RETARGETING: (
        _tool("retargeting_pixels", "Retargeting Pixels", 100, 10, True),
        _tool("google_ads", "Google Ads", 0, 0, True),
        _tool("facebook_ads", "Facebook Ads", 0, 0, True),
        _DESIGN_OPTIONAL,
    ),
    Activity.ACTIVATIONS: (
        _tool("project_management", "Project Management", 300, 50, True),
        _CRM,
        _CONVERSION,
    ),
    Activity.PHYSICAL_VISITS: (
        _CRM,
        _tool("time_tracking", "Time Tracking", 200, 20, False),
        _PROJECTS_OPTIONAL,
    ),
    Activity.PERSONAL_BRAND: (
        _SOCIAL,
        _tool("content_management", "Content Management System", 1500, 100, False),
        _DESIGN_OPTIONAL,
    ),
})


def get_required_tools(activity: Activity) -> tuple[ToolRequirement, ...]:
    return TOOL_REQUIREMENTS.get(activity, ())


def validate_tool_requirements(activity: Activity, available_tools: AvailableTools) -> ToolValidation:
    """Compare an activity's tooling against what the tenant already has.

    Args:
        activity:        Activity being evaluated.
        available_tools: Tools the tenant reports owning.

    Returns:
        ``ToolValidation`` listing missing tools in catalogue order with their
        summed setup and monthly costs.
    """
    missing = [t for t in get_required_tools(activity) if not available_tools.has(t.tool_key)]
    return ToolValidation(
        missing_tools=missing,
        total_setup_cost=sum(t.setup_cost for t in missing),
        total_monthly_cost=sum(t.monthly_cost for t in missing),
        has_all_required_tools=not any(t.is_required for t in missing),
    )
