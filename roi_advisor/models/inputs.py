"""
Caller-supplied input records.

All models are frozen: a request is created once from form state and read
by every stage.  Field names are snake_case; the camelCase names used by
the web application (``monthlyRevenue``, ``coldCalls``, ``crmSystem``) are
accepted as aliases, so a form payload validates directly::

    CurrentKPIs.model_validate({"monthlyRevenue": 80000, "conversionRate": 6})

Zero means "not provided".  Numeric fields must be finite and non-negative;
anything else is a caller error reported as ``pydantic.ValidationError``.
"""

from __future__ import annotations

from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from roi_advisor.taxonomy.activity_taxonomy import Activity

_INPUT_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
    allow_inf_nan=False,
)


class _NonNegativeRecord(BaseModel):
    model_config = _INPUT_CONFIG

    @field_validator("*")
    @classmethod
    def validate_non_negative(cls, v: float, info: ValidationInfo) -> float:
        if v < 0:
            raise ValueError(f"{info.field_name} must be non-negative, got {v}.")
        return v

    def provided_fields(self) -> dict[str, bool]:
        """Map of field name → whether the caller supplied a non-zero value."""
        return {name: bool(getattr(self, name)) for name in type(self).model_fields}


class CurrentKPIs(_NonNegativeRecord):
    """Business KPIs, monthly unless stated otherwise.

    Attributes:
        monthly_revenue:           Revenue per month.
        customer_acquisition_cost: Average spend to win one customer.
        customer_lifetime_value:   Revenue per customer over the relationship.
        conversion_rate:           Lead → customer rate, in percent.
        average_order_value:       Revenue per order.
        monthly_leads:             New leads per month.
        sales_cycle_length:        Days from first touch to close.
        converted_customers:       New customers per month.
        customer_lifetime_span:    Months a customer stays on average.
        churn_rate:                Monthly churn, in percent.
    """

    monthly_revenue: float = 0.0
    customer_acquisition_cost: float = 0.0
    customer_lifetime_value: float = 0.0
    conversion_rate: float = 0.0
    average_order_value: float = 0.0
    monthly_leads: float = 0.0
    sales_cycle_length: float = 0.0
    converted_customers: float = 0.0
    customer_lifetime_span: float = 0.0
    churn_rate: float = 0.0

    @property
    def ltv_cac_ratio(self) -> float:
        if self.customer_lifetime_value > 0 and self.customer_acquisition_cost > 0:
            return self.customer_lifetime_value / self.customer_acquisition_cost
        return 0.0


class CurrentCosts(_NonNegativeRecord):
    """Monthly cost buckets."""

    marketing_budget: float = 0.0
    sales_team_cost: float = 0.0
    sales_commission: float = 0.0
    technology_costs: float = 0.0
    operational_costs: float = 0.0
    cogs: float = 0.0
    other_costs: float = 0.0

    @property
    def total(self) -> float:
        return sum(getattr(self, name) for name in type(self).model_fields)


class Goals(BaseModel):
    model_config = _INPUT_CONFIG

    revenue_target: float = Field(default=0.0, ge=0)
    timeframe: str = ""
    primary_objectives: list[str] = []
    growth_challenges: list[str] = []


class SalesActivities(BaseModel):
    """Which activities the tenant already runs.  One flag per ``Activity``."""

    model_config = _INPUT_CONFIG

    cold_calls: bool = False
    personalized_follow_up: bool = False
    video_calls: bool = False
    transactional_emails: bool = False
    social_selling: bool = False
    content_marketing: bool = False
    referral_program: bool = False
    webinars_events: bool = False
    paid_ads: bool = False
    seo_content: bool = False
    partnerships: bool = False
    direct_mail: bool = False
    trade_shows: bool = False
    influencer_marketing: bool = False
    retargeting: bool = False
    activations: bool = False
    physical_visits: bool = False
    personal_brand: bool = False

    @classmethod
    def from_active(cls, activities: Iterable[Activity | str]) -> "SalesActivities":
        """Build flags with exactly ``activities`` switched on."""
        return cls(**{Activity.from_key(str(a)).value: True for a in activities})

    def is_active(self, activity: Activity) -> bool:
        return bool(getattr(self, activity.value))

    def active(self) -> list[Activity]:
        return [a for a in Activity if self.is_active(a)]

    def inactive(self) -> list[Activity]:
        """Activities not yet adopted, in catalogue order."""
        return [a for a in Activity if not self.is_active(a)]

    @property
    def active_count(self) -> int:
        return len(self.active())


class AvailableTools(BaseModel):
    """Tooling the tenant already has.  Unknown keys are ignored."""

    model_config = _INPUT_CONFIG

    crm_system: bool = False
    phone_system: bool = False
    sales_automation: bool = False
    marketing_automation: bool = False
    email_marketing: bool = False
    whatsapp_business: bool = False
    video_conferencing: bool = False
    design_software: bool = False
    social_media_tools: bool = False
    linkedin_ads: bool = False
    content_management: bool = False
    seo_tools: bool = False
    conversion_tracking: bool = False
    google_ads: bool = False
    facebook_ads: bool = False
    web_analytics: bool = False
    document_management: bool = False
    project_management: bool = False
    lead_scoring_tool: bool = False
    retargeting_pixels: bool = False
    time_tracking: bool = False

    def has(self, tool_key: str) -> bool:
        return bool(getattr(self, tool_key, False))


class AnalysisRequest(BaseModel):
    """Everything ``run_analysis`` needs for one tenant."""

    model_config = _INPUT_CONFIG

    industry: str = ""
    company_size: str = ""
    kpis: CurrentKPIs = CurrentKPIs()
    costs: CurrentCosts = CurrentCosts()
    goals: Goals = Goals()
    activities: SalesActivities = SalesActivities()
    available_tools: Optional[AvailableTools] = None
