"""
What-if simulation records.

``ScenarioMultipliers`` holds optional scaling factors; ``None`` means the
factor is not applied.  ``SimulationResult`` compares one scenario with the
unmodified baseline, and ``MonthlyProjection`` is one row of a 12-month
forecast.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from roi_advisor.taxonomy.business_taxonomy import RiskLevel


class ScenarioMultipliers(BaseModel):
    """Scaling factors applied to KPIs and costs.

    Attributes:
        revenue_multiplier:          Scales revenue and AOV directly.
        cost_multiplier:             Scales every cost bucket except marketing and COGS.
        conversion_rate_multiplier:  Scales the conversion rate.
        churn_rate_multiplier:       Scales churn; lifetime span follows.
        marketing_budget_multiplier: Scales the marketing budget.
        cogs_multiplier:             Scales cost of goods sold.
        lead_generation_multiplier:  Scales monthly leads.
        ltv_multiplier:              Scales customer lifetime value.
    """

    model_config = ConfigDict(frozen=True)

    revenue_multiplier: Optional[float] = Field(default=None, gt=0)
    cost_multiplier: Optional[float] = Field(default=None, gt=0)
    conversion_rate_multiplier: Optional[float] = Field(default=None, gt=0)
    churn_rate_multiplier: Optional[float] = Field(default=None, gt=0)
    marketing_budget_multiplier: Optional[float] = Field(default=None, gt=0)
    cogs_multiplier: Optional[float] = Field(default=None, gt=0)
    lead_generation_multiplier: Optional[float] = Field(default=None, gt=0)
    ltv_multiplier: Optional[float] = Field(default=None, gt=0)

    def applied(self) -> dict[str, float]:
        """Factors that are set, keyed by field name."""
        return {k: v for k, v in self.model_dump().items() if v is not None}


class SimulationScenario(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    multipliers: ScenarioMultipliers = ScenarioMultipliers()


class StateSummary(BaseModel):
    """Monthly revenue, costs, profit and ROI (%) of one business state."""

    model_config = ConfigDict(frozen=True)

    monthly_revenue: float
    total_costs: float
    monthly_profit: float
    roi: float


class ScenarioComparison(BaseModel):
    """Percentage changes against baseline; ``roi_change`` is in points."""

    model_config = ConfigDict(frozen=True)

    revenue_change: float
    cost_change: float
    roi_change: float
    profit_change: float


class SimulationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    scenario: SimulationScenario
    results: StateSummary
    comparison: ScenarioComparison
    confidence: float
    risk_level: RiskLevel


class SensitivityRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    low: float
    base: float
    high: float


class MonthlyProjection(BaseModel):
    model_config = ConfigDict(frozen=True)

    month: int
    month_name: str
    leads: int
    conversion_rate: float
    converted_customers: int
    average_order_value: float
    monthly_revenue: float
    cumulative_revenue: float
    marketing_budget: float
    sales_team_cost: float
    technology_costs: float
    operational_costs: float
    total_costs: float
    cumulative_costs: float
    monthly_profit: float
    cumulative_profit: float
    roi: float
    cac: float
    ltv: float
    ltv_cac_ratio: float
