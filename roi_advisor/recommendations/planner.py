"""
Next-steps planner: turns ranked recommendations into a bucketed,
dependency-aware task plan.

Task sources
------------
foundation   : onboarding gaps (tracking, channels, CRM), skipped when the
               tenant already reports the tool.
activation   : the top recommendations, one ``implement_<activity>`` task each.
optimization : conversion below 3 % or CAC above 30 % of LTV.
scaling      : stage beyond startup and market fit above 6.

Buckets
-------
immediate  : critical or foundation tasks, capped at 3.
short-term : high-priority tasks not already immediate; when fewer than 2,
             back-filled with medium-priority activation tasks; capped at 5.
long-term  : remaining medium/low non-foundation tasks, capped at 4.

The critical path lists critical/high task ids from immediate + short-term,
highest priority first, re-ordered so no task precedes an in-path
dependency, capped at 5.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from roi_advisor.analysis.maturity import (
    assess_company_maturity,
    calculate_market_fit_score,
    get_readiness_level,
)
from roi_advisor.models.inputs import AvailableTools, CurrentCosts, CurrentKPIs, SalesActivities
from roi_advisor.models.outputs import (
    CompanyMaturity,
    CompanyProfile,
    FuzzyLogicRecommendation,
    NextStepsPlan,
    NextStepsTask,
)
from roi_advisor.taxonomy.business_taxonomy import (
    CompanyStage,
    ReadinessLevel,
    TaskCategory,
    TaskPriority,
)
from roi_advisor.utils.numeric import clamp
from roi_advisor.utils.time_utils import format_duration, parse_duration_minutes

logger = logging.getLogger(__name__)

P = TaskPriority
C = TaskCategory

CHANNELS_URL = "/settings?tab=channels"


# ── Task generators ───────────────────────────────────────────────────────────


def generate_foundation_tasks(
    maturity: CompanyMaturity,
    readiness: ReadinessLevel,
    available_tools: Optional[AvailableTools] = None,
) -> list[NextStepsTask]:
    tools = available_tools or AvailableTools()
    has_channel = tools.email_marketing or tools.whatsapp_business
    tasks: list[NextStepsTask] = []

    if readiness == ReadinessLevel.BEGINNER:
        if not tools.web_analytics:
            tasks.append(NextStepsTask(
                id="setup_tracking",
                title="Install Website Tracking",
                description="Set up analytics and visitor tracking to understand your audience behavior",
                priority=P.CRITICAL,
                category=C.FOUNDATION,
                estimated_time="15 min",
                market_fit_alignment=9,
                roi_impact=25,
                action_url=CHANNELS_URL,
                resources=["Developer", "Analytics tools"],
                reasoning="Essential for data-driven decisions and lead capture",
            ))
        if not has_channel:
            tasks.append(NextStepsTask(
                id="configure_channels",
                title="Connect Communication Channels",
                description="Set up email or WhatsApp to automatically engage with leads",
                priority=P.CRITICAL,
                category=C.FOUNDATION,
                estimated_time="20 min",
                dependencies=[] if tools.web_analytics else ["setup_tracking"],
                market_fit_alignment=8,
                roi_impact=40,
                action_url=CHANNELS_URL,
                resources=["Marketing team", "Email platform"],
                reasoning="Direct communication with leads is fundamental for conversion",
            ))
        else:
            tasks.append(NextStepsTask(
                id="optimize_communication",
                title="Optimize Communication Strategy",
                description="Improve your existing email/WhatsApp campaigns for better engagement",
                priority=P.HIGH,
                category=C.OPTIMIZATION,
                estimated_time="1 week",
                market_fit_alignment=7,
                roi_impact=30,
                resources=["Marketing team", "Content creation", "A/B testing"],
                reasoning="Maximize ROI from your existing communication tools",
            ))

    if maturity.digital_maturity < 5 and not tools.crm_system:
        tasks.append(NextStepsTask(
            id="setup_crm",
            title="Implement CRM System",
            description="Organize and track your leads and customer interactions",
            priority=P.HIGH,
            category=C.FOUNDATION,
            estimated_time="2 hours",
            dependencies=["configure_channels"],
            market_fit_alignment=7,
            roi_impact=30,
            resources=["Sales team", "CRM platform", "Data entry"],
            reasoning="Essential for scaling sales operations and tracking performance",
        ))
    elif tools.crm_system and maturity.digital_maturity < 7:
        tasks.append(NextStepsTask(
            id="optimize_crm",
            title="Optimize CRM Usage",
            description="Improve your CRM setup and team adoption for better results",
            priority=P.MEDIUM,
            category=C.OPTIMIZATION,
            estimated_time="1 week",
            dependencies=["configure_channels"],
            market_fit_alignment=8,
            roi_impact=25,
            resources=["Sales team", "CRM training", "Process documentation"],
            reasoning="Maximize ROI from your existing CRM investment",
        ))
    return tasks


def activation_priority(score: int) -> TaskPriority:
    if score > 80:
        return P.CRITICAL
    if score > 60:
        return P.HIGH
    return P.MEDIUM


def generate_activation_tasks(
    recommendations: Sequence[FuzzyLogicRecommendation],
    foundation_tasks: Sequence[NextStepsTask] = (),
    count: int = 3,
) -> list[NextStepsTask]:
    """One task per top recommendation, blocked on critical foundation work."""
    blockers = [t.id for t in foundation_tasks if t.priority == P.CRITICAL]
    tasks = []
    for rec in recommendations[:count]:
        lead = rec.reasoning[0] if rec.reasoning else "High-impact opportunity"
        tasks.append(NextStepsTask(
            id=f"implement_{rec.activity_key.value}",
            title=f"Implement {rec.activity}",
            description=". ".join(rec.reasoning),
            priority=activation_priority(rec.score),
            category=C.ACTIVATION,
            estimated_time=rec.implementation_plan.timeframe,
            dependencies=list(blockers),
            market_fit_alignment=int(clamp(round(rec.confidence / 10), 1, 10)),
            roi_impact=rec.implementation_plan.expected_roi,
            resources=list(rec.implementation_plan.resources),
            prerequisites=list(rec.prerequisites),
            reasoning=f"AI Score: {rec.score}/100. {lead}",
        ))
    return tasks


def generate_optimization_tasks(kpis: CurrentKPIs) -> list[NextStepsTask]:
    tasks = []
    if kpis.conversion_rate < 3:
        tasks.append(NextStepsTask(
            id="optimize_conversion",
            title="Optimize Conversion Funnel",
            description="Analyze and improve your lead-to-customer conversion process",
            priority=P.HIGH,
            category=C.OPTIMIZATION,
            estimated_time="1 week",
            dependencies=["setup_tracking"],
            market_fit_alignment=8,
            roi_impact=50,
            resources=["Marketing analyst", "A/B testing tools", "UX designer"],
            reasoning=f"Current conversion rate ({kpis.conversion_rate:g}%) is below industry average",
        ))
    if kpis.customer_acquisition_cost > kpis.customer_lifetime_value * 0.3:
        tasks.append(NextStepsTask(
            id="reduce_cac",
            title="Reduce Customer Acquisition Cost",
            description="Optimize marketing spend and improve cost efficiency",
            priority=P.MEDIUM,
            category=C.OPTIMIZATION,
            estimated_time="2 weeks",
            dependencies=["setup_crm"],
            market_fit_alignment=7,
            roi_impact=35,
            resources=["Marketing manager", "Analytics tools", "Budget planning"],
            reasoning="CAC is too high relative to LTV, impacting profitability",
        ))
    return tasks


def generate_scaling_tasks(maturity: CompanyMaturity, market_fit_score: float) -> list[NextStepsTask]:
    if maturity.stage == CompanyStage.STARTUP or market_fit_score <= 6:
        return []
    return [
        NextStepsTask(
            id="scale_team",
            title="Scale Sales & Marketing Team",
            description="Hire additional team members to handle increased demand",
            priority=P.MEDIUM,
            category=C.SCALING,
            estimated_time="1 month",
            dependencies=["optimize_conversion"],
            market_fit_alignment=6,
            roi_impact=60,
            resources=["HR team", "Recruitment budget", "Training materials"],
            reasoning="Strong market fit indicates readiness for team expansion",
        ),
        NextStepsTask(
            id="automate_processes",
            title="Implement Marketing Automation",
            description="Set up automated workflows to scale without proportional cost increase",
            priority=P.LOW,
            category=C.SCALING,
            estimated_time="3 weeks",
            dependencies=["setup_crm"],
            market_fit_alignment=7,
            roi_impact=45,
            resources=["Marketing automation platform", "Technical setup", "Content creation"],
            reasoning="Automation enables efficient scaling of marketing efforts",
        ),
    ]


def prune_dependencies(tasks: Sequence[NextStepsTask]) -> list[NextStepsTask]:
    """Drop dependencies on task ids that are not part of the plan."""
    ids = {t.id for t in tasks}
    pruned = []
    for task in tasks:
        kept = [d for d in task.dependencies if d in ids]
        pruned.append(task if kept == task.dependencies else task.model_copy(update={"dependencies": kept}))
    return pruned


# ── Plan assembly ─────────────────────────────────────────────────────────────


def bucket_tasks(
    tasks: Sequence[NextStepsTask],
    immediate_cap: int = 3,
    short_term_cap: int = 5,
    short_term_min: int = 2,
    long_term_cap: int = 4,
) -> tuple[list[NextStepsTask], list[NextStepsTask], list[NextStepsTask]]:
    immediate = [
        t for t in tasks if t.priority == P.CRITICAL or t.category == C.FOUNDATION
    ][:immediate_cap]
    taken = {t.id for t in immediate}

    short_term = [t for t in tasks if t.priority == P.HIGH and t.id not in taken]
    if len(short_term) < short_term_min:
        short_ids = {t.id for t in short_term}
        short_term += [
            t for t in tasks
            if t.category == C.ACTIVATION and t.priority == P.MEDIUM
            and t.id not in taken and t.id not in short_ids
        ]
    short_term = short_term[:short_term_cap]
    taken |= {t.id for t in short_term}

    long_term = [
        t for t in tasks
        if t.priority in (P.MEDIUM, P.LOW) and t.category != C.FOUNDATION and t.id not in taken
    ][:long_term_cap]
    return immediate, short_term, long_term


def calculate_critical_path(
    immediate: Sequence[NextStepsTask],
    short_term: Sequence[NextStepsTask],
    cap: int = 5,
) -> list[str]:
    candidates = sorted(
        (t for t in [*immediate, *short_term] if t.priority in (P.CRITICAL, P.HIGH)),
        key=lambda t: -t.priority.rank,
    )
    by_id = {t.id: t for t in candidates}
    ordered: list[str] = []
    visiting: set[str] = set()

    def place(task: NextStepsTask) -> None:
        if task.id in ordered or task.id in visiting:
            return
        visiting.add(task.id)
        for dep in task.dependencies:
            if dep in by_id:
                place(by_id[dep])
        visiting.discard(task.id)
        ordered.append(task.id)

    for task in candidates:
        place(task)
    return ordered[:cap]


def calculate_total_time(tasks: Sequence[NextStepsTask]) -> str:
    return format_duration(sum(parse_duration_minutes(t.estimated_time) for t in tasks))


def calculate_expected_roi_increase(activation_tasks: Sequence[NextStepsTask]) -> float:
    if not activation_tasks:
        return 0.0
    return sum(t.roi_impact for t in activation_tasks) / len(activation_tasks)


def generate_next_steps_plan(
    activities: SalesActivities,
    kpis: CurrentKPIs,
    costs: CurrentCosts,
    industry: str,
    company_size: str,
    fuzzy_recommendations: Sequence[FuzzyLogicRecommendation],
    available_tools: Optional[AvailableTools] = None,
    *,
    activation_task_count: int = 3,
    immediate_cap: int = 3,
    short_term_cap: int = 5,
    short_term_min: int = 2,
    long_term_cap: int = 4,
    critical_path_cap: int = 5,
) -> NextStepsPlan:
    """Build the three-horizon action plan for one tenant.

    Activation tasks take their ROI from each recommendation's
    implementation plan, which already reflects the matching opportunity.
    """
    maturity = assess_company_maturity(kpis, costs, company_size, industry)
    market_fit = calculate_market_fit_score(kpis)
    readiness = get_readiness_level(maturity, market_fit, activities)

    foundation = generate_foundation_tasks(maturity, readiness, available_tools)
    activation = generate_activation_tasks(fuzzy_recommendations, foundation, activation_task_count)
    all_tasks = prune_dependencies([
        *foundation,
        *activation,
        *generate_optimization_tasks(kpis),
        *generate_scaling_tasks(maturity, market_fit),
    ])

    immediate, short_term, long_term = bucket_tasks(
        all_tasks, immediate_cap, short_term_cap, short_term_min, long_term_cap
    )
    plan = NextStepsPlan(
        company_profile=CompanyProfile(
            stage=maturity.stage,
            digital_maturity=maturity.digital_maturity,
            market_fit_score=market_fit,
            readiness_level=readiness,
        ),
        immediate_actions=immediate,
        short_term_goals=short_term,
        long_term_strategy=long_term,
        total_estimated_time=calculate_total_time(all_tasks),
        expected_roi_increase=calculate_expected_roi_increase(
            [t for t in all_tasks if t.category == C.ACTIVATION]
        ),
        critical_path=calculate_critical_path(immediate, short_term, critical_path_cap),
    )
    logger.info(
        "Plan: %d immediate, %d short-term, %d long-term (readiness=%s, market fit=%.2f)",
        len(immediate), len(short_term), len(long_term), readiness, market_fit,
    )
    return plan
