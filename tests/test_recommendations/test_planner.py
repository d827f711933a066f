"""
Tests for roi_advisor/recommendations/planner.py.

What we test
------------
generate_next_steps_plan():
  - Beginner tenant: foundation tasks first, optimisation for weak conversion,
    no activation or scaling tasks, summed effort.
  - Reference tenant: advanced readiness, activation and scaling tasks,
    CRM optimisation instead of setup.
  - Structural: bucket caps, no task in two buckets, every dependency
    resolves inside the plan, critical path drawn from early buckets.

bucket_tasks(): back-fill of short-term with medium activation tasks.
calculate_critical_path(): dependencies placed first; capped.
prune_dependencies(), activation_priority(), calculate_total_time().
"""

from __future__ import annotations

import pytest

from roi_advisor.models.inputs import AvailableTools, CurrentCosts, CurrentKPIs, SalesActivities
from roi_advisor.models.outputs import NextStepsTask
from roi_advisor.recommendations.planner import (
    activation_priority,
    bucket_tasks,
    calculate_critical_path,
    calculate_total_time,
    generate_next_steps_plan,
    prune_dependencies,
)
from roi_advisor.recommendations.recommender import generate_fuzzy_logic_recommendations
from roi_advisor.taxonomy.business_taxonomy import (
    CompanyStage,
    ReadinessLevel,
    TaskCategory,
    TaskPriority,
)


def _task(task_id, priority, category=TaskCategory.ACTIVATION, deps=(), time="1 day") -> NextStepsTask:
    return NextStepsTask(
        id=task_id,
        title=task_id,
        description="",
        priority=priority,
        category=category,
        estimated_time=time,
        dependencies=list(deps),
        market_fit_alignment=5,
        roi_impact=10,
        reasoning="",
    )


def _ids(tasks):
    return [t.id for t in tasks]


@pytest.fixture
def beginner_plan():
    return generate_next_steps_plan(
        SalesActivities(), CurrentKPIs(), CurrentCosts(), "services", "1-10", [],
    )


@pytest.fixture
def tech_plan(tech_kpis, tech_costs, cold_calls_only, basic_tools):
    recs = generate_fuzzy_logic_recommendations(
        cold_calls_only, tech_kpis, tech_costs, "Technology", "51-200"
    )
    return generate_next_steps_plan(
        cold_calls_only, tech_kpis, tech_costs, "Technology", "51-200",
        recs, available_tools=basic_tools,
    )


class TestBeginnerPlan:
    def test_profile(self, beginner_plan):
        profile = beginner_plan.company_profile
        assert profile.stage == CompanyStage.STARTUP
        assert profile.readiness_level == ReadinessLevel.BEGINNER
        assert profile.market_fit_score == 5.0

    def test_foundation_first(self, beginner_plan):
        assert _ids(beginner_plan.immediate_actions) == [
            "setup_tracking", "configure_channels", "setup_crm",
        ]

    def test_optimization_short_term(self, beginner_plan):
        assert _ids(beginner_plan.short_term_goals) == ["optimize_conversion"]
        assert beginner_plan.long_term_strategy == []

    def test_critical_path(self, beginner_plan):
        assert beginner_plan.critical_path == [
            "setup_tracking", "configure_channels", "setup_crm", "optimize_conversion",
        ]

    def test_totals(self, beginner_plan):
        # 15 min + 20 min + 2 hours + 1 week
        assert beginner_plan.total_estimated_time == "1 week 2 hours"
        assert beginner_plan.expected_roi_increase == 0.0

    def test_existing_channels_optimised(self):
        tools = AvailableTools(web_analytics=True, email_marketing=True)
        plan = generate_next_steps_plan(
            SalesActivities(), CurrentKPIs(), CurrentCosts(), "services", "1-10", [],
            available_tools=tools,
        )
        ids = _ids(plan.all_tasks())
        assert "setup_tracking" not in ids
        assert "configure_channels" not in ids
        assert "optimize_communication" in ids

    def test_tools_follow_recommendations(self):
        tools = AvailableTools(web_analytics=True, email_marketing=True)
        plan = generate_next_steps_plan(
            SalesActivities(), CurrentKPIs(), CurrentCosts(), "services", "1-10", [], tools,
        )
        assert "setup_tracking" not in _ids(plan.all_tasks())


class TestReferencePlan:
    def test_advanced_readiness(self, tech_plan):
        assert tech_plan.company_profile.readiness_level == ReadinessLevel.ADVANCED
        assert tech_plan.company_profile.stage == CompanyStage.GROWTH

    def test_activation_tasks_immediate(self, tech_plan):
        assert _ids(tech_plan.immediate_actions)[:2] == [
            "implement_personal_brand", "implement_content_marketing",
        ]
        assert all(t.category == TaskCategory.ACTIVATION for t in tech_plan.immediate_actions)

    def test_crm_optimised_not_set_up(self, tech_plan):
        ids = _ids(tech_plan.all_tasks())
        assert "optimize_crm" in ids
        assert "setup_crm" not in ids

    def test_scaling_tasks(self, tech_plan):
        ids = _ids(tech_plan.long_term_strategy)
        assert "scale_team" in ids
        assert "automate_processes" in ids

    def test_no_foundation_when_advanced(self, tech_plan):
        ids = _ids(tech_plan.all_tasks())
        assert "setup_tracking" not in ids

    def test_expected_roi_is_activation_mean(self, tech_plan):
        activation = [t for t in tech_plan.all_tasks() if t.category == TaskCategory.ACTIVATION]
        assert tech_plan.expected_roi_increase == pytest.approx(
            sum(t.roi_impact for t in activation) / len(activation)
        )


class TestPlanStructure:
    @pytest.mark.parametrize("plan_fixture", ["beginner_plan", "tech_plan"])
    def test_invariants(self, plan_fixture, request):
        plan = request.getfixturevalue(plan_fixture)
        assert len(plan.immediate_actions) <= 3
        assert len(plan.short_term_goals) <= 5
        assert len(plan.long_term_strategy) <= 4
        assert len(plan.critical_path) <= 5

        ids = _ids(plan.all_tasks())
        assert len(ids) == len(set(ids))
        for task in plan.all_tasks():
            assert set(task.dependencies) <= set(ids)

        early = set(_ids(plan.immediate_actions)) | set(_ids(plan.short_term_goals))
        assert set(plan.critical_path) <= early


class TestBucketTasks:
    def test_backfill_with_medium_activation(self):
        tasks = [
            _task("a", TaskPriority.HIGH),
            _task("b", TaskPriority.MEDIUM),
            _task("c", TaskPriority.MEDIUM, TaskCategory.OPTIMIZATION),
        ]
        immediate, short, long = bucket_tasks(tasks)
        assert immediate == []
        assert _ids(short) == ["a", "b"]
        assert _ids(long) == ["c"]

    def test_immediate_cap(self):
        tasks = [_task(f"t{i}", TaskPriority.CRITICAL) for i in range(5)]
        immediate, short, long = bucket_tasks(tasks)
        assert _ids(immediate) == ["t0", "t1", "t2"]
        assert short == [] and long == []

    def test_foundation_never_long_term(self):
        tasks = [_task(f"f{i}", TaskPriority.MEDIUM, TaskCategory.FOUNDATION) for i in range(5)]
        immediate, short, long = bucket_tasks(tasks)
        assert len(immediate) == 3
        assert long == []


class TestCriticalPath:
    def test_dependency_placed_first(self):
        a = _task("a", TaskPriority.CRITICAL, deps=["b"])
        b = _task("b", TaskPriority.HIGH)
        assert calculate_critical_path([a], [b]) == ["b", "a"]

    def test_excludes_medium(self):
        assert calculate_critical_path([_task("m", TaskPriority.MEDIUM)], []) == []

    def test_capped(self):
        tasks = [_task(f"t{i}", TaskPriority.HIGH) for i in range(8)]
        assert len(calculate_critical_path(tasks, [], cap=5)) == 5


class TestHelpers:
    def test_prune_dependencies(self):
        tasks = prune_dependencies([
            _task("a", TaskPriority.HIGH, deps=["b", "missing"]),
            _task("b", TaskPriority.HIGH),
        ])
        assert tasks[0].dependencies == ["b"]

    @pytest.mark.parametrize("score, expected", [
        (95, TaskPriority.CRITICAL),
        (81, TaskPriority.CRITICAL),
        (80, TaskPriority.HIGH),
        (61, TaskPriority.HIGH),
        (60, TaskPriority.MEDIUM),
    ])
    def test_activation_priority(self, score, expected):
        assert activation_priority(score) == expected

    def test_total_time(self):
        tasks = [
            _task("a", TaskPriority.HIGH, time="15 min"),
            _task("b", TaskPriority.HIGH, time="2 hours"),
        ]
        assert calculate_total_time(tasks) == "2 hours 15 minutes"
