"""
Deterministic business analysis: ROI metrics, opportunity costs, company
maturity and what-if simulation.  No fuzzy inference happens here.

Modules
-------
roi_metrics : get_intelligent_defaults() + calculate_roi_metrics(): fills
              missing KPIs/costs from benchmarks and projects ROI.
opportunity : calculate_opportunity_costs() + calculate_activity_priority().
maturity    : assess_company_maturity() + calculate_market_fit_score()
              + get_readiness_level().
simulation  : apply_multipliers() + run_scenarios() + generate_projections()
              + sensitivity_analysis().
"""
