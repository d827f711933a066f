"""
Recommendation engine: converts fuzzy scores and opportunity costs into
ranked activity recommendations and a next-steps action plan.

Modules
-------
recommender : generate_fuzzy_logic_recommendations() + contextual_reasoning()
              + build_implementation_plan(): pure functions, no I/O.
planner     : generate_next_steps_plan() + task generators + bucket_tasks()
              + calculate_critical_path().
"""
