"""
Fuzzy inference core: membership functions, linguistic variables, the rule
base and the Mamdani-style inference engine.

Modules
-------
membership : triangular() / trapezoidal() / gaussian() / sigmoid() factories
             returning validated, frozen callables.
variables  : FuzzySet + FuzzyVariable + VARIABLE_REGISTRY (six variables).
rules      : FuzzyRule with explicit ``applies_to`` + RULE_BASE +
             validate_rule_base().
engine     : infer() + defuzzify() + calculate_fuzzy_inputs() +
             score_activity(): pure functions, no I/O.
"""
