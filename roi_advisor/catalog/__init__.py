"""
Activity catalogue: static economics, tooling and playbook text.

Modules
-------
activities : ActivityBaseline + ACTIVITY_BASELINES + industry / size-tier
             ROI multipliers.
tools      : TOOL_REQUIREMENTS + validate_tool_requirements().
playbook   : prerequisites, risks, resources and stage alignment per activity.
"""
