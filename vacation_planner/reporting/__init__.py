"""
vacation_planner.reporting — result file output.

Modules:
  export — atomic CSV export helpers for entitlement results.
"""
