"""Vacation Planner — annual vacation day entitlements from an employee roster."""

__version__ = "1.0.0"
