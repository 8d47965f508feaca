"""
Vacation policy rules.

Modules
-------
validator : is_valid() + invalid_row_message() — record completeness.
engine    : RULE_CHAIN + compute_days() — pure functions, no logging or I/O.
"""
