"""
Ingestion layer — roster reading and row normalization.

Submodules:
  roster_csv     — CSV roster reader (header → cell dicts)
  record_parser  — free-form column matching into ``EmployeeRecord``
"""
