"""Outpatient scheduling desk with emergency triage and undo."""

__version__ = "0.1.0"
