"""Scoring core and service clients of the SiagaJiwa caregiver screening app."""

__version__ = "0.1.0"
