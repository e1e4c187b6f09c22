"""
Cattle loan application capture.

Form data model, validation engine and submission orchestration for
livestock loan applications.
"""

__version__ = "0.1.0"
