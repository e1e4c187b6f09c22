"""
Domain logic module for business rules.

This package contains the loan application form model, its validation
rules and the submission workflow, independent of storage or display.
"""
