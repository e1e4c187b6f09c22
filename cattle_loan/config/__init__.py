"""
Configuration package for the cattle loan application.

This package contains modules for managing application settings,
environment variables, and logging configuration.
"""

from cattle_loan.config.settings import Settings

# Export settings singleton for app-wide use
settings = Settings()

__all__ = ["settings", "Settings"]
