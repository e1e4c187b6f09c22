"""
Application settings and configuration.

This module provides a centralized configuration management system using Pydantic.
It loads settings from environment variables, .env files, or falls back to defaults.
"""

import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file if present
load_dotenv()

# Base directories
ROOT_DIR = Path(__file__).parent.parent.parent
LOG_DIR = ROOT_DIR / "logs"
DATA_DIR = ROOT_DIR / "data"

PERSISTENCE_BACKENDS = ("memory", "json")
CATTLE_TYPE_CHOICES = ("", "Cow", "Buffalo", "Goat", "Sheep", "Other")


class FormSettings(BaseModel):
    """Defaults used when seeding or resetting the application form."""
    
    default_loan_term: str = Field(
        default="12",
        description="Loan term in months pre-filled on a fresh form"
    )
    
    new_cattle_type: str = Field(
        default="",
        description="Cattle type pre-selected on entries added with 'add cattle'"
    )
    
    @field_validator("default_loan_term")
    @classmethod
    def validate_loan_term(cls, v: str) -> str:
        """Validate that the default term is a whole number of months."""
        v = v.strip()
        if not v.isdigit():
            raise ValueError("Default loan term must be a whole number of months")
        return v
    
    @field_validator("new_cattle_type")
    @classmethod
    def validate_cattle_type(cls, v: str) -> str:
        """Validate that the pre-selected cattle type is a known choice."""
        if v not in CATTLE_TYPE_CHOICES:
            raise ValueError(f"Cattle type must be one of {list(CATTLE_TYPE_CHOICES)}")
        return v


class PersistenceSettings(BaseModel):
    """Persistence collaborator configuration."""
    
    backend: str = Field(
        default="memory",
        description="Storage backend for submitted applications (memory or json)"
    )
    
    collection: str = Field(
        default="loanApplications",
        description="Name of the collection submitted applications are written to"
    )
    
    data_dir: Path = Field(
        default=DATA_DIR,
        description="Directory used by file-backed storage"
    )
    
    @field_validator("backend")
    @classmethod
    def validate_backend(cls, v: str) -> str:
        """Validate that the backend is supported."""
        v = v.lower()
        if v not in PERSISTENCE_BACKENDS:
            raise ValueError(f"Persistence backend must be one of {list(PERSISTENCE_BACKENDS)}")
        return v


class LoggingSettings(BaseModel):
    """Logging configuration settings."""
    
    level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format"
    )
    
    file_enabled: bool = Field(
        default=False,
        description="Whether to write logs to a file"
    )
    
    console_enabled: bool = Field(
        default=True,
        description="Whether to write logs to console"
    )
    
    log_dir: Path = Field(
        default=LOG_DIR,
        description="Directory for log files"
    )
    
    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()


class Settings(BaseModel):
    """Main application settings."""
    
    # Application info
    app_name: str = Field(
        default="Cattle Loan Application",
        description="Application name"
    )
    
    app_version: str = Field(
        default="0.1.0",
        description="Application version"
    )
    
    # Sub-configurations
    form: FormSettings = Field(default_factory=lambda: FormSettings(
        default_loan_term=os.environ.get("FORM_DEFAULT_LOAN_TERM", "12"),
        new_cattle_type=os.environ.get("FORM_NEW_CATTLE_TYPE", "")
    ))
    
    persistence: PersistenceSettings = Field(default_factory=lambda: PersistenceSettings(
        backend=os.environ.get("PERSISTENCE_BACKEND", "memory"),
        collection=os.environ.get("PERSISTENCE_COLLECTION", "loanApplications"),
        data_dir=_parse_path(os.environ.get("DATA_DIR"), DATA_DIR)
    ))
    
    logging: LoggingSettings = Field(default_factory=lambda: LoggingSettings(
        level=os.environ.get("LOG_LEVEL", "INFO"),
        format=os.environ.get("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
        file_enabled=_parse_bool(os.environ.get("LOG_FILE_ENABLED", "False")),
        console_enabled=_parse_bool(os.environ.get("LOG_CONSOLE_ENABLED", "True")),
        log_dir=_parse_path(os.environ.get("LOG_DIR"), LOG_DIR)
    ))
    
    # Runtime configs
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    
    def __init__(self, **data: Any):
        """Initialize settings, allowing a debug mode override from the environment."""
        super().__init__(**data)
        self.debug_mode = _parse_bool(os.environ.get("DEBUG_MODE", str(self.debug_mode)))
    
    def get_collection_path(self) -> Path:
        """Get the path of the file backing the configured collection."""
        return self.persistence.data_dir / f"{self.persistence.collection}.jsonl"


def _parse_path(value: Optional[str], default: Path) -> Path:
    """Parse string to path, falling back to the default when unset."""
    if not value:
        return default
    return Path(value).expanduser()


def _parse_bool(value: str) -> bool:
    """Parse string to boolean."""
    return value.lower() in ("true", "1", "t", "yes", "y")
