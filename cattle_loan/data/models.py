"""
Data models for persisted loan applications.
"""
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Union

from cattle_loan.domain.application.models import Application


class ApplicationStatus(str, Enum):
    """Processing status attached to an application when it is stored."""
    
    PENDING = "pending"


class ServerTimestamp:
    """Placeholder for a creation time the storage backend assigns on write."""
    
    _instance: Optional['ServerTimestamp'] = None
    
    def __new__(cls) -> 'ServerTimestamp':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance
    
    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = ServerTimestamp()


@dataclass(frozen=True)
class SubmissionRecord:
    """Model representing an application as handed to storage."""
    
    application: Application
    status: ApplicationStatus = ApplicationStatus.PENDING
    created_at: Union[datetime, ServerTimestamp] = SERVER_TIMESTAMP
    id: Optional[str] = None
    
    @property
    def is_stored(self) -> bool:
        return self.id is not None and isinstance(self.created_at, datetime)
    
    def stored_as(self, record_id: str, created_at: datetime) -> 'SubmissionRecord':
        """Return a copy carrying the storage-assigned id and timestamp."""
        return replace(self, id=record_id, created_at=created_at)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert the model to the stored record shape."""
        result = self.application.to_dict()
        result["status"] = self.status.value
        result["createdAt"] = self.created_at.isoformat() if isinstance(self.created_at, datetime) else None
        if self.id is not None:
            result["id"] = self.id
        return result
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SubmissionRecord':
        """Create a model from a dictionary."""
        created_at = data.get("createdAt")
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        
        return cls(
            application=Application.from_dict(data),
            status=ApplicationStatus(data.get("status", ApplicationStatus.PENDING.value)),
            created_at=created_at or SERVER_TIMESTAMP,
            id=data.get("id")
        )
