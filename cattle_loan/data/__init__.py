"""Storage for submitted loan applications."""

from typing import Optional

from cattle_loan.config.settings import PersistenceSettings
from cattle_loan.data.base_repository import ApplicationRepository
from cattle_loan.data.json_repository import JsonFileApplicationRepository
from cattle_loan.data.memory_repository import InMemoryApplicationRepository
from cattle_loan.data.models import SERVER_TIMESTAMP, ApplicationStatus, SubmissionRecord


def create_repository(config: Optional[PersistenceSettings] = None) -> ApplicationRepository:
    """
    Build the repository selected by the persistence settings.
    
    Args:
        config: Persistence settings, defaults to the global settings
        
    Returns:
        ApplicationRepository: Unconnected repository
    """
    if config is None:
        from cattle_loan.config import settings
        config = settings.persistence
    
    if config.backend == "json":
        return JsonFileApplicationRepository({
            "data_dir": config.data_dir,
            "collection": config.collection,
        })
    return InMemoryApplicationRepository()


__all__ = [
    "ApplicationRepository",
    "ApplicationStatus",
    "InMemoryApplicationRepository",
    "JsonFileApplicationRepository",
    "SERVER_TIMESTAMP",
    "SubmissionRecord",
    "create_repository",
]
