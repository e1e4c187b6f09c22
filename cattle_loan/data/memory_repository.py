"""
In-memory repository implementation for testing.
"""
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

from cattle_loan.config.logging_config import get_logger
from cattle_loan.data.base_repository import ApplicationRepository
from cattle_loan.data.models import SubmissionRecord

logger = get_logger(__name__)


class InMemoryApplicationRepository(ApplicationRepository):
    """In-memory repository implementation.
    
    This repository stores records in memory, primarily for
    testing and development purposes.
    """
    
    def __init__(self, connection_config: Optional[Dict] = None):
        super().__init__(connection_config)
        self._store: Dict[str, SubmissionRecord] = {}
    
    async def connect(self) -> bool:
        """Simulate connecting to a database.
        
        Returns:
            bool: Always returns True
        """
        self._is_connected = True
        logger.info("Connected to in-memory repository")
        return True
    
    async def disconnect(self) -> None:
        """Simulate disconnecting from a database."""
        self._is_connected = False
        logger.info("Disconnected from in-memory repository")
    
    async def create(self, record: SubmissionRecord) -> str:
        self._check_connection()
        
        record_id = uuid.uuid4().hex
        self._store[record_id] = record.stored_as(record_id, datetime.now(timezone.utc))
        logger.debug(f"Stored application {record_id}")
        return record_id
    
    async def get_by_id(self, id: str) -> Optional[SubmissionRecord]:
        self._check_connection()
        return self._store.get(id)
    
    async def get_all(self) -> List[SubmissionRecord]:
        self._check_connection()
        return list(self._store.values())
