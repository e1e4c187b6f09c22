"""
Base repository interface for storing submitted applications.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from cattle_loan.config.logging_config import get_logger
from cattle_loan.data.models import SubmissionRecord

logger = get_logger(__name__)


class ApplicationRepository(ABC):
    """Base class for all application storage implementations.
    
    This abstract class defines the interface the submission workflow
    writes through. Implementations resolve the record's server
    timestamp and assign its document id.
    """
    
    def __init__(self, connection_config: Optional[Dict[str, Any]] = None):
        """Initialize the repository with connection configuration.
        
        Args:
            connection_config: Storage connection parameters
        """
        self.connection_config = connection_config or {}
        self._is_connected = False
    
    @property
    def is_connected(self) -> bool:
        return self._is_connected
    
    @abstractmethod
    async def connect(self) -> bool:
        """Establish connection to the storage backend.
        
        Returns:
            bool: True if connection successful, False otherwise
        """
        pass
    
    @abstractmethod
    async def disconnect(self) -> None:
        """Disconnect from the storage backend."""
        pass
    
    @abstractmethod
    async def create(self, record: SubmissionRecord) -> str:
        """Store a new application record.
        
        Args:
            record: Application with its pending status and timestamp placeholder
            
        Returns:
            str: Document id assigned by the backend
            
        Raises:
            Exception: Any backend failure; the caller treats all as a failed write
        """
        pass
    
    @abstractmethod
    async def get_by_id(self, id: str) -> Optional[SubmissionRecord]:
        """Retrieve a stored record by its id.
        
        Args:
            id: Document id
            
        Returns:
            Optional[SubmissionRecord]: Record if found, None otherwise
        """
        pass
    
    @abstractmethod
    async def get_all(self) -> List[SubmissionRecord]:
        """Retrieve all stored records in insertion order."""
        pass
    
    def handle_db_error(self, error: Exception, operation: str) -> Dict[str, Any]:
        """Log a storage error in a consistent way.
        
        Args:
            error: The exception that occurred
            operation: Name of the storage operation that failed
            
        Returns:
            Dict[str, Any]: Error information
        """
        error_info = {
            "repository": self.__class__.__name__,
            "operation": operation,
            "error_type": type(error).__name__,
            "error_message": str(error)
        }
        
        logger.error(f"Storage error: {error_info}")
        return error_info
    
    def _check_connection(self) -> None:
        """Check if the repository is connected.
        
        Raises:
            RuntimeError: If not connected
        """
        if not self._is_connected:
            raise RuntimeError(f"{self.__class__.__name__} is not connected")
