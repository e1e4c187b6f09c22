"""
File-backed repository storing one JSON object per line.
"""
import asyncio
import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from cattle_loan.config.logging_config import get_logger
from cattle_loan.data.base_repository import ApplicationRepository
from cattle_loan.data.models import SubmissionRecord

logger = get_logger(__name__)


class JsonFileApplicationRepository(ApplicationRepository):
    """Repository appending submitted applications to a JSON Lines file.
    
    The file lives at ``<data_dir>/<collection>.jsonl``. File access runs
    in a worker thread so the event loop is not blocked.
    """
    
    def __init__(self, connection_config: Optional[Dict[str, Any]] = None):
        """Initialize the repository.
        
        Args:
            connection_config: ``data_dir`` and ``collection`` entries
        """
        super().__init__(connection_config)
        data_dir = Path(self.connection_config.get("data_dir", "data"))
        collection = self.connection_config.get("collection", "loanApplications")
        self.path = data_dir / f"{collection}.jsonl"
    
    async def connect(self) -> bool:
        """Create the data directory if needed.
        
        Returns:
            bool: True if the directory is usable, False otherwise
        """
        try:
            await asyncio.to_thread(self.path.parent.mkdir, parents=True, exist_ok=True)
        except OSError as e:
            self.handle_db_error(e, "connect")
            return False
        
        self._is_connected = True
        logger.info(f"Connected to JSON file repository at {self.path}")
        return True
    
    async def disconnect(self) -> None:
        self._is_connected = False
        logger.info("Disconnected from JSON file repository")
    
    async def create(self, record: SubmissionRecord) -> str:
        self._check_connection()
        
        record_id = uuid.uuid4().hex
        stored = record.stored_as(record_id, datetime.now(timezone.utc))
        line = json.dumps(stored.to_dict(), ensure_ascii=False)
        
        try:
            await asyncio.to_thread(self._append_line, line)
        except OSError as e:
            self.handle_db_error(e, "create")
            raise
        
        logger.debug(f"Stored application {record_id} in {self.path}")
        return record_id
    
    async def get_by_id(self, id: str) -> Optional[SubmissionRecord]:
        for record in await self.get_all():
            if record.id == id:
                return record
        return None
    
    async def get_all(self) -> List[SubmissionRecord]:
        self._check_connection()
        
        lines = await asyncio.to_thread(self._read_lines)
        return [SubmissionRecord.from_dict(json.loads(line)) for line in lines]
    
    def _append_line(self, line: str) -> None:
        with self.path.open("a", encoding="utf-8") as f:
            f.write(line + "\n")
    
    def _read_lines(self) -> List[str]:
        if not self.path.exists():
            return []
        with self.path.open("r", encoding="utf-8") as f:
            return [line for line in f.read().splitlines() if line.strip()]
