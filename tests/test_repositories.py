# tests/test_repositories.py
import json
from datetime import datetime

import pytest

from cattle_loan.config.settings import PersistenceSettings
from cattle_loan.data import create_repository
from cattle_loan.data.json_repository import JsonFileApplicationRepository
from cattle_loan.data.memory_repository import InMemoryApplicationRepository
from cattle_loan.data.models import SERVER_TIMESTAMP, ApplicationStatus, ServerTimestamp, SubmissionRecord
from cattle_loan.domain.application.models import Application


@pytest.fixture
def record(valid_form):
    """Create a pending record for a valid application"""
    return SubmissionRecord(application=valid_form.application)


def test_record_defaults(record):
    """Test that new records are pending with an unresolved timestamp"""
    assert record.status is ApplicationStatus.PENDING
    assert record.created_at is SERVER_TIMESTAMP
    assert ServerTimestamp() is SERVER_TIMESTAMP
    assert record.is_stored is False


def test_record_to_dict_appends_status(record):
    """Test the stored shape: application fields plus status and createdAt"""
    data = record.to_dict()
    
    assert data["status"] == "pending"
    assert data["createdAt"] is None
    assert "id" not in data
    assert data["applicant"]["name"] == "Ravi"
    assert data["cattle"][0]["breed"] == "Gir"


@pytest.mark.asyncio
async def test_in_memory_create_and_read(record):
    """Test storing and reading back a record"""
    repository = InMemoryApplicationRepository()
    assert await repository.connect() is True
    assert repository.is_connected
    
    record_id = await repository.create(record)
    stored = await repository.get_by_id(record_id)
    
    assert stored.id == record_id
    assert stored.application == record.application
    assert isinstance(stored.created_at, datetime)
    assert stored.created_at.tzinfo is not None
    assert await repository.get_all() == [stored]
    assert await repository.get_by_id("missing") is None


@pytest.mark.asyncio
async def test_in_memory_assigns_unique_ids(record):
    """Test that each write gets its own document id"""
    repository = InMemoryApplicationRepository()
    await repository.connect()
    
    first = await repository.create(record)
    second = await repository.create(record)
    
    assert first != second
    assert len(await repository.get_all()) == 2


@pytest.mark.asyncio
async def test_in_memory_requires_connection(record):
    """Test that operations fail before connect and after disconnect"""
    repository = InMemoryApplicationRepository()
    with pytest.raises(RuntimeError):
        await repository.create(record)
    
    await repository.connect()
    await repository.disconnect()
    with pytest.raises(RuntimeError):
        await repository.get_all()


@pytest.mark.asyncio
async def test_json_repository_appends_lines(tmp_path, record):
    """Test that each application is written as one JSON line"""
    repository = JsonFileApplicationRepository({"data_dir": tmp_path / "store", "collection": "loanApplications"})
    assert await repository.connect() is True
    
    first = await repository.create(record)
    second = await repository.create(record)
    
    lines = (tmp_path / "store" / "loanApplications.jsonl").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    
    data = json.loads(lines[0])
    assert data["id"] == first
    assert data["status"] == "pending"
    assert data["createdAt"] is not None
    assert data["banking"]["ifscCode"] == "SBIN0001234"
    assert data["cattle"][0]["insuranceStatus"] is False
    
    stored = await repository.get_by_id(second)
    assert stored.application == record.application
    assert isinstance(stored.created_at, datetime)


@pytest.mark.asyncio
async def test_json_repository_empty(tmp_path):
    """Test reading a collection that has no file yet"""
    repository = JsonFileApplicationRepository({"data_dir": tmp_path})
    await repository.connect()
    
    assert await repository.get_all() == []
    assert await repository.get_by_id("anything") is None


@pytest.mark.asyncio
async def test_json_repository_write_failure(tmp_path, record):
    """Test that a write error propagates to the caller"""
    repository = JsonFileApplicationRepository({"data_dir": tmp_path})
    await repository.connect()
    # A directory where the file should be makes the append fail
    repository.path.mkdir()
    
    with pytest.raises(OSError):
        await repository.create(record)


def test_create_repository_backends(tmp_path):
    """Test choosing the repository from settings"""
    memory = create_repository(PersistenceSettings(backend="memory"))
    json_repo = create_repository(PersistenceSettings(backend="json", data_dir=tmp_path, collection="apps"))
    
    assert isinstance(memory, InMemoryApplicationRepository)
    assert isinstance(json_repo, JsonFileApplicationRepository)
    assert json_repo.path == tmp_path / "apps.jsonl"


def test_record_from_dict():
    """Test rebuilding a stored record"""
    record = SubmissionRecord.from_dict({
        "applicant": {"name": "Ravi"},
        "status": "pending",
        "createdAt": "2024-03-01T10:00:00+00:00",
        "id": "abc",
    })
    
    assert record.id == "abc"
    assert record.application.applicant.name == "Ravi"
    assert record.application.cattle == Application().cattle
    assert record.created_at == datetime.fromisoformat("2024-03-01T10:00:00+00:00")
