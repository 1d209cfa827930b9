# tests/conftest.py
import pytest

from courtside.config.settings import Settings, StorageSettings
from courtside.data.persistence import MemoryKeyValueStorage
from courtside.domain.booking_store import BookingStore
from courtside.domain.event_manager_store import EventManagerStore
from courtside.domain.sync import EventCatalogSync
from courtside.events.event_interface import EventEmitter


@pytest.fixture
def storage():
    """Empty in-memory key-value storage"""
    return MemoryKeyValueStorage()


@pytest.fixture
def emitter():
    """Fresh event emitter"""
    return EventEmitter()


@pytest.fixture
def booking_store():
    """Empty public catalog"""
    return BookingStore()


@pytest.fixture
def event_manager_store(emitter):
    """Organizer store publishing on the test emitter"""
    return EventManagerStore(emitter)


@pytest.fixture
def event_sync(emitter, booking_store):
    """Sync mirroring managed events into the public catalog"""
    sync = EventCatalogSync(emitter, booking_store)
    yield sync
    sync.detach()


@pytest.fixture
def test_settings(tmp_path):
    """Settings writing into a temporary directory, without demo data"""
    settings = Settings(storage=StorageSettings(data_dir=tmp_path / "data", enabled=True))
    settings.seed_dummy_data = False
    return settings
