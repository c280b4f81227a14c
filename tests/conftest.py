import base64
import pytest
from fastapi.testclient import TestClient

from deedseal.app_state import state
from deedseal.config import ENCRYPTION_KEY_ENV
from deedseal.lib import aead
from deedseal.lib.record import DeedFields
from deedseal.lib.store import InMemoryIdentifierStore
from deedseal.main import app

ZERO_KEY = base64.b64encode(bytes(32)).decode("ascii")


@pytest.fixture
def encryption_key():
    """A fresh random base64 AES-256 key."""
    return aead.generate_key()


@pytest.fixture
def zero_key():
    """The all-zero 256-bit key used by the GCM reference vectors."""
    return ZERO_KEY


@pytest.fixture
def sample_fields():
    return DeedFields(
        no_hakmilik="GRN 12345",
        no_bangunan="12",
        no_tingkat="3",
        no_petak="45",
        negeri="SELANGOR",
        daerah="PETALING",
        bandar="SHAH ALAM",
        owner="0xABCDEF0123456789",
    )


@pytest.fixture
def store():
    return InMemoryIdentifierStore()


@pytest.fixture
def api_client(monkeypatch, encryption_key):
    """
    A TestClient against the app with a configured key and empty state.
    """
    monkeypatch.setenv(ENCRYPTION_KEY_ENV, encryption_key)
    state.reset()
    with TestClient(app) as c:
        yield c
    state.reset()
