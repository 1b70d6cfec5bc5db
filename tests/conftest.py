"""Test fixtures and utilities."""

from pathlib import Path

import pytest

from ifound.state_store import StateStore


@pytest.fixture
def temp_db(tmp_path) -> Path:
    """Temporary database path for testing."""
    return tmp_path / "test_ifound.db"


@pytest.fixture
def state_store(temp_db) -> StateStore:
    """A fresh state store."""
    return StateStore(temp_db)


class FakeClock:
    """Deterministic, strictly increasing ISO timestamps."""

    def __init__(self, start_second: int = 0):
        self.second = start_second

    def __call__(self) -> str:
        value = f"2024-11-18T08:{self.second // 60:02d}:{self.second % 60:02d}.000Z"
        self.second += 1
        return value


@pytest.fixture
def clock() -> FakeClock:
    """Clock that advances one second per call."""
    return FakeClock()


@pytest.fixture
def sample_item_fields() -> dict:
    """Fields for registering a typical item."""
    return {
        "item_name": "Blue Wallet",
        "student_id": "S1",
        "owner_name": "Ana",
        "category": "wallets",
        "strand": "STEM",
        "email": "ana@example.edu",
        "contact": "",
        "photo_data_url": "x",
    }


@pytest.fixture
def sample_snapshot() -> dict:
    """A small exported store."""
    return {
        "items": [
            {
                "id": "7f0c1e9a-2f2d-4c36-9a52-1c1b0c7e8f10",
                "itemName": "Hydro Flask",
                "studentId": "S9",
                "ownerName": "Ben",
                "category": "tumblers",
                "strand": None,
                "email": None,
                "contact": None,
                "photoPath": "data:image/jpeg;base64,AAAA",
                "status": "claimed",
                "createdAt": "2024-11-01T10:00:00.000Z",
                "foundPhotoPath": "data:image/jpeg;base64,BBBB",
                "lastClaimedAt": "2024-11-03T10:00:00.000Z",
            }
        ],
        "found_reports": [
            {
                "id": 57,
                "itemId": "7f0c1e9a-2f2d-4c36-9a52-1c1b0c7e8f10",
                "finderName": "Cara",
                "location": "Gym",
                "photoPath": "data:image/jpeg;base64,BBBB",
                "status": "verified",
                "createdAt": "2024-11-02T10:00:00.000Z",
            }
        ],
        "claims": [
            {
                "id": 12,
                "itemId": "7f0c1e9a-2f2d-4c36-9a52-1c1b0c7e8f10",
                "claimantName": "Ben",
                "createdAt": "2024-11-03T10:00:00.000Z",
            }
        ],
        "seq": {"found_reports": 57, "claims": 12},
    }
