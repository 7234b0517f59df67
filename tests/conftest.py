"""Pytest configuration and fixtures."""

import pytest
import tempfile
import json
from pathlib import Path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def sample_dict_json():
    """Sample mapping JSON for testing."""
    return {
        "user1": {
            "name": "Alice",
            "email": "alice@example.com",
            "age": 30
        },
        "user2": {
            "name": "Bob",
            "email": "bob@example.com",
            "age": 25
        },
        "user3": {
            "name": "Carol",
            "email": "carol@example.com",
            "age": 41
        }
    }


@pytest.fixture
def sample_list_json():
    """Sample list JSON for testing."""
    return [
        {"id": 1, "name": "Item 1", "value": 100},
        {"id": 2, "name": "Item 2", "value": 200},
        {"id": 3, "name": "Item 3", "value": 300},
    ]


@pytest.fixture
def sample_mixed_json():
    """Sample nested JSON mixing arrays, objects and scalars."""
    return {
        "metadata": {
            "version": "1.0",
            "created": "2024-01-01"
        },
        "data": [
            {"type": "A", "values": [1, 2, 3]},
            {"type": "B", "values": [4, 5, 6]},
        ],
        "enabled": True,
        "note": None,
        "ratio": 0.5
    }


@pytest.fixture
def write_json(temp_dir):
    """Write data as a JSON file inside the temporary directory."""
    def write(data, name="input.json"):
        path = temp_dir / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return write
