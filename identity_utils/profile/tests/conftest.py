"""Shared fixtures for user profile tests."""

import json
from pathlib import Path
from typing import Any, Callable

import pytest

RESOURCES_DIR = Path(__file__).parent / "resources"


@pytest.fixture
def load_resource() -> Callable[[str], str]:
    """Return a loader for the raw JSON payloads under tests/resources."""

    def _load(name: str) -> str:
        return (RESOURCES_DIR / name).read_text(encoding="utf-8")

    return _load


@pytest.fixture
def profile_json(load_resource: Callable[[str], str]) -> str:
    return load_resource("profile.json")


@pytest.fixture
def profile_basic_json(load_resource: Callable[[str], str]) -> str:
    return load_resource("profile_basic.json")


@pytest.fixture
def profile_full_json(load_resource: Callable[[str], str]) -> str:
    return load_resource("profile_full.json")


@pytest.fixture
def profile_oauth_json(load_resource: Callable[[str], str]) -> str:
    return load_resource("profile_oauth.json")


@pytest.fixture
def profile_basic_dict(profile_basic_json: str) -> dict[str, Any]:
    """Provide the basic profile as an already decoded mapping."""
    return json.loads(profile_basic_json)
