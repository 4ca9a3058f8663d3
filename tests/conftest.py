"""Shared fixtures for airframe tests."""

from pathlib import Path

import pytest

from airframe.config import load_config

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def r44_path() -> Path:
    """Path to the sample helicopter configuration."""
    return DATA_DIR / "r44.yaml"


@pytest.fixture
def r44_document(r44_path):
    """Parsed sample helicopter configuration."""
    return load_config(r44_path)


@pytest.fixture
def mass_node(r44_document):
    """Mass section of the sample configuration."""
    return r44_document["aircraft"]["mass"]
