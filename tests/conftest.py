"""Pytest fixtures: project root on sys.path, shared replies, 32-bit host simulation."""

import sys
from pathlib import Path

import pytest

# Add project root to path
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from kv_reply import scalars


@pytest.fixture
def transport_error():
    return ConnectionError("connection reset by peer")


@pytest.fixture
def native_32bit(monkeypatch):
    """Pretend the host int is 32 bits wide."""
    monkeypatch.setattr(scalars, "INT_MIN", -(1 << 31))
    monkeypatch.setattr(scalars, "INT_MAX", (1 << 31) - 1)
