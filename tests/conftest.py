"""Shared fixtures for the mcasm test suite."""

import pytest

from mcasm.constants import DEFAULT_MAX_LENGTH


@pytest.fixture
def latch_source() -> str:
    return "OEN 0\nSTO 0\nLD 7\nSTO F"


@pytest.fixture
def full_length_source() -> str:
    """A program of exactly the default token ceiling."""
    return "LD 1\n" * (DEFAULT_MAX_LENGTH // 2)
