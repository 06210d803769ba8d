"""Pytest configuration for the ZhCode test suite."""

import pytest

from zhcode import compile


@pytest.fixture
def compile_source():
    """Compile ZhCode source to JavaScript."""
    return compile
