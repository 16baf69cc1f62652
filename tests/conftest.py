"""Fixtures and configuration for pytest."""

import pytest

from exsl import HLSLWriter, create_parameter
from exsl.types import HLSLFloat, HLSLFloat2, HLSLFloat4


@pytest.fixture
def writer() -> HLSLWriter:
    """Plain (non-IL) writer with default configuration."""
    return HLSLWriter()


@pytest.fixture
def il_writer() -> HLSLWriter:
    """IL-flavored writer, prologue already written."""
    return HLSLWriter(is_il=True)


@pytest.fixture
def uv():
    return create_parameter(HLSLFloat2, "uv")


@pytest.fixture
def time():
    return create_parameter(HLSLFloat, "time")


@pytest.fixture
def color():
    return create_parameter(HLSLFloat4, "color")
