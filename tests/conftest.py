"""Configure pytest."""

import logging
from typing import Generator

import pytest

from tablealign.preferences import LayoutConfig, preferences


@pytest.fixture(autouse=True)
def clean_state() -> Generator[None, None, None]:
    """Stop preferences and logging set up by one test leaking into the next"""
    yield
    preferences.dict.clear()
    logger = logging.getLogger("tablealign")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def config() -> LayoutConfig:
    """Layout config with small padding, so expected widths are easy to read"""
    return LayoutConfig(padding=2)
