"""
pytest configuration and fixtures for the svdenc tests.

Hypothesis profiles:
    pytest                              # default, 100 examples
    HYPOTHESIS_PROFILE=ci pytest        # more thorough
"""

import os
from pathlib import Path

import pytest
from hypothesis import settings

from svdenc.encoder.config import EncoderConfig

settings.register_profile("default", max_examples=100, deadline=None)
settings.register_profile("ci", max_examples=500, deadline=None)
settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "default"))

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def config():
    return EncoderConfig()


@pytest.fixture
def sample_svd():
    return DATA_DIR / "sample.svd"
