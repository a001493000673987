"""Shared pytest fixtures."""

import os
import shutil
import pytest
from pathlib import Path


TEST_DIR = "./data/test/readeof"


@pytest.fixture(scope="function")
def test_dir():
    """Create and cleanup test directory."""
    os.makedirs(TEST_DIR, exist_ok=True)
    yield Path(TEST_DIR)
    if os.path.exists(TEST_DIR):
        shutil.rmtree(TEST_DIR)
