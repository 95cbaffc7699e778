"""Shared fixtures for the readly test suite."""

from pathlib import Path
from unittest import mock

import pytest

from readly import config

SAMPLE_CLIPPINGS = Path(__file__).parent / "fixtures" / "clippings_sample.txt"


@pytest.fixture
def kindle_device(tmp_path):
    """Create a fake Kindle volume holding the sample clippings file."""
    base_path = tmp_path / "Kindle"
    documents = base_path / "documents"
    documents.mkdir(parents=True)
    (documents / "My Clippings.txt").write_bytes(SAMPLE_CLIPPINGS.read_bytes())
    return base_path


@pytest.fixture
def mock_config_dir(tmp_path):
    """Point the configuration layer at a temporary directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    config.get_config_file_path.cache_clear()
    with mock.patch("readly.config.get_config_dir", return_value=config_dir):
        yield config_dir
    config.get_config_file_path.cache_clear()
