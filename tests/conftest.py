"""Shared fixtures for the plugin tests."""

import os
import time

import pytest



@pytest.fixture
def now():
    return int(time.time())


@pytest.fixture
def make_file(now):
    """Create a file whose modification time lies age_seconds in the past."""

    def _make_file(directory, name, age_seconds, content=''):
        path = directory / name
        path.write_text(content)
        mtime = now - age_seconds
        os.utime(path, (mtime, mtime))
        return path

    return _make_file


@pytest.fixture
def age_path(now):
    """Set the modification time of an existing path."""

    def _age_path(path, age_seconds):
        mtime = now - age_seconds
        os.utime(path, (mtime, mtime))
        return path

    return _age_path
