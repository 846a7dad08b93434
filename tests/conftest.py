"""
Pytest configuration and fixtures for runtime dashboard tests.

Every test starts without build metadata; use ``build_info`` to provide it.
"""
import time

import pytest


@pytest.fixture(autouse=True)
def no_build_info(tmp_path, monkeypatch):
    """Point build metadata lookup at a file that does not exist."""
    monkeypatch.setenv("RUNTIME_DASHBOARD_BUILD_INFO", str(tmp_path / "missing_build_info.yaml"))


@pytest.fixture
def build_info(tmp_path, monkeypatch):
    """Write build metadata and return a function that rewrites it."""
    path = tmp_path / "build_info.yaml"
    monkeypatch.setenv("RUNTIME_DASHBOARD_BUILD_INFO", str(path))

    def write(content):
        path.write_text(content)
        return path

    write("commit_id: abc123\ncommit_date: '2024-01-01'\n")
    return write


@pytest.fixture
def eastern_time(monkeypatch):
    """Switch the process default timezone to US Eastern for one test."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset not available on this platform")
    monkeypatch.setenv("TZ", "EST+05EDT,M3.2.0,M11.1.0")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


@pytest.fixture
def executor():
    """Thread pool handed to responders, shut down after the test."""
    from concurrent.futures import ThreadPoolExecutor

    pool = ThreadPoolExecutor(max_workers=4)
    yield pool
    pool.shutdown(wait=True)
