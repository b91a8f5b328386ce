import pytest

from sleeping_pill.database import Database
from sleeping_pill.counter import SleepCounter
from sleeping_pill.models import MonitorSettings


@pytest.fixture
def requests_output():
    """`powercfg /requests` output with two SYSTEM requests"""
    return [
        "DISPLAY:",
        "None.",
        "",
        "SYSTEM:",
        "[DRIVER] Realtek High Definition Audio (HDAUDIO\\FUNC_01&VEN_10EC&DEV_0892)",
        "An audio stream is currently in use.",
        "[PROCESS] \\Device\\HarddiskVolume4\\Program Files\\Mozilla Firefox\\firefox.exe",
        "Playing audio",
        "",
        "AWAYMODE:",
        "None.",
        "",
        "EXECUTION:",
        "[PROCESS] \\Device\\HarddiskVolume4\\Windows\\System32\\backup.exe",
        "",
        "PERFBOOST:",
        "None.",
        "",
        "ACTIVELOCKSCREEN:",
        "None.",
    ]


@pytest.fixture
def no_requests_output():
    """`powercfg /requests` output when nothing blocks sleep"""
    return [
        "DISPLAY:",
        "None.",
        "",
        "SYSTEM:",
        "None.",
        "",
        "AWAYMODE:",
        "None.",
    ]


@pytest.fixture
def overrides_output():
    """`powercfg /requestsoverride` output overriding both SYSTEM requests"""
    return [
        "[SERVICE]",
        "",
        "[PROCESS]",
        "firefox.exe SYSTEM",
        "vlc.exe DISPLAY",
        "",
        "[DRIVER]",
        "Realtek High Definition Audio SYSTEM",
    ]


@pytest.fixture
def settings():
    """Default timings: 180s screen time, 20s idle, 5s samples"""
    return MonitorSettings(
        screen_time_ms=180000,
        idle_time_ms=20000,
        sample_period_ms=5000
    )


@pytest.fixture
def database(tmp_path):
    """Database in a scratch directory"""
    return Database(tmp_path / "data" / "sleeping_pill.db")


@pytest.fixture
def counter(database):
    return SleepCounter(database)
