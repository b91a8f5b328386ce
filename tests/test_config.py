import pytest

from sleeping_pill.config import Config, clamp, is_valid_screen_saver


ENV_NAMES = [
    'SLEEPING_PILL_PROCESS', 'SLEEPING_PILL_TIME', 'SLEEPING_PILL_IDLE',
    'SLEEPING_PILL_SAMPLE', 'SLEEPING_PILL_POWERCFG_TIMEOUT', 'SLEEPING_PILL_VERBOSE',
    'SLEEPING_PILL_LOG_FILE',
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestConfig:
    """Configuration from environment variables"""

    def test_defaults(self, clean_env):
        config = Config()

        assert config.screen_saver is None
        assert config.screen_time == 180
        assert config.idle_time == 20
        assert config.sample_period == 5
        assert config.powercfg_timeout == 30
        assert config.verbose is False

    def test_environment_values_are_clamped(self, clean_env):
        clean_env.setenv('SLEEPING_PILL_TIME', '5000')
        clean_env.setenv('SLEEPING_PILL_IDLE', '10')
        clean_env.setenv('SLEEPING_PILL_SAMPLE', '0')

        config = Config()

        assert config.screen_time == 1800
        assert config.idle_time == 30
        assert config.sample_period == 1

    def test_invalid_number_falls_back_to_default(self, clean_env):
        clean_env.setenv('SLEEPING_PILL_TIME', 'three minutes')

        assert Config().screen_time == 180

    def test_invalid_process_is_ignored(self, clean_env):
        clean_env.setenv('SLEEPING_PILL_PROCESS', 'notepad.exe')

        assert Config().screen_saver is None

    def test_process_and_verbose(self, clean_env):
        clean_env.setenv('SLEEPING_PILL_PROCESS', '"Mystify.scr"')
        clean_env.setenv('SLEEPING_PILL_VERBOSE', 'yes')

        config = Config()

        assert config.screen_saver == "Mystify.scr"
        assert config.verbose is True

    def test_data_dir_from_environment(self, clean_env, tmp_path):
        clean_env.setenv('SLEEPING_PILL_DATA_DIR', str(tmp_path))

        config = Config()

        assert config.db_path == tmp_path / 'sleeping_pill.db'


class TestBuildSettings:
    """Settings handed to the monitor"""

    def test_defaults_in_milliseconds(self, clean_env):
        settings = Config().build_settings()

        assert settings.screen_time_ms == 180000
        assert settings.idle_time_ms == 20000
        assert settings.sample_period_ms == 5000
        assert settings.threshold_ms == 160000
        assert settings.screen_saver is None
        assert settings.powercfg_timeout == 30.0

    def test_explicit_values_are_clamped(self, clean_env):
        settings = Config().build_settings(screen_time=10, idle_time=20, sample_period=90)

        assert settings.screen_time_ms == 30000
        assert settings.idle_time_ms == 30000
        assert settings.sample_period_ms == 60000

    def test_idle_limited_to_screen_time(self, clean_env):
        settings = Config().build_settings(screen_time=60, idle_time=600)

        assert settings.idle_time_ms == 60000
        assert settings.threshold_ms == 0

    def test_overrides_take_precedence(self, clean_env):
        clean_env.setenv('SLEEPING_PILL_VERBOSE', 'true')

        settings = Config().build_settings(screen_saver="Ribbons.scr", verbose=False, powercfg_timeout=500)

        assert settings.screen_saver == "Ribbons.scr"
        assert settings.verbose is False
        assert settings.powercfg_timeout == 300.0

    def test_invalid_screen_saver_is_rejected(self, clean_env):
        with pytest.raises(ValueError):
            Config().build_settings(screen_saver="Ribbons.exe")


def test_clamp():
    assert clamp(5, 1, 10) == 5
    assert clamp(0, 1, 10) == 1
    assert clamp(11, 1, 10) == 10


@pytest.mark.parametrize("name,valid", [
    ("Mystify.scr", True),
    ("RIBBONS.SCR", True),
    (".scr", False),
    ("ribbons.exe", False),
    ("", False),
])
def test_is_valid_screen_saver(name, valid):
    assert is_valid_screen_saver(name) is valid
