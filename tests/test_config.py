import pytest

from qap_core.config import Settings
from qap_core.errors import QAPError


def test_defaults(clean_env, tmp_path):
    settings = Settings.from_env(dotenv_path=tmp_path / ".env")
    assert settings == Settings()
    assert settings.lookup_delay_s == 1.5
    assert settings.volume_threshold == 10
    assert settings.proximity_threshold_km == 5.0


def test_environment_overrides(clean_env, tmp_path):
    clean_env.setenv("QAP_AMENITY_SEED", "42")
    clean_env.setenv("QAP_LOOKUP_DELAY_S", "0")
    clean_env.setenv("QAP_PROXIMITY_THRESHOLD_KM", "2.5")
    settings = Settings.from_env(dotenv_path=tmp_path / ".env")
    assert settings.amenity_seed == 42
    assert settings.lookup_delay_s == 0
    assert settings.proximity_threshold_km == 2.5


def test_dotenv_file_is_loaded(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("QAP_VOLUME_THRESHOLD=12\nQAP_REPORT_DIR=out\n", encoding="utf-8")
    settings = Settings.from_env(dotenv_path=env_file)
    assert settings.volume_threshold == 12
    assert settings.report_dir == "out"


def test_malformed_value_names_variable(clean_env, tmp_path):
    clean_env.setenv("QAP_VOLUME_THRESHOLD", "ten")
    with pytest.raises(QAPError, match="QAP_VOLUME_THRESHOLD"):
        Settings.from_env(dotenv_path=tmp_path / ".env")


def test_non_positive_threshold_rejected(clean_env, tmp_path):
    clean_env.setenv("QAP_PROXIMITY_THRESHOLD_KM", "0")
    with pytest.raises(QAPError):
        Settings.from_env(dotenv_path=tmp_path / ".env")
