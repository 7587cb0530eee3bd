import pytest
from pydantic import ValidationError

from worshipsheet.config import ENV_SOURCE, AppConfig, load_config
from worshipsheet.exceptions import UnsupportedSourceError
from worshipsheet.registry import get_source
from worshipsheet.sources.api import ApiSongSource
from worshipsheet.sources.local import LocalSongSource


@pytest.fixture(autouse=True)
def _no_env_source(monkeypatch):
    monkeypatch.delenv(ENV_SOURCE, raising=False)


# ---------------------------------------------------------------------------
# load_config
# ---------------------------------------------------------------------------


def test_defaults_without_file():
    config = load_config()
    assert config == AppConfig()
    assert config.source == "songs.json"
    assert config.log_level == "WARNING"


def test_yaml_file(tmp_path):
    path = tmp_path / "worshipsheet.yaml"
    path.write_text("source: http://localhost:5000\ndefault_limit: 10\n", encoding="utf-8")
    config = load_config(path)
    assert config.source == "http://localhost:5000"
    assert config.default_limit == 10
    assert config.api_timeout == 15.0


def test_empty_yaml_file(tmp_path):
    path = tmp_path / "worshipsheet.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == AppConfig()


def test_env_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "worshipsheet.yaml"
    path.write_text("source: a.json\n", encoding="utf-8")
    monkeypatch.setenv(ENV_SOURCE, "b.json")
    assert load_config(path).source == "b.json"


def test_invalid_log_level(tmp_path):
    path = tmp_path / "worshipsheet.yaml"
    path.write_text("log_level: LOUD\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_config(path)


# ---------------------------------------------------------------------------
# get_source
# ---------------------------------------------------------------------------


def test_get_source_url_is_api():
    assert isinstance(get_source("http://localhost:5000"), ApiSongSource)


def test_get_source_path_is_local():
    assert isinstance(get_source("data/songs.json"), LocalSongSource)


def test_get_source_empty_location():
    with pytest.raises(UnsupportedSourceError):
        get_source("")
