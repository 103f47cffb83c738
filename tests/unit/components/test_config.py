"""
Unit tests for configuration loading.
"""

import os

import pytest

from tablemark.config import Config, get_config, get_config_path, load_config, reset_config
from tablemark.table import DEFAULT_STYLE


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    for key in list(os.environ):
        if key.startswith("TABLEMARK_"):
            monkeypatch.delenv(key)
    reset_config()
    yield tmp_path
    reset_config()


def write_config(root, text):
    path = root / "tablemark" / "config.toml"
    path.parent.mkdir(parents=True)
    path.write_text(text)
    return path


class TestDefaults:
    def test_defaults(self):
        cfg = load_config()
        assert cfg.document.wrap_document is True
        assert cfg.document.include_style is True
        assert cfg.document.style == DEFAULT_STYLE
        assert cfg.reader.strict is True
        assert cfg.reader.default_format == "csv"
        assert cfg.io.encoding == "utf-8"
        assert cfg.logging.level == "WARNING"

    def test_config_path_respects_xdg(self, isolated_config):
        assert get_config_path() == isolated_config / "tablemark" / "config.toml"

    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_reset_config_reloads(self):
        first = get_config()
        reset_config()
        assert get_config() is not first


class TestTomlFile:
    def test_file_values_applied(self, isolated_config):
        write_config(isolated_config, """
[document]
wrap_document = false
style = "td {color:red;}"

[reader]
strict = false
default_format = "tsv"

[io]
max_file_size = 1024

[logging]
level = "debug"
""")
        cfg = load_config()
        assert cfg.document.wrap_document is False
        assert cfg.document.style == "td {color:red;}"
        assert cfg.reader.strict is False
        assert cfg.reader.default_format == "tsv"
        assert cfg.io.max_file_size == 1024
        assert cfg.logging.level == "DEBUG"

    def test_broken_file_falls_back_to_defaults(self, isolated_config):
        write_config(isolated_config, "[document\nwrap_document = ")
        cfg = load_config()
        assert cfg == Config()


class TestEnvOverrides:
    def test_env_overrides_file(self, isolated_config, monkeypatch):
        write_config(isolated_config, "[reader]\nstrict = true\n")
        monkeypatch.setenv("TABLEMARK_STRICT", "no")
        assert load_config().reader.strict is False

    def test_bool_values(self, monkeypatch):
        monkeypatch.setenv("TABLEMARK_INCLUDE_STYLE", "0")
        monkeypatch.setenv("TABLEMARK_WRAP_DOCUMENT", "yes")
        cfg = load_config()
        assert cfg.document.include_style is False
        assert cfg.document.wrap_document is True

    def test_int_value(self, monkeypatch):
        monkeypatch.setenv("TABLEMARK_MAX_FILE_SIZE", "2048")
        assert load_config().io.max_file_size == 2048

    def test_bad_int_ignored(self, monkeypatch):
        monkeypatch.setenv("TABLEMARK_MAX_FILE_SIZE", "lots")
        assert load_config().io.max_file_size == Config().io.max_file_size

    def test_log_level_upper_cased(self, monkeypatch):
        monkeypatch.setenv("TABLEMARK_LOG_LEVEL", "info")
        assert load_config().logging.level == "INFO"
