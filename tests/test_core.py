"""Tests for settings and logging setup."""
import logging

from wpmm.core.config import get_settings
from wpmm.core.logging_config import sanitize_message, setup_logging


def test_settings_defaults():
    settings = get_settings()
    assert settings.default_install_folder == "wordpress"
    assert settings.default_language == "en_US"
    assert settings.package_file_name == "wp-package.json"
    assert settings.max_redirects == 10


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("WPMM_MAX_REDIRECTS", "3")
    get_settings.cache_clear()
    assert get_settings().max_redirects == 3


def test_sanitize_wp_config_secrets():
    line = "define( 'DB_PASSWORD', 'hunter2' ); define( 'NONCE_SALT', 'abc' ); define( 'DB_NAME', 'blog' );"
    masked = sanitize_message(line)
    assert "hunter2" not in masked
    assert "'abc'" not in masked
    assert "define( 'DB_NAME', 'blog' );" in masked


def test_setup_logging_writes_file(tmp_path, monkeypatch):
    monkeypatch.setenv("WPMM_LOG_DIR", str(tmp_path / "logs"))
    get_settings.cache_clear()
    root = logging.getLogger()
    saved = root.handlers[:]
    try:
        setup_logging("DEBUG")
        logging.getLogger("wpmm.test").info("db password=secret123")
        for handler in root.handlers:
            handler.flush()
        content = (tmp_path / "logs" / "wpmm.log").read_text()
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers = saved

    assert "password=***" in content
    assert "secret123" not in content
