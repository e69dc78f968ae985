import io
import zipfile

import pytest

from wpmm.core.config import get_settings


WP_CONFIG_SAMPLE = """<?php
/**
 * The base configuration for WordPress
 */

// ** Database settings - You can get this info from your web host ** //
/** The name of the database for WordPress */
define( 'DB_NAME', 'database_name_here' );

/** Database username */
define( 'DB_USER', 'username_here' );

/** Database password */
define( 'DB_PASSWORD', 'password_here' );

/** Database hostname */
define( 'DB_HOST', 'localhost' );

/** Database charset to use in creating database tables. */
define( 'DB_CHARSET', 'utf8' );

/** The database collate type. Don't change this if in doubt. */
define( 'DB_COLLATE', '' );

/**#@+
 * Authentication unique keys and salts.
 */
define( 'AUTH_KEY',         'put your unique phrase here' );
define( 'SECURE_AUTH_KEY',  'put your unique phrase here' );
define( 'LOGGED_IN_KEY',    'put your unique phrase here' );
define( 'NONCE_KEY',        'put your unique phrase here' );
define( 'AUTH_SALT',        'put your unique phrase here' );
define( 'SECURE_AUTH_SALT', 'put your unique phrase here' );
define( 'LOGGED_IN_SALT',   'put your unique phrase here' );
define( 'NONCE_SALT',       'put your unique phrase here' );
/**#@-*/

$table_prefix = 'wp_';

define( 'WP_DEBUG', false );

/* That's all, stop editing! Happy publishing. */

if ( ! defined( 'ABSPATH' ) ) {
	define( 'ABSPATH', __DIR__ . '/' );
}

require_once ABSPATH . 'wp-settings.php';
"""

VERSION_PHP = """<?php
/**
 * WordPress Version
 */
$wp_version = '6.4.3';
$wp_db_version = 56657;
$wp_local_package = 'it_IT';
"""


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Settings are cached per process; tests must not see each other's env."""
    for key in ("WPMM_MAX_REDIRECTS", "WPMM_DEFAULT_LANGUAGE", "WPMM_LOG_DIR"):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def wp_site(tmp_path):
    """A minimal WordPress tree with one theme and one plugin."""
    site = tmp_path / "mysite"
    (site / "wp-includes").mkdir(parents=True)
    (site / "wp-includes" / "version.php").write_text(VERSION_PHP)

    config = WP_CONFIG_SAMPLE.replace("database_name_here", "mysite_db")
    config = config.replace("username_here", "mysite_user")
    (site / "wp-config.php").write_text(config)
    (site / "wp-config-sample.php").write_text(WP_CONFIG_SAMPLE)

    theme = site / "wp-content" / "themes" / "twentytwentyfour"
    theme.mkdir(parents=True)
    (theme / "style.css").write_text(
        "/*\nTheme Name: Twenty Twenty-Four\nVersion: 1.0\nRequires PHP: 7.0\n*/\n"
    )

    plugin = site / "wp-content" / "plugins" / "akismet"
    plugin.mkdir(parents=True)
    (plugin / "akismet.php").write_text(
        "<?php\n/*\nPlugin Name: Akismet\n * Version: 5.3.1\n*/\n"
    )
    (site / "wp-content" / "plugins" / "index.php").write_text("<?php // Silence is golden.\n")

    return site


def build_zip(files) -> bytes:
    """Zip bytes with the given {entry name: content} mapping, in order."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, content in files.items():
            archive.writestr(name, content)
    return buffer.getvalue()


@pytest.fixture
def make_zip(tmp_path):
    def _make(files, name="archive.zip"):
        path = tmp_path / name
        path.write_bytes(build_zip(files))
        return path
    return _make


class FakeResponse:
    def __init__(self, status_code=200, body=b"", headers=None, reason="OK", json_data=None):
        self.status_code = status_code
        self.body = body
        self.headers = headers or {}
        self.reason = reason
        self.json_data = json_data
        self.closed = False

    def iter_content(self, chunk_size=1):
        for start in range(0, len(self.body), chunk_size):
            yield self.body[start:start + chunk_size]

    def json(self):
        return self.json_data

    def raise_for_status(self):
        if self.status_code >= 400:
            import requests
            raise requests.HTTPError(f"{self.status_code} {self.reason}")

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class FakeSession:
    """Serves canned responses by URL and records every request."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []
        self.closed = False

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        route = self.routes.get(url)
        if route is None:
            return FakeResponse(status_code=404, reason="Not Found")
        if isinstance(route, Exception):
            raise route
        return route

    def close(self):
        self.closed = True


@pytest.fixture
def fake_session():
    return FakeSession()
