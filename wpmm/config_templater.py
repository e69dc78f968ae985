"""
Config Templater

Rewrites define() statements in wp-config.php text and fills the salt
placeholders that ship in wp-config-sample.php.
"""
import logging
import random
import re
from pathlib import Path
from typing import Any, Dict, Mapping

logger = logging.getLogger(__name__)

SALT_CHARSET = (
    "abcdefghijklmnopqrstuvwxyz"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "0123456789"
    "!@#$%^&*()-_=+[]{}|;:,.<>?/"
)
SALT_LENGTH = 64
SALT_PLACEHOLDER = "put your unique phrase here"
SALT_CONSTANTS = [
    "AUTH_KEY",
    "SECURE_AUTH_KEY",
    "LOGGED_IN_KEY",
    "NONCE_KEY",
    "AUTH_SALT",
    "SECURE_AUTH_SALT",
    "LOGGED_IN_SALT",
    "NONCE_SALT",
]

DB_CONSTANTS = ["DB_NAME", "DB_USER", "DB_PASSWORD", "DB_HOST", "DB_CHARSET", "DB_COLLATE"]


def _define(name: str, value: str) -> str:
    return f"define( '{name}', {value} );"


def _substitute(pattern: str, replacement: str, content: str) -> str:
    # A callable replacement keeps backslashes in values literal
    return re.sub(pattern, lambda _: replacement, content, count=1)


def replace_constant(content: str, constant_name: str, value: str) -> str:
    """Replace the single-quoted value of a define() constant. No-op if absent."""
    pattern = rf"define\(\s*'{re.escape(constant_name)}'\s*,\s*'[^']*'\s*\);"
    return _substitute(pattern, _define(constant_name, f"'{value}'"), content)


def replace_boolean_constant(content: str, constant_name: str, value: Any) -> str:
    """Replace an unquoted define() value such as true/false. No-op if absent."""
    if isinstance(value, bool):
        value = "true" if value else "false"
    pattern = rf"define\(\s*'{re.escape(constant_name)}'\s*,\s*[^']*?\s*\);"
    return _substitute(pattern, _define(constant_name, str(value)), content)


def replace_variable(content: str, variable_name: str, value: str) -> str:
    """Replace a single-quoted $variable assignment, e.g. $table_prefix."""
    pattern = rf"\${re.escape(variable_name)}\s*=\s*'[^']*'\s*;"
    return _substitute(pattern, f"${variable_name} = '{value}';", content)


def escape_php_string(value: str) -> str:
    """Escape a value for a single-quoted PHP literal."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def generate_secret() -> str:
    """64 random characters for a salt constant. Not cryptographically hardened."""
    return "".join(random.choice(SALT_CHARSET) for _ in range(SALT_LENGTH))


def fill_secret_placeholders(content: str) -> str:
    """Give every salt constant still set to the sample placeholder a fresh secret."""
    for constant in SALT_CONSTANTS:
        pattern = rf"define\(\s*'{constant}'\s*,\s*'{SALT_PLACEHOLDER}'\s*\);"
        content = _substitute(pattern, _define(constant, f"'{generate_secret()}'"), content)
    return content


def render_wp_config(sample_content: str, wp_config: Mapping[str, Any]) -> str:
    """
    Build wp-config.php text from wp-config-sample.php text.

    wp_config holds the DB_* constants, table_prefix, WP_DEBUG and any extra
    constants to set. Booleans are written unquoted, everything else is
    escaped into a single-quoted literal.
    """
    content = sample_content

    for name, value in wp_config.items():
        if value is None:
            continue
        if name == "table_prefix":
            content = replace_variable(content, name, escape_php_string(value))
        elif isinstance(value, bool):
            content = replace_boolean_constant(content, name, value)
        else:
            content = replace_constant(content, name, escape_php_string(str(value)))

    return fill_secret_placeholders(content)


def write_wp_config(base_folder, wp_config: Dict[str, Any]) -> Path:
    """Render wp-config-sample.php into wp-config.php inside base_folder."""
    base = Path(base_folder)
    sample = (base / "wp-config-sample.php").read_text(encoding="utf-8")
    target = base / "wp-config.php"
    target.write_text(render_wp_config(sample, wp_config), encoding="utf-8")
    logger.info(f"Wrote {target}")
    return target
