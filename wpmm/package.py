"""
Package Config

Model and loader for wp-package.json, the file describing what an installation
should contain: WordPress version and language, wp-config values, themes and plugins.
"""
import json
import logging
import re
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError

from wpmm.core.config import get_settings
from wpmm.core.exceptions import PackageConfigError
from wpmm.php_parser import get_current_wp_info, parse_wp_config, strip_comments
from wpmm.scanner import scan_directory

logger = logging.getLogger(__name__)

# define( 'WP_DEBUG', false ); carries a bareword, not a quoted value
BOOLEAN_DEFINE_RE = re.compile(r"define\(\s*'(\w+)'\s*,\s*(true|false)\s*\)", re.IGNORECASE)


def _default_language() -> str:
    return get_settings().default_language


def _default_name() -> str:
    return get_settings().default_install_folder


class WpConfigValues(BaseModel):
    """Values written into wp-config.php. Extra keys become extra constants."""
    DB_NAME: str = "my_db_name"
    DB_USER: str = "my_username"
    DB_PASSWORD: str = "my_password"
    DB_HOST: str = "127.0.0.1"
    DB_CHARSET: str = "utf8"
    DB_COLLATE: str = ""
    table_prefix: str = "wp_"
    WP_DEBUG: bool = True

    class Config:
        extra = "allow"


class WordPressSection(BaseModel):
    version: Optional[str] = None  # None installs the latest release
    language: str = Field(default_factory=_default_language)
    config: WpConfigValues = Field(default_factory=WpConfigValues)


class PackageItem(BaseModel):
    name: str
    version: Optional[str] = None
    source: Optional[str] = None  # explicit zip URL, overrides wordpress.org


class PackageConfig(BaseModel):
    name: str = Field(default_factory=_default_name)
    wordpress: WordPressSection = Field(default_factory=WordPressSection)
    themes: List[PackageItem] = []
    plugins: List[PackageItem] = []


def package_file(root_folder) -> Path:
    return Path(root_folder) / get_settings().package_file_name


def load_package_config(root_folder) -> PackageConfig:
    """
    Load wp-package.json from root_folder.

    A missing file yields the defaults. Invalid content raises PackageConfigError.
    """
    path = package_file(root_folder)
    if not path.exists():
        logger.info(f"{path} not found, using default configuration")
        return PackageConfig()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return PackageConfig.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as e:
        raise PackageConfigError(f"Invalid {path}: {e}") from e


def save_package_config(config: PackageConfig, root_folder) -> Path:
    path = package_file(root_folder)
    path.write_text(config.model_dump_json(indent=2, exclude_none=True) + "\n", encoding="utf-8")
    return path


def _boolean_constants(wp_folder: Path) -> dict:
    """true/false define() values from wp-config.php, keyed by constant name."""
    try:
        content = (wp_folder / "wp-config.php").read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        # parse_wp_config has already logged the failure
        return {}
    return {
        name: value.lower() == "true"
        for name, value in BOOLEAN_DEFINE_RE.findall(strip_comments(content))
    }


def config_from_installation(wp_folder, language: Optional[str] = None) -> PackageConfig:
    """Describe an existing installation as a PackageConfig."""
    wp_folder = Path(wp_folder)
    info = get_current_wp_info(wp_folder)
    found = {}

    parsed = parse_wp_config(wp_folder)
    if parsed:
        found = {k: v for k, v in parsed.constants.items() if k in WpConfigValues.model_fields}
        if "table_prefix" in parsed.variables:
            found["table_prefix"] = parsed.variables["table_prefix"]
        found.update(
            (k, v) for k, v in _boolean_constants(wp_folder).items() if k in WpConfigValues.model_fields
        )

    content_dir = wp_folder / "wp-content"
    return PackageConfig(
        name=wp_folder.resolve().name,
        wordpress=WordPressSection(
            version=info.version,
            language=language or info.locale or _default_language(),
            config=WpConfigValues.model_validate(found),
        ),
        themes=[PackageItem(name=i.name, version=i.version) for i in scan_directory(content_dir / "themes")],
        plugins=[PackageItem(name=i.name, version=i.version) for i in scan_directory(content_dir / "plugins")],
    )


def init_package_config(wp_folder, language: Optional[str] = None) -> Path:
    """Write wp-package.json for wp_folder unless one already exists."""
    path = package_file(wp_folder)
    if path.exists():
        logger.warning(f"{path} already exists, leaving it untouched")
        return path

    path = save_package_config(config_from_installation(wp_folder, language), wp_folder)
    logger.info(f"Package configuration written to {path}")
    return path
