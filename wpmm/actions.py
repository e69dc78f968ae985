"""
Actions

The finite set of operations a front end can request, and their dispatch.
"""
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from wpmm.core.exceptions import UnsupportedActionError
from wpmm.installer import WordPressInstaller
from wpmm.package import PackageConfig, init_package_config, load_package_config
from wpmm.paths import get_wordpress_paths
from wpmm.php_parser import get_current_wp_info
from wpmm.scanner import dump

logger = logging.getLogger(__name__)


class Action(str, Enum):
    INFO = "info"
    DUMP = "dump"
    INIT = "init"
    UPLOAD_DATABASE = "upload-database"
    DUMP_DATABASE = "dump-database"
    INSTALL = "install"


def _info(config: PackageConfig, root: Path) -> Dict[str, Any]:
    paths = get_wordpress_paths(config, root)
    info = get_current_wp_info(paths.base_folder)
    result = {
        "name": config.name,
        "base_folder": str(paths.base_folder),
        "wordpress": {"version": info.version, "locale": info.locale},
        "themes": len(config.themes),
        "plugins": len(config.plugins),
    }
    logger.info(f"WordPress {info.version or 'not installed'} in {paths.base_folder}")
    return result


def _dump(config: PackageConfig, root: Path) -> Path:
    paths = get_wordpress_paths(config, root)
    return dump(paths.base_folder, config.wordpress.language)


def _init(config: PackageConfig, root: Path) -> Path:
    paths = get_wordpress_paths(config, root)
    return init_package_config(paths.base_folder, config.wordpress.language)


def _install(config: PackageConfig, root: Path) -> Path:
    return WordPressInstaller(config, root).run()


def _database(action: Action) -> Callable[[PackageConfig, Path], Any]:
    def handler(config: PackageConfig, root: Path):
        raise UnsupportedActionError(f"{action.value} is handled by the database tooling")
    return handler


HANDLERS: Dict[Action, Callable[[PackageConfig, Path], Any]] = {
    Action.INFO: _info,
    Action.DUMP: _dump,
    Action.INIT: _init,
    Action.INSTALL: _install,
    Action.UPLOAD_DATABASE: _database(Action.UPLOAD_DATABASE),
    Action.DUMP_DATABASE: _database(Action.DUMP_DATABASE),
}


def run_action(action: Action, root_folder=None, config: Optional[PackageConfig] = None) -> Any:
    """
    Run one action against root_folder (default: the working directory).

    config defaults to the wp-package.json found in root_folder.
    """
    root = Path(root_folder) if root_folder is not None else Path.cwd()
    action = Action(action)
    if config is None:
        config = load_package_config(root)
    logger.debug(f"Running {action.value} in {root}")
    return HANDLERS[action](config, root)
