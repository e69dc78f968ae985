"""
Path Resolver

Computes where an installation lives relative to the working directory.
"""
from dataclasses import dataclass
from pathlib import Path

from wpmm.core.config import get_settings


@dataclass(frozen=True)
class InstallPaths:
    temp_dir: Path
    base_folder: Path
    plugins_folder: Path
    theme_folder: Path


def get_wordpress_paths(config, root_folder=None) -> InstallPaths:
    """
    Resolve the installation folders.

    The root folder itself is the installation when it already holds
    wp-config.php or the package file; otherwise the installation goes into
    root/<config.name>.
    """
    settings = get_settings()
    root = Path(root_folder) if root_folder is not None else Path.cwd()
    base_folder = root

    in_place = (root / "wp-config.php").exists() or (root / settings.package_file_name).exists()
    if not in_place:
        base_folder = root / (getattr(config, "name", None) or settings.default_install_folder)

    return InstallPaths(
        temp_dir=root / "temp",
        base_folder=base_folder,
        plugins_folder=base_folder / "wp-content" / "plugins",
        theme_folder=base_folder / "wp-content" / "themes",
    )
