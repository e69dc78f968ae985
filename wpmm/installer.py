"""
WordPress Installer

Materializes an installation from a PackageConfig:
1. download + extract WordPress core
2. write wp-config.php from wp-config-sample.php
3. download + extract each theme and plugin
4. remove the temp folder
"""
import logging
import shutil
from pathlib import Path
from typing import List, Optional

import requests

from wpmm.archive import cleanup, extract_zip, make_dir, rename_folder
from wpmm.config_templater import write_wp_config
from wpmm.fetcher import (
    download_file,
    get_latest_wordpress,
    plugin_download_url,
    theme_download_url,
    wordpress_download_url,
)
from wpmm.package import PackageConfig, PackageItem
from wpmm.paths import InstallPaths, get_wordpress_paths

logger = logging.getLogger(__name__)


class WordPressInstaller:
    """Installs WordPress core, themes and plugins described by a PackageConfig."""

    def __init__(self, config: PackageConfig, root_folder=None, session: Optional[requests.Session] = None):
        self.config = config
        self.paths: InstallPaths = get_wordpress_paths(config, root_folder)
        self._owns_session = session is None
        self.session = session or requests.Session()

    def run(self) -> Path:
        make_dir(self.paths.temp_dir)
        try:
            self.install_wordpress()
            self.install_packages(self.config.themes, self.paths.theme_folder, theme_download_url)
            self.install_packages(self.config.plugins, self.paths.plugins_folder, plugin_download_url)
        finally:
            cleanup(self.paths.temp_dir)
            if self._owns_session:
                self.session.close()
        logger.info(f"WordPress installed in {self.paths.base_folder}")
        return self.paths.base_folder

    def resolve_version(self) -> str:
        version = self.config.wordpress.version
        if not version:
            version = get_latest_wordpress(self.session)["version"]
            logger.info(f"Latest WordPress release is {version}")
        return version

    def install_wordpress(self) -> None:
        version = self.resolve_version()
        language = self.config.wordpress.language
        archive = self.paths.temp_dir / f"wordpress-{version}-{language}.zip"

        download_file(wordpress_download_url(version, language), archive, session=self.session)
        self._unpack(archive, self.paths.base_folder)

        if (self.paths.base_folder / "wp-config.php").exists():
            logger.info("wp-config.php already present, keeping it")
            return
        write_wp_config(self.paths.base_folder, self.config.wordpress.config.model_dump())

    def install_packages(self, items: List[PackageItem], destination: Path, url_for) -> None:
        make_dir(destination)
        for item in items:
            url = item.source or url_for(item.name, item.version)
            archive = self.paths.temp_dir / f"{item.name}-{item.version or 'latest'}.zip"
            logger.info(f"Installing {item.name} {item.version or '(latest)'}")
            download_file(url, archive, session=self.session)
            self._unpack(archive, destination / item.name)

    def _unpack(self, archive: Path, target: Path) -> None:
        """Extract archive and move its root folder to target."""
        staging = self.paths.temp_dir / f"{archive.stem}-extract"
        root = extract_zip(archive, staging)
        source = staging / root if root else staging

        if target.exists():
            # Installing in place: merge over what's already there
            shutil.copytree(source, target, dirs_exist_ok=True)
        else:
            target.parent.mkdir(parents=True, exist_ok=True)
            rename_folder(source, target)

        if staging.exists():
            cleanup(staging)
