"""
Asset Fetcher

Downloads WordPress releases, themes and plugins to local files.
"""
import logging
from pathlib import Path
from typing import Optional
from urllib.parse import urljoin

import requests

from wpmm.core.config import get_settings
from wpmm.core.exceptions import CircularRedirectError, DownloadError

logger = logging.getLogger(__name__)

WP_DOWNLOAD_URL = "https://wordpress.org/wordpress-{version}.zip"
WP_LOCALIZED_DOWNLOAD_URL = "https://{prefix}.wordpress.org/wordpress-{version}-{language}.zip"
PACKAGE_DOWNLOAD_URL = "https://downloads.wordpress.org/{kind}/{name}.zip"
PACKAGE_VERSION_DOWNLOAD_URL = "https://downloads.wordpress.org/{kind}/{name}.{version}.zip"


def wordpress_download_url(version: str, language: Optional[str] = None) -> str:
    """Release archive URL; non en_US languages come from the localized mirror."""
    if language and language != "en_US":
        return WP_LOCALIZED_DOWNLOAD_URL.format(
            prefix=language[:2].lower(), version=version, language=language
        )
    return WP_DOWNLOAD_URL.format(version=version)


def plugin_download_url(name: str, version: Optional[str] = None) -> str:
    if version:
        return PACKAGE_VERSION_DOWNLOAD_URL.format(kind="plugin", name=name, version=version)
    return PACKAGE_DOWNLOAD_URL.format(kind="plugin", name=name)


def theme_download_url(name: str, version: Optional[str] = None) -> str:
    if version:
        return PACKAGE_VERSION_DOWNLOAD_URL.format(kind="theme", name=name, version=version)
    return PACKAGE_DOWNLOAD_URL.format(kind="theme", name=name)


def download_file(url: str, target_file, session: Optional[requests.Session] = None) -> None:
    """
    Download url to target_file, following redirects.

    Does nothing when target_file already exists. The body is streamed to disk.

    Args:
        url: Address to fetch
        target_file: Destination path
        session: requests session to use (a private one is created if omitted)

    Raises:
        DownloadError: HTTP status >= 400 or a transport failure
        CircularRedirectError: a redirect revisits a URL or the hop limit is hit
    """
    target = Path(target_file)
    if target.exists():
        logger.info(f"{target} already exists. Skipping download.")
        return

    settings = get_settings()
    http = session or requests.Session()
    headers = {"User-Agent": settings.user_agent}
    visited = set()
    current = url

    try:
        for _ in range(settings.max_redirects + 1):
            if current in visited:
                raise CircularRedirectError(f"Redirect loop at {current} while fetching {url}")
            visited.add(current)

            try:
                response = http.get(
                    current,
                    headers=headers,
                    stream=True,
                    allow_redirects=False,
                    timeout=settings.request_timeout,
                )
            except requests.RequestException as e:
                raise DownloadError(f"Download of {current} failed: {e}") from e

            with response:
                code = response.status_code
                if code >= 400:
                    raise DownloadError(response.reason or f"HTTP {code}")

                location = response.headers.get("Location")
                if 300 <= code < 400 and location:
                    current = urljoin(current, location)
                    logger.debug(f"Redirected to {current}")
                    continue

                _write_body(response, target, settings.chunk_size)
                logger.info(f"Downloaded {url} to {target}")
                return

        raise CircularRedirectError(
            f"More than {settings.max_redirects} redirects while fetching {url}"
        )
    finally:
        if session is None:
            http.close()


def _write_body(response: requests.Response, target: Path, chunk_size: int) -> None:
    """Stream the response body to target, removing partial output on failure."""
    try:
        with open(target, "wb") as f:
            for chunk in response.iter_content(chunk_size=chunk_size):
                if chunk:
                    f.write(chunk)
    except (requests.RequestException, OSError) as e:
        target.unlink(missing_ok=True)
        raise DownloadError(f"Failed writing {target}: {e}") from e


def get_latest_wordpress(session: Optional[requests.Session] = None) -> dict:
    """
    Fetch the newest release offer from the WordPress.org version-check API.

    Returns the first offer, e.g. {"version": "6.5.2", "locale": "en_US", "download": ...}.
    """
    settings = get_settings()
    http = session or requests
    try:
        res = http.get(
            settings.version_check_url,
            headers={"User-Agent": settings.user_agent},
            timeout=settings.request_timeout,
        )
        res.raise_for_status()
        data = res.json()
    except (requests.RequestException, ValueError) as e:
        raise DownloadError(f"Version check failed: {e}") from e

    offers = data.get("offers") or []
    if not offers:
        raise DownloadError("Cannot get the last version available")
    return offers[0]
