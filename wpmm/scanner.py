"""
Installation Scanner

Detects theme and plugin versions of an existing WordPress installation and
writes the inventory snapshot (wp-package.json).
"""
import json
import logging
import re
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from wpmm.core.config import get_settings
from wpmm.php_parser import get_current_wp_info

logger = logging.getLogger(__name__)

VERSION_HEADER_RE = re.compile(r"Version:\s*([\d.]+)", re.IGNORECASE)


@dataclass
class InventoryItem:
    name: str
    version: str


@dataclass
class InventorySnapshot:
    """Detected core version, language and per-item theme/plugin versions."""
    name: str
    version: Optional[str]
    language: str
    themes: List[InventoryItem] = field(default_factory=list)
    plugins: List[InventoryItem] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "wordpress": {
                "version": self.version,
                "language": self.language,
            },
            "themes": [asdict(item) for item in self.themes],
            "plugins": [asdict(item) for item in self.plugins],
        }


def extract_header_version(file_path) -> Optional[str]:
    """Return the dotted version from a 'Version:' header line, or None."""
    try:
        content = Path(file_path).read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning(f"Cannot read {file_path}: {e}")
        return None
    match = VERSION_HEADER_RE.search(content)
    return match.group(1) if match else None


def _detect_version(item_dir: Path) -> Optional[str]:
    # style.css first (themes), then the main PHP file (plugins)
    for candidate in (item_dir / "style.css", item_dir / f"{item_dir.name}.php"):
        if candidate.is_file():
            version = extract_header_version(candidate)
            if version:
                return version
    return None


def scan_directory(directory) -> List[InventoryItem]:
    """
    List the themes or plugins installed in a directory.

    Only immediate subdirectories count. Each contributes at most one item;
    directories without version metadata are skipped.
    """
    base = Path(directory)
    result = []

    if not base.is_dir():
        logger.warning(f"Directory does not exist: {base}")
        return result

    for item_dir in sorted(base.iterdir()):
        if not item_dir.is_dir():
            continue
        logger.debug(f"Scanning {item_dir}")
        version = _detect_version(item_dir)
        if version:
            logger.info(f"Found {item_dir.name} version {version}")
            result.append(InventoryItem(name=item_dir.name, version=version))

    return result


def build_snapshot(wp_folder, language: str) -> InventorySnapshot:
    """Scan a WordPress folder. The language is passed in, never read from the OS."""
    wp_folder = Path(wp_folder)
    content_dir = wp_folder / "wp-content"
    info = get_current_wp_info(wp_folder)

    return InventorySnapshot(
        name=wp_folder.resolve().name,
        version=info.version,
        language=language,
        themes=scan_directory(content_dir / "themes"),
        plugins=scan_directory(content_dir / "plugins"),
    )


def dump(wp_folder, language: Optional[str] = None, output_path=None) -> Path:
    """
    Write the inventory snapshot of wp_folder as JSON.

    Args:
        wp_folder: WordPress installation root
        language: Language recorded in the snapshot (default: settings.default_language)
        output_path: Destination (default: <wp_folder>/wp-package.json)

    Returns:
        Path of the written file.
    """
    settings = get_settings()
    snapshot = build_snapshot(wp_folder, language or settings.default_language)
    output = Path(output_path) if output_path else Path(wp_folder) / settings.package_file_name

    with open(output, "w", encoding="utf-8") as f:
        json.dump(snapshot.to_dict(), f, indent=2)
        f.write("\n")

    logger.info(f"WordPress configuration dump completed. Configuration saved to {output}")
    return output
