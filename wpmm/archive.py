"""
Archive Extraction

Unpacks release archives and discovers the folder every entry is rooted in,
plus the small filesystem helpers used around an extraction.
"""
import logging
import shutil
import zipfile
from pathlib import Path
from typing import Iterable, Optional

from wpmm.core.exceptions import ExtractionError

logger = logging.getLogger(__name__)


def narrow_root(current: Optional[str], entry_name: str) -> str:
    """
    Fold one archive entry into the running common root.

    The first entry (current is None) seeds the candidate with its top-level
    segment. Later entries keep only the segments shared with the candidate,
    compared segment by segment.
    """
    parts = entry_name.split("/")
    if current is None:
        return parts[0]

    shared = []
    for ours, theirs in zip(current.split("/"), parts):
        if ours != theirs:
            break
        shared.append(ours)
    return "/".join(shared)


def common_root(names: Iterable[str]) -> str:
    """Return the common root folder of a sequence of archive entry names."""
    root = None
    for name in names:
        root = narrow_root(root, name)
    return root or ""


def extract_zip(archive_path, target_dir) -> str:
    """
    Extract a zip archive into target_dir.

    Args:
        archive_path: Path of the zip file
        target_dir: Directory the entries are written to (created if missing)

    Returns:
        The folder name shared by every entry, or "" when there is none.

    Raises:
        ExtractionError: the archive can't be read or the target can't be written.
            The target directory is unreliable afterwards; re-fetch, don't retry.
    """
    target = Path(target_dir)
    root = None

    try:
        target.mkdir(parents=True, exist_ok=True)
        base = target.resolve()
        with zipfile.ZipFile(archive_path) as archive:
            for entry in archive.infolist():
                destination = (base / entry.filename).resolve()
                if not destination.is_relative_to(base):
                    raise ExtractionError(
                        f"Entry {entry.filename} would be written outside {target}"
                    )
                archive.extract(entry, base)
                root = narrow_root(root, entry.filename)
    except ExtractionError:
        raise
    except (zipfile.BadZipFile, OSError) as e:
        logger.error(f"Error extracting {archive_path}: {e}")
        raise ExtractionError(f"Could not extract {archive_path}: {e}") from e

    root = root or ""
    logger.info(f"Extracted {archive_path} to {target / root}")
    return root


def make_dir(path) -> Path:
    """Create a directory (and parents) if it does not already exist."""
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def cleanup(path) -> bool:
    """Remove a directory tree. Failures are logged, not raised."""
    try:
        shutil.rmtree(path)
        logger.info(f"Removed {path}")
        return True
    except OSError as e:
        logger.warning(f"Cleanup of {path} failed: {e}")
        return False


def rename_folder(old_path, new_path) -> Path:
    return Path(old_path).rename(new_path)
