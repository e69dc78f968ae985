"""
PHP Declaration Parser

Pattern-based extraction of define() constants and $variable assignments from
wp-config.php and version.php. This is text recognition, not a PHP parser:
unusual source degrades to missing values instead of errors.
"""
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

# define( 'NAME', 'VALUE' );
DEFINE_RE = re.compile(r"define\(\s*'([^']*)'\s*,\s*'([^']*)'\s*\);", re.IGNORECASE)

# $name = value / 'value' / "value", up to ;, ?> or the end of the line
VARIABLE_RE = re.compile(
    r"""\$([a-zA-Z_\x7f-\xff][a-zA-Z0-9_\x7f-\xff]*)\s*=\s*["']?(.*?[^"'])["']?(?:;|\?>|\s+\?>|$)""",
    re.MULTILINE,
)


@dataclass(frozen=True)
class ParsedConfig:
    constants: Dict[str, str] = field(default_factory=dict)
    variables: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class WordPressInfo:
    version: Optional[str] = None
    locale: Optional[str] = None


def strip_comments(content: str) -> str:
    """
    Remove // and /* */ comments line by line.

    Block comments may span lines. String literals are not protected, so a
    comment marker inside a quoted value is stripped as well.
    """
    in_block_comment = False
    lines = []

    for line in content.split("\n"):
        if in_block_comment:
            end = line.find("*/")
            if end == -1:
                lines.append("")
                continue
            in_block_comment = False
            line = line[end + 2:]

        start = line.find("/*")
        while start != -1:
            end = line.find("*/", start + 2)
            if end == -1:
                line = line[:start]
                in_block_comment = True
                break
            line = line[:start] + line[end + 2:]
            start = line.find("/*")

        line_comment = line.find("//")
        if line_comment != -1:
            line = line[:line_comment]

        lines.append(line)

    return "\n".join(lines)


def extract_declarations(content: str) -> ParsedConfig:
    """Collect every define() constant and $variable assignment; later ones win."""
    uncommented = strip_comments(content)

    constants = {}
    for match in DEFINE_RE.finditer(uncommented):
        constants[match.group(1)] = match.group(2)

    variables = {}
    for match in VARIABLE_RE.finditer(uncommented):
        variables[match.group(1)] = match.group(2)

    return ParsedConfig(constants=constants, variables=variables)


def parse_wp_config(wp_folder) -> Optional[ParsedConfig]:
    """
    Parse wp-config.php in a WordPress folder.

    Returns None (and logs why) when the file can't be read.
    """
    file_path = Path(wp_folder) / "wp-config.php"
    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Error parsing {file_path}: {e}")
        return None
    return extract_declarations(content)


def extract_single_value(content: str, variable_name: str = "wp_version") -> Optional[str]:
    """Return the quoted value assigned to variable_name, or None."""
    pattern = re.compile(rf"{re.escape(variable_name)}\s*=\s*['\"]([^'\"]+)['\"]")
    match = pattern.search(content)
    return match.group(1) if match else None


def get_current_wp_info(wp_folder) -> WordPressInfo:
    """Read the core version and packaged locale from wp-includes/version.php."""
    version_file = Path(wp_folder) / "wp-includes" / "version.php"
    try:
        content = version_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Cannot read WordPress version from {version_file}: {e}")
        return WordPressInfo()

    return WordPressInfo(
        version=extract_single_value(content, "wp_version"),
        locale=extract_single_value(content, "wp_local_package"),
    )
