"""
Error Taxonomy

Hard failures raised by the provisioning pipeline. Parsing and scanning problems
are soft: they are logged and surface as None or shorter lists, never as these.
"""


class WpmmError(Exception):
    """Base exception for wpmm."""


class DownloadError(WpmmError):
    """HTTP error status or transport failure while fetching an asset."""


class CircularRedirectError(DownloadError):
    """Redirect chain revisited a URL or exceeded the hop limit."""


class ExtractionError(WpmmError):
    """Archive unreadable or target directory unwritable.

    The target directory must be considered unreliable afterwards.
    """


class PackageConfigError(WpmmError):
    """wp-package.json is missing required fields or is not valid JSON."""


class UnsupportedActionError(WpmmError):
    """The requested action is handled outside this package."""
