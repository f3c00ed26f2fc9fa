"""
License file lookup inside the installed dependency tree.

Each dependency is expected under ``<vendor_root>/<name>/``; the first
non-empty file among a fixed list of candidate names is taken as its
license text.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Optional, Union

from .error_handling import ErrorLevel, log_filesystem_error
from .structured_logging import log_license_lookup

LICENSE_FILENAMES = [
    "LICENSE.txt",
    "LICENSE.md",
    "LICENSE",
    "license.txt",
    "license.md",
    "license",
    "LICENSE-2.0.txt",
]


class LicenseStatus(Enum):
    """Outcome of a license file lookup."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    READ_FAILED = "read_failed"


@dataclass(frozen=True)
class LicenseLookup:
    """Result of probing a dependency directory for a license file."""

    status: LicenseStatus
    text: str = ""
    path: Optional[Path] = None

    @property
    def found(self) -> bool:
        return self.status == LicenseStatus.FOUND


def dependency_directory(name: str, vendor_root: Union[str, Path]) -> Optional[Path]:
    """
    Install directory of a dependency.

    The name is checked without resolving symlinks, so path-repository
    packages linked into the vendor root are still found. Returns None for
    absolute names and names with ".." parts.
    """
    relative = PurePosixPath(name)
    if relative.is_absolute() or not relative.parts or ".." in relative.parts:
        return None
    return Path(vendor_root) / relative


def _read_candidate(path: Path) -> str:
    with open(path, encoding="utf-8", errors="replace") as f:
        return f.read()


def locate_license_text(name: str, vendor_root: Union[str, Path]) -> LicenseLookup:
    """
    Find the license file for a dependency.

    Args:
        name: Dependency name, e.g. ``vendor/package``
        vendor_root: Directory holding one subdirectory per dependency

    Returns:
        LicenseLookup: FOUND with the file contents, NOT_FOUND when no
        candidate exists, READ_FAILED when candidates existed but none
        could be read.
    """
    directory = dependency_directory(name, vendor_root)
    if directory is None or not directory.is_dir():
        log_license_lookup(name, LicenseStatus.NOT_FOUND.value)
        return LicenseLookup(status=LicenseStatus.NOT_FOUND)

    read_failed = False
    for filename in LICENSE_FILENAMES:
        candidate = directory / filename
        if not candidate.is_file():
            continue

        try:
            text = _read_candidate(candidate)
        except OSError as e:
            read_failed = True
            log_filesystem_error(
                f"Could not read license file for {name}: {e}",
                "license_locator",
                "locate_license_text",
                file_path=str(candidate),
                exception=e,
                level=ErrorLevel.WARNING,
            )
            continue

        if text:
            log_license_lookup(name, LicenseStatus.FOUND.value, str(candidate))
            return LicenseLookup(status=LicenseStatus.FOUND, text=text, path=candidate)

    status = LicenseStatus.READ_FAILED if read_failed else LicenseStatus.NOT_FOUND
    log_license_lookup(name, status.value)
    return LicenseLookup(status=status)
