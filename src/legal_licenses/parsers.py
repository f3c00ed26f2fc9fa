import json
from pathlib import Path
from typing import Any, List, Optional, Tuple

from .cli_config import get_config
from .dependency import DependencyRecord
from .error_handling import ManifestParseError, log_parsing_error

PACKAGE_SECTIONS = ("packages", "packages-dev")


def _validate_file_path(file_path: str) -> Path:
    """
    Validate the manifest path before reading it.

    Args:
        file_path: The file path to validate

    Returns:
        Path: Resolved path object

    Raises:
        ManifestParseError: If the path is missing, not a file or too large
    """
    if not file_path or not isinstance(file_path, (str, Path)):
        raise ManifestParseError("Manifest path must be a non-empty string")

    try:
        path = Path(file_path).resolve()
    except (OSError, ValueError) as e:
        raise ManifestParseError(f"Invalid manifest path: {e}", str(file_path))

    if not path.exists():
        raise ManifestParseError(f"Manifest file does not exist: {path}", str(path))

    if not path.is_file():
        raise ManifestParseError(f"Manifest path is not a file: {path}", str(path))

    try:
        file_size = path.stat().st_size
    except OSError as e:
        raise ManifestParseError(f"Cannot access manifest: {e}", str(path))

    max_file_size = get_config().security.max_file_size_bytes
    if file_size > max_file_size:
        raise ManifestParseError(
            f"Manifest too large: {file_size} bytes (max: {max_file_size})", str(path)
        )

    return path


def _safe_read_file(path: Path) -> str:
    """
    Read a validated file as UTF-8 text.

    Raises:
        ManifestParseError: If the file cannot be read
    """
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except UnicodeDecodeError:
        raise ManifestParseError("Manifest contains invalid UTF-8 characters", str(path))
    except PermissionError:
        raise ManifestParseError("Permission denied reading manifest", str(path))
    except OSError as e:
        raise ManifestParseError(f"Error reading manifest: {e}", str(path))


def _optional_string(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _parse_licenses(value: Any, name: str) -> Tuple[str, ...]:
    """Normalize the 'license' field: a list of identifiers or a single string."""
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        raise ManifestParseError(
            f"Package '{name}' has an invalid license field: {type(value).__name__}"
        )
    return tuple(
        item.strip() for item in value if isinstance(item, str) and item.strip()
    )


def _parse_package(entry: Any, section: str, index: int) -> DependencyRecord:
    """Build a DependencyRecord from one lock-file package entry."""
    if not isinstance(entry, dict):
        raise ManifestParseError(f"Entry {index} in '{section}' must be an object")

    name = entry.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ManifestParseError(f"Entry {index} in '{section}' has no package name")
    name = name.strip()

    version = entry.get("version")
    if version is None or not str(version).strip():
        raise ManifestParseError(f"Package '{name}' has no version")

    source = entry.get("source")
    source_url = None
    source_reference = None
    if isinstance(source, dict):
        source_url = _optional_string(source.get("url"))
        source_reference = _optional_string(source.get("reference"))
    elif source is not None:
        raise ManifestParseError(f"Package '{name}' has an invalid source block")

    return DependencyRecord(
        name=name,
        version=str(version).strip(),
        source_url=source_url,
        source_reference=source_reference,
        licenses=_parse_licenses(entry.get("license"), name),
        description=_optional_string(entry.get("description")),
        homepage=_optional_string(entry.get("homepage")),
        dev=section == "packages-dev",
    )


def parse_lock_data(data: Any, include_dev: bool = False) -> List[DependencyRecord]:
    """
    Extract dependency records from a decoded composer.lock document.

    Records keep the order of the 'packages' list, followed by 'packages-dev'
    when include_dev is set.

    Raises:
        ManifestParseError: If the document is not the expected container
    """
    if not isinstance(data, dict):
        raise ManifestParseError("Manifest must contain a JSON object")

    if "packages" not in data:
        raise ManifestParseError("Manifest has no 'packages' section")

    sections = PACKAGE_SECTIONS if include_dev else PACKAGE_SECTIONS[:1]
    dependencies = []
    for section in sections:
        packages = data.get(section)
        if packages is None:
            continue
        if not isinstance(packages, list):
            raise ManifestParseError(f"Manifest section '{section}' must be a list")

        for index, entry in enumerate(packages):
            dependencies.append(_parse_package(entry, section, index))

    return dependencies


def parse_manifest_file(
    file_path: str, include_dev: bool = False
) -> List[DependencyRecord]:
    """
    Parse a composer.lock style manifest into dependency records.

    Args:
        file_path: Path to the lock file
        include_dev: Also read the 'packages-dev' section

    Returns:
        List[DependencyRecord]: Dependencies in manifest order

    Raises:
        ManifestParseError: If the file is missing, unreadable or malformed
    """
    try:
        path = _validate_file_path(file_path)
        data = _load_json(path)
        return parse_lock_data(data, include_dev=include_dev)
    except ManifestParseError as e:
        log_parsing_error(
            str(e), "parsers", "parse_manifest_file", file_path=str(file_path), exception=e
        )
        if e.path is None:
            e.path = str(file_path)
        raise


def _load_json(path: Path) -> Any:
    content = _safe_read_file(path)
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ManifestParseError(f"Invalid JSON format: {e}", str(path))
