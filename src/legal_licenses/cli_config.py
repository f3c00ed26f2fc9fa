"""
Configuration management for Legal Licenses.

Settings come from defaults, an optional config file (JSON, YAML or TOML)
and LEGAL_LICENSES_* environment variables, in increasing precedence.
Command-line flags are applied on top by the CLI.
"""

import json
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import toml
from rich.console import Console

from .error_handling import ConfigurationError, log_configuration_error

try:
    import yaml

    HAS_YAML = True
except ImportError:
    HAS_YAML = False

console = Console(stderr=True)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
REPORT_FLAGS = ["hide_version", "csv_output", "include_license_text", "include_dev"]


@dataclass
class ReportConfig:
    """Report generation settings."""

    manifest_path: str = "composer.lock"
    vendor_dir: str = "vendor"
    output_dir: str = "."
    hide_version: bool = False
    csv_output: bool = False
    include_license_text: bool = False
    include_dev: bool = False


@dataclass
class SecurityConfig:
    """Input validation limits."""

    max_file_size_mb: int = 10

    @property
    def max_file_size_bytes(self) -> int:
        """Convert MB to bytes for internal use."""
        return self.max_file_size_mb * 1024 * 1024


@dataclass
class LoggingConfig:
    """Logging configuration."""

    log_level: str = "WARNING"


@dataclass
class LegalLicensesConfig:
    """Main configuration containing all subsections."""

    report: ReportConfig = field(default_factory=ReportConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# Global configuration instance
_global_config: Optional[LegalLicensesConfig] = None


def validate_config_values(config: LegalLicensesConfig) -> List[str]:
    """
    Validate configuration values and return any errors.

    Args:
        config: Configuration to validate

    Returns:
        List[str]: List of validation errors (empty if valid)
    """
    errors = []

    for key in ("manifest_path", "vendor_dir", "output_dir"):
        value = getattr(config.report, key)
        if not isinstance(value, str) or not value.strip():
            errors.append(f"report.{key} must be a non-empty string")

    # "false" in a config file is a string, and a truthy one
    for key in REPORT_FLAGS:
        if not isinstance(getattr(config.report, key), bool):
            errors.append(f"report.{key} must be true or false")

    max_file_size_mb = config.security.max_file_size_mb
    if (
        isinstance(max_file_size_mb, bool)
        or not isinstance(max_file_size_mb, int)
        or max_file_size_mb <= 0
    ):
        errors.append("security.max_file_size_mb must be a positive integer")

    if str(config.logging.log_level).upper() not in LOG_LEVELS:
        errors.append(
            f"logging.log_level must be one of {', '.join(LOG_LEVELS)}"
        )

    return errors


def load_config_file(config_path: Path) -> Optional[Dict[str, Any]]:
    """Load config from file. Returns None when the file cannot be used."""
    if not config_path.exists():
        return None

    suffix = config_path.suffix.lower()
    try:
        with open(config_path, encoding="utf-8") as f:
            if suffix in [".yaml", ".yml"]:
                if HAS_YAML:
                    data = yaml.safe_load(f)
                else:
                    console.print(
                        "⚠️  PyYAML not installed, skipping YAML config", style="yellow"
                    )
                    return None
            elif suffix == ".toml":
                data = toml.load(f)
            elif suffix == ".json":
                data = json.load(f)
            else:
                return None
    except Exception as e:
        console.print(
            f"⚠️  Error loading config from {config_path}: {e}", style="yellow"
        )
        return None

    if not isinstance(data, dict):
        console.print(
            f"⚠️  Config file {config_path} must contain a mapping", style="yellow"
        )
        return None

    return data


def find_config_file() -> Optional[Path]:
    """Find config file in standard locations."""
    locations = [
        Path.cwd() / ".legal-licenses.json",
        Path.cwd() / ".legal-licenses.yaml",
        Path.cwd() / ".legal-licenses.yml",
        Path.cwd() / ".legal-licenses.toml",
        Path.home() / ".config" / "legal-licenses" / "config.json",
    ]

    for location in locations:
        if location.exists():
            return location

    return None


def load_environment_overrides(config: LegalLicensesConfig) -> None:
    """Load environment variable overrides."""

    def get_env_bool(key: str, default: bool = False) -> bool:
        value = os.environ.get(key, "").lower()
        return value in ["true", "1", "yes", "on"] if value else default

    def get_env_int(key: str, default: Optional[int] = None) -> Optional[int]:
        try:
            return int(os.environ[key]) if key in os.environ else default
        except ValueError:
            console.print(f"⚠️  Invalid integer value for {key}, using default", style="yellow")
            return default

    if manifest := os.environ.get("LEGAL_LICENSES_MANIFEST"):
        config.report.manifest_path = manifest
    if vendor_dir := os.environ.get("LEGAL_LICENSES_VENDOR_DIR"):
        config.report.vendor_dir = vendor_dir
    if output_dir := os.environ.get("LEGAL_LICENSES_OUTPUT_DIR"):
        config.report.output_dir = output_dir

    config.report.hide_version = get_env_bool(
        "LEGAL_LICENSES_HIDE_VERSION", config.report.hide_version
    )
    config.report.csv_output = get_env_bool("LEGAL_LICENSES_CSV", config.report.csv_output)
    config.report.include_license_text = get_env_bool(
        "LEGAL_LICENSES_INCLUDE_LICENSE_TEXT", config.report.include_license_text
    )
    config.report.include_dev = get_env_bool(
        "LEGAL_LICENSES_INCLUDE_DEV", config.report.include_dev
    )

    if max_file_size := get_env_int("LEGAL_LICENSES_MAX_FILE_SIZE_MB"):
        config.security.max_file_size_mb = max_file_size

    if log_level := os.environ.get("LEGAL_LICENSES_LOG_LEVEL"):
        config.logging.log_level = log_level.upper()


def apply_config_section(
    config: Any, section_data: Dict[str, Any], section_name: str
) -> None:
    """Apply configuration from dictionary to config section."""
    if not isinstance(section_data, dict):
        console.print(f"⚠️  Config section {section_name} must be a mapping", style="yellow")
        return

    for key, value in section_data.items():
        if hasattr(config, key):
            setattr(config, key, value)
        else:
            console.print(
                f"⚠️  Unknown config key in {section_name}: {key}", style="yellow"
            )


def apply_config_data(config: LegalLicensesConfig, file_config: Dict[str, Any]) -> None:
    """Apply a loaded config mapping to the config sections it names."""
    for section_name in ("report", "security", "logging"):
        if section_name in file_config:
            apply_config_section(
                getattr(config, section_name), file_config[section_name], section_name
            )


def load_config() -> LegalLicensesConfig:
    """Load configuration from file and environment."""
    global _global_config

    if _global_config is not None:
        return _global_config

    config = LegalLicensesConfig()

    config_file = find_config_file()
    if config_file:
        file_config = load_config_file(config_file)
        if file_config:
            apply_config_data(config, file_config)

    load_environment_overrides(config)

    validation_errors = validate_config_values(config)
    if validation_errors:
        console.print("⚠️  Configuration validation errors:", style="red")
        for error in validation_errors:
            console.print(f"  • {error}", style="red")
            log_configuration_error(error, "cli_config", "load_config", config_file)
        console.print("Using default values for invalid settings.", style="yellow")
        _restore_invalid_defaults(config)

    _global_config = config
    return config


def _restore_invalid_defaults(config: LegalLicensesConfig) -> None:
    """Reset each setting that fails validation on its own back to its default."""
    defaults = LegalLicensesConfig()
    for section_name in ("report", "security", "logging"):
        section = getattr(config, section_name)
        default_section = getattr(defaults, section_name)
        for key, value in list(vars(section).items()):
            probe = LegalLicensesConfig()
            setattr(getattr(probe, section_name), key, value)
            if validate_config_values(probe):
                setattr(section, key, getattr(default_section, key))


def get_config() -> LegalLicensesConfig:
    """Get the global configuration instance."""
    global _global_config
    if _global_config is None:
        _global_config = load_config()
    return _global_config


def reset_config() -> None:
    """Reset the global configuration (useful for testing)."""
    global _global_config
    _global_config = None


def create_sample_config() -> str:
    """Generate a sample JSON configuration with all defaults."""
    return json.dumps(LegalLicensesConfig().to_dict(), indent=2)


def read_config_file(config_path: Path) -> LegalLicensesConfig:
    """
    Build a configuration from a single file, without environment overrides.

    Raises:
        ConfigurationError: The file cannot be loaded or holds invalid values
    """
    config_data = load_config_file(config_path)
    if config_data is None:
        raise ConfigurationError(f"Could not load config from {config_path}")

    config = LegalLicensesConfig()
    apply_config_data(config, config_data)

    errors = validate_config_values(config)
    if errors:
        raise ConfigurationError(f"{config_path} is invalid", errors)

    return config
