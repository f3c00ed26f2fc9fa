"""
Report generation: manifest in, license report file out.

The collaborators (manifest loader, license locator, writer) are passed in so
the pipeline can run against fakes.
"""

import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional

from .cli_config import LegalLicensesConfig
from .dependency import DependencyRecord
from .license_locator import LicenseLookup, locate_license_text
from .parsers import parse_manifest_file
from .report_writer import ReportWriter
from .reporting import build_markdown_document, format_csv_row, format_markdown_entry
from .structured_logging import (
    clear_run_context,
    log_generation_complete,
    log_generation_start,
    set_run_context,
)

ManifestLoader = Callable[[str, bool], List[DependencyRecord]]
LicenseLocator = Callable[[str, Path], LicenseLookup]


@dataclass(frozen=True)
class ReportOptions:
    """Settings for one report generation run."""

    hide_version: bool = False
    csv_output: bool = False
    include_license_text: bool = False
    include_dev: bool = False
    manifest_path: str = "composer.lock"
    vendor_dir: str = "vendor"
    output_dir: str = "."

    @property
    def output_format(self) -> str:
        return "csv" if self.csv_output else "markdown"

    @classmethod
    def from_config(cls, config: LegalLicensesConfig, **overrides) -> "ReportOptions":
        """Build options from configuration; None-valued overrides are ignored."""
        report = config.report
        values = {
            "hide_version": report.hide_version,
            "csv_output": report.csv_output,
            "include_license_text": report.include_license_text,
            "include_dev": report.include_dev,
            "manifest_path": report.manifest_path,
            "vendor_dir": report.vendor_dir,
            "output_dir": report.output_dir,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


@dataclass
class GenerationResult:
    """Summary of a finished generation run."""

    output_path: Path
    output_format: str
    dependencies: List[DependencyRecord] = field(default_factory=list)
    missing_licenses: List[str] = field(default_factory=list)

    @property
    def total_dependencies(self) -> int:
        return len(self.dependencies)


def generate_report(
    options: ReportOptions,
    load_manifest: ManifestLoader = parse_manifest_file,
    locate_license: LicenseLocator = locate_license_text,
    writer: Optional[ReportWriter] = None,
    on_start: Optional[Callable[[int], None]] = None,
) -> GenerationResult:
    """
    Generate the license report described by options.

    on_start, when given, is called with the dependency count once the
    manifest has been loaded.

    Raises:
        ManifestParseError: If the manifest cannot be loaded
        ReportWriteError: If the report cannot be written
    """
    writer = writer or ReportWriter(options.output_dir)
    dependencies = load_manifest(options.manifest_path, options.include_dev)
    if on_start is not None:
        on_start(len(dependencies))

    run_id = f"run_{uuid.uuid4().hex[:12]}"
    set_run_context(
        run_id=run_id,
        manifest_path=options.manifest_path,
        total_dependencies=len(dependencies),
    )
    log_generation_start(
        run_id, options.manifest_path, len(dependencies), options.output_format
    )

    vendor_root = Path(options.vendor_dir)
    missing = []
    try:
        if options.csv_output:
            rows = []
            for dependency in dependencies:
                if not locate_license(dependency.name, vendor_root).found:
                    missing.append(dependency.name)
                rows.append(format_csv_row(dependency, options.hide_version))
            output_path = writer.write_csv(rows)
        else:
            entries = []
            for dependency in dependencies:
                lookup = locate_license(dependency.name, vendor_root)
                if not lookup.found:
                    missing.append(dependency.name)
                entries.append(
                    format_markdown_entry(
                        dependency, lookup.text, options.include_license_text
                    )
                )
            output_path = writer.write_markdown(build_markdown_document(entries))

        log_generation_complete(run_id, str(output_path), len(dependencies), len(missing))
    finally:
        clear_run_context()

    return GenerationResult(
        output_path=output_path,
        output_format=options.output_format,
        dependencies=list(dependencies),
        missing_licenses=missing,
    )
