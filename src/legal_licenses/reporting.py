"""
Report formatting for dependency license reports.

Renders dependency records as Markdown blocks or CSV rows, and as a Rich
table for console display.
"""

from typing import Iterable, List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from .dependency import DependencyRecord

NOT_CONFIGURED = "Not configured."
NO_SHA = "no sha"
NO_LICENSE_FILE = "No license file found."
SHA_LENGTH = 7

CSV_HEADER = ["name", "version", "source", "license description"]

BOILERPLATE = """# Project Licenses
This file was generated by the Legal Licenses utility. It contains the name, version and commit sha, description, homepage, and license information for every dependency in this project.

## Dependencies

"""


def get_boilerplate() -> str:
    """Return the fixed header of the Markdown report."""
    return BOILERPLATE


def short_sha(record: DependencyRecord) -> str:
    """First characters of the source revision, or 'no sha' without one."""
    if not record.source_reference:
        return NO_SHA
    return record.source_reference[:SHA_LENGTH]


def license_names(record: DependencyRecord) -> str:
    """Comma-joined declared license identifiers."""
    if not record.licenses:
        return NOT_CONFIGURED
    return ", ".join(record.licenses)


def format_markdown_entry(
    record: DependencyRecord,
    license_text: str = "",
    include_license_text: bool = False,
) -> str:
    """
    Render one dependency as a Markdown block.

    Args:
        record: The dependency to render
        license_text: Located license file contents, possibly empty
        include_license_text: Append the license file contents to the block

    Returns:
        str: Markdown block terminated by a blank line
    """
    lines = [
        f"### {record.name} (Version {record.version} | {short_sha(record)})",
        record.description or NOT_CONFIGURED,
        f"Homepage: {record.homepage or NOT_CONFIGURED}",
        f"Source: {record.source_url or NOT_CONFIGURED}",
        f"Licenses Used: {license_names(record)}",
    ]

    if include_license_text:
        lines.append("")
        lines.append(license_text.rstrip("\n") if license_text else NO_LICENSE_FILE)

    return "\n".join(lines) + "\n\n"


def build_markdown_document(entries: Iterable[str]) -> str:
    """Concatenate the boilerplate header and the rendered entries."""
    return get_boilerplate() + "".join(entries)


def format_csv_row(record: DependencyRecord, hide_version: bool = False) -> List[str]:
    """
    Render one dependency as the four CSV fields.

    The version is blanked when hide_version is set.
    """
    return [
        record.name,
        "" if hide_version else record.version,
        record.source_url or "",
        license_names(record),
    ]


class DependencyTableReporter:
    """Displays dependency records in the console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def build_table(
        self, records: Sequence[DependencyRecord], hide_version: bool = False
    ) -> Table:
        table = Table(
            title=f"📋 Dependencies ({len(records)})",
            box=box.ROUNDED,
            title_style="bold cyan",
        )
        table.add_column("Name", style="bold")
        if not hide_version:
            table.add_column("Version")
        table.add_column("Revision", style="dim")
        table.add_column("Licenses", style="green")

        for record in records:
            row = [record.name]
            if not hide_version:
                row.append(record.version)
            row.extend([short_sha(record), license_names(record)])
            table.add_row(*row)

        return table

    def print_dependencies(
        self, records: Sequence[DependencyRecord], hide_version: bool = False
    ) -> None:
        if not records:
            self.console.print("ℹ️  No dependencies found in the manifest.", style="yellow")
            return
        self.console.print(self.build_table(records, hide_version))
