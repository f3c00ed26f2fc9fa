"""Writes generated license reports to disk."""

import csv
from pathlib import Path
from typing import Iterable, Sequence, Union

from .error_handling import ReportWriteError, log_filesystem_error
from .reporting import CSV_HEADER

MARKDOWN_FILENAME = "licenses.md"
CSV_FILENAME = "licenses.csv"


class ReportWriter:
    """Serializes report documents to their fixed output filenames."""

    def __init__(self, output_dir: Union[str, Path] = "."):
        self.output_dir = Path(output_dir)

    @property
    def markdown_path(self) -> Path:
        return self.output_dir / MARKDOWN_FILENAME

    @property
    def csv_path(self) -> Path:
        return self.output_dir / CSV_FILENAME

    def write_markdown(self, text: str) -> Path:
        """Write the Markdown report in one go, replacing any existing file."""
        path = self.markdown_path
        try:
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(text)
        except OSError as e:
            self._fail("write_markdown", path, e)
        return path

    def write_csv(self, rows: Iterable[Sequence[str]]) -> Path:
        """Write the CSV report: header row, then one row per dependency."""
        path = self.csv_path
        try:
            with open(path, "w", encoding="utf-8", newline="") as f:
                writer = csv.writer(f, lineterminator="\n")
                writer.writerow(CSV_HEADER)
                writer.writerows(rows)
        except OSError as e:
            self._fail("write_csv", path, e)
        return path

    def _fail(self, function: str, path: Path, error: OSError) -> None:
        log_filesystem_error(
            f"Failed to write report: {error}",
            "report_writer",
            function,
            file_path=str(path),
            exception=error,
        )
        raise ReportWriteError(f"Cannot write {path}: {error}", str(path)) from error
