from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel

from .cli_config import (
    create_sample_config,
    find_config_file,
    get_config,
    load_config,
    read_config_file,
)
from .completion import get_completion_scripts
from .error_handling import ConfigurationError, ManifestParseError, ReportWriteError
from .generator import ReportOptions, generate_report
from .parsers import parse_manifest_file
from .reporting import DependencyTableReporter
from .structured_logging import configure_logging

__version__ = "1.0.0"

console = Console()


@click.group(invoke_without_command=True)
@click.option("--version", is_flag=True, help="Show version information")
@click.pass_context
def cli(ctx, version):
    """
    📜 Legal Licenses: dependency license report generator

    Reads the project's composer.lock, looks up each dependency's license
    file under vendor/ and writes licenses.md or licenses.csv.
    """
    if version:
        console.print(f"Legal Licenses version {__version__}", style="bold blue")
        ctx.exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@cli.command()
@click.option(
    "--hide-version/--show-version",
    "-hv",
    default=None,
    help="Hide dependency version",
)
@click.option(
    "--csv/--markdown", "csv_output", default=None, help="Output csv format"
)
@click.option(
    "--include-license-text/--no-license-text",
    default=None,
    help="Append each dependency's license file contents (Markdown only)",
)
@click.option(
    "--include-dev/--no-dev",
    default=None,
    help="Include packages-dev dependencies",
)
@click.option(
    "--manifest",
    type=click.Path(dir_okay=False),
    help="Lock file to read (default from config or composer.lock)",
)
@click.option(
    "--vendor-dir",
    type=click.Path(file_okay=False),
    help="Installed dependency directory (default from config or vendor)",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False),
    help="Directory for the generated report (default: current directory)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show details about the generated report")
def generate(
    hide_version: Optional[bool],
    csv_output: Optional[bool],
    include_license_text: Optional[bool],
    include_dev: Optional[bool],
    manifest: Optional[str],
    vendor_dir: Optional[str],
    output_dir: Optional[str],
    verbose: bool,
) -> None:
    """
    Generate Licenses file from project dependencies.

    Examples:

      legal-licenses generate

      legal-licenses generate --csv --hide-version

      legal-licenses generate --include-license-text --vendor-dir lib/vendor
    """
    config = load_config()
    configure_logging(config.logging.log_level)

    options = ReportOptions.from_config(
        config,
        hide_version=hide_version,
        csv_output=csv_output,
        include_license_text=include_license_text,
        include_dev=include_dev,
        manifest_path=manifest,
        vendor_dir=vendor_dir,
        output_dir=output_dir,
    )

    def announce_start(total_dependencies: int) -> None:
        console.print("Generating Licenses file...", style="green")
        if verbose:
            console.print(
                f"📁 {total_dependencies} dependencies read from {options.manifest_path}",
                style="dim",
            )

    try:
        result = generate_report(options, on_start=announce_start)
    except ManifestParseError as e:
        raise click.ClickException(f"Failed to parse dependency manifest: {e}")
    except ReportWriteError as e:
        raise click.ClickException(f"Failed to write report: {e}")

    console.print("Done!", style="green")

    if verbose:
        console.print(f"✅ Report saved to {result.output_path}", style="dim")
        if result.missing_licenses:
            console.print(
                f"⚠️  No license file found for {len(result.missing_licenses)} "
                f"dependencies: {', '.join(result.missing_licenses)}",
                style="yellow",
            )


@cli.command()
@click.option(
    "--hide-version/--show-version",
    "-hv",
    default=None,
    help="Hide dependency version",
)
@click.option(
    "--include-dev/--no-dev",
    default=None,
    help="Include packages-dev dependencies",
)
@click.option(
    "--manifest",
    type=click.Path(dir_okay=False),
    help="Lock file to read (default from config or composer.lock)",
)
def show(
    hide_version: Optional[bool], include_dev: Optional[bool], manifest: Optional[str]
) -> None:
    """List dependencies and their declared licenses."""
    config = load_config()
    configure_logging(config.logging.log_level)
    options = ReportOptions.from_config(
        config,
        hide_version=hide_version,
        include_dev=include_dev,
        manifest_path=manifest,
    )

    try:
        dependencies = parse_manifest_file(options.manifest_path, options.include_dev)
    except ManifestParseError as e:
        raise click.ClickException(f"Failed to parse dependency manifest: {e}")

    DependencyTableReporter(console).print_dependencies(
        dependencies, hide_version=options.hide_version
    )


@cli.command()
def info():
    """Show information about inputs, outputs and configuration."""
    info_text = """
[bold blue]📋 Inputs:[/bold blue]

• [green]composer.lock[/green] - Locked dependency list (packages, packages-dev)
• [green]vendor/<name>/[/green] - Installed dependency, probed for a license file

[bold blue]🔎 License file names, in lookup order:[/bold blue]

  LICENSE.txt, LICENSE.md, LICENSE, license.txt, license.md, license, LICENSE-2.0.txt

[bold blue]📄 Outputs:[/bold blue]

• [green]licenses.md[/green] - Markdown report (default)
• [green]licenses.csv[/green] - CSV report with --csv

[bold blue]🌍 Environment Variables:[/bold blue]

• [cyan]LEGAL_LICENSES_MANIFEST[/cyan] - Lock file path
• [cyan]LEGAL_LICENSES_VENDOR_DIR[/cyan] - Installed dependency directory
• [cyan]LEGAL_LICENSES_OUTPUT_DIR[/cyan] - Report directory
• [cyan]LEGAL_LICENSES_LOG_LEVEL[/cyan] - Log level for structured logs

[bold blue]📄 Configuration Files:[/bold blue]

• [green].legal-licenses.json[/green], [green].yaml[/green], [green].toml[/green] - Project-level config
• [green]~/.config/legal-licenses/config.json[/green] - User-level config

[bold blue]💡 Usage Examples:[/bold blue]

  legal-licenses generate
  legal-licenses generate --csv --hide-version
  legal-licenses show
  legal-licenses config init
"""
    console.print(
        Panel(
            info_text,
            title="[bold]Legal Licenses Information[/bold]",
            border_style="blue",
        )
    )


@cli.group()
def config():
    """Configuration management commands."""
    pass


@config.command("init")
@click.option(
    "--path",
    type=click.Path(),
    default=".legal-licenses.json",
    help="Path where to create the config file",
    show_default=True,
)
@click.option("--force", is_flag=True, help="Overwrite existing config file")
def config_init(path: str, force: bool):
    """Create a sample configuration file."""
    config_path = Path(path)

    if config_path.exists() and not force:
        console.print(f"⚠️  Config file already exists at {config_path}", style="yellow")
        console.print("Use --force to overwrite", style="dim")
        return

    try:
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(create_sample_config())
    except OSError as e:
        raise click.ClickException(f"Failed to create config file: {e}")

    console.print(f"✅ Created configuration file at {config_path}", style="green")


@config.command("show")
def config_show():
    """Show current configuration settings."""
    current_config = get_config()
    config_file = find_config_file()

    console.print(Panel("[bold blue]🔧 Configuration[/bold blue]", border_style="blue"))
    console.print(f"  Config File: {config_file or 'none (defaults)'}")

    console.print("\n[bold cyan]📄 Report Settings:[/bold cyan]")
    console.print(f"  Manifest: {current_config.report.manifest_path}")
    console.print(f"  Vendor Directory: {current_config.report.vendor_dir}")
    console.print(f"  Output Directory: {current_config.report.output_dir}")
    console.print(f"  Hide Version: {current_config.report.hide_version}")
    console.print(f"  CSV Output: {current_config.report.csv_output}")
    console.print(f"  Include License Text: {current_config.report.include_license_text}")
    console.print(f"  Include Dev: {current_config.report.include_dev}")

    console.print("\n[bold cyan]🔒 Security Settings:[/bold cyan]")
    console.print(f"  Max Manifest Size: {current_config.security.max_file_size_mb} MB")

    console.print("\n[bold cyan]📝 Logging Settings:[/bold cyan]")
    console.print(f"  Log Level: {current_config.logging.log_level}")


@config.command("validate")
@click.argument("config_file", type=click.Path(exists=True, dir_okay=False))
def config_validate(config_file: str):
    """Validate a configuration file."""
    try:
        read_config_file(Path(config_file))
    except ConfigurationError as e:
        if e.problems:
            console.print("❌ Configuration validation failed:", style="red")
            for problem in e.problems:
                console.print(f"  • {problem}", style="red")
        raise click.ClickException(str(e))

    console.print(f"✅ Configuration file {config_file} is valid", style="green")


@cli.command()
@click.argument(
    "shell", type=click.Choice(["bash", "zsh", "fish"], case_sensitive=False)
)
def completion(shell: str):
    """Generate shell completion scripts.

    Examples:

      legal-licenses completion bash > ~/.legal-licenses-completion.bash
    """
    click.echo(get_completion_scripts()[shell.lower()])


if __name__ == "__main__":
    cli()
