#!/usr/bin/env python3
import os
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from .commit_message import (
    PRESETS,
    ConfigurationError,
    available_presets,
    validate_message,
    validate_message_from_file,
)
from .config import DEFAULT_CONFIG_FILENAME, Config
from .models import ValidationOptions
from .observers import CompositeObserver, ConsoleDiagnosticObserver, FileDiagnosticObserver

console = Console()
err_console = Console(stderr=True)


def build_observer(log_file: Optional[Path]) -> CompositeObserver:
    """Console output plus an optional log file."""
    observer = CompositeObserver([ConsoleDiagnosticObserver(err_console)])
    if log_file:
        observer.add_observer(FileDiagnosticObserver(str(log_file)))
    return observer


def print_presets() -> None:
    console.print("\n[bold]Available presets:[/bold]")
    for name in available_presets():
        preset = PRESETS[name]
        ignore = f" (ignores {preset.ignore_pattern.pattern})" if preset.ignore_pattern else ""
        console.print(f"{name:<10} {preset.description}{ignore}", markup=False)


def print_config(config: Config, config_dir: Path) -> None:
    config_path = config_dir / DEFAULT_CONFIG_FILENAME
    source = "config" if config_path.exists() else "default"

    console.print("\n[bold]Current Configuration Settings:[/bold]")
    if config_path.exists():
        console.print(f"[dim]Config file: {str(config_path).replace(os.sep, '/')}[/dim]")
    else:
        console.print("[dim]Using default values (no config file found)[/dim]")

    console.print(f"\n{'Setting':<20} {'Value':<20} {'Source':<10}")
    console.print("-" * 50)
    console.print(f"{'preset':<20} {config.preset:<20} {source:<10}")
    console.print(f"{'quiet':<20} {str(config.quiet):<20} {source:<10}")
    console.print(f"{'log_file':<20} {str(config.log_file or 'None'):<20} {source:<10}")


@click.command()
@click.argument(
    "message_file",
    required=False,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option("-m", "--message", help="Commit message to validate instead of a file")
@click.option(
    "-p",
    "--preset",
    type=click.Choice(available_presets(), case_sensitive=True),
    help="Preset to validate against (overrides config setting)",
)
@click.option(
    "-q", "--quiet", is_flag=True, help="Suppress the 'validation ignored' notice"
)
@click.option(
    "--config",
    "config_dir",
    default=".",
    help="Directory holding .commitpresets.toml (defaults to current directory)",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option(
    "-l",
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also append diagnostics to this file (overrides config setting)",
)
@click.option("--list-presets", is_flag=True, help="List the available presets and exit")
@click.option("--config-list", is_flag=True, help="Display current configuration settings")
@click.option("--init-config", is_flag=True, help="Create a config file with default values")
@click.option("--version", is_flag=True, help="Display version information and exit")
def main(
    message_file: Optional[Path],
    message: Optional[str],
    preset: Optional[str],
    quiet: bool,
    config_dir: Path,
    log_file: Optional[Path],
    list_presets: bool,
    config_list: bool,
    init_config: bool,
    version: bool,
):
    """
    Validate a commit message against a project convention.

    Pass the commit message file (as git does for a commit-msg hook) or a
    message with --message. Exits 0 when the message is valid and 1 when
    it is not.

    Configuration can be set in .commitpresets.toml; command line options
    override configuration file settings.
    """
    if version:
        from .version import display_version_info

        display_version_info()
        return

    if list_presets:
        print_presets()
        return

    config_dir = config_dir.absolute()

    if config_list:
        print_config(Config.load(config_dir), config_dir)
        return

    if init_config:
        config_path = config_dir / DEFAULT_CONFIG_FILENAME
        if config_path.exists():
            console.print(f"[yellow]Config file already exists:[/yellow] {config_path}")
        else:
            Config().save(config_dir)
            console.print(f"[green]Created new config file with default values:[/green] {config_path}")
        return

    if message_file is None and message is None:
        raise click.UsageError("Provide a commit message file or --message")
    if message_file is not None and message is not None:
        raise click.UsageError("Use either a commit message file or --message, not both")

    config = Config.load(config_dir)
    if preset is not None:
        config.preset = preset
    if quiet:
        config.quiet = True

    observer = build_observer(log_file or config.get_log_file())
    options = ValidationOptions(preset=config.preset, quiet=config.quiet or None)

    try:
        if message_file is not None:
            is_valid = validate_message_from_file(message_file, options, observer)
        else:
            is_valid = validate_message(message, options, observer)
    except ConfigurationError as e:
        raise click.UsageError(str(e))
    except OSError as e:
        raise click.FileError(str(message_file), hint=e.strerror or str(e))
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Operation cancelled by user[/yellow]")
        raise click.Abort()

    if is_valid:
        if not config.quiet:
            console.print(f"[green]Commit message follows the '{config.preset}' convention[/green]")
        sys.exit(0)

    err_console.print(f"[red]Commit message rejected by the '{config.preset}' preset[/red]")
    sys.exit(1)


if __name__ == "__main__":
    main()
