#!/usr/bin/env python3
"""
DCIM Extraction CLI

Copies or moves photos and videos off an iOS device mount into a single
folder, recovering edited renders from the PhotoData mutations tree.
"""

import sys
import logging
import click
from pathlib import Path
from colorama import init, Fore, Style

# Add the dcim_extractor package to path
sys.path.insert(0, str(Path(__file__).parent))

from dcim_extractor import (
    Config,
    RunConfig,
    DeviceExtractor,
    ExtractionError,
    ExtractionReporter,
)

# Initialize colorama for cross-platform colored output
init()

# Replaced on each setup_logging call
_handlers = []


def setup_logging(level: str = 'INFO', log_dir: Path = None):
    """Set up logging configuration."""
    global _handlers
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Logs go to stderr so dry-run operations on stdout stay clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    for handler in _handlers:
        root_logger.removeHandler(handler)
    _handlers = [console_handler]

    root_logger.setLevel(numeric_level)
    root_logger.addHandler(console_handler)

    if log_dir:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / 'extract.log')
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        _handlers.append(file_handler)


def print_header(title: str):
    """Print a formatted header."""
    click.echo(f"\n{Fore.CYAN}{'=' * 60}{Style.RESET_ALL}")
    click.echo(f"{Fore.CYAN}{title.center(60)}{Style.RESET_ALL}")
    click.echo(f"{Fore.CYAN}{'=' * 60}{Style.RESET_ALL}\n")
    sys.stdout.flush()

def print_success(message: str):
    """Print success message."""
    click.echo(f"{Fore.GREEN}OK: {message}{Style.RESET_ALL}")
    sys.stdout.flush()

def print_warning(message: str):
    """Print warning message."""
    click.echo(f"{Fore.YELLOW}WARN: {message}{Style.RESET_ALL}")
    sys.stdout.flush()

def print_error(message: str):
    """Print error message."""
    click.echo(f"{Fore.RED}ERROR: {message}{Style.RESET_ALL}", err=True)
    sys.stderr.flush()

def print_info(message: str):
    """Print info message."""
    click.echo(f"{Fore.BLUE}INFO: {message}{Style.RESET_ALL}")
    sys.stdout.flush()


def error_chain(error: BaseException) -> str:
    """Render an exception and its causes as 'outer: inner: ...'."""
    messages = []
    while error is not None:
        text = str(error) or type(error).__name__
        if not messages or text not in messages[-1]:
            messages.append(text)
        error = error.__cause__
    return ": ".join(messages)


@click.command()
@click.option('--mount', '-m', default='', help='Location of the iOS device mount')
@click.option('--target', '-t', default=None,
              help='Target directory to put photos and videos (default from config)')
@click.option('--delete/--no-delete', default=None, help='Delete original files (move instead of copy)')
@click.option('--dry-run/--no-dry-run', '-n', default=None, help="Show operations but don't perform them")
@click.option('--config', '-c', help='Path to configuration file')
@click.option('--log-level', '-l', default=None,
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']),
              help='Logging level')
@click.option('--report', '-r', help='Save summary report to this file')
def cli(mount, target, delete, dry_run, config, log_level, report):
    """DCIM Extraction Tool - copy photos, videos and edited renders off a device."""

    try:
        config_obj = Config(config)
    except ExtractionError as e:
        print_error(f"Failed to load configuration: {error_chain(e)}")
        sys.exit(1)

    log_dir = config_obj.get_log_dir()
    setup_logging(log_level or config_obj.get_log_level(), Path(log_dir) if log_dir else None)

    errors = config_obj.validate_config()
    if errors:
        print_error("Configuration validation failed:")
        for error in errors:
            click.echo(f"  - {error}", err=True)
        sys.exit(1)

    run_config = RunConfig(
        mount=mount,
        target=target if target is not None else config_obj.get_default_target(),
        delete=config_obj.should_delete() if delete is None else delete,
        dry_run=config_obj.is_dry_run() if dry_run is None else dry_run,
    )

    print_header("DEVICE EXTRACTION")
    if run_config.dry_run:
        print_info("Running in DRY RUN mode - nothing will be copied or moved")
    if run_config.delete:
        print_warning("Originals will be removed from the device after transfer")

    extractor = DeviceExtractor(run_config, reporter=click.echo, config=config_obj)
    reporter = ExtractionReporter()

    try:
        results = extractor.run()
    except (ExtractionError, OSError) as e:
        print_error(error_chain(e))
        sys.exit(1)

    click.echo("\n" + reporter.generate_summary_report(results))
    if report:
        print_success(f"Report saved: {reporter.save_report(results, report)}")
    sys.stdout.flush()


if __name__ == '__main__':
    cli()
