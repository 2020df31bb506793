import logging
import sys
from pathlib import Path
from typing import Annotated, Optional

# Add the src directory to sys.path so the packages resolve when run as a script
src_dir = Path(__file__).resolve().parent
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

import typer

from core.app_version import get_app_version
from core.config import load_app_config
from core.logging import configure_logging, get_logger
from extractors.callbacks import LoggingCallbacks
from extractors.mobile.xry.processor import XryReportProcessor
from sdk.records import JsonlRecordSink, RecordCollector

LOGGER = get_logger("app.run")

EXIT_OK = 0
EXIT_NO_REPORTS = 1
EXIT_READ_ERROR = 2

app = typer.Typer(
    name="xrysifter",
    help="Parse XRY mobile extraction reports into normalized records.",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"XRY Sifter {get_app_version()}")
        raise typer.Exit()


@app.command()
def parse(
    folder: Annotated[Path, typer.Argument(help="XRY export folder holding the text reports")],
    output: Annotated[
        Path, typer.Option("--output", "-o", help="JSON lines file receiving the records")
    ] = Path("records.jsonl"),
    config_dir: Annotated[
        Optional[Path],
        typer.Option("--config-dir", help="Base directory holding config/config.yml"),
    ] = None,
    log_dir: Annotated[
        Optional[Path],
        typer.Option("--log-dir", help="Directory for processing.log (default: the configured logs dir)"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    version: Annotated[
        bool,
        typer.Option("--version", "-V", callback=_version_callback, is_eager=True,
                     help="Show the version and exit"),
    ] = False,
) -> None:
    """Parse every supported report in FOLDER and write the records to OUTPUT."""
    app_config = load_app_config(config_dir or Path.cwd())
    level = logging.DEBUG if verbose else getattr(logging, app_config.logging.level, logging.INFO)
    configure_logging(
        log_dir or app_config.logs_dir,
        level=level,
        max_bytes=app_config.logging.app_log_max_mb * 1024 * 1024,
        backup_count=app_config.logging.app_log_backup_count,
    )

    processor = XryReportProcessor(folder, RecordCollector(), app_config.xry, LoggingCallbacks())
    if not processor.discover_reports():
        typer.echo(f"No XRY reports found in {folder}", err=True)
        raise typer.Exit(EXIT_NO_REPORTS)

    # Only touch the output file once there is something to parse
    sink = JsonlRecordSink.open(output)
    processor.sink = sink
    try:
        result = processor.process()
    finally:
        sink.close()

    for report in result.reports:
        typer.echo(f"{report.path.name:<32} {report.report_type:<20} {report.status:<8} {report.artifacts}")
    for kind, count in sorted(result.counts.items()):
        typer.echo(f"{kind}: {count}")
    typer.echo(f"Wrote {sink.written} records to {output}")
    LOGGER.info("Wrote %d records to %s", sink.written, output)

    for report in result.failed:
        typer.echo(f"Cannot read XRY report {report.path.name}: {report.error}", err=True)
    if result.failed:
        raise typer.Exit(EXIT_READ_ERROR)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
