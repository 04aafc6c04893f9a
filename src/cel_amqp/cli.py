"""CLI interface for the CEL AMQP backend."""

import json
import logging
from pathlib import Path

import typer

from .errors import CelAmqpError
from .interfaces.cli_handlers import collect_status, effective_options, forward_events
from .utils.config import DEFAULT_AMQP_CONFIG_PATH, DEFAULT_CEL_AMQP_CONFIG_PATH

app = typer.Typer(help="Forward CEL events to an AMQP broker")

CelConfigOption = typer.Option(
    Path(DEFAULT_CEL_AMQP_CONFIG_PATH),
    "--config",
    "-c",
    envvar="CEL_AMQP_CONFIG",
    help="Path to the cel_amqp routing config (YAML, JSON or .conf).",
)
AmqpConfigOption = typer.Option(
    Path(DEFAULT_AMQP_CONFIG_PATH),
    "--amqp-config",
    envvar="CEL_AMQP_AMQP_CONFIG",
    help="Path to the AMQP connection profiles config (YAML, JSON or .conf).",
)


@app.callback()
def configure_logging(
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        envvar="CEL_AMQP_LOG_LEVEL",
        help="Python logging level name.",
    ),
) -> None:
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command("status")
def status_command(
    cel_config: Path = CelConfigOption,
    amqp_config: Path = AmqpConfigOption,
) -> None:
    """Show the state of every configured AMQP connection."""

    try:
        loaded, statuses = collect_status(cel_config, amqp_config)
    except CelAmqpError as error:
        typer.echo(f"Error: {error.message}", err=True)
        raise typer.Exit(code=1) from error

    typer.echo(f"{'Name':<24} {'URL':<48} State")
    for status in statuses:
        typer.echo(f"{status.name:<24} {status.url:<48} {status.state}")
    if not loaded:
        typer.echo("CEL AMQP backend could not be loaded.", err=True)
        raise typer.Exit(code=1)


@app.command("forward")
def forward_command(
    input_file: typer.FileText = typer.Option(
        "-",
        "--input",
        "-i",
        help="File with one JSON CEL record per line; '-' reads stdin.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Log documents instead of publishing them.",
    ),
    cel_config: Path = CelConfigOption,
    amqp_config: Path = AmqpConfigOption,
) -> None:
    """Publish CEL records read from a file or stdin."""

    try:
        summary = forward_events(input_file, cel_config, amqp_config, dry_run=dry_run)
    except CelAmqpError as error:
        typer.echo(f"Error: {error.message}", err=True)
        raise typer.Exit(code=1) from error

    for line_number, reason in summary.rejected:
        typer.echo(f"[REJECTED] line={line_number} error={reason}")

    typer.echo(
        "Summary: "
        f"total={summary.total} "
        f"published={summary.published} "
        f"dropped={summary.dropped} "
        f"rejected={len(summary.rejected)}"
    )


@app.command("show-config")
def show_config_command(cel_config: Path = CelConfigOption) -> None:
    """Print the effective routing options as JSON."""

    try:
        options = effective_options(cel_config)
    except CelAmqpError as error:
        typer.echo(f"Error: {error.message}", err=True)
        raise typer.Exit(code=1) from error

    typer.echo(json.dumps(options.model_dump(), indent=2))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
