"""
Main CLI entry point for snmp-checks.

Provides the `snmpcheck` command with subcommands for:
- usage: Interface bandwidth usage against thresholds
- interfaces: Interface inventory (text or JSON)
- sysdescr: sysDescr pattern check
- bgp-peers: BGP peer session state
- inventory: Full device inventory as JSON
- version: Show version

Every check prints one plugin line on stdout and exits with the plugin
exit code. Logs go to stderr.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from snmp_checks import __version__
from snmp_checks.checks import (
    BaseCheck,
    BgpPeersCheck,
    InterfacesCheck,
    InterfaceUsageCheck,
    SysDescrCheck,
    collect_inventory,
)
from snmp_checks.core.config import ProbeSettings, get_settings, load_settings_file
from snmp_checks.core.exceptions import ConfigurationError, SNMPChecksError
from snmp_checks.formatters.output import PluginFormatter, exit_code, render_plugin_output
from snmp_checks.models.rates import Direction, Threshold
from snmp_checks.models.verdict import Verdict
from snmp_checks.snmp.client import SNMPClient

logger = logging.getLogger(__name__)

# Main CLI app
app = typer.Typer(
    name="snmpcheck",
    help="SNMP health probes with Nagios/Icinga-compatible output",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# stdout carries plugin output only; logs and diagnostics go to stderr
console = Console()
err_console = Console(stderr=True)


# =============================================================================
# Shared options
# =============================================================================

TargetOption = Annotated[
    str, typer.Option("--target", "-t", help="Target SNMP device")
]
CommunityOption = Annotated[
    str | None,
    typer.Option(
        "--community", "-C", envvar="SNMPCHECK_COMMUNITY", help="SNMP community string"
    ),
]
PortOption = Annotated[int | None, typer.Option("--port", help="SNMP port")]
TimeoutOption = Annotated[
    int | None, typer.Option("--timeout", help="Request timeout in seconds")
]
ConfigOption = Annotated[
    Path | None, typer.Option("--config", "-c", help="Path to YAML config file")
]
DebugOption = Annotated[
    bool, typer.Option("--debug", "-d", help="Enable debug logging")
]
PerfOption = Annotated[
    bool, typer.Option("--perf", help="Include performance data")
]


def configure_logging(settings: ProbeSettings) -> None:
    """Send log records to stderr through rich."""
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[
            RichHandler(console=err_console, show_path=settings.debug, rich_tracebacks=True)
        ],
        force=True,
    )


def load_settings(
    config_file: Path | None,
    community: str | None = None,
    port: int | None = None,
    timeout: int | None = None,
    debug: bool = False,
    **overrides: object,
) -> ProbeSettings:
    """
    Resolve settings: CLI flags over config file over environment.

    Raises:
        typer.Exit: With the UNKNOWN exit code if the configuration is invalid
    """
    try:
        base = load_settings_file(config_file) if config_file else get_settings()
        settings = base.merged(
            community=community,
            port=port,
            timeout=timeout,
            debug=debug or None,
            **overrides,
        )
        # Validate merged values (model_copy skips validation)
        settings = ProbeSettings(**settings.model_dump())
    except (ConfigurationError, ValueError) as e:
        verdict = Verdict.unknown(f"Invalid configuration: {e}")
        typer.echo(render_plugin_output(verdict))
        raise typer.Exit(exit_code(verdict)) from None

    configure_logging(settings)
    return settings


def make_client(target: str, settings: ProbeSettings) -> SNMPClient:
    return SNMPClient(target, settings.credentials)


def emit(verdict: Verdict) -> None:
    """Print the plugin line and exit with the matching code."""
    raise typer.Exit(PluginFormatter().write_verdict(verdict))


def run_check(check: BaseCheck) -> None:
    emit(check.run())


# =============================================================================
# Commands
# =============================================================================


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"snmpcheck version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """
    snmpcheck - SNMP health probes.

    Interface usage, interface inventory, sysDescr, BGP peer and device
    inventory checks for network devices over SNMPv2c.
    """


@app.command()
def usage(
    target: TargetOption = "127.0.0.1",
    index: Annotated[int, typer.Option("--index", "-i", help="ifIndex of the interface")] = 1,
    delay: Annotated[
        int | None, typer.Option("--delay", help="Seconds between the two samples")
    ] = None,
    warn_in: Annotated[float, typer.Option("--warn-in", min=0, help="Inbound warning in bps")] = 0,
    crit_in: Annotated[float, typer.Option("--crit-in", min=0, help="Inbound critical in bps")] = 0,
    warn_out: Annotated[
        float, typer.Option("--warn-out", min=0, help="Outbound warning in bps")
    ] = 0,
    crit_out: Annotated[
        float, typer.Option("--crit-out", min=0, help="Outbound critical in bps")
    ] = 0,
    perf: PerfOption = False,
    community: CommunityOption = None,
    port: PortOption = None,
    timeout: TimeoutOption = None,
    config_file: ConfigOption = None,
    debug: DebugOption = False,
) -> None:
    """Check interface bandwidth usage against thresholds. Zero disables a threshold."""
    settings = load_settings(config_file, community, port, timeout, debug, delay=delay)
    check = InterfaceUsageCheck(
        make_client(target, settings),
        index=index,
        delay=settings.delay,
        thresholds={
            Direction.IN: Threshold(warning=warn_in, critical=crit_in),
            Direction.OUT: Threshold(warning=warn_out, critical=crit_out),
        },
        enable_perf=perf,
    )
    run_check(check)


@app.command()
def interfaces(
    target: TargetOption = "127.0.0.1",
    as_json: Annotated[bool, typer.Option("--json", help="Output interfaces as JSON")] = False,
    community: CommunityOption = None,
    port: PortOption = None,
    timeout: TimeoutOption = None,
    config_file: ConfigOption = None,
    debug: DebugOption = False,
) -> None:
    """List every interface of a device."""
    settings = load_settings(config_file, community, port, timeout, debug)
    run_check(InterfacesCheck(make_client(target, settings), as_json=as_json))


@app.command()
def sysdescr(
    target: TargetOption = "127.0.0.1",
    pattern: Annotated[
        str, typer.Option("--pattern", "-p", help="Regular expression sysDescr must match")
    ] = "",
    perf: PerfOption = False,
    community: CommunityOption = None,
    port: PortOption = None,
    timeout: TimeoutOption = None,
    config_file: ConfigOption = None,
    debug: DebugOption = False,
) -> None:
    """Check sysDescr, optionally against a pattern."""
    settings = load_settings(config_file, community, port, timeout, debug)
    run_check(SysDescrCheck(make_client(target, settings), pattern=pattern, enable_perf=perf))


@app.command("bgp-peers")
def bgp_peers(
    target: TargetOption = "127.0.0.1",
    community: CommunityOption = None,
    port: PortOption = None,
    timeout: TimeoutOption = None,
    config_file: ConfigOption = None,
    debug: DebugOption = False,
) -> None:
    """Check that every started BGP peer is established."""
    settings = load_settings(config_file, community, port, timeout, debug)
    run_check(BgpPeersCheck(make_client(target, settings)))


@app.command()
def inventory(
    target: TargetOption = "127.0.0.1",
    community: CommunityOption = None,
    port: PortOption = None,
    timeout: TimeoutOption = None,
    config_file: ConfigOption = None,
    debug: DebugOption = False,
) -> None:
    """Collect a device inventory and print it as JSON."""
    settings = load_settings(config_file, community, port, timeout, debug)
    try:
        result = collect_inventory(make_client(target, settings))
    except SNMPChecksError as e:
        emit(Verdict.critical(f"Error collecting inventory from {target}: {e}"))
    except Exception as e:
        logger.exception(f"Unexpected error collecting inventory from {target}")
        emit(Verdict.unknown(f"Unexpected error collecting inventory from {target}: {e}"))
    PluginFormatter().write_inventory(result)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]snmpcheck[/bold] version {__version__}")


def cli() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    cli()
