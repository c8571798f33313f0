"""
hwcheck - Main Entry Point.

Parses command line flags, loads thresholds, runs the selected
collectors and writes the report to stdout.
"""

import argparse
import logging
import os
import sys
from dataclasses import dataclass
from typing import List, Optional

from . import __version__
from .core.aggregator import Aggregator
from .core.config import Config
from .core.models import Domain
from .rendering import FORMATS, make_console, render
from .rendering.live import watch


logger = logging.getLogger(__name__)

DOMAIN_FLAGS = {
    "cpu": [Domain.CPU],
    "ram": [Domain.RAM],
    "storage": [Domain.STORAGE],
    "network": [Domain.NETWORK],
    "usb": [Domain.USB],
    "pci": [Domain.PCI],
    "health": [Domain.MOTHERBOARD, Domain.BATTERY],
}

FLAG_HELP = {
    "cpu": "Show CPU information",
    "ram": "Show RAM information",
    "storage": "Show storage information",
    "network": "Show network interfaces",
    "usb": "Show USB devices",
    "pci": "Show PCI devices",
    "health": "Show system health (motherboard, BIOS, battery)",
}


@dataclass
class Options:
    """Everything the run needs from the command line."""

    domains: List[Domain]
    format: str = "table"
    color: bool = True
    watch: Optional[float] = None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hwcheck",
        description="Report hardware and system health information.",
    )
    for flag, help_text in FLAG_HELP.items():
        parser.add_argument(f"--{flag}", action="store_true", help=help_text)
    parser.add_argument(
        "--full", "--all",
        dest="full",
        action="store_true",
        help="Show every section (the default when no section flag is given)",
    )
    parser.add_argument(
        "-f", "--format",
        choices=FORMATS,
        default="table",
        help="Output format (default: table)",
    )
    parser.add_argument(
        "-c", "--config",
        metavar="PATH",
        help="Path to a YAML threshold configuration file",
    )
    parser.add_argument(
        "--write-config",
        metavar="PATH",
        help="Write the effective configuration to PATH and exit",
    )
    parser.add_argument(
        "--watch",
        nargs="?",
        type=float,
        const=1.0,
        metavar="SECONDS",
        help="Refresh the table view every SECONDS (default 1) until Ctrl+C",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging level for diagnostics on stderr",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase diagnostic output (-v info, -vv debug)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def selected_domains(args: argparse.Namespace) -> List[Domain]:
    """Map section flags to domains; no flag or --full selects everything."""
    chosen = [flag for flag in DOMAIN_FLAGS if getattr(args, flag)]
    if args.full or not chosen:
        return list(Domain)

    domains = []
    for flag in chosen:
        domains.extend(DOMAIN_FLAGS[flag])
    return Domain.ordered(domains)


def parse_options(parser: argparse.ArgumentParser, args: argparse.Namespace) -> Options:
    if args.watch is not None:
        if args.format != "table":
            parser.error("--watch can only be used with --format table")
        if args.watch <= 0:
            parser.error("--watch interval must be positive")

    return Options(
        domains=selected_domains(args),
        format=args.format,
        color=not args.no_color,
        watch=args.watch,
    )


def setup_logging(level: str, fmt: Optional[str] = None):
    """Configure root logging to stderr; stdout carries only the report."""
    numeric = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric, int):
        numeric = logging.WARNING
    logging.basicConfig(
        level=numeric,
        format=fmt or "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
        force=True,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    options = parse_options(parser, args)

    cli_level = args.log_level
    if cli_level is None and args.verbose:
        cli_level = "DEBUG" if args.verbose > 1 else "INFO"
    setup_logging(cli_level or os.getenv("HWCHECK_LOG_LEVEL") or "WARNING")

    config = Config.load(args.config)
    if cli_level is None:
        setup_logging(config.logging.level, config.logging.format)

    if args.write_config:
        try:
            config.to_yaml(args.write_config)
        except OSError as e:
            logger.error(f"Cannot write configuration to {args.write_config}: {e}")
            return 1
        logger.info(f"Configuration written to {args.write_config}")
        return 0

    aggregator = Aggregator(config.thresholds)
    logger.debug(f"Selected domains: {', '.join(d.value for d in options.domains)}")

    if options.watch is not None:
        try:
            watch(aggregator, options.domains, make_console(sys.stdout, options.color), options.watch)
        except KeyboardInterrupt:
            pass
        return 0

    report = aggregator.build_report(options.domains)

    try:
        render(report, options.format, sys.stdout, color=options.color)
    except BrokenPipeError:
        # Keep the interpreter from failing again when it flushes stdout at exit
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        return 1
    except OSError as e:
        logger.error(f"Cannot write report: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
