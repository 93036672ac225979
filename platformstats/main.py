"""
Platform Statistics - Main Entry Point.

Samples CPU, memory and power telemetry on the local board and prints
a report.
"""

import argparse
import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import yaml

from .core.config import Config, LoggingConfig, get_default_config_path
from .collectors.platform_collector import PlatformCollector, SECTIONS
from .report import ReportPrinter


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def configure_logging(config: LoggingConfig, verbose: bool = False):
    """Apply the logging section of the configuration to the root logger."""
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else config.level.upper())

    if config.file_path:
        handler = RotatingFileHandler(
            config.file_path,
            maxBytes=config.max_file_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
        )
        handler.setFormatter(logging.Formatter(config.format))
        root.addHandler(handler)


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Print CPU, memory and power statistics of the platform"
    )

    parser.add_argument(
        "-a", "--all",
        action="store_true",
        help="Print all supported stats (default when no section is selected)"
    )

    parser.add_argument(
        "-c", "--cpu-util",
        action="store_true",
        dest="cpu_util",
        help="Print CPU utilization"
    )

    parser.add_argument(
        "-r", "--ram",
        action="store_true",
        help="Print RAM utilization"
    )

    parser.add_argument(
        "-s", "--swap",
        action="store_true",
        help="Print swap memory utilization"
    )

    parser.add_argument(
        "-p", "--power",
        action="store_true",
        help="Print power utilization"
    )

    parser.add_argument(
        "-m", "--cma",
        action="store_true",
        help="Print CMA memory utilization"
    )

    parser.add_argument(
        "-f", "--cpu-freq",
        action="store_true",
        dest="cpu_freq",
        help="Print CPU frequency"
    )

    parser.add_argument(
        "--rate",
        type=int,
        default=None,
        help="Seconds between power samples (default: 1)"
    )

    parser.add_argument(
        "--duration",
        type=int,
        default=None,
        help="Number of power samples (default: 1)"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the collected snapshot as JSON"
    )

    parser.add_argument(
        "--config",
        default=None,
        help="Path to configuration file (YAML)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )

    parser.add_argument(
        "--generate-config",
        action="store_true",
        help="Generate a sample configuration file"
    )

    return parser.parse_args(argv)


def selected_sections(args) -> list:
    """Sections requested on the command line, in report order."""
    if args.all:
        return list(SECTIONS)
    # Flag dests are named after the sections
    return [section for section in SECTIONS if getattr(args, section)] or list(SECTIONS)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Generate sample config if requested
    if args.generate_config:
        config = Config()
        config_path = "config/platformstats.yaml"
        Path("config").mkdir(exist_ok=True)
        config.to_yaml(config_path)
        print(f"Generated sample configuration: {config_path}")
        return 0

    # Load configuration
    config_path = args.config or get_default_config_path()
    try:
        config = Config.from_yaml(config_path)
    except (ValueError, TypeError, yaml.YAMLError) as e:
        logger.error(f"Invalid configuration in {config_path}: {e}")
        return 2
    configure_logging(config.logging, args.verbose)
    logger.debug(f"Loaded configuration from {config_path}")

    # Apply command line overrides
    if args.rate is not None:
        config.sampling.rate = args.rate
    if args.duration is not None:
        config.sampling.duration = args.duration

    collector = PlatformCollector(config)
    printer = ReportPrinter(verbose=args.verbose)
    sections = selected_sections(args)

    if args.json:
        snapshot = collector.collect(sections)
        print(json.dumps(snapshot.to_dict(), indent=2, default=str))
        return 1 if snapshot.errors else 0

    failed = False
    for section in sections:
        streamed = section == "power"
        if streamed:
            printer.print_power_header()
        snapshot = collector.collect(
            [section],
            on_power_sample=printer.print_power_sample if streamed else None,
        )
        printer.print_section(section, snapshot, power_streamed=streamed)
        failed = failed or bool(snapshot.errors)

    return 1 if failed else 0


def run():
    """Entry point for the application."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nInterrupted")
        sys.exit(130)


if __name__ == "__main__":
    run()
