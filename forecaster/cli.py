"""CLI entry point for the forecast fetcher."""

import argparse
import json
import logging
import sys

from forecaster.config.loader import config_as_dict, load_config
from forecaster.errors import EXIT_OK, EXIT_USAGE, ConfigurationError
from forecaster.pipeline.forecast_pipeline import ForecastPipeline

DEFAULT_CONFIG = "config.yaml"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="forecaster",
        description="Print the current temperature and a daily forecast from Yandex Weather",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument(
        "--log-level", default="WARNING", choices=LOG_LEVELS, help="Logging level"
    )

    sub = parser.add_subparsers(dest="command")

    # fetch
    fetch_p = sub.add_parser("fetch", help="Fetch and print the forecast (default)")
    _add_fetch_arguments(fetch_p)

    # config show
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display validated config (API key masked)")

    if argv is None:
        argv = sys.argv[1:]
    args = parser.parse_args(argv)
    if args.command is None:
        # Running without a command fetches with the configured values.
        args = parser.parse_args([*argv, "fetch"])

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "fetch":
            return _cmd_fetch(args)
        elif args.command == "config":
            return _cmd_config(args)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return e.exit_code

    parser.print_help()
    return EXIT_USAGE


def _add_fetch_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument("--lat", type=float, help="Override latitude")
    p.add_argument("--lon", type=float, help="Override longitude")
    p.add_argument("--days", type=int, help="Override number of forecast days")
    p.add_argument(
        "--format", choices=["text", "json"], default="text", help="Output format"
    )
    p.add_argument(
        "--no-raw", action="store_true", help="Do not print the raw JSON response"
    )


def _cmd_fetch(args) -> int:
    config = load_config(
        args.config,
        overrides={"latitude": args.lat, "longitude": args.lon, "days": args.days},
    )
    pipeline = ForecastPipeline(
        config, output_format=args.format, show_raw=not args.no_raw
    )
    return pipeline.run()


def _cmd_config(args) -> int:
    if args.config_command == "show":
        config = load_config(args.config)
        print(json.dumps(config_as_dict(config), indent=2))
        return EXIT_OK
    print("Use: config show")
    return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
