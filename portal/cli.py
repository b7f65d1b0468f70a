"""CLI entry point for the portal web front-end."""

import argparse
import asyncio
import logging

import httpx

from portal.app import build_fetcher, create_app
from portal.config.loader import get_config_value, load_config
from portal.config.schema import PortalConfig
from portal.models.forecast import FetchResult

DEFAULT_CONFIG = "ops/configs/default.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="portal",
        description="Weather forecast web front-end",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )

    sub = parser.add_subparsers(dest="command")

    # serve
    serve_p = sub.add_parser("serve", help="Run the HTTP server")
    serve_p.add_argument("--host", help="Bind address (overrides config)")
    serve_p.add_argument("--port", type=int, help="Bind port (overrides config)")

    # weather
    sub.add_parser("weather", help="Fetch forecasts once and print them")

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Display one config value")
    get_p.add_argument("key", help="Dotted key, e.g. weather_api.base_url")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "serve":
        return _cmd_serve(config, args)
    elif args.command == "weather":
        return _cmd_weather(config)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_serve(config: PortalConfig, args) -> int:
    import uvicorn

    uvicorn.run(
        create_app(config),
        host=args.host or config.server.host,
        port=args.port or config.server.port,
    )
    return 0


async def _fetch_once(config: PortalConfig) -> FetchResult:
    async with httpx.AsyncClient() as http_client:
        fetcher = build_fetcher(config, http_client)
        return await fetcher.fetch()


def _cmd_weather(config: PortalConfig) -> int:
    result = asyncio.run(_fetch_once(config))
    if result.error is not None:
        print(f"Error ({result.error.kind}): {result.error.message}")
        return 1

    print(f"Forecasts: {len(result.forecasts)}")
    for f in result.forecasts:
        print(
            f"  {f.date.isoformat()}: {f.temperature_c}C / "
            f"{f.temperature_f:.1f}F {f.summary or '-'}"
        )
    return 0


def _cmd_config(config: PortalConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            print(get_config_value(config, args.key))
            return 0
        except KeyError as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config get key")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
