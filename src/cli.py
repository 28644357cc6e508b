"""CLI entry point for HTTP RGB lights."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from config import load_config, load_secrets
from devices.http_rgb import HttpRgbLight
from devices.manager import DeviceManager
from utils.errors import classify_exception

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="http-rgb",
        description="Control HTTP RGB / white balance lights",
    )
    parser.add_argument(
        "--config-dir",
        type=str,
        help="Path to config directory",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("list", help="List configured lights")

    # config validate
    config_parser = subparsers.add_parser("config", help="Configuration utilities")
    config_subparsers = config_parser.add_subparsers(dest="config_action", help="Config action")
    config_subparsers.add_parser("validate", help="Validate configuration")

    for name, help_text in (
        ("status", "Read every readable attribute of a light"),
        ("identify", "Send an identify request"),
        ("services", "Show the characteristics a light exposes"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("light", help="Light id")

    power_parser = subparsers.add_parser("power", help="Get or set power")
    power_parser.add_argument("light", help="Light id")
    power_parser.add_argument(
        "state",
        nargs="?",
        choices=["on", "off"],
        help="New power state (omit to read)",
    )

    for name in ("brightness", "saturation"):
        sub = subparsers.add_parser(name, help=f"Get or set {name}")
        sub.add_argument("light", help="Light id")
        sub.add_argument(
            "level",
            nargs="?",
            type=int,
            help=f"New {name} 0-100 (omit to read)",
        )

    return parser


async def run_command(args: argparse.Namespace, manager: DeviceManager) -> dict[str, Any]:
    """Run a light command and return a response dict."""
    if args.command == "list":
        return {
            "lights": [manager.light_to_response(light) for light in manager.get_lights()],
        }

    light_id = getattr(args, "light", None)
    try:
        light = manager.get_light(light_id)

        if args.command == "status":
            await light.refresh()
            return manager.light_to_response(light)

        if args.command == "identify":
            await light.identify()
            return {"id": light.id, "identified": True}

        if args.command == "services":
            if not isinstance(light, HttpRgbLight):
                raise ValueError(f"Light {light.id} does not describe its services")
            return light.services()

        if args.command == "power":
            if args.state is None:
                return {"id": light.id, "is_on": await light.get_power()}
            body = await light.set_power(args.state == "on")
            return {"id": light.id, "is_on": args.state == "on", "response": body}

        if args.command == "brightness":
            if args.level is None:
                return {"id": light.id, "brightness": await light.get_brightness()}
            await light.set_brightness(args.level)
            return {"id": light.id, "brightness": light.state.brightness}

        if args.command == "saturation":
            if args.level is None:
                return {"id": light.id, "saturation": await light.get_saturation()}
            await light.set_saturation(args.level)
            return {"id": light.id, "saturation": light.state.saturation}

        raise ValueError(f"Unknown command: {args.command}")

    except Exception as e:
        error = classify_exception(e, light_id)
        logger.debug(f"{args.command} failed: {error.message}")
        return error.to_dict()


async def run(args: argparse.Namespace) -> int:
    """Load config, run the command and print the JSON result."""
    config_dir = Path(args.config_dir) if args.config_dir else None
    config = load_config(config_dir)
    secrets = load_secrets(config_dir)

    if args.command == "config":
        print(json.dumps({"valid": True, "lights": [light.id for light in config.lights]}, indent=2))
        return 0

    manager = DeviceManager(config, secrets)
    await manager.initialize()
    try:
        result = await run_command(args, manager)
    finally:
        await manager.shutdown()

    print(json.dumps(result, indent=2))
    return 1 if "error" in result else 0


def main() -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "config" and args.config_action is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    try:
        sys.exit(asyncio.run(run(args)))
    except Exception as e:
        logger.error(f"{args.command} failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
