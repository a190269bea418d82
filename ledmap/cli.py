"""CLI entry point for the LED weather map."""

import argparse
import logging

from ledmap.color.encoder import temperature_to_color, temperature_to_hsv
from ledmap.color.errors import ColorPipelineError
from ledmap.color.fade import generate_colors
from ledmap.config.loader import get_config_value, load_config, set_config_value
from ledmap.daemon import MapDaemon, daemon_status, stop_daemon
from ledmap.display.strip import StripError
from ledmap.pipeline.map_cycle import MapCycle
from ledmap.reporting.formatters import (
    format_color,
    format_cube_json,
    format_cube_text,
    format_cycle_json,
    format_cycle_text,
)

DEFAULT_CONFIG = "ops/configs/default.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="ledmap",
        description="LED weather map: forecast temperatures as fading colors",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # colors
    colors_p = sub.add_parser(
        "colors", help="Generate the color cube for literal temperatures"
    )
    colors_p.add_argument(
        "temps", nargs="+",
        help="One comma-separated temperature list per location, e.g. 10,20,30",
    )
    colors_p.add_argument("--fade-steps", type=int, default=None)
    colors_p.add_argument("--json", action="store_true", help="Print JSON")

    # swatch
    swatch_p = sub.add_parser("swatch", help="Show the color for temperatures")
    swatch_p.add_argument("temps", nargs="+", type=float)

    # run
    run_p = sub.add_parser("run", help="Fetch forecasts and play the map once")
    run_p.add_argument("--json", action="store_true", help="Print JSON summary")

    # daemon
    daemon_p = sub.add_parser("daemon", help="Run the map continuously")
    daemon_p.add_argument("--stop", action="store_true", help="Stop the daemon")
    daemon_p.add_argument("--status", action="store_true", help="Show daemon status")

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "swatch":
        return _cmd_swatch(args)
    if args.command == "daemon" and args.stop:
        return stop_daemon()
    if args.command == "daemon" and args.status:
        return daemon_status()

    config = load_config(args.config)

    if args.command == "colors":
        return _cmd_colors(config, args)
    elif args.command == "run":
        return _cmd_run(config, args)
    elif args.command == "daemon":
        return _cmd_daemon(config)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_colors(config, args) -> int:
    try:
        forecast = [[float(t) for t in arg.split(",") if t.strip()] for arg in args.temps]
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    fade_steps = (
        args.fade_steps if args.fade_steps is not None else config.render.fade_steps
    )
    try:
        cube = generate_colors(forecast, fade_steps)
    except ColorPipelineError as e:
        print(f"Error: {e}")
        return 1
    print(format_cube_json(cube) if args.json else format_cube_text(cube))
    return 0


def _cmd_swatch(args) -> int:
    for temp in args.temps:
        h, s, v = temperature_to_hsv(temp)
        packed = temperature_to_color(temp)
        print(
            f"{temp:7.1f}  h={h:.3f} s={s:.3f} v={v:.1f}  "
            f"grb=0x{packed:06x}  rgb={format_color(packed)}"
        )
    return 0


def _cmd_run(config, args) -> int:
    try:
        cycle = MapCycle(config)
    except StripError as e:
        print(f"Error: {e}")
        return 1
    try:
        summary = cycle.run()
    except Exception as e:
        logging.getLogger(__name__).exception("Cycle failed")
        print(f"Error: {e}")
        return 1
    finally:
        cycle.strip.close()
    print(format_cycle_json(summary) if args.json else format_cycle_text(summary))
    return 0


def _cmd_daemon(config) -> int:
    try:
        daemon = MapDaemon(config)
    except StripError as e:
        print(f"Error: {e}")
        return 1
    daemon.start()
    return 0


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = kv.split("=", 1)
        try:
            new_config = set_config_value(config, key.strip(), value.strip())
            print(f"Set {key} = {get_config_value(new_config, key.strip())}")
            return 0
        except Exception as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config set key=value")
        return 1
