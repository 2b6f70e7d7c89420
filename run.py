"""Dungeon Mapper CLI entry point.

Provides subcommands for running the map analysis API and for working with
maps in their canonical text form straight from the shell (analyze, render,
prune dead ends, rebase, generate samples). Accepts configuration via flags
and environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()


def _color_enabled() -> bool:
    # Disable colors if output is not a real terminal (e.g., during pytest capture)
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


def _load_version() -> str:
    path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Dungeon Mapper

    Analyze completed dungeon maps (parent-pointer trees on a grid): classify
    rooms, list dead ends, compute the critical path and diameter, prune dead
    ends and move the base. Maps are passed in their canonical one-line form,
    e.g. "3 2 -S-/E.W b1 - b2".
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                        Bind address for the API server (default: 127.0.0.1)
          PORT                        Port for the API server (default: 5000)
          DGMAPPER_STRICT_VALIDATION  Reject malformed maps (default: 1)
          DGMAPPER_LOG_LEVEL          debug | info | warn | error (default: info)

        Examples:
          # Run the API server on the default host and port
          python run.py server

          # Summarize a map
          python run.py analyze "3 2 -S-/E.W b1 - b2"

          # Remove two dead ends, then print the updated map
          python run.py prune "3 2 -S-/E.W b1 - b2" a1 c1

          # Generate a reproducible sample map
          python run.py sample --seed 7 --rooms 20
        """
    )

    parser = argparse.ArgumentParser(
        prog="dgmapper",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"Dungeon Mapper {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    server_parser = subparsers.add_parser("server", help="Run the map analysis API server")
    server_parser.add_argument("--host", help="Bind address (overrides HOST)")
    server_parser.add_argument("--port", type=int, help="Port (overrides PORT)")
    server_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")

    analyze_parser = subparsers.add_parser("analyze", help="Print room classification and metrics for a map")
    analyze_parser.add_argument("map", help="Map in canonical text form (quote it)")
    analyze_parser.add_argument("--json", action="store_true", help="Print the summary as JSON")

    pretty_parser = subparsers.add_parser("pretty", help="Render the grid of a map, top row first")
    pretty_parser.add_argument("map", help="Map in canonical text form (quote it)")

    prune_parser = subparsers.add_parser("prune", help="Remove dead ends (in order) and print the new map")
    prune_parser.add_argument("map", help="Map in canonical text form (quote it)")
    prune_parser.add_argument("points", nargs="+", help="Dead ends in chess notation, e.g. a1")

    rebase_parser = subparsers.add_parser("rebase", help="Move the base to another room and print the new map")
    rebase_parser.add_argument("map", help="Map in canonical text form (quote it)")
    rebase_parser.add_argument("point", help="New base in chess notation")

    sample_parser = subparsers.add_parser("sample", help="Generate a random completed map")
    sample_parser.add_argument("--seed", type=int, help="RNG seed for a reproducible map")
    sample_parser.add_argument("--rooms", type=int, default=24, help="Number of rooms (default: 24)")
    sample_parser.add_argument("--width", type=int, default=8, help="Grid width (default: 8)")
    sample_parser.add_argument("--height", type=int, default=8, help="Grid height (default: 8)")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    return parser.parse_args(argv)


def _print_summary(summary: dict, colored: bool) -> None:
    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if colored else text

    def value(val) -> str:
        if isinstance(val, list):
            val = " ".join(val) if val else "(none)"
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if colored else str(val)

    rows = [
        ("Size:", f"{summary['width']}x{summary['height']}"),
        ("Base:", summary["base"]),
        ("Boss:", summary["boss"]),
        ("Rooms:", f"{summary['rooms']} / {summary['max_rooms']}"),
        ("Gaps:", summary["gaps"]),
        ("Dead ends:", summary["dead_ends"]),
        ("Bonus:", summary["bonus_dead_ends"]),
        ("Crit rooms:", summary["crit_rooms"]),
        ("Height:", summary["tree_height"]),
        ("Diameter:", summary["diameter"]),
    ]
    for k, v in rows:
        print(f"  {label(k):12} {value(v)}")


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    colored = _color_enabled()
    mode = (getattr(args, "command", None) or "server").lower()

    from dgmapper.dungeon import MapConfig, MapError, decode_map, generate_map, parse_chess_string
    from dgmapper.logging_utils import log

    def error(msg: str) -> int:
        prefix = f"{Fore.RED}[ERROR]{Style.RESET_ALL}" if colored else "[ERROR]"
        print(f"{prefix} {msg}", file=sys.stderr)
        return 1

    try:
        if mode == "analyze":
            dmap = decode_map(args.map)
            summary = dmap.summary()
            if args.json:
                print(json.dumps(summary, indent=2))
            else:
                print(dmap.to_pretty_string())
                _print_summary(summary, colored)
            return 0
        if mode == "pretty":
            print(decode_map(args.map).to_pretty_string())
            return 0
        if mode == "prune":
            dmap = decode_map(args.map)
            for raw in args.points:
                dmap.remove_dead_end(parse_chess_string(raw))
            print(dmap)
            return 0
        if mode == "rebase":
            dmap = decode_map(args.map)
            dmap.rebase(parse_chess_string(args.point))
            print(dmap)
            return 0
        if mode == "sample":
            cfg = MapConfig(width=args.width, height=args.height, room_count=args.rooms, seed=args.seed)
            print(generate_map(cfg))
            return 0
    except MapError as e:
        log.warn(event="cli_error", command=mode, code=e.code, message=e.message)
        return error(e.message)
    except ValueError as e:
        return error(str(e))

    # server
    host = getattr(args, "host", None) or os.getenv("HOST", "127.0.0.1")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    title = f"{Fore.CYAN}{Style.BRIGHT}Dungeon Mapper API{Style.RESET_ALL}" if colored else "Dungeon Mapper API"
    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if colored else "=" * 40
    print("\n".join([divider, f"  {title}", divider, f"  Host: {host}", f"  Port: {port}", divider, ""]))
    log.info(event="listen", host=host, port=port, debug=debug)

    # Import server entrypoint only after environment is ready
    from dgmapper.server import start_server

    start_server(host=host, port=port, debug=debug)
    return 0


def cli() -> None:
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    cli()
