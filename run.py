"""roomgen CLI entry point.

Provides subcommands for generating a layout in the terminal and for running
the Flask preview server. Accepts configuration via flags and environment
variables, with optional .env loading.

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

# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()


def _load_version() -> str:
    try:
        with open(os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION"), "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    roomgen layout generator

    Generate cellular automata caves and backtracking mazes in the terminal, or
    run the HTTP preview server. Configuration can be provided via CLI flags or
    environment variables. If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                  Bind address for the web server (default: 0.0.0.0)
          PORT                  Port for the web server (default: 5000)
          ROOMGEN_LOG_LEVEL     debug | info | warn | error (default: info)
          ROOMGEN_LOG_JSON      Emit JSON log lines when set to 1/true
          ROOMGEN_MAX_CELLS     Largest width*height the server will generate

        Examples:
          # Print a 40x20 cave
          python run.py generate dungeon --width 40 --height 20 --seed 7

          # Maze with no loops and every dead end kept, plus metrics
          python run.py generate maze --loop-count 0 --dead-end-keep-chance 1 --metrics

          # Run the preview server on a custom port
          python run.py server --port 8080

          # Load variables from .env then run the server
          python run.py --env-file .env server
        """
    )

    parser = argparse.ArgumentParser(
        prog="roomgen",
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
        version=f"roomgen {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # generate subcommand
    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate a layout and print it as text",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate a layout; '#' is wall and '.' is floor.",
    )
    gen_parser.add_argument("kind", choices=["dungeon", "cave", "maze"], help="Generator to run")
    gen_parser.add_argument("--width", type=int, default=32, help="Grid width in cells (default: 32)")
    gen_parser.add_argument("--height", type=int, default=32, help="Grid height in cells (default: 32)")
    gen_parser.add_argument("--seed", type=int, default=None, help="RNG seed (default: 0)")
    gen_parser.add_argument(
        "--floor-height",
        dest="floor_height",
        type=float,
        default=None,
        help="Value stored in floor cells (default: 1.0)",
    )
    gen_parser.add_argument("--density", type=float, default=None, help="[dungeon] initial wall probability")
    gen_parser.add_argument("--iterations", type=int, default=None, help="[dungeon] automaton steps")
    gen_parser.add_argument("--path-width", dest="path_width", type=int, default=None, help="[dungeon] corridor width")
    gen_parser.add_argument("--loop-count", dest="loop_count", type=int, default=None, help="[maze] extra openings")
    gen_parser.add_argument(
        "--dead-end-keep-chance",
        dest="dead_end_keep_chance",
        type=float,
        default=None,
        help="[maze] probability each dead end survives pruning",
    )
    gen_parser.add_argument(
        "--smooth-edges",
        dest="smooth_edges",
        action="store_true",
        default=None,
        help="Fill wall cells enclosed by floor on three sides",
    )
    gen_parser.add_argument("--metrics", action="store_true", help="Print generation metrics as JSON")
    gen_parser.set_defaults(command="generate")

    # server subcommand
    server_parser = subparsers.add_parser(
        "server",
        help="Run the layout preview web server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask layout preview server",
    )
    server_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 5000)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    args = parser.parse_args(argv)
    return args


def _settings_mapping(args: argparse.Namespace) -> dict:
    mapping = {
        "seed": args.seed,
        "height": args.floor_height,
        "density": args.density,
        "iterations": args.iterations,
        "path_width": args.path_width,
        "loop_count": args.loop_count,
        "dead_end_keep_chance": args.dead_end_keep_chance,
        "smooth_edges": args.smooth_edges,
    }
    return {k: v for k, v in mapping.items() if v is not None}


def _run_generate(args: argparse.Namespace) -> int:
    from roomgen.generation import InvalidParameter, create_generator, grid_to_rows, settings_for

    try:
        settings = settings_for(args.kind, _settings_mapping(args))
        generator = create_generator(args.kind, settings)
        grid = generator.generate(args.width, args.height)
    except InvalidParameter as e:
        prefix = f"{Fore.RED}[ERROR]{Style.RESET_ALL}" if _COLOR_ENABLED else "[ERROR]"
        print(f"{prefix} {e}", file=sys.stderr)
        return 1
    print("\n".join(grid_to_rows(grid)))
    if args.metrics:
        print(json.dumps(generator.last_metrics, indent=2, sort_keys=True))
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "generate":
        return _run_generate(args)

    # Resolve configuration from CLI flags or env vars
    env_host = os.getenv("HOST", "0.0.0.0")
    env_port = int(os.getenv("PORT", "5000"))
    host = getattr(args, "host", None) or env_host
    port = int(getattr(args, "port", None) or env_port)
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoints only after environment is ready
    from roomgen.logging_utils import log
    from roomgen.server import start_server

    title = (
        f"{Fore.CYAN}{Style.BRIGHT}roomgen Preview Server{Style.RESET_ALL}"
        if _COLOR_ENABLED
        else "roomgen Preview Server"
    )

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text

    def value(val: str | int) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Version:'):12} {value(__version__)}",
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Debug:'):12} {value('YES' if debug else 'NO')}",
        divider,
        "",
    ]
    print("\n".join(lines))
    log.info(event="listen", host=host, port=port, debug=debug)
    start_server(host=host, port=port, debug=debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
