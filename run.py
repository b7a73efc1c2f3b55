"""Hex map generator CLI entry point.

Provides subcommands for running the HTTP generation service and for
generating a single manifest straight to stdout or a file. Accepts
configuration via flags and environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

from mapgen.version import __version__

_color_init()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()


def _parse_widths(text: str):
    try:
        return tuple(int(w) for w in text.split(",") if w.strip())
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid width list: {text!r}") from None


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Hex Map Generator

    Run the HTTP generation service or produce a single map manifest from the
    command line. Configuration can be provided via CLI flags or environment
    variables. If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                   Bind address for the web server (default: 0.0.0.0)
          PORT                   Port for the web server (default: 5000)
          DEFAULT_HEXAGON_COUNT  Count used when a request omits it (default: 50)
          MAX_HEXAGON_COUNT      Largest count the service accepts (default: 200)
          MAPGEN_LOG_LEVEL       debug | info | warn | error (default: info)
          MAPGEN_LOG_JSON        Emit JSON log lines when set to 1

        Examples:
          # Run the service on the default host and port
          python run.py serve

          # Generate a 60 hexagon map for a fixed seed
          python run.py generate --seed test123 --count 60

          # Corridor-heavy map written to a file, with structural validation
          python run.py generate --count 120 --corridor-ratio 0.85 --output map.json --validate
        """
    )

    parser = argparse.ArgumentParser(
        prog="hexmap",
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
        version=f"Hex Map Generator {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP generation service",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    serve_parser.add_argument("--host", default=None, help="Host interface to bind (default: env HOST or 0.0.0.0)")
    serve_parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: env PORT or 5000)")
    serve_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    serve_parser.set_defaults(command="serve")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one map manifest as JSON",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    gen_parser.add_argument("--seed", default=None, help="Seed string (random when omitted)")
    gen_parser.add_argument("--count", type=int, default=None, help="Target hexagon count (default: env DEFAULT_HEXAGON_COUNT or 50)")
    gen_parser.add_argument("--corridor-ratio", dest="corridor_ratio", type=float, default=0.7)
    gen_parser.add_argument("--room-min", dest="room_min", type=int, default=4)
    gen_parser.add_argument("--room-max", dest="room_max", type=int, default=8)
    gen_parser.add_argument("--widths", type=_parse_widths, default=(1, 2), help="Comma separated corridor widths (default: 1,2)")
    gen_parser.add_argument("--output", "-o", default=None, help="Write the manifest to this file instead of stdout")
    gen_parser.add_argument("--indent", type=int, default=2, help="JSON indent (default: 2)")
    gen_parser.add_argument("--validate", action="store_true", help="Run all structural checks and report them on stderr")
    gen_parser.set_defaults(command="generate")

    # If no subcommand provided, default to serve
    if len(argv) == 0:
        argv = ["serve"]

    return parser.parse_args(argv)


def _banner(mode: str, host: str, port: int) -> str:
    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text

    def value(val) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)

    title = f"{Fore.CYAN}{Style.BRIGHT}Hex Map Generator{Style.RESET_ALL}" if _COLOR_ENABLED else "Hex Map Generator"
    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Mode:'):12} {value(mode.upper())}",
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Version:'):12} {value(__version__)}",
        divider,
        "",
    ]
    return "\n".join(lines)


def run_generate(args: argparse.Namespace) -> int:
    from mapgen.generation import GenerationOptions, MapGenerator, MapInvariantError, MapValidator
    from mapgen.logging_utils import StructuredLogger

    options = GenerationOptions(
        corridor_ratio=args.corridor_ratio,
        room_size_min=args.room_min,
        room_size_max=args.room_max,
        corridor_widths=args.widths,
    )
    count = args.count if args.count is not None else int(os.getenv("DEFAULT_HEXAGON_COUNT", "50"))
    try:
        options.validate()
        if count < 1:
            raise ValueError("Hexagon count must be at least 1")
    except ValueError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2

    logger = StructuredLogger("mapgen.cli", stream=sys.stderr)
    try:
        manifest = MapGenerator(seed=args.seed, options=options, logger=logger).generate(count)
    except MapInvariantError as e:
        print(f"[ERROR] {e} (seed={e.seed})", file=sys.stderr)
        return 3

    text = json.dumps(manifest.to_dict(), indent=args.indent or None)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(text + "\n")
    else:
        print(text)

    if args.validate:
        result = MapValidator().validate_map(list(manifest.hexagons), options.corridor_ratio)
        print(json.dumps(result.to_dict(), indent=2), file=sys.stderr)
        if not result.is_valid:
            return 1
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "serve").lower()
    if mode == "generate":
        return run_generate(args)

    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))

    # Import server entrypoint only after environment is ready
    from mapgen.server import start_server

    print(_banner(mode, host, port))
    start_server(host, port, bool(getattr(args, "debug", False)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
