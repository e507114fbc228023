"""Zipper CLI entry point.

Provides subcommands for running the board generation server and for
generating a single board from the terminal. Accepts configuration via flags
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
# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()


from zipper import __version__  # noqa: E402


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Zipper Board Server

    Run the board generation HTTP server, or generate a single board and print
    it. Configuration can be provided via CLI flags or environment variables.
    If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                        Bind address for the web server (default: 0.0.0.0)
          PORT                        Port for the web server (default: 8000)
          ZIPPER_GENERATION_RETRIES   Extra attempts after a failed route search (default: 1)
          CORS_ALLOWED_ORIGINS        Access-Control-Allow-Origin value (default: *)

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Run the server on a custom port
          python run.py server --port 8080

          # Print an 8x8 board with 4 checkpoints and 5 walls
          python run.py generate --size 8 --nodes 4 --walls 5

          # Same board every time, as JSON
          python run.py generate --size 8 --nodes 4 --walls 5 --seed 42 --json
        """
    )

    parser = argparse.ArgumentParser(
        prog="Zipper",
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
        version=f"Zipper Board Server {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # server subcommand
    server_parser = subparsers.add_parser(
        "server",
        help="Run the board generation web server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask board generation server",
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
        help="Port to listen on (default: env PORT or 8000)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    # generate subcommand
    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one board and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate a single board and print it as text or JSON.",
    )
    gen_parser.add_argument("--size", type=int, default=6, help="Grid side length, 5-20 (default: 6)")
    gen_parser.add_argument("--nodes", type=int, default=3, help="Checkpoint count (default: 3)")
    gen_parser.add_argument("--walls", type=int, default=4, help="Requested wall count (default: 4)")
    gen_parser.add_argument("--seed", default=None, help="Integer or string seed for a reproducible board")
    gen_parser.add_argument("--json", dest="as_json", action="store_true", help="Print the board as JSON")
    gen_parser.set_defaults(command="generate")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    args = parser.parse_args(argv)
    return args


def _generate(args) -> int:
    from zipper.board import GenerationError, ValidationError, generate_board, validate_config

    raw = {"size": args.size, "nodes": args.nodes, "walls": args.walls, "seed": args.seed}
    try:
        config = validate_config(raw)
        board = generate_board(config)
    except ValidationError as exc:
        print(f"[ERROR] {exc.field}: {exc.message}", file=sys.stderr)
        return 2
    except GenerationError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1
    if args.as_json:
        print(json.dumps(board.to_dict()))
    else:
        print(f"seed={board.seed} size={config.size} checkpoints={config.checkpoint_count + 1} walls={len(board.walls)}")
        print(board.render_ascii())
    return 0


def main(argv: list[str]) -> int:
    # Load .env if requested, else the default .env if present
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "generate":
        return _generate(args)

    # Resolve configuration from CLI flags or env vars
    env_host = os.getenv("HOST", "0.0.0.0")
    env_port = int(os.getenv("PORT", "8000"))
    host = getattr(args, "host", None) or env_host
    port = int(getattr(args, "port", None) or env_port)
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoints only after environment is ready
    from zipper.logging_utils import log
    from zipper.server import start_server

    title = (
        f"{Fore.CYAN}{Style.BRIGHT}Zipper Board Server{Style.RESET_ALL}"
        if _COLOR_ENABLED
        else "Zipper Board Server"
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
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Debug:'):12} {value('YES' if debug else 'NO')}",
        f"  {label('Version:'):12} {value(__version__)}",
        divider,
        "",
    ]
    print("\n".join(lines))
    log.info(event="listen", host=host, port=port, debug=debug)
    start_server(host=host, port=port, debug=debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
