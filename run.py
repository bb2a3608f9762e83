"""Island world generator CLI entry point.

Provides subcommands for generating and printing a world, reloading a saved
session, and running the HTTP API server. Accepts configuration via flags
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

from island import __version__
from island.logging_utils import log
from island.worldgen import (
    SHAPES,
    SPREADS,
    Direction,
    SessionState,
    World,
    WorldConfig,
    WorldConfigError,
    load_session,
    save_session,
    validate_config,
)
from island.worldgen.config import CONTINUATIONS, CUSTOM_CONTINUATION
from island.worldgen.state import default_save_path
from island.worldgen.tiles import DOOR, FLOOR, HALLWAY, UNUSED, WALL

_color_init()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()

_GLYPH_COLORS = {
    UNUSED: Fore.BLUE,
    WALL: Fore.WHITE + Style.DIM,
    FLOOR: Fore.GREEN,
    HALLWAY: Fore.YELLOW,
    DOOR: Fore.MAGENTA,
}


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Island World Generator

    Generate procedural island worlds from a seed, print them as text or JSON,
    reload saved sessions, or serve worlds over a small HTTP API. Configuration
    can be provided via CLI flags or environment variables. If both are
    present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                Bind address for the web server (default: 0.0.0.0)
          PORT                Port for the web server (default: 5000)
          ISLAND_SAVE_FILE    Session save file (default: save.txt)
          ISLAND_LOG_LEVEL    debug | info | warn | error (default: info)

        Examples:
          # Print a random world
          python run.py generate

          # Reproducible packed, straight-corridor world, saved for later
          python run.py generate --seed 42 --spread packed --continuation straight --save

          # Rebuild the saved session
          python run.py load

          # Serve worlds over HTTP on a custom port
          python run.py server --port 8080
        """
    )

    parser = argparse.ArgumentParser(
        prog="Island",
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
        version=f"Island World Generator {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # generate subcommand
    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate a world and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate a world from a seed and optional overrides, then print it.",
    )
    gen_parser.add_argument("--seed", type=int, default=None, help="World seed (default: random)")
    gen_parser.add_argument("--height", type=int, default=75, help="World height in cells (default: 75)")
    gen_parser.add_argument("--width", type=int, default=150, help="World width in cells (default: 150)")
    gen_parser.add_argument("--shape", choices=SHAPES, default=None, help="Island silhouette (default: random)")
    gen_parser.add_argument("--spread", choices=SPREADS, default=None, help="Room placement strategy (default: random)")
    gen_parser.add_argument("--min-room-dim", type=int, default=-1, help="Minimum room dimension (-1: random)")
    gen_parser.add_argument("--max-room-dim", type=int, default=-1, help="Maximum room dimension (-1: random)")
    gen_parser.add_argument(
        "--continuation",
        choices=list(CONTINUATIONS) + [CUSTOM_CONTINUATION],
        default=None,
        help="Corridor straightness (default: random 50-89%%)",
    )
    gen_parser.add_argument(
        "--continue-percentage",
        type=int,
        default=-1,
        help="Straightness percentage used with --continuation custom",
    )
    gen_parser.add_argument("--doors-per-room", type=int, default=1, help="Doors opened per room, 1-4 (default: 1)")
    gen_parser.add_argument("--json", action="store_true", help="Print the world as JSON instead of a text map")
    gen_parser.add_argument("--show-spawn", action="store_true", help="Mark a random spawn point with '@'")
    gen_parser.add_argument(
        "--save",
        nargs="?",
        const="",
        default=None,
        metavar="PATH",
        help="Save the session (default path: env ISLAND_SAVE_FILE or save.txt)",
    )
    gen_parser.add_argument("--isometric", action="store_true", help="Record the isometric view in the saved session")
    gen_parser.set_defaults(command="generate")

    # load subcommand
    load_parser = subparsers.add_parser(
        "load",
        help="Rebuild and print a saved session",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    load_parser.add_argument("path", nargs="?", default=None, help="Save file (default: env ISLAND_SAVE_FILE or save.txt)")
    load_parser.add_argument("--json", action="store_true", help="Print the world as JSON instead of a text map")
    load_parser.set_defaults(command="load")

    # server subcommand
    server_parser = subparsers.add_parser(
        "server",
        help="Run the HTTP world API server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask server exposing /api/world endpoints",
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


def _config_from_args(args) -> WorldConfig:
    return validate_config(
        WorldConfig(
            seed=args.seed,
            height=args.height,
            width=args.width,
            shape=args.shape,
            spread=args.spread,
            min_room_dim=args.min_room_dim,
            max_room_dim=args.max_room_dim,
            continuation=args.continuation,
            continue_percentage=args.continue_percentage,
            doors_per_room=args.doors_per_room,
        )
    )


def render_map(world: World, occupants=None) -> str:
    text = world.to_ascii(occupants)
    if not _COLOR_ENABLED:
        return text
    lines = []
    for y, line in zip(range(world.height - 1, -1, -1), text.split("\n")):
        out = []
        for x, ch in enumerate(line):
            if ch == "@":
                out.append(f"{Fore.RED}{Style.BRIGHT}@{Style.RESET_ALL}")
                continue
            color = _GLYPH_COLORS.get(world.tiles[x][y].kind)
            out.append(f"{color}{ch}{Style.RESET_ALL}" if color else ch)
        lines.append("".join(out))
    return "\n".join(lines)


def _print_world(world: World, as_json: bool, occupants=None):
    if as_json:
        print(json.dumps(world.to_json(), indent=2))
        return
    print(render_map(world, occupants))
    summary = (
        f"seed={world.seed} shape={world.settings.shape} spread={world.settings.spread} "
        f"rooms={len(world.rooms)} straightness={world.settings.continue_percentage}%"
    )
    print(f"{Fore.CYAN}{summary}{Style.RESET_ALL}" if _COLOR_ENABLED else summary)


def _cmd_generate(args) -> int:
    config = _config_from_args(args)
    world = World(config)
    spawn = world.random_room_point() if (args.show_spawn or args.save is not None) else None
    occupants = {"player": spawn} if (args.show_spawn and spawn is not None) else None
    _print_world(world, args.json, occupants)
    if args.save is not None:
        if args.isometric:
            world.switch_view(True)
        session = SessionState(world.config, world.catalog.isometric, spawn, Direction.DOWN)
        path = save_session(session, args.save or None)
        print(f"[INFO] Session saved to {path}", file=sys.stderr)
        log.info(event="session_saved", path=path, seed=world.seed)
    return 0


def _cmd_load(args) -> int:
    path = args.path or default_save_path()
    try:
        session = load_session(path)
    except FileNotFoundError:
        print(f"[ERROR] Save file not found: {path}")
        return 1
    world = World(session.config)
    world.switch_view(session.isometric)
    occupants = None
    if session.position is not None and world.grid.in_bounds(*session.position):
        occupants = {"player": session.position}
    _print_world(world, args.json, occupants)
    log.info(event="session_loaded", path=path, seed=world.seed)
    return 0


def main(argv: list[str]) -> int:
    # Load .env if requested, else the default .env if present (no error if missing)
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    try:
        if mode == "generate":
            return _cmd_generate(args)
        if mode == "load":
            return _cmd_load(args)
    except WorldConfigError as exc:
        print(f"[ERROR] {exc}")
        return 2

    # Resolve configuration from CLI flags or env vars
    env_host = os.getenv("HOST", "0.0.0.0")
    env_port = int(os.getenv("PORT", "5000"))
    host = getattr(args, "host", None) or env_host
    port = int(getattr(args, "port", None) or env_port)
    debug = bool(getattr(args, "debug", False))

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoint only after environment is ready
    from island.server import start_server

    title = (
        f"{Fore.CYAN}{Style.BRIGHT}Island World Server Bootup{Style.RESET_ALL}"
        if _COLOR_ENABLED
        else "Island World Server Bootup"
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
        f"  {label('Mode:'):12} {value(mode.upper())}",
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Version:'):12} {value(__version__)}",
        f"  {label('Debug:'):12} {value('YES' if debug else 'NO')}",
        divider,
        "",
    ]
    print("\n".join(lines))
    log.info(event="startup", mode=mode, host=host, port=port)

    start_server(host=host, port=port, debug=debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
