"""levelcodec CLI entry point.

Provides subcommands for running the level storage/codec HTTP service and for
converting level files offline (encode to the chunked format, decode back to
dense rows, normalize). Accepts configuration via flags and environment
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
from colorama import just_fix_windows_console
from dotenv import load_dotenv

just_fix_windows_console()
_COLOR_ENABLED = True

# Disable colors if output is not a real terminal (e.g., during pytest capture)
try:
    if not sys.stdout.isatty():  # pragma: no cover - environment dependent
        _COLOR_ENABLED = False
except (AttributeError, ValueError):  # pragma: no cover - detached/closed stdout
    _COLOR_ENABLED = False


def _load_version() -> str:
    try:
        with open(os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION"), "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()

EXIT_OK = 0
EXIT_IO = 1
EXIT_CODEC = 2


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    levelcodec - chunked tile-level codec and storage service

    Run the HTTP service or convert level files between the dense (rows of
    tile characters) and chunked (chunks20x18) representations. Configuration
    can be provided via CLI flags or environment variables. If both are
    present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST            Bind address for the web server (default: 0.0.0.0)
          PORT            Port for the web server (default: 5000)
          DATABASE_URL    SQLAlchemy database URI (default: sqlite:///instance/levels.db)

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Encode a list of dense levels, dropping empty borders first
          python run.py encode levels.json -o levels.chunked.json --normalize

          # Expand any stored payload (chunked or legacy) back to dense rows
          python run.py decode levels.chunked.json
        """
    )

    parser = argparse.ArgumentParser(
        prog="levelcodec",
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
        version=f"levelcodec {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the HTTP service",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the level codec/storage HTTP service",
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
        "--db",
        dest="db_uri",
        default=None,
        help="Database URI (default: env DATABASE_URL or sqlite:///instance/levels.db)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    encode_parser = subparsers.add_parser(
        "encode",
        help="Encode dense levels into a chunks20x18 levels file",
        formatter_class=argparse.RawTextHelpFormatter,
        description=dedent(
            """
            Read a JSON list of dense levels (or {"levels": [...]}) and write
            the chunked levels file.
            """
        ),
    )
    encode_parser.add_argument("path", help="Input JSON file ('-' for stdin)")
    encode_parser.add_argument("-o", "--output", default=None, help="Output file (default: stdout)")
    encode_parser.add_argument(
        "--normalize",
        action="store_true",
        help="Strip all-empty rows and columns from each level before encoding",
    )
    encode_parser.set_defaults(command="encode")

    decode_parser = subparsers.add_parser(
        "decode",
        help="Expand a stored levels payload into dense rows",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Accepts chunks20x18 files and legacy dense payloads.",
    )
    decode_parser.add_argument("path", help="Input JSON file ('-' for stdin)")
    decode_parser.add_argument("-o", "--output", default=None, help="Output file (default: stdout)")
    decode_parser.set_defaults(command="decode")

    normalize_parser = subparsers.add_parser(
        "normalize",
        help="Normalize every level of a dense payload",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    normalize_parser.add_argument("path", help="Input JSON file ('-' for stdin)")
    normalize_parser.add_argument("-o", "--output", default=None, help="Output file (default: stdout)")
    normalize_parser.set_defaults(command="normalize")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    args = parser.parse_args(argv)
    return args


def _read_json(path: str):
    if path == "-":
        return json.load(sys.stdin)
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _write_json(data, output: str | None) -> None:
    text = json.dumps(data, indent=2)
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(text + "\n")
    else:
        print(text)


def _error(msg: str) -> None:
    prefix = f"{Fore.RED}[ERROR]{Style.RESET_ALL}" if _COLOR_ENABLED else "[ERROR]"
    print(f"{prefix} {msg}", file=sys.stderr)


def run_convert(mode: str, args: argparse.Namespace) -> int:
    """Offline file conversion for the encode/decode/normalize subcommands.

    Only the codec is imported here, so no Flask app is built and stdout
    carries nothing but the converted JSON.
    """
    from levelcodec.codec import LevelCodecError, build_levels_file, levels_from_any, normalize
    from levelcodec.logging_utils import log

    try:
        payload = _read_json(args.path)
    except OSError as e:
        _error(f"Cannot read {args.path}: {e}")
        return EXIT_IO
    except ValueError as e:
        _error(f"Invalid JSON in {args.path}: {e}")
        return EXIT_IO

    try:
        if mode == "encode":
            levels = levels_from_any(payload)
            out = build_levels_file(levels, normalize_first=args.normalize)
        elif mode == "decode":
            out = levels_from_any(payload)
        else:
            out = [normalize(level) for level in levels_from_any(payload)]
    except LevelCodecError as e:
        log.warn(event="convert_failed", mode=mode, code=e.code, error=e.message)
        _error(f"{e.code}: {e.message}")
        return EXIT_CODEC

    try:
        _write_json(out, args.output)
    except OSError as e:
        _error(f"Cannot write {args.output}: {e}")
        return EXIT_IO
    return EXIT_OK


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode in ("encode", "decode", "normalize"):
        return run_convert(mode, args)

    # Resolve configuration from CLI flags or env vars
    env_host = os.getenv("HOST", "0.0.0.0")
    env_port = int(os.getenv("PORT", "5000"))
    env_db = os.getenv("DATABASE_URL")

    host = getattr(args, "host", None) or env_host
    port = int(getattr(args, "port", None) or env_port)
    db_uri_cli = getattr(args, "db_uri", None)

    # Make DATABASE_URL available to the Flask app BEFORE importing it
    if db_uri_cli:
        os.environ["DATABASE_URL"] = db_uri_cli

    db_banner = db_uri_cli or env_db or "auto (instance/levels.db)"

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoints only after environment is ready
    from levelcodec.logging_utils import log
    from levelcodec.server import start_server

    title = (
        f"{Fore.CYAN}{Style.BRIGHT}Level Service Bootup{Style.RESET_ALL}" if _COLOR_ENABLED else "Level Service Bootup"
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
        f"  {label('Database:'):12} {value(db_banner)}",
        f"  {label('Format:'):12} {value('chunks20x18')}",
        divider,
        "",
    ]
    print("\n".join(lines))

    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")
    log.info(event="startup", mode=mode, host=host, port=port, db=db_banner, debug=debug)
    start_server(host=host, port=port, debug=debug)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
