"""Command line front-end: print the last lines of a file, optionally following it."""

import argparse
import signal
import sys
import threading
from typing import List, Optional

from pydantic import ValidationError

from .config import settings
from .models.options import ReadOptions, StreamOptions
from .services.tail_reader import TailReader
from .utils.logger import init_app_logger

EX_SUCCESS = 0
EX_FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="readeof",
        description="Print the last lines of a file, optionally following it as it grows."
    )
    parser.add_argument("file", help="File to read")
    parser.add_argument("-n", "--lines", type=int, default=10, help="Number of lines (default: 10)")
    parser.add_argument("-f", "--follow", action="store_true", help="Keep printing appended lines")
    parser.add_argument("--encoding", default=None, help=f"Text encoding (default: {settings.encoding})")
    parser.add_argument("--buffer-size", type=int, default=None,
                        help=f"Read chunk size in bytes (default: {settings.buffer_size})")
    parser.add_argument("--poll-interval", type=float, default=None,
                        help=f"Seconds between polls with --follow (default: {settings.poll_interval})")
    parser.add_argument("--log-level", default=None, help=f"Log level (default: {settings.log_level})")
    return parser


def install_stop_handlers(stop_event: threading.Event) -> None:
    """Turn SIGINT/SIGTERM into a graceful stop of the follow loop."""
    def _handle(signum, frame):
        stop_event.set()

    signal.signal(signal.SIGINT, _handle)
    if hasattr(signal, "SIGTERM"):
        signal.signal(signal.SIGTERM, _handle)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI.

    Args:
        argv: Arguments without the program name; sys.argv[1:] when None

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    app_settings = settings.model_copy(update={"log_level": args.log_level}) if args.log_level else settings
    init_app_logger(app_settings)

    overrides = dict(encoding=args.encoding, buffer_size=args.buffer_size)
    try:
        if args.follow:
            options = StreamOptions.resolve(poll_interval=args.poll_interval, **overrides)
        else:
            options = ReadOptions.resolve(**overrides)
    except ValidationError as e:
        parser.error(str(e))

    reader = TailReader(args.file, options)
    try:
        if not args.follow:
            sys.stdout.write(reader.read_last(args.lines))
            sys.stdout.flush()
            return EX_SUCCESS

        stop_event = threading.Event()
        install_stop_handlers(stop_event)
        for line in reader.follow(args.lines, stop_event):
            print(line, flush=True)
    except (OSError, ValueError) as e:
        sys.stderr.write(f"readeof: {args.file}: {e}\n")
        return EX_FAILURE

    return EX_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
