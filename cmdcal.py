#!/usr/bin/env python3
"""
cmdcal - A command-driven event calendar.

This is the main entry point for the application.

    cmdcal --mode interactive
    cmdcal --mode headless commands.txt
"""

import sys
import argparse
from pathlib import Path

from calengine.calendar_store import CalendarStore
from calengine.config import Config
from calengine.debug import set_debug_enabled
from calshell.dispatcher import CommandDispatcher
from calshell.session import run_interactive, run_headless


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="cmdcal - A command-driven event calendar"
    )
    parser.add_argument(
        "--mode",
        choices=["interactive", "headless"],
        required=True,
        help="Read commands from the terminal or from a command file"
    )
    parser.add_argument(
        "file",
        nargs="?",
        type=Path,
        help="Command file (headless mode only)"
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        help="Path to configuration file (default: auto-detect)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output"
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point. Returns the process exit status."""
    args = parse_args(argv)
    set_debug_enabled(args.debug)

    if args.mode == "headless" and args.file is None:
        print("Error: headless mode requires a command file", file=sys.stderr)
        return 1
    if args.mode == "interactive" and args.file is not None:
        print("Error: interactive mode does not take a command file", file=sys.stderr)
        return 1

    # Load configuration
    try:
        config = Config.load(args.config)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(f"\nDefault configuration location: {Config.get_default_config_path()}", file=sys.stderr)
        print("\nExample configuration:", file=sys.stderr)
        print("""
[General]
auto_decline = false

[Export]
directory = "~/calendars"

[Headless]
halt_on_declined = false
""", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 1

    if args.debug:
        print(f"Loaded configuration from: {config.source or 'built-in defaults'}", file=sys.stderr)

    dispatcher = CommandDispatcher(CalendarStore(), config)

    if args.mode == "interactive":
        run_interactive(dispatcher, sys.stdin, sys.stdout)
        return 0

    ok = run_headless(dispatcher, args.file, sys.stdout, sys.stderr)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
