"""
Interactive and headless command sessions.

Both read command lines, hand each one to a CommandDispatcher and write
the result. The interactive session reads until "exit"; the headless
session runs a command file and stops at the first hard failure.
"""

from pathlib import Path
from typing import TextIO, Union

from calengine.debug import debug_print

from .dispatcher import CommandDispatcher, is_error, is_failure


BANNER = (
    "Calendar Application Started",
    "Enter commands (type 'exit' to quit):",
)
FAREWELL = "Calendar Application Terminated"


def _debug_print(msg: str) -> None:
    debug_print("SESSION", msg)


def _is_exit(line: str) -> bool:
    return line.strip().lower() == "exit"


def _write(stream: TextIO, text: str) -> None:
    stream.write(text + "\n")
    stream.flush()


def run_interactive(dispatcher: CommandDispatcher, input_stream: TextIO, output_stream: TextIO) -> None:
    """
    Run a prompt-less read/execute loop.

    Stops on "exit" or at end of input. Blank lines are ignored.
    """
    for line in BANNER:
        _write(output_stream, line)

    for line in input_stream:
        line = line.rstrip("\n")
        if not line.strip():
            continue
        _write(output_stream, dispatcher.process_command(line))
        if _is_exit(line):
            break

    _write(output_stream, FAREWELL)


def read_command_file(path: Union[str, Path]) -> list[str]:
    """
    Read the non-blank lines of a command file.

    Raises:
        OSError: if the file cannot be read.
        ValueError: if the last non-blank line is not "exit".
    """
    with open(path, 'r', encoding='utf-8') as f:
        lines = [line.strip() for line in f if line.strip()]

    if not lines or not _is_exit(lines[-1]):
        raise ValueError("Command file must end with an 'exit' command")
    return lines


def run_headless(
    dispatcher: CommandDispatcher,
    path: Union[str, Path],
    output_stream: TextIO,
    error_stream: TextIO,
) -> bool:
    """
    Execute a command file.

    Every result is written to output_stream. Execution stops at the first
    "Error" result, and at "Failed" results too when the configuration asks
    for it.

    Returns:
        True if the file ran through to its "exit" line.
    """
    try:
        lines = read_command_file(path)
    except OSError as e:
        _write(error_stream, f"Error reading command file: {e}")
        return False
    except ValueError as e:
        _write(error_stream, f"Error: {e}")
        return False

    halt_on_declined = dispatcher.config.headless.halt_on_declined
    _debug_print(f"Running {len(lines)} commands from {path} (halt_on_declined={halt_on_declined})")

    for line in lines:
        result = dispatcher.process_command(line)
        _write(output_stream, result)

        if _is_exit(line):
            return True

        if is_error(result) or (halt_on_declined and is_failure(result)):
            _write(error_stream, f"Command failed, stopping execution: {result}")
            return False

    return True
