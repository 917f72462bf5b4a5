"""
cmdcal Shell Module

Command language front end for the calendar engine:
- Command parsing into operation descriptors (command_parser.py)
- Dispatching to the calendar store (dispatcher.py)
- Result display formatting (formatting.py)
- Interactive and headless sessions (session.py)
"""

from .command_parser import parse_command
from .dispatcher import CommandDispatcher, is_error, is_failure
from .session import run_interactive, run_headless

__all__ = [
    'parse_command',
    'CommandDispatcher',
    'is_error',
    'is_failure',
    'run_interactive',
    'run_headless',
]
