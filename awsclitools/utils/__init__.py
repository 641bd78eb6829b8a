"""
Shared helpers: running command lines and reading their JSON output.
"""

from .runner import CommandResult, CommandRunner, ShellRunner
from .responses import parse_json, optional_field, required_field

__all__ = [
    'CommandResult',
    'CommandRunner',
    'ShellRunner',
    'parse_json',
    'optional_field',
    'required_field',
]
