"""
Command Runner

Runs AWS CLI command lines through the shell. Command lines are built as
strings (some of them are pipelines), so they are handed to the shell as is.
"""

import logging
import subprocess
from typing import Optional, Protocol

from ..errors import ExecutionFailure

logger = logging.getLogger(__name__)

__all__ = [
    'CommandResult',
    'CommandRunner',
    'ShellRunner',
]


class CommandResult:
    """The captured output of a command and whether it succeeded."""

    def __init__(self, output: str, succeeded: bool, returncode: Optional[int] = None):
        self.output = output
        self.succeeded = succeeded
        self.returncode = returncode

    def __repr__(self) -> str:
        # output may hold secret values
        return f"CommandResult(succeeded={self.succeeded}, returncode={self.returncode})"


class CommandRunner(Protocol):
    """Anything that can run a command line and report the result."""

    def run(self, description: str, command_line: str,
            interactive: bool = False) -> CommandResult:
        ...


class ShellRunner:
    """
    Runs command lines with subprocess, one at a time.
    """

    def __init__(self, cwd: Optional[str] = None, raise_on_failure: bool = True):
        """
        Initialize the runner.

        Args:
            cwd: Working directory for the commands (defaults to the current one)
            raise_on_failure: Raise ExecutionFailure when a command exits non-zero
        """
        self.cwd = cwd
        self.raise_on_failure = raise_on_failure

    def run(self, description: str, command_line: str,
            interactive: bool = False) -> CommandResult:
        """
        Run a command line and wait for it to finish.

        Args:
            description: Human readable summary used in logs and errors
            command_line: The command line to run
            interactive: Leave stdin/stdout attached to the terminal instead of
                capturing output, so the command can prompt the user

        Returns:
            CommandResult: Output (empty when interactive) and success flag

        Raises:
            ExecutionFailure: If the command fails and raise_on_failure is set
        """
        logger.info(description)

        if interactive:
            completed = subprocess.run(command_line, shell=True, cwd=self.cwd)
            output = ""
        else:
            completed = subprocess.run(
                command_line, shell=True, cwd=self.cwd,
                capture_output=True, text=True
            )
            output = completed.stdout
            if completed.returncode != 0:
                output += completed.stderr

        result = CommandResult(output, completed.returncode == 0, completed.returncode)
        if not result.succeeded:
            logger.error("%s failed with exit code %s", description, completed.returncode)
            if self.raise_on_failure:
                raise ExecutionFailure(description, output, completed.returncode)

        return result
