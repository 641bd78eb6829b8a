"""
Shared test fixtures and configuration.
"""

import pytest
import os
import sys

# Add the parent directory to the path so we can import the awsclitools package
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from awsclitools.utils.runner import CommandResult


# Fake command runner
class FakeRunner:
    """Records command lines and replies with canned output."""

    def __init__(self, output="", succeeded=True):
        self.output = output
        self.succeeded = succeeded
        self.calls = []

    def run(self, description, command_line, interactive=False):
        """Record the call and return the canned result."""
        self.calls.append((description, command_line, interactive))
        return CommandResult(self.output, self.succeeded, 0 if self.succeeded else 1)

    @property
    def last_command(self):
        return self.calls[-1][1]


@pytest.fixture
def fake_runner():
    """Fixture providing a runner that returns empty successful output."""
    return FakeRunner()


@pytest.fixture
def runner_factory():
    """Fixture to build runners with specific output."""
    return FakeRunner
