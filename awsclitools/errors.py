from typing import Optional


class AWSToolsError(Exception):
    """Base class for errors raised by awsclitools."""


class ConfigurationError(AWSToolsError):
    """Raised when configuration is invalid or a role name is not recognised."""


class UnresolvedRoleError(ConfigurationError):
    """Raised when a known role kind has no ARN for the requested environment."""

    def __init__(self, role_kind: str, environment: str):
        super().__init__(f"No {role_kind} role configured for environment '{environment}'")
        self.role_kind = role_kind
        self.environment = environment


class ResponseFormatError(AWSToolsError):
    """Raised when AWS CLI output is not JSON or lacks an expected field."""

    def __init__(self, description: str, reason: str):
        super().__init__(f"{description}: {reason}")
        self.description = description
        self.reason = reason


class ExecutionFailure(AWSToolsError):
    """Raised when an external command reports failure."""

    def __init__(self, description: str, output: str = "", returncode: Optional[int] = None):
        message = f"{description} failed"
        if returncode is not None:
            message += f" (exit code {returncode})"
        super().__init__(message)
        self.description = description
        self.output = output
        self.returncode = returncode
