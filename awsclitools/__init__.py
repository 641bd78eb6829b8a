"""
awsclitools - command lines and helpers for driving the AWS CLI from
deployment automation.
"""

from .errors import (
    AWSToolsError,
    ConfigurationError,
    UnresolvedRoleError,
    ResponseFormatError,
    ExecutionFailure,
)
from .config import Settings, AWS_REGION, AWS_AUTH_PROFILE
from .commandlines import CommandBuilder, Operation
from .roles import RoleTable, default_role_table
from .facade import AWSFacade

__all__ = [
    'AWSToolsError',
    'ConfigurationError',
    'UnresolvedRoleError',
    'ResponseFormatError',
    'ExecutionFailure',
    'Settings',
    'AWS_REGION',
    'AWS_AUTH_PROFILE',
    'CommandBuilder',
    'Operation',
    'RoleTable',
    'default_role_table',
    'AWSFacade',
]
