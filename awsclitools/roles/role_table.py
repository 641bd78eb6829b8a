"""
Role Table

Maps the user friendly role names accepted by the automation tasks
("deploy", "read") and an environment name to the full IAM role ARN
assumed during an MFA login.
"""

import logging
from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence

from botocore.utils import ArnParser, InvalidArnException

from ..config import AWS_DEPLOYMENT_ROLES, AWS_READ_ROLES, AWS_ROLE_NAMES
from ..errors import ConfigurationError

logger = logging.getLogger(__name__)

__all__ = [
    'RoleTable',
    'default_role_table',
]


class RoleTable:
    """
    Read-only mapping of (role kind, environment) to role ARN.
    """

    def __init__(self, roles: Mapping[str, Mapping[str, str]],
                 role_kinds: Sequence[str] = AWS_ROLE_NAMES):
        """
        Initialize the role table.

        Args:
            roles: Role ARNs keyed by role kind, then by environment name
            role_kinds: The role kinds that may be looked up

        Raises:
            ConfigurationError: If a role kind is not recognised or an ARN is malformed
        """
        self.role_kinds = tuple(role_kinds)
        parser = ArnParser()

        table = {}
        for role_kind, arns in roles.items():
            if role_kind not in self.role_kinds:
                raise ConfigurationError(f"Unknown role kind '{role_kind}' in role table")
            for environment, arn in arns.items():
                try:
                    if not arn.startswith("arn:"):
                        raise InvalidArnException(arn)
                    parser.parse_arn(arn)
                except InvalidArnException as e:
                    raise ConfigurationError(
                        f"Invalid ARN for {role_kind} role in '{environment}': {arn}"
                    ) from e
            table[role_kind] = MappingProxyType(dict(arns))

        self._roles = MappingProxyType(table)

    def resolve(self, role_kind: str, environment: str) -> Optional[str]:
        """
        Map a role kind and environment to the full role ARN.

        Args:
            role_kind: One of the recognised role kinds
            environment: Environment name, e.g. staging or prod

        Returns:
            The role ARN, or None if the environment has no role of that kind

        Raises:
            ConfigurationError: If role_kind is not recognised
        """
        if role_kind not in self.role_kinds:
            raise ConfigurationError(f"No ARN corresponding to {role_kind}")

        arn = self._roles.get(role_kind, {}).get(environment)
        logger.debug("Resolved %s role for %s: %s", role_kind, environment, arn)
        return arn

    def environments(self, role_kind: str) -> List[str]:
        """Return the environments that have a role of the given kind."""
        if role_kind not in self.role_kinds:
            raise ConfigurationError(f"No ARN corresponding to {role_kind}")
        return sorted(self._roles.get(role_kind, {}))


def default_role_table() -> RoleTable:
    """
    Get the role table for the configured deployment and read roles.

    Returns:
        RoleTable: Table built from AWS_DEPLOYMENT_ROLES and AWS_READ_ROLES
    """
    return RoleTable({
        "deploy": AWS_DEPLOYMENT_ROLES,
        "read": AWS_READ_ROLES,
    })
