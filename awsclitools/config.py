"""
Configuration for awsclitools.

Holds the fixed region, authentication profile and role ARNs used by the
deployment automation, plus a small Settings object that lets the region,
profile and output directory be overridden from the environment.
"""

import os
from typing import Dict, Optional

__all__ = [
    'AWS_REGION',
    'AWS_AUTH_PROFILE',
    'AWS_DEPLOYMENT_ROLES',
    'AWS_READ_ROLES',
    'AWS_ROLE_NAMES',
    'DEFAULT_OUT_DIR',
    'Settings',
]

# The default region
AWS_REGION = "eu-west-2"

# The AWS profile holding the long term credentials used for MFA logins
AWS_AUTH_PROFILE = "nhs-auth"

# Role ARNs assumed when logging in for deployment
AWS_DEPLOYMENT_ROLES: Dict[str, str] = {
    "staging": "arn:aws:iam::123456789012:role/staging-ApplicationDeploymentUser",
    "prod": "arn:aws:iam::123456789012:role/prod-ApplicationDeploymentUser",
}

# Role ARNs assumed when logging in for queries
AWS_READ_ROLES: Dict[str, str] = {
    "staging": "arn:aws:iam::123456789012:role/staging-ReadOnlyUser",
    "prod": "arn:aws:iam::123456789012:role/prod-ReadOnlyUser",
}

# User friendly role names accepted by the login helpers
AWS_ROLE_NAMES = ("deploy", "read")

DEFAULT_OUT_DIR = "out"

ENV_REGION = "AWSCLITOOLS_REGION"
ENV_AUTH_PROFILE = "AWSCLITOOLS_AUTH_PROFILE"
ENV_OUT_DIR = "AWSCLITOOLS_OUT_DIR"


class Settings:
    """Runtime settings for the AWS helpers."""

    def __init__(self, region: str = AWS_REGION, auth_profile: str = AWS_AUTH_PROFILE,
                 out_dir: str = DEFAULT_OUT_DIR):
        self.region = region
        self.auth_profile = auth_profile
        self.out_dir = out_dir

    def __repr__(self) -> str:
        return (f"Settings(region={self.region!r}, auth_profile={self.auth_profile!r}, "
                f"out_dir={self.out_dir!r})")

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            Settings with any AWSCLITOOLS_* overrides applied
        """
        if environ is None:
            environ = os.environ

        return cls(
            region=environ.get(ENV_REGION) or AWS_REGION,
            auth_profile=environ.get(ENV_AUTH_PROFILE) or AWS_AUTH_PROFILE,
            out_dir=environ.get(ENV_OUT_DIR) or DEFAULT_OUT_DIR,
        )

    def create_facade(self, runner=None):
        """
        Create an AWSFacade wired with these settings.

        Args:
            runner: Command runner to use (defaults to a ShellRunner)

        Returns:
            AWSFacade using the default role table
        """
        from .commandlines import CommandBuilder
        from .facade import AWSFacade
        from .roles import default_role_table
        from .utils.runner import ShellRunner

        return AWSFacade(
            runner=runner or ShellRunner(),
            roles=default_role_table(),
            builder=CommandBuilder(region=self.region),
            auth_profile=self.auth_profile,
        )
