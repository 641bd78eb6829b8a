"""
AWS Facade

Runs the command lines from awsclitools.commandlines through a command
runner and turns their output into plain values: parameter and secret
values, secret names, signatures. Also resolves the user friendly role
names used for MFA logins into role ARNs.
"""

import logging
import os
from typing import List, Optional

from .commandlines import CommandBuilder
from .config import AWS_AUTH_PROFILE, Settings
from .errors import ExecutionFailure, ResponseFormatError, UnresolvedRoleError
from .roles import RoleTable, default_role_table
from .utils.responses import optional_field, parse_json, required_field
from .utils.runner import CommandResult, CommandRunner

logger = logging.getLogger(__name__)

__all__ = [
    'AWSFacade',
    'resolve_role_arn',
    'login_with_mfa',
    'get_parameter_value',
    'get_secret_value',
    'list_secret_names',
    'update_secret_value',
    'delete_secret',
]

LAMBDA_LOG_DIR = os.path.join("logs", "lambdas")


class AWSFacade:
    """
    Performs AWS operations through the AWS CLI.
    """

    def __init__(self, runner: CommandRunner, roles: Optional[RoleTable] = None,
                 builder: Optional[CommandBuilder] = None,
                 auth_profile: str = AWS_AUTH_PROFILE):
        """
        Initialize the facade.

        Args:
            runner: Runs the command lines
            roles: Role table used for MFA logins (defaults to the configured roles)
            builder: Command line builder (defaults to the default region)
            auth_profile: Profile holding the long term credentials for aws-mfa
        """
        self.runner = runner
        self.roles = roles or default_role_table()
        self.builder = builder or CommandBuilder()
        self.auth_profile = auth_profile

    def _run(self, description: str, command_line: str,
             interactive: bool = False) -> CommandResult:
        result = self.runner.run(description, command_line, interactive=interactive)
        if not result.succeeded:
            raise ExecutionFailure(description, result.output, result.returncode)
        return result

    def _run_json(self, description: str, command_line: str):
        result = self._run(description, command_line)
        logger.debug("%s returned %d characters", description, len(result.output))
        return parse_json(description, result.output)

    # Roles and authentication

    def resolve_role_arn(self, role_kind: str, environment: str) -> Optional[str]:
        """
        Map a user friendly role name to the full role ARN for an environment.

        Returns:
            The role ARN, or None when the environment has no such role

        Raises:
            ConfigurationError: If role_kind is not "deploy" or "read"
        """
        return self.roles.resolve(role_kind, environment)

    def login_with_mfa(self, role_kind: str, environment: str) -> CommandResult:
        """
        Perform an aws-mfa login, prompting for the MFA code.

        The temporary credentials are stored by aws-mfa under the profile
        <auth_profile>-<environment>.

        Raises:
            ConfigurationError: If role_kind is not recognised
            UnresolvedRoleError: If the environment has no role of that kind
        """
        role_arn = self.resolve_role_arn(role_kind, environment)
        if role_arn is None:
            raise UnresolvedRoleError(role_kind, environment)

        cmdline = self.builder.multi_factor_login(self.auth_profile, role_arn, environment)
        return self._run(f"MFA login as {role_kind} for {environment}", cmdline, interactive=True)

    # Parameters and secrets

    def get_parameter_value(self, name: str) -> str:
        """
        Return the value of an SSM parameter.

        Raises:
            ResponseFormatError: If the response has no Parameter.Value
        """
        description = f"Retrieve {name.split('/')[-1]}"
        payload = self._run_json(description, self.builder.get_parameter(name))
        value = required_field(description, payload, "Parameter", "Value")
        if not isinstance(value, str):
            raise ResponseFormatError(description, "Parameter.Value is not a string")
        return value

    def get_secret_value(self, name: str) -> str:
        """
        Return the string value of a secret.

        A secret that exists but has no value yet yields an empty string.

        Raises:
            ResponseFormatError: If the response is not a JSON object or
                SecretString is not a string
        """
        description = f"Retrieve {name}"
        payload = self._run_json(description, self.builder.retrieve_secret(name))
        value = optional_field(description, payload, "SecretString")
        if value is None:
            return ""
        if not isinstance(value, str):
            raise ResponseFormatError(description, "SecretString is not a string")
        return value

    def list_secret_names(self) -> List[str]:
        """
        Return the names of all the secrets, in the order AWS lists them.
        """
        description = "Retrieve list of secrets"
        payload = self._run_json(description, self.builder.list_all_secrets())
        secrets = required_field(description, payload, "SecretList")
        if not isinstance(secrets, list):
            raise ResponseFormatError(description, "SecretList is not a list")
        return [required_field(description, secret, "Name") for secret in secrets]

    def update_secret_value(self, name: str, value: str) -> CommandResult:
        """Store a new value for a secret."""
        return self._run(f"Update {name}", self.builder.update_secret(name, value))

    def delete_secret(self, name: str) -> CommandResult:
        return self._run(f"Delete {name}", self.builder.delete_secret(name))

    # Lambda, ECR, S3 and KMS

    def invoke_lambda(self, function_name: str, out_dir: str) -> CommandResult:
        """
        Invoke a Lambda function, saving the response under <out_dir>/logs/lambdas.
        """
        output_directory = os.path.join(out_dir, LAMBDA_LOG_DIR)
        os.makedirs(output_directory, exist_ok=True)
        cmdline = self.builder.invoke_lambda(function_name, output_directory)
        return self._run(f"Invoke {function_name}", cmdline)

    def ecr_password(self, region: Optional[str] = None) -> str:
        """Return a temporary ECR authentication token."""
        result = self._run("Retrieve ECR login password", self.builder.ecr_login(region))
        return result.output.strip()

    def download_from_s3(self, object_path: str, local_target: str) -> CommandResult:
        return self._run(f"Download s3://{object_path}",
                         self.builder.download_from_s3(object_path, local_target))

    def upload_to_s3(self, local_source: str, object_path: str, content_type: str) -> CommandResult:
        return self._run(f"Upload {local_source} to s3://{object_path}",
                         self.builder.upload_to_s3(local_source, object_path, content_type))

    def upload_to_s3_recursive(self, local_source: str, object_path: str) -> CommandResult:
        return self._run(f"Upload {local_source} to s3://{object_path}",
                         self.builder.upload_to_s3_recursive(local_source, object_path))

    def delete_from_s3(self, object_path: str) -> CommandResult:
        return self._run(f"Delete s3://{object_path}", self.builder.delete_from_s3(object_path))

    def download_public_key(self, key_id: str, output_path: str) -> CommandResult:
        return self._run(f"Download public key {key_id}",
                         self.builder.download_public_key(key_id, output_path))

    def sign_digest(self, key_arn: str, digest_path: str) -> str:
        """
        Sign the digest stored at digest_path.

        Returns:
            str: The base64 encoded signature
        """
        result = self._run(f"Sign {digest_path}", self.builder.sign_digest(key_arn, digest_path))
        return result.output.strip()

    def verify_digest_signature(self, key_arn: str, digest_path: str, signature: str) -> CommandResult:
        return self._run(f"Verify signature of {digest_path}",
                         self.builder.verify_digest_signature(key_arn, digest_path, signature))


def _default_facade() -> AWSFacade:
    return Settings.from_env().create_facade()


def resolve_role_arn(role_kind: str, environment: str) -> Optional[str]:
    """
    Map a user friendly role name to the full role ARN for an environment.

    Args:
        role_kind: "deploy" or "read"
        environment: Environment name, e.g. staging or prod

    Returns:
        The role ARN, or None when the environment has no such role
    """
    return default_role_table().resolve(role_kind, environment)


def login_with_mfa(role_kind: str, environment: str) -> CommandResult:
    """
    Perform an aws-mfa login for the role of the given kind in an environment.
    """
    return _default_facade().login_with_mfa(role_kind, environment)


def get_parameter_value(name: str) -> str:
    return _default_facade().get_parameter_value(name)


def get_secret_value(name: str) -> str:
    return _default_facade().get_secret_value(name)


def list_secret_names() -> List[str]:
    return _default_facade().list_secret_names()


def update_secret_value(name: str, value: str) -> CommandResult:
    return _default_facade().update_secret_value(name, value)


def delete_secret(name: str) -> CommandResult:
    return _default_facade().delete_secret(name)
