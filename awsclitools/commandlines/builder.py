"""
AWS CLI command lines

This module codifies the AWS CLI invocations used by the deployment
automation. Every method returns a complete command line as a string and
nothing else: no commands are run, no files or directories are touched and
no argument is validated. The same arguments always produce the same string,
which keeps the command lines easy to diff and test.
"""

import os
from datetime import datetime
from enum import Enum
from typing import Optional

from ..config import AWS_REGION

__all__ = [
    'Operation',
    'CommandBuilder',
    'check_operations',
    'SIGNING_ALGORITHM',
    'MESSAGE_TYPE',
    'MFA_DURATION_SECONDS',
    'MFA_LONG_TERM_SUFFIX',
]

# Wire constants expected by KMS and aws-mfa. Do not change.
SIGNING_ALGORITHM = "ECDSA_SHA_256"
MESSAGE_TYPE = "DIGEST"
MFA_DURATION_SECONDS = 3600
MFA_LONG_TERM_SUFFIX = "none"

# get-public-key returns the base64 key as a quoted JSON string: drop the
# opening quote and the closing quote plus newline before decoding.
PUBLIC_KEY_UNWRAP = "tail -c +2 | head -c -2 | base64 --decode"

LAMBDA_LOG_TIMESTAMP = "%Y%m%d_%H%M%S"


class Operation(Enum):
    """The closed set of supported AWS CLI operations."""
    INVOKE_LAMBDA = "invoke_lambda"
    ECR_LOGIN = "ecr_login"
    DOWNLOAD_FROM_S3 = "download_from_s3"
    UPLOAD_TO_S3 = "upload_to_s3"
    UPLOAD_TO_S3_RECURSIVE = "upload_to_s3_recursive"
    DELETE_FROM_S3 = "delete_from_s3"
    DOWNLOAD_PUBLIC_KEY = "download_public_key"
    SIGN_DIGEST = "sign_digest"
    VERIFY_DIGEST_SIGNATURE = "verify_digest_signature"
    GET_PARAMETER = "get_parameter"
    RETRIEVE_SECRET = "retrieve_secret"
    DELETE_SECRET = "delete_secret"
    LIST_ALL_SECRETS = "list_all_secrets"
    UPDATE_SECRET = "update_secret"
    MULTI_FACTOR_LOGIN = "multi_factor_login"


class CommandBuilder:
    """
    Builds AWS CLI command lines, one method per Operation.
    """

    def __init__(self, region: str = AWS_REGION):
        """
        Initialize the builder.

        Args:
            region: Region used by every command that takes one
        """
        self.region = region

    def build(self, operation: Operation, **params) -> str:
        """
        Build the command line for an operation.

        Args:
            operation: The operation to build
            **params: Keyword arguments of the matching builder method

        Returns:
            str: The command line
        """
        return getattr(self, Operation(operation).value)(**params)

    def invoke_lambda(self, function_name: str, output_directory: str,
                      timestamp: Optional[datetime] = None) -> str:
        """
        Invoke a Lambda function by name, writing the response to a
        timestamped log file in output_directory.

        The directory must already exist when the command runs.

        Args:
            function_name: Name of the Lambda function
            output_directory: Directory receiving the response file
            timestamp: Time used for the file name (defaults to now)
        """
        timestamp = timestamp or datetime.now()
        outfile = os.path.join(
            output_directory,
            f"{timestamp.strftime(LAMBDA_LOG_TIMESTAMP)}_{function_name}.log"
        )
        return f"aws lambda invoke --region {self.region} --function-name {function_name} {outfile}"

    def ecr_login(self, region: Optional[str] = None) -> str:
        """Retrieve a temporary ECR authentication token."""
        return f"aws ecr get-login-password --region {region or self.region}"

    # object_path is the full path to the object, bucket name first

    def download_from_s3(self, object_path: str, local_target: str) -> str:
        return f"aws s3 cp s3://{object_path} {local_target}"

    def upload_to_s3(self, local_source: str, object_path: str, content_type: str) -> str:
        return f"aws s3 cp --content-type {content_type} {local_source} s3://{object_path}"

    def upload_to_s3_recursive(self, local_source: str, object_path: str) -> str:
        return f"aws s3 cp {local_source} s3://{object_path} --recursive"

    def delete_from_s3(self, object_path: str) -> str:
        return f"aws s3 rm s3://{object_path}"

    def download_public_key(self, key_id: str, output_path: str) -> str:
        """
        Download the public key for key_id in DER format into output_path.

        Args:
            key_id: KMS key id or ARN
            output_path: File receiving the decoded key
        """
        return (f"aws kms get-public-key --key-id {key_id} --query PublicKey "
                f"--region {self.region} | {PUBLIC_KEY_UNWRAP} > {output_path}")

    def sign_digest(self, key_arn: str, digest_path: str) -> str:
        """
        Sign the binary message digest stored at digest_path.

        The base64 signature is printed as text on stdout.
        """
        return (f"aws kms sign --key-id {key_arn} --signing-algorithm {SIGNING_ALGORITHM} "
                f"--message-type {MESSAGE_TYPE} --message fileb://{digest_path} "
                f"--output text --query Signature --region {self.region}")

    def verify_digest_signature(self, key_arn: str, digest_path: str, signature: str) -> str:
        """Verify the signature of the binary message digest stored at digest_path."""
        return (f"aws kms verify --key-id {key_arn} --signing-algorithm {SIGNING_ALGORITHM} "
                f"--message-type {MESSAGE_TYPE} --message fileb://{digest_path} "
                f"--signature {signature} --region {self.region}")

    def get_parameter(self, name: str) -> str:
        return f"aws ssm get-parameter --name {name} --region {self.region}"

    def retrieve_secret(self, name: str) -> str:
        return f"aws secretsmanager get-secret-value --secret-id {name} --region {self.region}"

    def delete_secret(self, name: str) -> str:
        return f"aws secretsmanager delete-secret --secret-id {name} --region {self.region}"

    def list_all_secrets(self) -> str:
        return f"aws secretsmanager list-secrets --region {self.region}"

    def update_secret(self, name: str, string_value: str) -> str:
        """
        Store a new value for a secret.

        string_value is placed inside double quotes as is. It must not
        contain characters that break shell quoting.
        """
        return (f"aws secretsmanager put-secret-value --secret-id {name} "
                f"--secret-string \"{string_value}\" --region {self.region}")

    def multi_factor_login(self, profile: str, role_arn: str, short_term_suffix: str) -> str:
        """
        aws-mfa command line that creates temporary credentials for role_arn
        under the profile <profile>-<short_term_suffix>.
        """
        return (f"aws-mfa --duration {MFA_DURATION_SECONDS} --profile {profile} "
                f"--assume-role {role_arn} --long-term-suffix {MFA_LONG_TERM_SUFFIX} "
                f"--short-term-suffix {short_term_suffix}")


def check_operations(builder_class) -> None:
    """
    Ensure builder_class has a method for every Operation.

    Raises:
        TypeError: If an operation has no matching method
    """
    for operation in Operation:
        if not callable(getattr(builder_class, operation.value, None)):
            raise TypeError(f"{builder_class.__name__} has no method for {operation}")


check_operations(CommandBuilder)
