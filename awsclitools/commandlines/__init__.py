"""
AWS CLI command lines used by the automation scripts.

The module level functions build command lines for the default region.
Use CommandBuilder directly to target another region.
"""

from .builder import (
    CommandBuilder,
    Operation,
    SIGNING_ALGORITHM,
    MESSAGE_TYPE,
    MFA_DURATION_SECONDS,
    MFA_LONG_TERM_SUFFIX,
)

_default_builder = CommandBuilder()

invoke_lambda = _default_builder.invoke_lambda
ecr_login = _default_builder.ecr_login
download_from_s3 = _default_builder.download_from_s3
upload_to_s3 = _default_builder.upload_to_s3
upload_to_s3_recursive = _default_builder.upload_to_s3_recursive
delete_from_s3 = _default_builder.delete_from_s3
download_public_key = _default_builder.download_public_key
sign_digest = _default_builder.sign_digest
verify_digest_signature = _default_builder.verify_digest_signature
get_parameter = _default_builder.get_parameter
retrieve_secret = _default_builder.retrieve_secret
delete_secret = _default_builder.delete_secret
list_all_secrets = _default_builder.list_all_secrets
update_secret = _default_builder.update_secret
multi_factor_login = _default_builder.multi_factor_login

__all__ = [
    'CommandBuilder',
    'Operation',
    'SIGNING_ALGORITHM',
    'MESSAGE_TYPE',
    'MFA_DURATION_SECONDS',
    'MFA_LONG_TERM_SUFFIX',
] + [operation.value for operation in Operation]
