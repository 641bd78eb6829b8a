#!/usr/bin/env python3
"""
AWS Secrets CLI

A command-line utility for the deployment automation's AWS chores:
MFA logins, Secrets Manager entries and SSM parameters.
"""

import argparse
import logging
import os
import sys
from pathlib import Path

# Add the parent directory to sys.path to import from awsclitools
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
from awsclitools import AWSToolsError, ConfigurationError, Settings
from awsclitools.config import AWS_ROLE_NAMES


# Characters the shell still interprets inside the double quotes around --secret-string
UNQUOTABLE_CHARACTERS = ('"', '$', '`', '\\')


def handle_login(facade, args):
    """Handle the login command."""
    facade.login_with_mfa(args.role, args.environment)
    print(f"✅ Logged in as {args.role} for {args.environment}")
    print("\nTo use these credentials in your shell, run:")
    print(f"  export AWS_PROFILE={facade.auth_profile}-{args.environment}")


def handle_role(facade, args):
    """Handle the role command."""
    arn = facade.resolve_role_arn(args.role, args.environment)
    if arn is None:
        print(f"❌ No {args.role} role configured for {args.environment}")
        configured = facade.roles.environments(args.role)
        if configured:
            print(f"Configured environments: {', '.join(configured)}")
        sys.exit(1)
    print(arn)


def handle_parameter(facade, args):
    """Handle the parameter command."""
    print(facade.get_parameter_value(args.name))


def handle_secret_get(facade, args):
    """Handle the secret get command."""
    print(facade.get_secret_value(args.name))


def handle_secret_list(facade, args):
    """Handle the secret list command."""
    names = facade.list_secret_names()
    if not names:
        print("No secrets found.")
    for name in names:
        print(name)


def read_secret_value(args):
    """
    Get the new secret value from --value, --from-env or stdin.

    Raises:
        ConfigurationError: If the environment variable is not set or the
            value cannot be passed safely inside shell double quotes
    """
    if args.value is not None:
        value = args.value
    elif args.from_env:
        if args.from_env not in os.environ:
            raise ConfigurationError(f"Environment variable {args.from_env} is not set")
        value = os.environ[args.from_env]
    else:
        value = sys.stdin.read().strip()

    rejected = sorted({c for c in value if c in UNQUOTABLE_CHARACTERS})
    if rejected:
        raise ConfigurationError(
            f"Secret value contains characters that cannot be quoted: {' '.join(rejected)}"
        )
    return value


def handle_secret_update(facade, args):
    """Handle the secret update command."""
    value = read_secret_value(args)
    facade.update_secret_value(args.name, value)
    print(f"✅ Updated {args.name}")


def handle_secret_delete(facade, args):
    """Handle the secret delete command."""
    facade.delete_secret(args.name)
    print(f"✅ Deleted {args.name}")


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Run AWS CLI chores for the deployment automation"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--region", help="AWS region (default: AWSCLITOOLS_REGION or eu-west-2)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    login = subparsers.add_parser("login", help="Log in with MFA for an environment")
    login.add_argument("environment", help="Environment name, e.g. staging or prod")
    login.add_argument("--role", choices=AWS_ROLE_NAMES, default="read", help="Role to assume (default: read)")
    login.set_defaults(func=handle_login)

    role = subparsers.add_parser("role", help="Show the role ARN for an environment")
    role.add_argument("environment", help="Environment name")
    role.add_argument("--role", choices=AWS_ROLE_NAMES, default="read", help="Role kind (default: read)")
    role.set_defaults(func=handle_role)

    parameter = subparsers.add_parser("parameter", help="Print the value of an SSM parameter")
    parameter.add_argument("name", help="Parameter name")
    parameter.set_defaults(func=handle_parameter)

    secret = subparsers.add_parser("secret", help="Manage Secrets Manager entries")
    secret_commands = secret.add_subparsers(dest="secret_command", required=True)

    secret_get = secret_commands.add_parser("get", help="Print a secret value")
    secret_get.add_argument("name", help="Secret name")
    secret_get.set_defaults(func=handle_secret_get)

    secret_list = secret_commands.add_parser("list", help="List all secret names")
    secret_list.set_defaults(func=handle_secret_list)

    secret_update = secret_commands.add_parser("update", help="Store a new secret value")
    secret_update.add_argument("name", help="Secret name")
    secret_update.add_argument("--value", help="New value (read from stdin if omitted)")
    secret_update.add_argument("--from-env", help="Read the new value from this environment variable")
    secret_update.set_defaults(func=handle_secret_update)

    secret_delete = secret_commands.add_parser("delete", help="Delete a secret")
    secret_delete.add_argument("name", help="Secret name")
    secret_delete.set_defaults(func=handle_secret_delete)

    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = Settings.from_env()
    if args.region:
        settings.region = args.region
    facade = settings.create_facade()

    try:
        args.func(facade, args)
    except AWSToolsError as e:
        print(f"❌ {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
