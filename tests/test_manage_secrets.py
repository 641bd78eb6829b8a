"""
Tests for the manage_secrets script.
"""

import importlib.util
import os
import pytest
from unittest.mock import patch
from awsclitools.facade import AWSFacade

SCRIPT_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
                           "scripts", "manage_secrets.py")


@pytest.fixture
def script():
    """Load the script as a module."""
    spec = importlib.util.spec_from_file_location("manage_secrets", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def run_script(script, fake_runner):
    """Run the script's main with a fake runner behind the facade."""
    def run(*argv):
        with patch('awsclitools.config.Settings.create_facade', return_value=AWSFacade(fake_runner)):
            script.main(list(argv))
        return fake_runner
    return run


def test_parse_args_login(script):
    """Test parsing the login command."""
    args = script.parse_args(["login", "staging", "--role", "deploy"])

    assert args.environment == "staging"
    assert args.role == "deploy"
    assert args.func is script.handle_login


def test_parse_args_rejects_unknown_role(script):
    """Test the role choices are restricted."""
    with pytest.raises(SystemExit):
        script.parse_args(["login", "staging", "--role", "admin"])


def test_secret_list(runner_factory, script, capsys):
    """Test listing secrets prints one name per line."""
    runner = runner_factory('{"SecretList":[{"Name":"a"},{"Name":"b"}]}')
    with patch('awsclitools.config.Settings.create_facade', return_value=AWSFacade(runner)):
        script.main(["secret", "list"])

    assert capsys.readouterr().out == "a\nb\n"


def test_login_prints_profile(run_script, capsys):
    """Test the login command runs aws-mfa and prints the profile to use."""
    runner = run_script("login", "prod", "--role", "deploy")

    assert runner.last_command.startswith("aws-mfa --duration 3600 --profile nhs-auth")
    assert "export AWS_PROFILE=nhs-auth-prod" in capsys.readouterr().out


def test_role_unknown_environment_exits(run_script, capsys):
    """Test showing a role for an unconfigured environment."""
    with pytest.raises(SystemExit) as excinfo:
        run_script("role", "dev")

    assert excinfo.value.code == 1
    assert "No read role configured for dev" in capsys.readouterr().out


def test_secret_update_from_env(run_script, monkeypatch, capsys):
    """Test updating a secret with a value from the environment."""
    monkeypatch.setenv("NEW_SECRET", "s3cr3t")

    runner = run_script("secret", "update", "api-key", "--from-env", "NEW_SECRET")

    assert "--secret-string \"s3cr3t\"" in runner.last_command
    assert "Updated api-key" in capsys.readouterr().out


def test_errors_exit_with_message(script, runner_factory, capsys):
    """Test that errors are reported and exit non-zero."""
    runner = runner_factory("not json")
    with patch('awsclitools.config.Settings.create_facade', return_value=AWSFacade(runner)):
        with pytest.raises(SystemExit) as excinfo:
            script.main(["parameter", "/app/version"])

    assert excinfo.value.code == 1
    assert "Retrieve version" in capsys.readouterr().out


def test_secret_update_missing_env_variable(run_script, monkeypatch, capsys):
    """Test that an unset environment variable does not write an empty secret."""
    monkeypatch.delenv("NO_SUCH_VAR", raising=False)

    with pytest.raises(SystemExit) as excinfo:
        run_script("secret", "update", "prod/api-key", "--from-env", "NO_SUCH_VAR")

    assert excinfo.value.code == 1
    out = capsys.readouterr().out
    assert "❌ Environment variable NO_SUCH_VAR is not set" in out
    assert "Updated" not in out


@pytest.mark.parametrize("value", ['pa$HOMEss', 'pa$HOMEss"x', 'a`id`b', 'back\\slash', 'say "hi"'])
def test_secret_update_rejects_unquotable_value(script, fake_runner, capsys, value):
    """Test values the shell would expand or unbalance are refused before running."""
    with patch('awsclitools.config.Settings.create_facade', return_value=AWSFacade(fake_runner)):
        with pytest.raises(SystemExit) as excinfo:
            script.main(["secret", "update", "api-key", "--value", value])

    assert excinfo.value.code == 1
    assert fake_runner.calls == []
    out = capsys.readouterr().out
    assert "❌ Secret value contains characters that cannot be quoted" in out
    assert "Updated" not in out


def test_secret_update_plain_value(run_script, capsys):
    """Test a value without shell metacharacters is stored as given."""
    runner = run_script("secret", "update", "api-key", "--value", "pa ss-word_1")

    assert runner.last_command == ("aws secretsmanager put-secret-value --secret-id api-key "
                                   "--secret-string \"pa ss-word_1\" --region eu-west-2")
    assert "✅ Updated api-key" in capsys.readouterr().out


def test_role_unknown_environment_lists_configured(run_script, capsys):
    """Test the role command lists the environments that do have the role."""
    with pytest.raises(SystemExit):
        run_script("role", "dev", "--role", "deploy")

    assert "Configured environments: prod, staging" in capsys.readouterr().out
