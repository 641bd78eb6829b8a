"""
Tests for the role table.
"""

import pytest
from unittest.mock import MagicMock
from awsclitools.errors import ConfigurationError
from awsclitools.roles import RoleTable, default_role_table

PROD_DEPLOY_ARN = "arn:aws:iam::123456789012:role/prod-ApplicationDeploymentUser"
STAGING_READ_ARN = "arn:aws:iam::123456789012:role/staging-ReadOnlyUser"


@pytest.fixture
def roles():
    """Default role table."""
    return default_role_table()


def test_resolve_prod_deploy(roles):
    """Test resolving the prod deployment role."""
    assert roles.resolve("deploy", "prod") == PROD_DEPLOY_ARN


def test_resolve_staging_read(roles):
    """Test resolving the staging read role."""
    assert roles.resolve("read", "staging") == STAGING_READ_ARN


def test_resolve_unknown_environment_returns_none(roles):
    """Test that an unconfigured environment yields no ARN."""
    assert roles.resolve("deploy", "unknown-env") is None


def test_resolve_unknown_kind_raises_without_lookup(roles):
    """Test that an unknown role kind fails before the table is read."""
    roles._roles = MagicMock()

    with pytest.raises(ConfigurationError, match="No ARN corresponding to nonexistent-kind"):
        roles.resolve("nonexistent-kind", "prod")

    roles._roles.get.assert_not_called()
    roles._roles.__getitem__.assert_not_called()


def test_table_is_read_only(roles):
    """Test the table cannot be changed after construction."""
    with pytest.raises(TypeError):
        roles._roles["deploy"]["dev"] = "arn:aws:iam::123456789012:role/dev"


def test_source_mapping_changes_do_not_leak():
    """Test the table copies the mapping it is given."""
    source = {"read": {"staging": STAGING_READ_ARN}}
    table = RoleTable(source)
    source["read"]["staging"] = "arn:aws:iam::999999999999:role/changed"

    assert table.resolve("read", "staging") == STAGING_READ_ARN


def test_substitute_table():
    """Test a table with alternative roles."""
    table = RoleTable({"deploy": {"dev": "arn:aws:iam::111111111111:role/dev-Deploy"}})

    assert table.resolve("deploy", "dev") == "arn:aws:iam::111111111111:role/dev-Deploy"
    assert table.resolve("read", "dev") is None
    assert table.environments("deploy") == ["dev"]


@pytest.mark.parametrize("arn", ["not-an-arn", "aws:iam::123:role/x", "arn:aws:iam"])
def test_malformed_arn_rejected(arn):
    """Test that malformed ARNs are rejected when the table is built."""
    with pytest.raises(ConfigurationError, match="Invalid ARN"):
        RoleTable({"deploy": {"prod": arn}})


def test_unknown_kind_in_table_rejected():
    """Test that a table with an unknown role kind is rejected."""
    with pytest.raises(ConfigurationError, match="Unknown role kind"):
        RoleTable({"admin": {"prod": PROD_DEPLOY_ARN}})

