"""
Role lookup for MFA logins.
"""

from .role_table import RoleTable, default_role_table

__all__ = [
    'RoleTable',
    'default_role_table',
]
