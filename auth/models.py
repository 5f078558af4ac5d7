"""This module re-exports the User model from the database package for use in authentication-related code.
"""

from database.models import AccountStatus, Role, User  # noqa: F401

__all__ = ["AccountStatus", "Role", "User"]
