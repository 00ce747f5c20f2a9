"""Request identity and role enforcement for downstream handlers."""

from auth_gate.auth.context import RequestIdentity
from auth_gate.auth.roles import get_identity, require_role

__all__ = ["RequestIdentity", "get_identity", "require_role"]
