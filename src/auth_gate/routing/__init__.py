"""Request routing decision engine.

Quick start::

    from auth_gate.routing import RequestDescriptor, RoutingConfig, decide

    config = RoutingConfig.for_features(rbac=True, multitenant=False)
    decision = decide(RequestDescriptor(path="/dashboard"), config)
"""

from auth_gate.routing.classifier import RouteClass, classify, is_matched, is_protected
from auth_gate.routing.config import RoutingConfig
from auth_gate.routing.decision import (
    MiddlewareDecision,
    PassThrough,
    PassThroughWithHeaders,
    Redirect,
    Rewrite,
    decide,
)
from auth_gate.routing.request import RequestDescriptor
from auth_gate.routing.roles import RoleSet, extract_roles, has_role
from auth_gate.routing.tenant import resolve_tenant

__all__ = [
    "MiddlewareDecision",
    "PassThrough",
    "PassThroughWithHeaders",
    "Redirect",
    "RequestDescriptor",
    "Rewrite",
    "RoleSet",
    "RouteClass",
    "RoutingConfig",
    "classify",
    "decide",
    "extract_roles",
    "has_role",
    "is_matched",
    "is_protected",
    "resolve_tenant",
]
