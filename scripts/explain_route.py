"""CLI that shows what the routing middleware would do with one request.

Usage::

    uv run python -m scripts.explain_route --path /dashboard \
        --host acme.example.com --multitenant

    uv run python -m scripts.explain_route --path /admin --rbac \
        --cookie next-auth.session-token=<jwt>

    uv run python -m scripts.explain_route --path /admin \
        --config ./my-app/.auth-bp-config.json --cookie ...

Prints the decision as JSON.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import fields
from pathlib import Path

from auth_gate.errors import ProjectConfigError
from auth_gate.routing.config import RoutingConfig
from auth_gate.routing.decision import MiddlewareDecision, decide
from auth_gate.routing.project_file import load_project_config
from auth_gate.routing.request import RequestDescriptor


def parse_cookie(raw: str) -> tuple[str, str]:
    """Parse a ``name=value`` argument."""
    name, sep, value = raw.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"Expected name=value, got: {raw!r}")
    return name, value


def decision_to_dict(decision: MiddlewareDecision) -> dict[str, object]:
    """JSON-friendly form: ``{"decision": <variant>, ...fields}``."""
    values = {f.name: getattr(decision, f.name) for f in fields(decision)}
    if "headers" in values:
        values["headers"] = dict(values["headers"])
    return {"decision": type(decision).__name__, **values}


def build_config(args: argparse.Namespace) -> RoutingConfig:
    """Routing config from ``--config`` or the feature flags."""
    if args.config is not None:
        return load_project_config(args.config)
    return RoutingConfig.for_features(rbac=args.rbac, multitenant=args.multitenant)


def explain(args: argparse.Namespace) -> dict[str, object]:
    """Evaluate the request described by ``args``."""
    config = build_config(args)
    request = RequestDescriptor(
        path=args.path,
        host=args.host,
        cookies=dict(args.cookie),
    )
    return decision_to_dict(decide(request, config))


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and print the decision."""
    parser = argparse.ArgumentParser(description="Explain a routing decision")
    parser.add_argument("--path", required=True, help="Request path")
    parser.add_argument("--host", default="localhost:3000", help="Host header")
    parser.add_argument(
        "--cookie",
        type=parse_cookie,
        action="append",
        default=[],
        help="Cookie as name=value (repeatable)",
    )
    parser.add_argument("--rbac", action="store_true", help="Enable RBAC")
    parser.add_argument(
        "--multitenant", action="store_true", help="Enable multitenancy"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Generator config snapshot (overrides --rbac/--multitenant)",
    )

    args = parser.parse_args(argv)
    try:
        result = explain(args)
    except ProjectConfigError as exc:
        print(str(exc), file=sys.stderr)
        sys.exit(1)
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
