"""CLI script to register one enrollment identity.

Usage:
    python -m ca_registry.scripts.register_identity --name alice --secret 's3cr3t' \
        --type client --attr hf.Registrar.Roles=client --group org1
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from ca_registry.config import get_settings
from ca_registry.core.exceptions import DuplicateGroup, RegistryError
from ca_registry.core.logging import setup_logging
from ca_registry.db.database import create_schema, get_engine
from ca_registry.schemas import Attribute, Identity
from ca_registry.store import Accessor


def parse_attribute(raw: str) -> Attribute:
    """Parse ``name=value`` into an attribute."""
    name, sep, value = raw.partition("=")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"Attribute must look like name=value, got {raw!r}")
    return Attribute(name=name.strip(), value=value)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Register an enrollment identity")
    parser.add_argument("--name", required=True, help="Identity name")
    parser.add_argument("--secret", required=True, help="One-time enrollment secret")
    parser.add_argument("--type", default="client", help="Identity type")
    parser.add_argument(
        "--attr",
        action="append",
        default=[],
        type=parse_attribute,
        help="Attribute as name=value (repeatable)",
    )
    parser.add_argument("--group", default="", help="Also create this group if missing")
    parser.add_argument("--parent-group", default="", help="Parent of --group (empty for root)")
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(settings.log_level, json_output=settings.log_json, log_file=settings.log_file)

    engine = get_engine()
    create_schema(engine)
    accessor = Accessor(engine)

    try:
        if args.group:
            try:
                accessor.insert_group(args.group, args.parent_group)
            except DuplicateGroup:
                pass
        accessor.insert_identity(
            Identity(name=args.name, secret=args.secret, type=args.type, attributes=args.attr)
        )
    except RegistryError as exc:
        print(f"Error [{exc.code}]: {exc.message}", file=sys.stderr)
        return 1

    print(f"Identity '{args.name}' registered successfully.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
