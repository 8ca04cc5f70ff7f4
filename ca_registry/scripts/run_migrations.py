"""Run registry schema migrations.

Usage:
    python -m ca_registry.scripts.run_migrations [upgrade|downgrade|current|history] [--revision REV]
"""

import argparse
import os

from alembic import command
from alembic.config import Config

_PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def _alembic_config() -> Config:
    return Config(os.path.join(_PACKAGE_DIR, "alembic.ini"))


def upgrade(revision: str = "head") -> None:
    """Run migrations to the target revision."""
    command.upgrade(_alembic_config(), revision)
    print("✓ Migrations completed successfully")


def downgrade(revision: str = "-1") -> None:
    """Downgrade to a specific revision."""
    command.downgrade(_alembic_config(), revision)
    print(f"✓ Downgraded to {revision}")


def current() -> None:
    """Show current revision."""
    command.current(_alembic_config(), verbose=True)


def history() -> None:
    """Show migration history."""
    command.history(_alembic_config(), verbose=True)


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Run registry database migrations")
    parser.add_argument(
        "command",
        choices=["upgrade", "downgrade", "current", "history"],
        default="upgrade",
        nargs="?",
        help="Migration command to run",
    )
    parser.add_argument(
        "--revision",
        default=None,
        help="Target revision (default: head for upgrade, -1 for downgrade)",
    )
    args = parser.parse_args(argv)

    if args.command == "upgrade":
        upgrade(args.revision or "head")
    elif args.command == "downgrade":
        downgrade(args.revision or "-1")
    elif args.command == "current":
        current()
    elif args.command == "history":
        history()


if __name__ == "__main__":
    main()
