"""Operational scripts: migrations and identity registration CLI."""

import argparse

import pytest
from sqlalchemy import inspect

from ca_registry.db.database import get_engine, make_engine, verify_database_connection
from ca_registry.scripts import register_identity, run_migrations
from ca_registry.store import Accessor, GroupRepository, IdentityRepository, make_accessor

pytestmark = pytest.mark.integration


def test_upgrade_creates_registry_tables(settings_env):
    run_migrations.upgrade()

    inspector = inspect(get_engine())
    tables = set(inspector.get_table_names())
    assert {"Users", "Groups"} <= tables
    user_columns = {c["name"] for c in inspector.get_columns("Users")}
    assert user_columns == {
        "id", "token", "type", "attributes", "state", "serial_number", "authority_key_identifier",
    }


def test_downgrade_drops_registry_tables(settings_env):
    run_migrations.upgrade()
    run_migrations.downgrade("base")

    assert "Users" not in inspect(get_engine()).get_table_names()


def test_migrated_schema_serves_accessor(settings_env):
    run_migrations.upgrade()
    accessor = Accessor(get_engine())
    accessor.insert_group("org1")
    assert accessor.get_root_group().name == "org1"


def test_register_identity_cli(settings_env, capsys, monkeypatch):
    monkeypatch.setattr(register_identity, "setup_logging", lambda *args, **kwargs: None)
    code = register_identity.main([
        "--name", "alice",
        "--secret", "s3cr3t",
        "--attr", "hf.Registrar.Roles=client",
        "--attr", "hf.Revoker=true",
        "--group", "org1",
    ])
    assert code == 0
    assert "registered successfully" in capsys.readouterr().out

    accessor = Accessor(get_engine())
    alice = accessor.get_identity("alice")
    assert alice.type == "client"
    assert [(a.name, a.value) for a in alice.attributes] == [
        ("hf.Registrar.Roles", "client"),
        ("hf.Revoker", "true"),
    ]
    assert accessor.get_group("org1").is_root


def test_register_identity_cli_duplicate(settings_env, capsys, monkeypatch):
    monkeypatch.setattr(register_identity, "setup_logging", lambda *args, **kwargs: None)
    args = ["--name", "bob", "--secret", "pw"]
    assert register_identity.main(args) == 0
    assert register_identity.main(args) == 1
    assert "R4090" in capsys.readouterr().err


def test_parse_attribute_rejects_missing_separator():
    with pytest.raises(argparse.ArgumentTypeError):
        register_identity.parse_attribute("novalue")


def test_make_accessor_uses_configured_engine(settings_env):
    run_migrations.upgrade()
    accessor = make_accessor()
    assert accessor.engine is get_engine()
    assert isinstance(accessor, IdentityRepository)
    assert isinstance(accessor, GroupRepository)


def test_verify_database_connection(settings_env, tmp_path):
    assert verify_database_connection() is True
    broken = make_engine(f"sqlite:///{(tmp_path / 'missing' / 'dir.db').as_posix()}")
    (tmp_path / "missing").rmdir()
    try:
        assert verify_database_connection(broken) is False
    finally:
        broken.dispose()
