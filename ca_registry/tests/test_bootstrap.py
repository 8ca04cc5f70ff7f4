"""Bootstrap registrar identity from environment settings."""

import pytest

from ca_registry.bootstrap import ensure_bootstrap_identity
from ca_registry.config import Settings
from ca_registry.core.exceptions import GroupNotFound, IdentityNotFound, NotConfigured, SerializationError
from ca_registry.schemas import Identity


def _settings(**overrides) -> Settings:
    values = {
        "bootstrap_enabled": True,
        "bootstrap_name": "admin",
        "bootstrap_secret": "adminpw",
        "environment": "test",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_disabled_does_nothing(accessor):
    assert ensure_bootstrap_identity(_settings(bootstrap_enabled=False), accessor) is False
    with pytest.raises(IdentityNotFound):
        accessor.get_identity("admin")


def test_creates_registrar_identity(accessor):
    assert ensure_bootstrap_identity(_settings(bootstrap_root_group="org1"), accessor) is True

    admin = accessor.get_identity("admin")
    assert admin.type == "client"
    assert admin.state == 0
    assert [a.name for a in admin.attributes] == [
        "hf.Registrar.Roles",
        "hf.Registrar.DelegateRoles",
        "hf.Revoker",
    ]
    assert accessor.get_root_group().name == "org1"
    assert accessor.authenticate_basic("admin", "adminpw").name == "admin"


def test_skips_existing_identity(accessor):
    accessor.insert_identity(Identity(name="admin", secret="original"))
    assert ensure_bootstrap_identity(_settings(bootstrap_root_group="org1"), accessor) is False
    assert accessor.get_identity("admin").secret == "original"


def test_rerun_is_harmless(accessor):
    settings = _settings(bootstrap_root_group="org1")
    assert ensure_bootstrap_identity(settings, accessor) is True
    assert ensure_bootstrap_identity(settings, accessor) is False


def test_missing_secret_skips(accessor):
    assert ensure_bootstrap_identity(_settings(bootstrap_secret=""), accessor) is False
    with pytest.raises(IdentityNotFound):
        accessor.get_identity("admin")
    with pytest.raises(GroupNotFound):
        accessor.get_root_group()


def test_refused_in_production(accessor):
    with pytest.raises(NotConfigured):
        ensure_bootstrap_identity(_settings(environment="production"), accessor)


def test_malformed_attributes_abort_before_writing(accessor):
    settings = _settings(bootstrap_root_group="org1").model_copy(
        update={"bootstrap_attributes": '[{"name": "hf.Registrar.Roles", "value": "client"'}
    )
    with pytest.raises(SerializationError):
        ensure_bootstrap_identity(settings, accessor)
    with pytest.raises(IdentityNotFound):
        accessor.get_identity("admin")
    with pytest.raises(GroupNotFound):
        accessor.get_root_group()


def test_concurrent_registration_is_not_an_error(accessor, monkeypatch):
    accessor.insert_identity(Identity(name="admin", secret="first"))

    def lookup_before_insert(name):
        raise IdentityNotFound(name)

    monkeypatch.setattr(accessor, "get_identity", lookup_before_insert)
    assert ensure_bootstrap_identity(_settings(), accessor) is False

    monkeypatch.undo()
    assert accessor.get_identity("admin").secret == "first"
