"""Register the bootstrap registrar identity from environment settings."""

from ca_registry.config import Settings
from ca_registry.core.exceptions import DuplicateGroup, DuplicateIdentity, IdentityNotFound, NotConfigured
from ca_registry.core.logging import get_logger
from ca_registry.schemas import Identity
from ca_registry.store import Accessor
from ca_registry.store.codec import parse_attributes

logger = get_logger(__name__)


def ensure_bootstrap_identity(settings: Settings, accessor: Accessor) -> bool:
    """Create the bootstrap identity if it is configured and not registered yet.

    Returns True when an identity was inserted. Enabling bootstrap in
    production is refused so the bootstrap secret cannot linger in a deployed
    environment.
    """
    if not settings.bootstrap_enabled:
        return False

    if settings.is_production:
        logger.error(
            "CRITICAL SECURITY: Bootstrap identity is enabled in production. "
            "This must be disabled after initial setup.",
        )
        raise NotConfigured("Bootstrap identity must not be enabled in production")

    name = (settings.bootstrap_name or "").strip()
    secret = settings.bootstrap_secret or ""

    if not name or not secret:
        logger.warning(
            "Bootstrap identity enabled but missing required env vars",
            data={"name_set": bool(name), "secret_set": bool(secret)},
        )
        return False

    # Malformed attribute config must fail before anything is written
    attributes = parse_attributes(settings.bootstrap_attributes)

    root_group = (settings.bootstrap_root_group or "").strip()
    if root_group:
        try:
            accessor.insert_group(root_group)
        except DuplicateGroup:
            pass

    try:
        accessor.get_identity(name)
        return False
    except IdentityNotFound:
        pass

    identity = Identity(
        name=name,
        secret=secret,
        type=settings.bootstrap_type,
        attributes=attributes,
    )

    try:
        accessor.insert_identity(identity)
    except DuplicateIdentity:
        # Another process registered it between the lookup and the insert
        return False

    logger.warning(
        "Bootstrap identity registered",
        data={"name": name, "type": identity.type, "root_group": root_group or None},
    )
    return True
