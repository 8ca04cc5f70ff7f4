"""Shared plumbing for the identity and group stores.

Every public write issues exactly one statement in its own transaction and
must affect exactly one row; :func:`expect_single_row` is the only place the
0 / 1 / other branching lives.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional

from sqlalchemy import Engine, Row
from sqlalchemy.sql.expression import Executable
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ca_registry.core.exceptions import NotConfigured, RegistryError, StoreError, StoreWriteError
from ca_registry.core.logging import get_logger

logger = get_logger(__name__)

ErrorFactory = Callable[[], RegistryError]


@dataclass(frozen=True)
class WriteResult:
    """Outcome of a single write statement."""

    rows_affected: int

    @property
    def changed(self) -> bool:
        return self.rows_affected > 0


def expect_single_row(
    result: WriteResult,
    *,
    action: str,
    missing: Optional[ErrorFactory] = None,
) -> WriteResult:
    """Enforce the exactly-one-row invariant on a write result.

    ``missing`` builds the error for a zero-row outcome (e.g. update of an
    unknown key); without it zero rows is a :class:`StoreWriteError`.
    """
    rows = result.rows_affected
    if rows == 1:
        return result
    if rows == 0:
        if missing is not None:
            raise missing()
        msg = f"Failed to {action}: no rows affected"
        logger.error(msg)
        raise StoreWriteError(msg, rows_affected=0)
    msg = f"{rows} rows are affected, should be 1 row"
    logger.error(msg, data={"action": action})
    raise StoreWriteError(msg, rows_affected=rows)


@contextmanager
def translate_store_errors(action: str, duplicate: Optional[ErrorFactory] = None) -> Iterator[None]:
    """Map SQLAlchemy failures onto the registry error hierarchy."""
    try:
        yield
    except IntegrityError as exc:
        if duplicate is not None:
            raise duplicate() from exc
        logger.error(f"Integrity violation during {action}: {exc.orig}")
        raise StoreError(f"Failed to {action}: {exc.orig}") from exc
    except SQLAlchemyError as exc:
        logger.error(f"Error during {action}: {type(exc).__name__}: {exc}")
        raise StoreError(f"Failed to {action}: {exc}") from exc


class EngineBound:
    """Holds the engine shared by every store operation."""

    def __init__(self, engine: Engine):
        self.bind(engine)

    def bind(self, engine: Engine) -> None:
        """Attach (or swap) the backing engine.

        Not safe to call while other threads have operations in flight on the
        same instance.
        """
        if engine is None:
            raise NotConfigured()
        self._engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine

    def _write(
        self,
        statement: Executable,
        *,
        action: str,
        duplicate: Optional[ErrorFactory] = None,
        missing: Optional[ErrorFactory] = None,
        single_row: bool = True,
    ) -> WriteResult:
        # A failed row-count check raises inside begin(), rolling the statement back
        with translate_store_errors(action, duplicate=duplicate):
            with self._engine.begin() as conn:
                result = WriteResult(conn.execute(statement).rowcount)
                if single_row:
                    expect_single_row(result, action=action, missing=missing)
        return result

    def _fetch(self, statement: Executable, *, action: str) -> List[Row]:
        with translate_store_errors(action):
            with self._engine.connect() as conn:
                return list(conn.execute(statement).all())
