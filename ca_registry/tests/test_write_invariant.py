"""Shared write helpers: row-count invariant and error translation."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from ca_registry.core.exceptions import (
    DuplicateIdentity,
    IdentityNotFound,
    StoreError,
    StoreWriteError,
)
from ca_registry.db.database import make_engine
from ca_registry.store import Accessor, WriteResult, expect_single_row, translate_store_errors


class TestExpectSingleRow:
    def test_one_row_passes(self):
        result = WriteResult(1)
        assert expect_single_row(result, action="insert") is result

    def test_zero_rows_without_missing_factory(self):
        with pytest.raises(StoreWriteError) as excinfo:
            expect_single_row(WriteResult(0), action="insert the identity record")
        assert excinfo.value.details == {"rows_affected": 0}

    def test_zero_rows_uses_missing_factory(self):
        with pytest.raises(IdentityNotFound):
            expect_single_row(WriteResult(0), action="update", missing=lambda: IdentityNotFound("alice"))

    @pytest.mark.parametrize("rows", [2, 17, -1])
    def test_any_other_count_is_write_error(self, rows):
        with pytest.raises(StoreWriteError, match="should be 1 row"):
            expect_single_row(WriteResult(rows), action="update", missing=lambda: IdentityNotFound("alice"))


class TestTranslateStoreErrors:
    def test_integrity_error_maps_to_duplicate(self):
        with pytest.raises(DuplicateIdentity) as excinfo:
            with translate_store_errors("insert", duplicate=lambda: DuplicateIdentity("alice")):
                raise IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))
        assert isinstance(excinfo.value.__cause__, IntegrityError)

    def test_integrity_error_without_duplicate_factory(self):
        with pytest.raises(StoreError):
            with translate_store_errors("insert"):
                raise IntegrityError("INSERT", {}, Exception("NOT NULL constraint failed"))

    def test_other_store_failures_pass_through_as_store_error(self):
        with pytest.raises(StoreError) as excinfo:
            with translate_store_errors("select"):
                raise OperationalError("SELECT", {}, Exception("database is locked"))
        assert isinstance(excinfo.value.__cause__, OperationalError)

    def test_registry_errors_are_not_rewrapped(self):
        with pytest.raises(IdentityNotFound):
            with translate_store_errors("update"):
                raise IdentityNotFound("alice")


def test_missing_schema_surfaces_as_store_error(tmp_path):
    engine = make_engine(f"sqlite:///{(tmp_path / 'empty.db').as_posix()}")
    try:
        with pytest.raises(StoreError):
            Accessor(engine).get_identity("alice")
    finally:
        engine.dispose()
