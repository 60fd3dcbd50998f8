"""Tests for the schema and table bootstrap."""

from __future__ import annotations

import psycopg2
import pytest
from psycopg2 import sql

from db.init_db import CREATE_SCHEMA_SQL, CREATE_TABLE_SQL, create_tables, log_table, resolve_schema
from exceptions import SchemaError
from tests.fakes import FakePool


class FailOnTablePool(FakePool):
    def execute(self, query, params=None, timeout: float = 30.0) -> None:
        super().execute(query, params, timeout)
        if len(self.executed) == 2:
            raise psycopg2.ProgrammingError("permission denied for schema fotalogs")


def test_schema_then_table_are_created(fake_pool: FakePool) -> None:
    create_tables(fake_pool, "fotalogs")

    queries = [q for q, _, _ in fake_pool.executed]
    assert queries == [
        CREATE_SCHEMA_SQL.format(schema=sql.Identifier("fotalogs")),
        CREATE_TABLE_SQL.format(table=sql.Identifier("fotalogs", "fotadevicelogs")),
    ]
    assert all(timeout == 5.0 for _, _, timeout in fake_pool.executed)
    assert all(params is None for _, params, _ in fake_pool.executed)


def test_bootstrap_twice_issues_the_same_idempotent_ddl(fake_pool: FakePool) -> None:
    create_tables(fake_pool, "fotalogs")
    create_tables(fake_pool, "fotalogs")

    first, second = fake_pool.executed[:2], fake_pool.executed[2:]
    assert first == second


def test_table_definition_matches_persisted_shape() -> None:
    ddl = CREATE_TABLE_SQL.string

    assert "CREATE TABLE IF NOT EXISTS" in ddl
    for column in (
        "processid", "processname", "deviceid", "fileid", "loglevel",
        "status", "errormessage", "metadata", "createdby", "createdat",
    ):
        assert f"    {column} " in ddl
    assert "metadata        JSONB DEFAULT '{{}}'" in ddl
    assert "PRIMARY KEY (processid, deviceid, fileid, processname, createdat)" in ddl
    assert "IF NOT EXISTS" in CREATE_SCHEMA_SQL.string


def test_schema_failure_raises_schema_error() -> None:
    pool = FakePool(fail_with=psycopg2.OperationalError("connection refused"))

    with pytest.raises(SchemaError, match="failed to create schema") as exc_info:
        create_tables(pool, "fotalogs")

    assert exc_info.value.schema == "fotalogs"
    assert isinstance(exc_info.value.__cause__, psycopg2.OperationalError)


def test_table_failure_raises_schema_error() -> None:
    with pytest.raises(SchemaError, match="failed to create log table"):
        create_tables(FailOnTablePool(), "fotalogs")


@pytest.mark.parametrize("schema", [None, "", "   "])
def test_absent_schema_falls_back_to_public(schema) -> None:
    assert resolve_schema(schema) == "public"


@pytest.mark.parametrize("schema", ["fotalogs", "abc", "ota"])
def test_present_schema_is_used_verbatim(schema: str) -> None:
    assert resolve_schema(schema) == schema


def test_log_table_is_schema_qualified() -> None:
    assert log_table("fotalogs") == sql.Identifier("fotalogs", "fotadevicelogs")
