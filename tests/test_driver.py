"""Tests for the reconciliation driver."""

import logging

from pgreconcile.db import (
    BaseType,
    CompositeType,
    Database,
    Domain,
    Function,
    RangeType,
    Schema,
    Table,
    TypeAttribute,
    View,
)
from pgreconcile.db.columns import Column
from pgreconcile.driver import OBJECT_KINDS, reconcile_databases
from pgreconcile.options import parse_options
from pgreconcile.output import OutputSink
from pgreconcile.privileges import parse_acl


def make_database(**objects) -> Database:
    return Database(server_version_num=160002, server_version="16.2", **objects)


class TestReconcileDatabases:
    """End to end runs over hand-built catalog snapshots."""

    def test_identical_databases_produce_nothing(self, config):
        tables = [Table("public", "t", "postgres", columns=(Column("a", "integer"),))]
        source = make_database(schemas=[Schema("public", "postgres")], tables=tables)
        target = make_database(schemas=[Schema("public", "postgres")], tables=list(tables))

        result = reconcile_databases(source, target, config)

        assert not result.has_statements
        assert not result.statistics.has_differences()

    def test_creates_before_drops(self, config):
        source = make_database(
            schemas=[Schema("legacy", "postgres"), Schema("public", "postgres")],
            tables=[Table("public", "old", "postgres")],
        )
        target = make_database(
            schemas=[Schema("app", "postgres"), Schema("public", "postgres")],
            views=[View("public", "v", "SELECT 1", "postgres")],
        )

        result = reconcile_databases(source, target, config)

        assert result.sink.statements() == [
            "CREATE SCHEMA app;",
            "CREATE VIEW public.v AS\nSELECT 1;",
            "DROP SCHEMA legacy;",
            "DROP TABLE public.old;",
        ]

    def test_oids_are_ignored(self, config):
        source = make_database(schemas=[Schema("public", "postgres", oid=2200)])
        target = make_database(schemas=[Schema("public", "postgres", oid=16384)])

        assert not reconcile_databases(source, target, config).has_statements

    def test_changed_objects_get_option_and_acl_deltas(self, full_config):
        source = make_database(
            tables=[
                Table(
                    "public", "t", "postgres",
                    options=parse_options(["fillfactor=70", "autovacuum_enabled=true"]),
                    acl=parse_acl("{alice=rw/postgres}"),
                )
            ]
        )
        target = make_database(
            tables=[
                Table(
                    "public", "t", "postgres",
                    options=parse_options(["fillfactor=90"]),
                    acl=parse_acl("{alice=r/postgres,carol=r/postgres}"),
                )
            ]
        )

        result = reconcile_databases(source, target, full_config)

        assert result.sink.pre == [
            "ALTER TABLE public.t RESET (autovacuum_enabled);",
            "ALTER TABLE public.t SET (fillfactor=90);",
            "REVOKE UPDATE ON TABLE public.t FROM alice;",
            "GRANT SELECT ON TABLE public.t TO carol;",
        ]
        assert result.sink.post == []
        assert result.statistics.row("Tables").changed == 1

    def test_function_return_type_change_stays_in_pre(self, config):
        function = Function(
            "public", "f", "", "function", "integer", "sql", "SELECT 1",
            "CREATE OR REPLACE FUNCTION public.f()\n RETURNS integer\n",
        )
        changed = Function(
            "public", "f", "", "function", "bigint", "sql", "SELECT 1",
            "CREATE OR REPLACE FUNCTION public.f()\n RETURNS bigint\n",
        )

        result = reconcile_databases(
            make_database(functions=[function]), make_database(functions=[changed]), config
        )

        assert result.sink.pre == [
            "DROP FUNCTION public.f();",
            "CREATE OR REPLACE FUNCTION public.f()\n RETURNS bigint;",
        ]
        assert result.sink.post == []

    def test_statistics_count_every_kind(self, config):
        source = make_database(schemas=[Schema("a", "postgres"), Schema("b", "postgres")])
        target = make_database(schemas=[Schema("b", "alice"), Schema("c", "postgres")])

        result = reconcile_databases(source, target, config)
        row = result.statistics.row("Schemas")

        assert [r.object_type for r in result.statistics] == [k.label for k in OBJECT_KINDS]
        assert (row.source_count, row.target_count) == (2, 2)
        assert (row.added, row.removed, row.changed) == (1, 1, 1)
        # owner changes are not emitted without --owner
        assert result.sink.statements() == ["CREATE SCHEMA c;", "DROP SCHEMA a;"]

    def test_appends_to_given_sink(self, config):
        sink = OutputSink(pre=["-- existing"])
        target = make_database(schemas=[Schema("app", "postgres")])

        result = reconcile_databases(make_database(), target, config, sink=sink)

        assert result.sink is sink
        assert sink.pre == ["-- existing", "CREATE SCHEMA app;"]

    def test_logs_classification(self, config, caplog):
        source = make_database(schemas=[Schema("old", "postgres")])
        target = make_database(schemas=[Schema("new", "postgres")])

        with caplog.at_level(logging.DEBUG, logger="pgreconcile.driver"):
            reconcile_databases(source, target, config)

        assert "schema new: target" in caplog.text
        assert "schema old: source" in caplog.text

    def test_types_are_created_before_their_users(self, config):
        target = make_database(
            base_types=[BaseType("public", "complex", "postgres", input="complex_in", output="complex_out")],
            domains=[Domain("public", "posint", "integer", "postgres")],
            range_types=[RangeType("public", "posrange", "public.posint", "postgres")],
            composite_types=[
                CompositeType("public", "pair", (TypeAttribute("r", "public.posrange"),), "postgres")
            ],
        )

        statements = reconcile_databases(make_database(), target, config).sink.statements()

        assert [s.split(" (")[0].split(" AS")[0] for s in statements] == [
            "CREATE TYPE public.complex",
            "CREATE DOMAIN public.posint",
            "CREATE TYPE public.posrange",
            "CREATE TYPE public.pair",
        ]
