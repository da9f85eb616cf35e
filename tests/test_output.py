"""Tests for the pre/post statement buffer and statistics."""

import io

from pgreconcile.comparator import Action
from pgreconcile.output import OutputSink
from pgreconcile.summary import Statistics


class TestOutputSink:
    """Two-phase ordering of generated statements."""

    def test_pre_before_post_regardless_of_insertion_order(self):
        sink = OutputSink()
        sink.add_post(["DROP TABLE public.old;"])
        sink.add_pre(["CREATE TABLE public.new (id integer);"])
        sink.add_post(["DROP SCHEMA legacy;"])
        sink.add_pre(["CREATE VIEW public.v AS SELECT 1;"])

        assert sink.statements() == [
            "CREATE TABLE public.new (id integer);",
            "CREATE VIEW public.v AS SELECT 1;",
            "DROP TABLE public.old;",
            "DROP SCHEMA legacy;",
        ]
        assert len(sink) == 4

    def test_empty_sink_renders_nothing(self):
        sink = OutputSink()

        assert sink.is_empty()
        assert sink.render(["pgreconcile 0.1.0"]) == ""

    def test_render_with_header(self):
        sink = OutputSink()
        sink.add_pre(["CREATE SCHEMA s;"])
        sink.add_post(["DROP SCHEMA t;"])

        text = sink.render(["pgreconcile 0.1.0", "reconcile between 16.2 and 16.3"])

        assert text == (
            "--\n"
            "-- pgreconcile 0.1.0\n"
            "-- reconcile between 16.2 and 16.3\n"
            "--\n"
            "\n"
            "CREATE SCHEMA s;\n"
            "\n"
            "DROP SCHEMA t;\n"
        )

    def test_write(self):
        sink = OutputSink()
        sink.add_pre(["CREATE SCHEMA s;"])
        fp = io.StringIO()

        sink.write(fp)

        assert fp.getvalue() == "CREATE SCHEMA s;\n"


class TestStatistics:
    """Per-kind counters."""

    def test_record(self):
        statistics = Statistics()
        statistics.record("Tables", Action.ADD)
        statistics.record("Tables", Action.ADD)
        statistics.record("Tables", Action.MODIFY)
        statistics.record("Views", Action.REMOVE)
        statistics.record("Views", Action.NONE)

        tables = statistics.row("Tables")
        assert (tables.added, tables.removed, tables.changed) == (2, 0, 1)
        assert statistics.total_removed == 1
        assert statistics.has_differences()

    def test_rows_keep_processing_order(self):
        statistics = Statistics()
        for label in ("Schemas", "Tables", "Views"):
            statistics.row(label)

        assert [row.object_type for row in statistics] == ["Schemas", "Tables", "Views"]
        assert not statistics.has_differences()
