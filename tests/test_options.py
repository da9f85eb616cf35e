"""Tests for option set parsing and reconciliation."""

import logging

import pytest

from pgreconcile.options import (
    OptionChange,
    OptionEntry,
    OptionSet,
    apply_delta,
    format_options,
    parse_options,
    reconcile_options,
)


class TestParseOptions:
    """Building option sets from strings and text arrays."""

    def test_none_is_not_an_empty_set(self):
        assert parse_options(None) is None
        assert parse_options("") == OptionSet(())

    def test_sorted_by_key(self):
        options = parse_options("fillfactor=70,autovacuum_enabled=true")

        assert options.keys == ("autovacuum_enabled", "fillfactor")
        assert options.get("fillfactor") == OptionEntry("fillfactor", "70")

    def test_bare_flags(self):
        options = parse_options("security_barrier")

        assert options.entries == (OptionEntry("security_barrier"),)
        assert str(options) == "security_barrier"

    def test_text_array_keeps_commas_in_values(self):
        options = parse_options(["search_path=public, pg_temp", "work_mem=64MB"])

        assert options.get("search_path").value == "public, pg_temp"
        assert len(options) == 2

    def test_whitespace_is_trimmed(self):
        options = parse_options(" fillfactor = 70 , ")

        assert options.entries == (OptionEntry("fillfactor", "70"),)

    def test_missing_key_is_malformed(self, caplog):
        with caplog.at_level(logging.WARNING, logger="pgreconcile.options"):
            assert parse_options("=70") is None
        assert "malformed option list" in caplog.text

    def test_repeated_key_keeps_last_value(self, caplog):
        with caplog.at_level(logging.WARNING, logger="pgreconcile.options"):
            options = parse_options("fillfactor=70,fillfactor=80")
        assert options.entries == (OptionEntry("fillfactor", "80"),)
        assert "repeated" in caplog.text


class TestReconcileOptions:
    """Reset / change / add deltas between two option sets."""

    def test_reset_change_add(self):
        a = parse_options("fillfactor=70,autovacuum_enabled=true")
        b = parse_options("fillfactor=90")

        delta = reconcile_options(a, b)

        assert delta.to_reset == ("autovacuum_enabled",)
        assert delta.to_change == (OptionChange("fillfactor", "70", "90"),)
        assert delta.to_add == ()

    def test_new_keys_are_added(self):
        delta = reconcile_options(parse_options("a=1"), parse_options("a=1,b=2,c"))

        assert delta.to_reset == ()
        assert delta.to_change == ()
        assert delta.to_add == (OptionEntry("b", "2"), OptionEntry("c"))

    def test_both_absent(self):
        delta = reconcile_options(None, None)
        assert delta.is_empty()

    def test_source_absent_adds_target(self):
        b = parse_options("fillfactor=90")

        delta = reconcile_options(None, b)

        assert delta.to_add == b.entries
        assert not delta.to_reset and not delta.to_change

    def test_target_absent_resets_source(self):
        delta = reconcile_options(parse_options("a=1,b=2"), None)

        assert delta.to_reset == ("a", "b")
        assert delta.reset_all
        assert not delta.to_change and not delta.to_add

    @pytest.mark.parametrize(
        "raw",
        ["", "fillfactor=70", "a=1,b,c=3", "autovacuum_enabled=false,toast_tuple_target=128"],
    )
    def test_identical_sets_produce_nothing(self, raw):
        assert reconcile_options(parse_options(raw), parse_options(raw)).is_empty()

    def test_exhaustive_over_keys(self):
        a = parse_options("a=1,b=2,c=3,d=4")
        b = parse_options("b=2,c=30,e=5,f")

        delta = reconcile_options(a, b)
        touched = set(delta.to_reset) | {c.key for c in delta.to_change} | {e.key for e in delta.to_add}

        assert touched == {"a", "d", "c", "e", "f"}
        assert "b" not in touched

    def test_applying_delta_reaches_target(self):
        a = parse_options("a=1,b=2,c=3")
        b = parse_options("b=20,c=3,d")

        assert apply_delta(a, reconcile_options(a, b)) == b

    def test_set_clause_lists_changes_then_additions(self):
        delta = reconcile_options(parse_options("b=1"), parse_options("a=5,b=2"))

        assert format_options(delta.to_set) == "b=2, a=5"
