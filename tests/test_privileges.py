"""Tests for ACL parsing and privilege reconciliation."""

import logging

import pytest

from pgreconcile.privileges import (
    AclAction,
    AclChange,
    AclEntry,
    apply_changes,
    diff_privileges,
    format_privileges,
    parse_acl,
    reconcile_acl,
)


class TestParseAcl:
    """Parsing aclitem[] literals."""

    def test_sorted_by_grantee(self):
        acl = parse_acl("{carol=r/bob,alice=rw/bob}")

        assert acl == (
            AclEntry("alice", "bob", "rw"),
            AclEntry("carol", "bob", "r"),
        )

    def test_public_grantee(self):
        acl = parse_acl("{=U/postgres,alice=UC/postgres}")

        assert acl[0] == AclEntry("", "postgres", "U")
        assert acl[0].is_public

    def test_null_acl(self):
        assert parse_acl(None) is None

    def test_empty_array(self):
        assert parse_acl("{}") == ()

    def test_grant_options_are_dropped(self):
        (entry,) = parse_acl("{alice=r*w/bob}")
        assert entry.privileges == "rw"

    def test_quoted_role_names(self):
        acl = parse_acl('{"\\"odd user\\"=r/postgres","my role=w/postgres"}')

        assert [e.grantee for e in acl] == ["my role", "odd user"]

    def test_quoted_role_inside_item(self):
        (entry,) = parse_acl('{"\\"a\\"\\"b\\"=r/postgres"}')
        assert entry.grantee == 'a"b'

    def test_same_grantee_from_two_grantors_is_merged(self):
        (entry,) = parse_acl("{alice=r/bob,alice=wr/postgres}")

        assert entry.privileges == "rw"
        assert entry.grantor == "bob"

    @pytest.mark.parametrize(
        "raw",
        ["alice=r/bob", "{alice}", "{alice=r}", "{alice=rQ/bob}", '{"alice=r/bob}'],
    )
    def test_malformed_acl_warns(self, raw, caplog):
        with caplog.at_level(logging.WARNING, logger="pgreconcile.privileges"):
            assert parse_acl(raw) is None
        assert "malformed ACL" in caplog.text


class TestDiffPrivileges:
    """Asymmetric privilege difference."""

    def test_codes_missing_from_second(self):
        assert diff_privileges("arwd", "rw") == "ad"

    def test_keeps_first_order(self):
        assert diff_privileges("dwra", "") == "dwra"

    def test_nothing_granted(self):
        assert diff_privileges("rw", None) == "rw"

    def test_identical(self):
        assert diff_privileges("rw", "wr") == ""

    def test_asymmetric(self):
        assert diff_privileges("rw", "r") == "w"
        assert diff_privileges("r", "rw") == ""


class TestReconcileAcl:
    """Revoke/grant sequence between two ACLs."""

    def test_revoke_then_grant_all(self):
        changes = reconcile_acl(parse_acl("{alice=rw/bob}"), parse_acl("{alice=r/bob,carol=r/bob}"))

        assert changes == [
            AclChange(AclAction.REVOKE, "alice", "w"),
            AclChange(AclAction.GRANT_ALL, "carol", "r"),
        ]

    def test_revoke_precedes_grant_for_same_grantee(self):
        changes = reconcile_acl(parse_acl("{alice=rw/bob}"), parse_acl("{alice=ra/bob}"))

        assert changes == [
            AclChange(AclAction.REVOKE, "alice", "w"),
            AclChange(AclAction.GRANT, "alice", "a"),
        ]

    def test_grantee_only_in_source(self):
        changes = reconcile_acl(parse_acl("{=r/bob,alice=r/bob}"), parse_acl("{alice=r/bob}"))

        assert changes == [AclChange(AclAction.REVOKE_ALL, "", "r")]

    def test_source_acl_missing(self):
        changes = reconcile_acl(None, parse_acl("{alice=r/bob,carol=w/bob}"))

        assert [c.action for c in changes] == [AclAction.GRANT_ALL, AclAction.GRANT_ALL]

    def test_target_acl_missing(self):
        changes = reconcile_acl(parse_acl("{alice=r/bob}"), None)

        assert changes == [AclChange(AclAction.REVOKE_ALL, "alice", "r")]

    def test_identical_acls(self):
        acl = parse_acl("{=r/bob,alice=arwdDxt/bob}")
        assert reconcile_acl(acl, acl) == []

    def test_applying_changes_reaches_target(self):
        a = parse_acl("{=r/bob,alice=rw/bob,dave=U/bob}")
        b = parse_acl("{alice=ra/bob,carol=r/bob,dave=U/bob}")

        result = apply_changes(a, reconcile_acl(a, b), grantor="bob")

        assert {(e.grantee, frozenset(e.privileges)) for e in result} == {
            (e.grantee, frozenset(e.privileges)) for e in b
        }

    def test_applying_changes_in_reverse_reaches_source(self):
        a = parse_acl("{=r/bob,alice=rw/bob,dave=U/bob}")
        b = parse_acl("{alice=ra/bob,carol=r/bob,dave=U/bob}")

        result = apply_changes(b, reconcile_acl(b, a), grantor="bob")

        assert {(e.grantee, frozenset(e.privileges)) for e in result} == {
            (e.grantee, frozenset(e.privileges)) for e in a
        }


class TestFormatPrivileges:
    def test_keywords(self):
        assert format_privileges("arw") == "INSERT, SELECT, UPDATE"

    def test_column_list(self):
        assert format_privileges("r", "a, b") == "SELECT (a, b)"
