"""Tests for configuration loading."""

import pytest

from pgreconcile.config import ConnectionConfig, ReconcileConfig, load_config
from pgreconcile.exceptions import ConfigError


def write_config(tmp_path, text):
    path = tmp_path / "pgreconcile.ini"
    path.write_text(text)
    return path


class TestLoadConfig:
    """INI configuration files."""

    def test_full_file(self, tmp_path):
        path = write_config(
            tmp_path,
            """
[general]
output = changes.sql
verbose = true
statistics = yes
comment = on
owner = false
privileges = 1
ignore-version = true

[from]
host = db1.example.com
port = 5433
user = alice
password = s3cr%t
dbname = app

[to]
conninfo = postgresql://bob@db2.example.com/app
""",
        )

        config = load_config(path)

        assert config.output == "changes.sql"
        assert config.verbose and config.statistics and config.comment
        assert not config.owner
        assert config.privileges and config.ignore_version
        assert config.source == ConnectionConfig(
            host="db1.example.com", port="5433", user="alice", password="s3cr%t", dbname="app"
        )
        assert config.target.conninfo == "postgresql://bob@db2.example.com/app"

    def test_defaults(self, tmp_path):
        config = load_config(write_config(tmp_path, "[general]\n"))

        assert config == ReconcileConfig()

    def test_invalid_boolean(self, tmp_path):
        path = write_config(tmp_path, "[general]\ncomment = maybe\n")

        with pytest.raises(ConfigError, match="comment"):
            load_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="could not read"):
            load_config(tmp_path / "absent.ini")

    def test_syntax_error(self, tmp_path):
        path = write_config(tmp_path, "no section header\n")

        with pytest.raises(ConfigError):
            load_config(path)


class TestConnectionConfig:
    """libpq connection strings."""

    def test_fields_become_conninfo(self):
        conninfo = ConnectionConfig(host="localhost", port="5432", dbname="app").to_conninfo()

        assert "host=localhost" in conninfo
        assert "dbname=app" in conninfo
        assert "application_name=pgreconcile" in conninfo

    def test_describe_hides_password(self):
        description = ConnectionConfig(host="h", user="u", password="secret", dbname="d").describe()

        assert "secret" not in description
        assert description == "d@h:5432"

    def test_describe_raw_conninfo(self):
        assert ConnectionConfig(conninfo="dbname=app").describe() == "dbname=app"
