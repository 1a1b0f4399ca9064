"""Tests for the sqlitejson command."""

import json

from sqlalchemy import create_engine, text
from typer.testing import CliRunner

from sqlitejson.cli.main import app
from sqlitejson.config import reset_settings

runner = CliRunner()


class TestExportCommand:
    """Tests for exporting through the CLI."""

    def test_table_option(self, presidents_db, presidents):
        """Test --table writes the whole table to stdout."""
        result = runner.invoke(app, [str(presidents_db), "--table", "presidents"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == presidents

    def test_sql_argument(self, presidents_db, presidents):
        """Test positional SQL statement."""
        result = runner.invoke(app, [str(presidents_db), "SELECT * FROM presidents;"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == presidents

    def test_sql_overrides_where(self, presidents_db, presidents):
        """Test positional SQL wins over --where."""
        result = runner.invoke(
            app, [str(presidents_db), "SELECT * FROM presidents;", "--where", "id==1"]
        )

        assert result.exit_code == 0
        assert json.loads(result.stdout) == presidents

    def test_where_key_columns(self, presidents_db):
        """Test --where, --key and --columns together."""
        result = runner.invoke(
            app,
            [
                str(presidents_db),
                "--table",
                "presidents",
                "--columns",
                "name",
                "--key",
                "name",
                "--where",
                "id == 1",
            ],
        )

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"Washington": {"name": "Washington"}}

    def test_columns_list(self, presidents_db, presidents):
        """Test comma-separated --columns."""
        result = runner.invoke(
            app, [str(presidents_db), "-t", "presidents", "-c", "id,name", "-w", "id > 5"]
        )

        assert result.exit_code == 0
        assert result.stdout.strip() == '[{"id":6,"name":"Adams"}]'

    def test_indent(self, presidents_db):
        """Test --indent pretty-prints."""
        result = runner.invoke(
            app, [str(presidents_db), "--table", "presidents", "--indent", "2"]
        )

        assert result.exit_code == 0
        assert '\n  {\n    "name": "Washington"' in result.stdout

    def test_output_file(self, presidents_db, presidents, tmp_path):
        """Test --output saves the export."""
        dest = tmp_path / "presidents.json"

        result = runner.invoke(
            app, [str(presidents_db), "--table", "presidents", "--output", str(dest)]
        )

        assert result.exit_code == 0
        assert json.loads(dest.read_text()) == presidents

    def test_config_file_indent(self, presidents_db, tmp_path):
        """Test indentation read from a YAML config file."""
        config = tmp_path / "config.yaml"
        config.write_text("output:\n  indent: 4\n")

        result = runner.invoke(
            app,
            [str(presidents_db), "--table", "presidents", "--where", "id == 1", "--config", str(config)],
        )

        assert result.exit_code == 0
        assert '\n    {\n        "name": "Washington"' in result.stdout


class TestTablesOption:
    """Tests for listing tables."""

    def test_lists_tables(self, presidents_db):
        """Test --tables prints one name per line."""
        result = runner.invoke(app, [str(presidents_db), "--tables"])

        assert result.exit_code == 0
        assert result.stdout.split() == ["presidents"]

    def test_views_included_on_request(self, presidents_db):
        """Test --views adds views after the tables."""
        engine = create_engine(f"sqlite:///{presidents_db}")
        with engine.begin() as conn:
            conn.execute(
                text("CREATE VIEW adams AS SELECT * FROM presidents WHERE name = 'Adams'")
            )
        engine.dispose()

        with_views = runner.invoke(app, [str(presidents_db), "--tables", "--views"])
        without_views = runner.invoke(app, [str(presidents_db), "--tables"])

        assert with_views.exit_code == 0
        assert with_views.stdout.split() == ["presidents", "adams"]
        assert without_views.stdout.split() == ["presidents"]


class TestErrors:
    """Tests for error reporting and exit codes."""

    def test_missing_table_and_sql(self, presidents_db):
        """Test request without table or SQL."""
        result = runner.invoke(app, [str(presidents_db)])

        assert result.exit_code == 2
        assert "Error" in result.output
        assert "table" in result.output

    def test_invalid_table_name(self, presidents_db):
        """Test table name that is not an identifier."""
        result = runner.invoke(app, [str(presidents_db), "--table", "presidents; --"])

        assert result.exit_code == 2

    def test_unknown_table(self, presidents_db):
        """Test query failure."""
        result = runner.invoke(app, [str(presidents_db), "--table", "senators"])

        assert result.exit_code == 3
        assert "no such table" in result.output

    def test_missing_database(self, tmp_path):
        """Test database file that does not exist."""
        result = runner.invoke(app, [str(tmp_path / "missing.db"), "--table", "presidents"])

        assert result.exit_code == 3
        assert not (tmp_path / "missing.db").exists()

    def test_blob(self, blob_db):
        """Test unserializable column."""
        result = runner.invoke(app, [str(blob_db), "--table", "files"])

        assert result.exit_code == 4
        assert "data" in result.output

    def test_output_to_missing_directory(self, presidents_db, tmp_path):
        """Test write failure."""
        dest = tmp_path / "missing" / "out.json"

        result = runner.invoke(
            app, [str(presidents_db), "--table", "presidents", "--output", str(dest)]
        )

        assert result.exit_code == 5

    def test_verbose_shows_context(self, presidents_db):
        """Test --verbose prints error context."""
        result = runner.invoke(app, [str(presidents_db), "--table", "senators", "--verbose"])

        assert result.exit_code == 3
        assert "SELECT * FROM senators" in result.output

    def test_invalid_environment_setting(self, presidents_db, monkeypatch):
        """Test bad setting from the environment is a configuration error."""
        monkeypatch.setenv("JSON_INDENT", "abc")
        reset_settings()

        result = runner.invoke(app, [str(presidents_db), "--table", "presidents"])

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "json_indent" in result.output
        assert "Unexpected" not in result.output

    def test_invalid_config_file_setting(self, presidents_db, tmp_path):
        """Test out-of-range value in a YAML config file."""
        config = tmp_path / "config.yaml"
        config.write_text("output:\n  indent: -1\n")

        result = runner.invoke(
            app, [str(presidents_db), "--table", "presidents", "--config", str(config)]
        )

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


class TestVersion:
    """Tests for --version."""

    def test_version(self):
        """Test version output."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "sqlitejson version" in result.stdout
