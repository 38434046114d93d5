"""Tests for the command line interface."""

import pytest
from typer.testing import CliRunner

from sequelize_pg_generator import __version__
from sequelize_pg_generator.config import Settings, settings
from sequelize_pg_generator.errors import DatabaseConnectionError
from sequelize_pg_generator.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Ignore connection settings from the environment or a .env file."""
    for name in ("pghost", "pgport", "pguser", "pgpassword", "pgdatabase"):
        monkeypatch.setattr(settings, name, None)
    monkeypatch.setattr(settings, "pgschema", "public")
    monkeypatch.setattr(settings, "indent", "\t")


@pytest.fixture
def output_paths(tmp_path):
    models_dir = tmp_path / "models"
    models_dir.mkdir()
    return models_dir, tmp_path / "relations"


@pytest.fixture
def patched_introspector(monkeypatch, blog_introspector):
    """Replace the PostgreSQL introspector with the fake blog schema."""
    created = []

    def factory(**kwargs):
        created.append(kwargs)
        return blog_introspector

    monkeypatch.setattr("sequelize_pg_generator.commands.generate.PostgresIntrospector", factory)
    return created


def generate_args(models_dir, relations_file, *extra):
    return [
        "generate",
        "-h", "localhost",
        "-d", "blog",
        "--models-dir", str(models_dir),
        "--relations-file", str(relations_file),
        *extra,
    ]


class TestTopLevel:
    """Tests for the top-level commands."""

    def test_version(self):
        """Test --version prints the package version."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_config_masks_password(self, monkeypatch):
        """Test the config command never shows the password."""
        monkeypatch.setattr(settings, "pghost", "db.local")
        monkeypatch.setattr(settings, "pgpassword", "hunter2")

        result = runner.invoke(app, ["config"])

        assert result.exit_code == 0
        assert "db.local" in result.output
        assert "Password configured: Yes" in result.output
        assert "hunter2" not in result.output


class TestGenerateValidation:
    """Tests for option validation of the generate command."""

    def test_missing_host(self, output_paths):
        """Test host is required."""
        models_dir, relations_file = output_paths

        result = runner.invoke(app, [
            "generate", "-d", "blog",
            "--models-dir", str(models_dir),
            "--relations-file", str(relations_file),
        ])

        assert result.exit_code == 1
        assert "host is required" in result.output

    def test_missing_database(self, output_paths):
        """Test database is required."""
        models_dir, relations_file = output_paths

        result = runner.invoke(app, [
            "generate", "-h", "localhost",
            "--models-dir", str(models_dir),
            "--relations-file", str(relations_file),
        ])

        assert result.exit_code == 1
        assert "database is required" in result.output

    def test_missing_models_dir_option(self, output_paths):
        """Test the models directory is required."""
        _, relations_file = output_paths

        result = runner.invoke(app, ["generate", "-h", "localhost", "-d", "blog", "--relations-file", str(relations_file)])

        assert result.exit_code == 1
        assert "models directory is required" in result.output

    def test_missing_relations_file_option(self, output_paths):
        """Test the relations file is required."""
        models_dir, _ = output_paths

        result = runner.invoke(app, ["generate", "-h", "localhost", "-d", "blog", "--models-dir", str(models_dir)])

        assert result.exit_code == 1
        assert "relations file is required" in result.output

    def test_nonexistent_models_dir(self, tmp_path, patched_introspector):
        """Test a models directory that does not exist is rejected before connecting."""
        result = runner.invoke(app, generate_args(tmp_path / "nope", tmp_path / "relations"))

        assert result.exit_code == 1
        assert "exist" in result.output
        assert patched_introspector == []

    def test_environment_fallback(self, monkeypatch, output_paths, patched_introspector):
        """Test host and database fall back to settings."""
        monkeypatch.setattr(settings, "pghost", "envhost")
        monkeypatch.setattr(settings, "pgdatabase", "envdb")
        monkeypatch.setattr(settings, "pguser", "envuser")
        models_dir, relations_file = output_paths

        result = runner.invoke(app, [
            "generate",
            "--models-dir", str(models_dir),
            "--relations-file", str(relations_file),
        ])

        assert result.exit_code == 0
        assert patched_introspector[0]["host"] == "envhost"
        assert patched_introspector[0]["database"] == "envdb"
        assert patched_introspector[0]["user"] == "envuser"
        assert patched_introspector[0]["schema"] == "public"


class TestGenerateRun:
    """Tests for running the generate command."""

    def test_success(self, output_paths, patched_introspector, blog_introspector):
        """Test a successful run writes files and reports timing."""
        models_dir, relations_file = output_paths

        result = runner.invoke(app, generate_args(models_dir, relations_file, "-U", "app", "-P", "5433"))

        assert result.exit_code == 0
        assert "success in" in result.output
        assert (models_dir / "post.js").exists()
        assert relations_file.with_name("relations.js").exists()
        assert patched_introspector[0]["port"] == 5433
        assert patched_introspector[0]["user"] == "app"
        assert blog_introspector.calls[0] == "connect"
        assert blog_introspector.calls[-1] == "close"

    def test_quiet(self, output_paths, patched_introspector):
        """Test --quiet suppresses the timing line."""
        models_dir, relations_file = output_paths

        result = runner.invoke(app, generate_args(models_dir, relations_file, "-q"))

        assert result.exit_code == 0
        assert "success in" not in result.output

    def test_typescript_options(self, output_paths, patched_introspector):
        """Test TypeScript, indent and schema options reach the run."""
        models_dir, relations_file = output_paths

        result = runner.invoke(app, generate_args(
            models_dir, relations_file, "--typescript", "--indent", "  ", "--schema", "blog",
        ))

        assert result.exit_code == 0
        assert patched_introspector[0]["schema"] == "blog"
        assert relations_file.with_name("relations.ts").exists()
        assert "\n  const models = sequelize.models;" in relations_file.with_name("relations.ts").read_text()

    def test_verbose_summary(self, output_paths, patched_introspector):
        """Test -v prints a summary of the generated models."""
        models_dir, relations_file = output_paths

        result = runner.invoke(app, generate_args(models_dir, relations_file, "-v"))

        assert result.exit_code == 0
        assert "Generated Models" in result.output

    def test_generation_failure(self, monkeypatch, make_introspector, make_column, output_paths):
        """Test generation errors are reported and exit with status 1."""
        introspector = make_introspector({"invoice": [make_column("total", "money")]}, [])
        monkeypatch.setattr(
            "sequelize_pg_generator.commands.generate.PostgresIntrospector",
            lambda **kwargs: introspector,
        )
        models_dir, relations_file = output_paths

        result = runner.invoke(app, generate_args(models_dir, relations_file))

        assert result.exit_code == 1
        assert "failure in" in result.output
        assert "Failed to generate: Unhandled data type: money" in result.output
        assert introspector.calls[-1] == "close"

    def test_connection_failure(self, monkeypatch, make_introspector, output_paths):
        """Test connection errors are reported."""
        introspector = make_introspector({}, [])

        def refuse():
            raise DatabaseConnectionError("Cannot connect to blog")

        introspector.connect = refuse
        monkeypatch.setattr(
            "sequelize_pg_generator.commands.generate.PostgresIntrospector",
            lambda **kwargs: introspector,
        )
        models_dir, relations_file = output_paths

        result = runner.invoke(app, generate_args(models_dir, relations_file))

        assert result.exit_code == 1
        assert "Failed to generate: Cannot connect to blog" in result.output


class TestEmptyEnvironment:
    """Tests for settings loaded from an environment with empty PG* variables."""

    def test_empty_variables_are_unset(self, monkeypatch):
        """Test empty PGPORT and PGHOST load as unset instead of failing."""
        monkeypatch.setenv("PGPORT", "")
        monkeypatch.setenv("PGHOST", "")

        loaded = Settings(_env_file=None)

        assert loaded.pgport is None
        assert loaded.pghost is None

    def test_commands_run_with_empty_port(self, monkeypatch):
        """Test config and --version work when PGPORT is set but empty."""
        monkeypatch.setenv("PGPORT", "")
        monkeypatch.setattr("sequelize_pg_generator.main.settings", Settings(_env_file=None))

        config_result = runner.invoke(app, ["config"])
        version_result = runner.invoke(app, ["--version"])

        assert config_result.exit_code == 0
        assert "Port: Default" in config_result.output
        assert version_result.exit_code == 0

    def test_generate_with_empty_port(self, monkeypatch, output_paths, patched_introspector):
        """Test an empty PGPORT falls back to the driver's default port."""
        monkeypatch.setenv("PGPORT", "")
        monkeypatch.setattr("sequelize_pg_generator.commands.generate.settings", Settings(_env_file=None))
        models_dir, relations_file = output_paths

        result = runner.invoke(app, generate_args(models_dir, relations_file))

        assert result.exit_code == 0
        assert patched_introspector[0]["port"] is None
