"""Tests for the run_analysis command line script."""

import os
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from scripts import run_analysis

PG_ENV = {
    "POSTGRES_HOST": "pg",
    "POSTGRES_PORT": "6543",
    "POSTGRES_DB": "bank",
    "POSTGRES_USER": "analyst",
    "POSTGRES_PASSWORD": "secret",
}


@pytest.fixture
def fake_setup_logging(monkeypatch) -> MagicMock:
    mock = MagicMock()
    monkeypatch.setattr(run_analysis, "setup_logging", mock)
    return mock


@pytest.fixture
def fake_postgres(monkeypatch) -> MagicMock:
    mock = MagicMock()
    monkeypatch.setattr(run_analysis, "PostgresSink", mock)
    return mock


def _generate_args(tmp_path: Path, *extra: str) -> list[str]:
    return ["--generate", "25", "--seed", "42", "--output-dir", str(tmp_path / "out"), *extra]


class TestPostgresTarget:
    """Tests for choosing the PostgreSQL target."""

    def test_postgres_flag_uses_environment(self, tmp_path: Path, fake_setup_logging, fake_postgres) -> None:
        """Test that --postgres connects with the POSTGRES_* settings."""
        with patch.dict(os.environ, PG_ENV, clear=True):
            assert run_analysis.main(_generate_args(tmp_path, "--postgres")) == 0

        fake_postgres.assert_called_once_with("postgresql://analyst:secret@pg:6543/bank")
        sink = fake_postgres.return_value
        sink.create_tables.assert_called_once()
        sink.write_schema.assert_called_once()
        sink.truncate_tables.assert_not_called()
        sink.close.assert_called_once()

    def test_explicit_url(self, tmp_path: Path, fake_setup_logging, fake_postgres) -> None:
        """Test that --postgres-url is used as given."""
        url = "postgresql://u:p@elsewhere:5432/churn"
        with patch.dict(os.environ, PG_ENV, clear=True):
            assert run_analysis.main(_generate_args(tmp_path, "--postgres-url", url, "--truncate")) == 0

        fake_postgres.assert_called_once_with(url)
        fake_postgres.return_value.truncate_tables.assert_called_once()

    def test_no_postgres_by_default(self, tmp_path: Path, fake_setup_logging, fake_postgres) -> None:
        """Test that PostgreSQL is only loaded on request."""
        with patch.dict(os.environ, PG_ENV, clear=True):
            assert run_analysis.main(_generate_args(tmp_path)) == 0

        fake_postgres.assert_not_called()
        assert (tmp_path / "out" / "risk_segments.json").exists()


class TestLogFormat:
    """Tests for the log format option."""

    def test_log_format_from_environment(self, tmp_path: Path, fake_setup_logging, fake_postgres) -> None:
        with patch.dict(os.environ, {"LOG_FORMAT": "json", "LOG_LEVEL": "DEBUG"}, clear=True):
            run_analysis.main(_generate_args(tmp_path))

        fake_setup_logging.assert_called_once_with("DEBUG", "json")

    def test_log_format_argument(self, tmp_path: Path, fake_setup_logging, fake_postgres) -> None:
        with patch.dict(os.environ, {}, clear=True):
            run_analysis.main(_generate_args(tmp_path, "--log-format", "json"))

        fake_setup_logging.assert_called_once_with("INFO", "json")


class TestExitCodes:
    """Tests for the script's exit codes."""

    def test_missing_input(self, tmp_path: Path, fake_setup_logging, fake_postgres) -> None:
        """Test that running without --source or --generate is a usage error."""
        with patch.dict(os.environ, {}, clear=True):
            assert run_analysis.main(["--output-dir", str(tmp_path)]) == 2

    def test_invalid_environment(self, fake_setup_logging) -> None:
        """Test that a malformed setting is reported instead of raised."""
        with patch.dict(os.environ, {"POSTGRES_PORT": "abc"}, clear=True):
            assert run_analysis.main(["--generate", "5"]) == 2

    def test_non_finite_value_fails_cleanly(self, tmp_path: Path, fake_setup_logging, fake_postgres) -> None:
        """Test that a NaN balance is reported as a failed run."""
        extract = tmp_path / "extract.csv"
        with patch.dict(os.environ, {}, clear=True):
            assert run_analysis.main(_generate_args(tmp_path, "--save-extract", str(extract))) == 0
        lines = extract.read_text(encoding="utf-8").splitlines()
        header = lines[0].split(",")
        row = lines[1].split(",")
        row[header.index("Total_Revolving_Bal")] = "NaN"
        extract.write_text("\n".join([lines[0], ",".join(row)]) + "\n", encoding="utf-8")

        with patch.dict(os.environ, {}, clear=True):
            assert run_analysis.main(["--source", str(extract), "--output-dir", str(tmp_path / "out2")]) == 1
        assert not (tmp_path / "out2").exists()
