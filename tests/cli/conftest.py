"""Pytest configuration and fixtures for CLI tests.

Provides a runner bound to the kb command group and records/config files
written to a temporary directory.
"""

from pathlib import Path

import msgspec
import pytest
import yaml
from click.testing import CliRunner


@pytest.fixture
def cli_runner():
    """Click CLI test runner with custom invoke method."""

    class KbCliRunner(CliRunner):
        def invoke(self, args, **kwargs):  # type: ignore
            """Invoke the kb group when given a list of arguments."""
            from kbase.cli.main import cli

            if isinstance(args, list):
                return super().invoke(cli, args, **kwargs)
            return super().invoke(args, **kwargs)

    return KbCliRunner()


@pytest.fixture
def records_file(tmp_path, sample_records) -> Path:
    """JSON export of the sample records."""
    path = tmp_path / "records.json"
    path.write_bytes(msgspec.json.encode(sample_records))
    return path


@pytest.fixture
def config_file(tmp_path):
    """Factory writing a YAML config file."""

    def _write(data: dict) -> Path:
        path = tmp_path / "kbase.yaml"
        path.write_text(yaml.safe_dump(data))
        return path

    return _write
