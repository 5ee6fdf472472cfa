"""Pytest configuration and fixtures."""

import os
from datetime import UTC, datetime

import pytest

from kbase.core.models import ContentType, Record


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch, tmp_path):
    """Isolate environment variables and config lookup for each test.

    This prevents a developer's own configuration or records file from
    leaking into test runs.
    """
    original_env = os.environ.copy()
    monkeypatch.delenv("KBASE_RECORDS", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def sample_records() -> list[Record]:
    """A small knowledge base covering every field the engine reads."""
    return [
        Record(
            id="react",
            title="React Best Practices",
            content="Hooks, memoization and component patterns",
            tags=("react", "frontend"),
            content_type=ContentType.NOTE,
            created_at=datetime(2024, 3, 15, 10, 30, tzinfo=UTC),
            updated_at=datetime(2024, 5, 1, 9, 0, tzinfo=UTC),
        ),
        Record(
            id="design",
            title="Design Docs",
            content="How we write architecture decision records",
            tags=("design",),
            content_type=ContentType.DOCUMENT,
            created_at=datetime(2023, 11, 2, 8, 0, tzinfo=UTC),
            updated_at=datetime(2024, 1, 10, 12, 0, tzinfo=UTC),
        ),
        Record(
            id="typescript",
            title="Intro to TypeScript",
            tags=("TypeScript", "frontend"),
            content_type=ContentType.VIDEO,
            created_at=datetime(2024, 6, 1, 0, 0, tzinfo=UTC),
            updated_at=datetime(2024, 6, 2, 0, 0, tzinfo=UTC),
        ),
        Record(
            id="packaging",
            title="Python Packaging Guide",
            content="pyproject.toml and build backends",
            tags=("python", "tooling"),
            content_type=ContentType.LINK,
            created_at=datetime(2022, 8, 20, 16, 45, tzinfo=UTC),
            updated_at=datetime(2023, 2, 1, 0, 0, tzinfo=UTC),
        ),
    ]
