"""Shared test fixtures for the origin-tracked YAML loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from yamlorigin.parser.loader import OriginTrackedYamlLoader
from yamlorigin.resource import FileResource
from yamlorigin.settings import LoaderSettings

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def settings() -> LoaderSettings:
    return LoaderSettings()


@pytest.fixture
def fixture_loader(settings: LoaderSettings):
    """Factory building a loader for a file under ``tests/fixtures``."""

    def _build(name: str) -> OriginTrackedYamlLoader:
        return OriginTrackedYamlLoader(FileResource(FIXTURES_DIR / name), settings)

    return _build


@pytest.fixture
def loader(fixture_loader) -> OriginTrackedYamlLoader:
    return fixture_loader("test-yaml.yml")


@pytest.fixture
def loaded(loader: OriginTrackedYamlLoader) -> dict:
    """The single document of ``test-yaml.yml``, flattened."""
    documents = loader.load()
    assert len(documents) == 1
    return documents[0]
