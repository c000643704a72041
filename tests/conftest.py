from __future__ import annotations

from pathlib import Path

import pytest

from scaffolder.config import ScaffolderDefaults
from scaffolder.rendering import TemplateRenderer
from tests._fixtures.repo_builder import RepoBuilder


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Provide a reusable repo builder rooted at the pytest tmp_path."""
    return RepoBuilder(tmp_path)


@pytest.fixture
def platform_repo(repo_builder: RepoBuilder) -> RepoBuilder:
    """A repo with root pom, BOM and a complete configuration file."""
    return repo_builder.platform()


@pytest.fixture(scope="session")
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def defaults() -> ScaffolderDefaults:
    return ScaffolderDefaults(group_id="com.acme")
