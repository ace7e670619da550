"""Shared pytest fixtures for goiki tests."""

import shutil
from pathlib import Path

import pytest

from goiki.config import Config
from goiki.store import CommandRunner, ContentStore, PathMapper, RevisionStore


@pytest.fixture(autouse=True)
def clean_goiki_env(monkeypatch):
    """Keep GOIKI_* and logging env vars from the host out of tests."""
    for key in (
        "GOIKI_CONFIG",
        "GOIKI_DATA_DIR",
        "GOIKI_FILE_EXTENSION",
        "GOIKI_NAME",
        "GOIKI_INDEX_PAGE",
        "GOIKI_GIT",
        "GOIKI_COMMAND_TIMEOUT",
        "GOIKI_MAX_CONTENT_SIZE",
        "GOIKI_INIT",
        "GOIKI_DEBUG",
        "LOG_LEVEL",
        "LOG_FILE",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def mock_config(tmp_path):
    """Create a Config pointing at a temporary data directory."""
    return Config(data_dir=str(tmp_path / "wiki"), file_extension="md")


@pytest.fixture
def git_repo(tmp_path) -> Path:
    """An initialized, empty git repository with a committer identity."""
    if shutil.which("git") is None:
        pytest.skip("git executable not available")

    root = tmp_path / "wiki"
    runner = CommandRunner(root)
    RevisionStore(runner).init()
    runner.run("config", "user.name", "Test User")
    runner.run("config", "user.email", "test@example.com")
    runner.run("config", "commit.gpgsign", "false")
    return root


@pytest.fixture
def runner(git_repo) -> CommandRunner:
    return CommandRunner(git_repo)


@pytest.fixture
def revision_store(runner) -> RevisionStore:
    return RevisionStore(runner)


@pytest.fixture
def store(git_repo, revision_store) -> ContentStore:
    """A ContentStore over the temporary repository, using .md files."""
    return ContentStore(revision_store, PathMapper(git_repo, "md"))
