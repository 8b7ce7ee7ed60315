"""
Pytest configuration and fixtures for Dockhand tests.
"""

import json
import os
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Action inputs as the runner would set them
os.environ.setdefault("INPUT_TOKEN", "test-github-token")
os.environ.setdefault("INPUT_PLATFORMS", "linux/amd64,linux/arm64")


@pytest.fixture
def workspace(tmp_path):
    """
    Create a repository checkout:

        workspace/
            README.md
            services/api/Dockerfile
            services/api/src/main.py
            services/web/Dockerfile
            services/web/index.html
            docs/guide/intro.md
    """
    root = tmp_path / "workspace"
    (root / "services" / "api" / "src").mkdir(parents=True)
    (root / "services" / "web").mkdir(parents=True)
    (root / "docs" / "guide").mkdir(parents=True)

    (root / "README.md").write_text("# repo")
    (root / "services" / "api" / "Dockerfile").write_text("FROM python:3.12-slim")
    (root / "services" / "api" / "src" / "main.py").write_text("print('api')")
    (root / "services" / "web" / "Dockerfile").write_text("FROM nginx:alpine")
    (root / "services" / "web" / "index.html").write_text("<html></html>")
    (root / "docs" / "guide" / "intro.md").write_text("intro")
    return root


@pytest.fixture
def event_file(tmp_path):
    """Write a push event payload and return its path."""

    def _write(commit_ids):
        path = tmp_path / "event.json"
        payload = {
            "ref": "refs/heads/main",
            "commits": [{"id": sha, "message": "change"} for sha in commit_ids],
        }
        path.write_text(json.dumps(payload))
        return path

    return _write


@pytest.fixture
def mock_runner():
    """Mock CommandRunner that records every invocation."""
    return MagicMock()


@pytest.fixture
def mock_docker_provider():
    """Mock DockerProvider for the privileged helper step."""
    return MagicMock()


@pytest.fixture
def mock_github_api():
    """Mock GitHub API responses."""
    with patch("requests.get") as mock_get:
        mock_get.return_value = MagicMock(
            status_code=200,
            links={},
            json=lambda: {"sha": "abc1234", "files": [{"filename": "services/api/src/main.py"}]},
        )
        yield mock_get


@pytest.fixture
def mock_docker_client():
    """Mock Docker client for testing."""
    client = MagicMock()
    client.ping.return_value = True
    client.containers.run.return_value = b""
    return client
