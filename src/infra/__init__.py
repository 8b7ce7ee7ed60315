# -----------------------------------------------------------------------------
# INFRASTRUCTURE LAYER
# -----------------------------------------------------------------------------
# Contains low-level infrastructure wrappers:
# - actions: GitHub Actions inputs, log groups and failure reporting
# - CommandRunner: Synchronous CLI execution (docker, buildx)
# - DockerProvider: Docker SDK wrapper for privileged helper containers
# - GitHubClient: Commit metadata from the GitHub REST API
# -----------------------------------------------------------------------------

from .command_runner import CommandError, CommandRunner
from .docker_client import DockerProvider, DockerProviderError
from .github_client import CommitFetchError, GitHubClient

__all__ = [
    "CommandError", "CommandRunner",
    "DockerProvider", "DockerProviderError",
    "CommitFetchError", "GitHubClient",
]
