# Copyright 2026 Pramod Kumar Voola
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


# -----------------------------------------------------------------------------
# GITHUB INFRASTRUCTURE - Commit Metadata
# -----------------------------------------------------------------------------
# Responsibility: Fetch the list of files changed by a commit through the
# GitHub REST API.
#
# Features:
# - Follows paginated file lists (Link: rel="next")
# - Honours GITHUB_API_URL for GitHub Enterprise Server
#
# Security:
# - The token is sent only in the Authorization header
# - Tokens are NEVER included in error messages
# -----------------------------------------------------------------------------

import requests
from rich.console import Console

console = Console()

# GitHub API configuration
GITHUB_API_URL = "https://api.github.com"
REQUEST_TIMEOUT_SECONDS = 30


class CommitFetchError(Exception):
    """Raised when the changed files of a commit cannot be fetched."""

    pass


class GitHubClient:
    """
    Minimal GitHub REST client for commit lookups.

    Only the endpoint the pipeline needs is implemented:
    GET /repos/{owner}/{repo}/commits/{ref}
    """

    def __init__(self, token: str, repository: str, api_url: str | None = None) -> None:
        """
        Args:
            token: GitHub token with read access to the repository
            repository: "owner/repo" of the repository that was pushed to
            api_url: API base URL (default: public GitHub)
        """
        if "/" not in repository:
            raise CommitFetchError(f"Repository must be in 'owner/repo' form, got: {repository!r}")

        self._token = token
        self._repository = repository
        self._api_url = (api_url or GITHUB_API_URL).rstrip("/")

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def get_commit_files(self, ref: str) -> list[str]:
        """
        Get the paths changed by a commit, in API order.

        Args:
            ref: Commit SHA (or any ref the API accepts)

        Returns:
            File paths relative to the repository root.

        Raises:
            CommitFetchError: If any page of the lookup fails.
        """
        url: str | None = f"{self._api_url}/repos/{self._repository}/commits/{ref}"
        files: list[str] = []

        while url:
            try:
                response = requests.get(url, headers=self._headers(), timeout=REQUEST_TIMEOUT_SECONDS)
            except requests.RequestException as e:
                raise CommitFetchError(f"GitHub API request failed: {e}")

            if response.status_code == 200:
                data = response.json()
                files.extend(entry["filename"] for entry in data.get("files", []))
                url = response.links.get("next", {}).get("url")

            elif response.status_code == 401:
                raise CommitFetchError("Invalid GitHub token")

            elif response.status_code == 404:
                raise CommitFetchError(f"Commit not found: {self._repository}@{ref}")

            elif response.status_code == 422:
                raise CommitFetchError(f"Invalid commit reference: {ref}")

            else:
                raise CommitFetchError(f"GitHub API error {response.status_code}: {response.text}")

        return files
