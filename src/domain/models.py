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
# DOMAIN MODELS - BUILD CONFIGURATION & PUSH EVENTS
# -----------------------------------------------------------------------------
# These Pydantic models define the contract between the CI environment and
# the build pipeline. Inputs are validated once at startup; nothing here is
# mutated for the rest of the run.
# -----------------------------------------------------------------------------

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_TAG = "latest"


def parse_tags(value: str | None) -> list[str]:
    """
    Split a comma-separated tag string into tag names.

    Whitespace around each tag is stripped and empty entries are dropped.
    A missing or blank value yields the default tag.
    """
    if value is None or not value.strip():
        return [DEFAULT_TAG]
    return [tag.strip() for tag in value.split(",") if tag.strip()]


def image_tags(owner: str, name: str, tags: list[str]) -> list[str]:
    """
    Build the full image references for one buildable unit.

    Example:
        image_tags("alice", "svc", ["a", "b"]) -> ["alice/svc:a", "alice/svc:b"]
    """
    return [f"{owner}/{name}:{tag}" for tag in tags]


class BuildConfiguration(BaseModel):
    """
    Immutable configuration for one run.

    Fields:
    - platforms: Opaque platform list forwarded verbatim to buildx
    - tags: Tag names applied to every image (default: ["latest"])
    - username / secret: Registry credentials; builds push only when both are set
    """

    platforms: str = Field(..., min_length=1, description="e.g. 'linux/amd64,linux/arm64'")
    tags: list[str] = Field(default_factory=lambda: [DEFAULT_TAG], min_length=1)
    username: str | None = Field(default=None, description="Registry user and image owner")
    secret: str | None = Field(default=None, repr=False, description="Registry password or token")

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @field_validator("tags", mode="before")
    @classmethod
    def _split_tags(cls, value):
        if isinstance(value, str):
            return parse_tags(value)
        return value

    @field_validator("username", "secret", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def has_credentials(self) -> bool:
        """True only when both username and secret were supplied."""
        return bool(self.username and self.secret)

    def owner(self, actor: str) -> str:
        """Image owner: the configured username, else the triggering actor."""
        return self.username or actor


class EventCommit(BaseModel):
    """A single commit entry from the push event payload."""

    id: str = Field(..., min_length=1, description="Commit SHA used to fetch changed files")


class PushEvent(BaseModel):
    """
    The subset of a push event payload the pipeline reads.

    Unknown keys in the payload are ignored. A payload without a commits
    list (e.g. from a non-push trigger) is rejected.
    """

    commits: list[EventCommit] = Field(..., description="Pushed commits, oldest first")

    @property
    def refs(self) -> list[str]:
        """Commit references in event order."""
        return [commit.id for commit in self.commits]
