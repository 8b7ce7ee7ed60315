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
# THE RESOLVER - CHANGE SET TO BUILD PLAN
# -----------------------------------------------------------------------------
# Responsibility: Turn the commits of a push event into a build plan, an
# insertion-ordered mapping of build context directory -> image name.
#
# Ordering:
# - Commits are processed in event order
# - Files are processed in the order the commit API returns them
# - A directory keeps the position of its first resolution
# -----------------------------------------------------------------------------

import json
from collections.abc import Callable, Iterable
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console

from src.core.walker import ResolutionError, find_build_context
from src.domain.models import PushEvent

console = Console()


def load_push_event(event_path: str | Path) -> PushEvent:
    """
    Read and validate the push event payload.

    Raises:
        ResolutionError: If the file is unreadable or not a valid push event.
    """
    try:
        with open(event_path, encoding="utf-8") as f:
            payload = json.load(f)
        return PushEvent.model_validate(payload)
    except OSError as e:
        raise ResolutionError(f"Cannot read event payload {event_path}: {e}")
    except json.JSONDecodeError as e:
        raise ResolutionError(f"Event payload is not valid JSON: {e}")
    except ValidationError as e:
        raise ResolutionError(f"Malformed push event: {e}")


class ChangeSetResolver:
    """
    Resolves changed files of a set of commits to buildable units.

    The file source is injected so the resolver can run without network
    access: anything that maps a commit reference to a list of paths works.
    """

    def __init__(self, fetch_files: Callable[[str], list[str]], root: str | Path) -> None:
        """
        Args:
            fetch_files: Returns the changed file paths for a commit reference.
            root: Workspace root, the upper bound of every walk.
        """
        self._fetch_files = fetch_files
        self._root = Path(root)

    def resolve(self, commit_refs: Iterable[str]) -> dict[Path, str]:
        """
        Build the plan for the given commits.

        Files with no Dockerfile between them and the root are skipped.
        Every file is walked, even when an earlier file already resolved
        to the same directory.

        Returns:
            Mapping of build context directory -> image name (directory base
            name). Empty when nothing needs building.
        """
        plan: dict[Path, str] = {}

        for ref in commit_refs:
            files = self._fetch_files(ref)
            console.print(f"[cyan][RESOLVER] Commit {ref[:7]}: {len(files)} changed file(s)[/cyan]")

            for changed_file in files:
                directory = find_build_context(changed_file, self._root)
                if directory is not None and directory not in plan:
                    plan[directory] = directory.name

        return plan
