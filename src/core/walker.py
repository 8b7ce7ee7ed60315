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
# THE WALKER - BUILD CONTEXT RESOLUTION
# -----------------------------------------------------------------------------
# Responsibility: Map a changed file to the nearest ancestor directory that
# holds a Dockerfile, never climbing above the workspace root.
#
# The walk is a pure function of (changed file, root). Directories are listed
# through explicit paths; the process working directory is never touched.
# -----------------------------------------------------------------------------

import os
from pathlib import Path

BUILD_DESCRIPTOR = "Dockerfile"


class ResolutionError(Exception):
    """Raised when a directory on the walk cannot be listed."""

    def __init__(self, message: str, directory: Path | None = None) -> None:
        super().__init__(message)
        self.directory = directory


def _is_within(path: Path, root: Path) -> bool:
    return path == root or root in path.parents


def find_build_context(changed_file: str | Path, root: str | Path) -> Path | None:
    """
    Find the build context for a changed file.

    Starts at the file's parent directory and climbs one level at a time.
    The descriptor check runs before the root check, so the root itself
    is still inspected on the iteration that reaches it.

    Args:
        changed_file: Path of the changed file, relative to root.
        root: Absolute workspace root; the walk never goes above it.

    Returns:
        The directory containing the Dockerfile, or None if there is none
        between the file and the root.

    Raises:
        ResolutionError: If a directory on the walk cannot be listed.
    """
    root = Path(os.path.abspath(root))
    current = Path(os.path.abspath(root / changed_file)).parent

    if not _is_within(current, root):
        return None

    while True:
        try:
            entries = os.listdir(current)
        except OSError as e:
            raise ResolutionError(f"Cannot list directory {current}: {e}", directory=current)

        if BUILD_DESCRIPTOR in entries:
            return current

        if current == root:
            return None

        current = current.parent
