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
# ACTIONS TOOLKIT
# -----------------------------------------------------------------------------
# Responsibility: Talk to the GitHub Actions runner.
#
# - Inputs arrive as INPUT_<NAME> environment variables
# - Workflow commands (::group::, ::error::, ::add-mask::) go to stdout
# -----------------------------------------------------------------------------

import os
from contextlib import contextmanager

from rich.console import Console

console = Console()


class InputError(Exception):
    """Raised when a required input or environment variable is missing."""

    pass


def _command(text: str) -> None:
    # Workflow commands must start a line and must not be wrapped.
    console.out(text, highlight=False)


def get_input(name: str, required: bool = False) -> str:
    """
    Read an action input.

    Args:
        name: Input name as declared in action.yml
        required: Raise InputError when the input is empty

    Returns:
        The whitespace-trimmed value ("" when unset).
    """
    value = os.getenv(f"INPUT_{name.replace(' ', '_').upper()}", "").strip()
    if required and not value:
        raise InputError(f"Input required and not supplied: {name}")
    return value


def get_env(name: str) -> str:
    """Read a runner-provided environment variable that must be present."""
    value = os.getenv(name, "")
    if not value:
        raise InputError(f"Environment variable not set: {name}")
    return value


def add_mask(value: str) -> None:
    """Ask the runner to redact a value from all subsequent log output."""
    if value:
        _command(f"::add-mask::{value}")


@contextmanager
def group(title: str):
    """Fold everything printed inside the block into a collapsible log group."""
    _command(f"::group::{title}")
    try:
        yield
    finally:
        _command("::endgroup::")


def _escape_data(text: str) -> str:
    return text.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def set_failed(message: str) -> None:
    """Report the run as failed with a message."""
    _command(f"::error::{_escape_data(message)}")
