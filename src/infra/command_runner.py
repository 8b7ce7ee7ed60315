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
# COMMAND RUNNER
# -----------------------------------------------------------------------------
# Responsibility: Run external CLI tools (docker, docker buildx) synchronously.
#
# Output is not captured: it streams straight into the CI log so long builds
# stay visible. Sensitive values are passed on stdin, never in argv.
# -----------------------------------------------------------------------------

import shlex
import subprocess

from rich.console import Console
from rich.markup import escape

console = Console()


class CommandError(Exception):
    """Raised when an external command cannot start or exits non-zero."""

    def __init__(self, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode


class CommandRunner:
    """
    Thin subprocess wrapper used for every external tool invocation.

    Why a class: the orchestrator receives it as a collaborator, so tests
    can swap in a mock and assert on the exact argument lists.
    """

    def run(self, name: str, args: list[str], stdin: str | None = None) -> None:
        """
        Run a command and wait for it to finish.

        Args:
            name: Executable name (e.g., "docker")
            args: Arguments, one list item per argument (no shell parsing)
            stdin: Optional text fed to the process on standard input

        Raises:
            CommandError: If the executable is missing or exits non-zero.
        """
        cmd = [name, *args]
        console.print(f"[dim][EXEC] {escape(shlex.join(cmd))}[/dim]")

        try:
            result = subprocess.run(cmd, input=stdin, text=True, check=False)
        except FileNotFoundError:
            raise CommandError(f"Executable not found: {name}")
        except subprocess.SubprocessError as e:
            raise CommandError(f"{name} subprocess error: {e}")

        if result.returncode != 0:
            raise CommandError(
                f"The process '{' '.join(cmd[:2])}' failed with exit code {result.returncode}",
                returncode=result.returncode,
            )
