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
# DOCKER PROVIDER
# -----------------------------------------------------------------------------
# Responsibility: A wrapper around the Docker SDK with connection validation
# and detailed error reporting.
#
# Used for the one step that needs a daemon-level container rather than the
# buildx CLI: registering QEMU binfmt handlers through a privileged helper.
# -----------------------------------------------------------------------------

import docker
from docker import DockerClient
from docker.errors import ContainerError, DockerException, ImageNotFound
from rich.console import Console
from rich.panel import Panel

console = Console()


class DockerProviderError(Exception):
    """Raised when the Docker daemon is unavailable or a helper container fails."""

    pass


class DockerProvider:
    """
    Docker SDK wrapper.

    The connection is opened lazily so runs with nothing to build never
    need a daemon.
    """

    def __init__(self, client: DockerClient | None = None) -> None:
        """
        Args:
            client: Pre-built client (tests); defaults to docker.from_env().
        """
        self._client = client

    def _connect(self) -> DockerClient:
        """
        Establish connection to the Docker daemon.

        Raises:
            DockerProviderError: If the daemon does not answer a ping.
        """
        try:
            client = docker.from_env()
            client.ping()
        except DockerException as e:
            console.print(
                Panel(
                    "[bold red]CRITICAL: Docker Engine Unavailable[/bold red]\n\n"
                    "The runner must provide a Docker daemon (DOCKER_HOST or /var/run/docker.sock).",
                    title="SYSTEM HALT",
                    border_style="red",
                )
            )
            raise DockerProviderError(f"Docker Engine is not available: {e}")

        console.print("[green][DOCKER] Connected to Docker Engine[/green]")
        return client

    def get_client(self) -> DockerClient:
        """Get the Docker client, connecting on first use."""
        if self._client is None:
            self._client = self._connect()
        return self._client

    def run_privileged(self, image: str) -> None:
        """
        Run a helper image to completion with full privileges.

        The container is removed afterwards and its output is echoed.

        Raises:
            DockerProviderError: If the image cannot be pulled or the container fails.
        """
        client = self.get_client()
        console.print(f"[cyan][DOCKER] Running privileged helper: {image}[/cyan]")

        try:
            output = client.containers.run(image, privileged=True, remove=True)
        except ContainerError as e:
            raise DockerProviderError(f"Helper {image} exited with code {e.exit_status}")
        except ImageNotFound:
            raise DockerProviderError(f"Helper image not found: {image}")
        except DockerException as e:
            raise DockerProviderError(f"Helper {image} failed: {e}")

        if output:
            console.print(output.decode(errors="replace").rstrip(), markup=False, highlight=False)
