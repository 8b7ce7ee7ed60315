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
# THE ORCHESTRATOR - MULTI-PLATFORM BUILDS
# -----------------------------------------------------------------------------
# Responsibility: Drive docker buildx over a resolved build plan.
#
# Sequence (strict, any failure aborts the rest):
# 1. Registry login (only when username AND secret are configured)
# 2. Emulation + builder provisioning (binfmt helper, buildx builder)
# 3. One build per plan entry, in plan order, pushing iff logged in
#
# Pushed images are not rolled back when a later step fails.
# -----------------------------------------------------------------------------

from pathlib import Path

from rich.console import Console

from src.domain.models import BuildConfiguration, image_tags
from src.infra import actions
from src.infra.command_runner import CommandRunner
from src.infra.docker_client import DockerProvider

console = Console()

DOCKER = "docker"
BINFMT_IMAGE = "linuxkit/binfmt:v0.8"
BUILDER_NAME = "builder"


class BuildOrchestrator:
    """
    Runs the login, provisioning and build steps for one plan.

    Collaborators are injected: the CLI runner for docker/buildx commands
    and the Docker provider for the privileged emulation helper.
    """

    def __init__(
        self, runner: CommandRunner | None = None, docker: DockerProvider | None = None
    ) -> None:
        self._runner = runner or CommandRunner()
        self._docker = docker or DockerProvider()

    def run(self, plan: dict[Path, str], config: BuildConfiguration, actor: str) -> None:
        """
        Build (and optionally push) every image in the plan.

        Args:
            plan: Build context directory -> image name, in build order
            config: Platforms, tags and optional registry credentials
            actor: Default image owner when no username is configured
        """
        if config.has_credentials:
            self.login(config.username, config.secret)

        self.prepare_builder()

        owner = config.owner(actor)
        for directory, name in plan.items():
            self.build(directory, name, owner, config)

    def login(self, username: str, secret: str) -> None:
        """Log in to the registry, passing the secret on stdin."""
        with actions.group("==> Login to registry"):
            self._runner.run(DOCKER, ["login", "--username", username, "--password-stdin"], stdin=secret)
            console.print(f"[green][REGISTRY] Logged in as {username}[/green]")

    def prepare_builder(self) -> None:
        """Register binfmt handlers and bootstrap the multi-platform builder."""
        with actions.group("==> Prepare buildx"):
            self._docker.run_privileged(BINFMT_IMAGE)
            self._runner.run(DOCKER, ["buildx", "create", "--use", "--name", BUILDER_NAME])
            self._runner.run(DOCKER, ["buildx", "inspect", "--bootstrap", BUILDER_NAME])

    def build(self, directory: Path, name: str, owner: str, config: BuildConfiguration) -> None:
        """Build one image for all configured platforms and tags."""
        args = ["buildx", "build"]
        if config.has_credentials:
            args.append("--push")
        args += ["--platform", config.platforms]
        for tag in image_tags(owner, name, config.tags):
            args += ["-t", tag]
        args.append(str(directory))

        with actions.group(f"==> Build '{name}' image"):
            self._runner.run(DOCKER, args)
            console.print(f"[green][BUILD] {name} complete[/green]")
