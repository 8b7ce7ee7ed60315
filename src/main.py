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
# DOCKHAND - ACTION ENTRY POINT
# -----------------------------------------------------------------------------
# Responsibility: Wire the pipeline together for one push event.
#
# Flow:
# 1. Read inputs and runner environment
# 2. Resolve changed files of every pushed commit to Dockerfile directories
# 3. Exit successfully when there is nothing to build
# 4. Login, provision buildx, build each image
#
# Any exception ends the run as a failure with the error message.
# -----------------------------------------------------------------------------

import os
import sys

from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from src.core.orchestrator import BuildOrchestrator
from src.core.resolver import ChangeSetResolver, load_push_event
from src.domain.models import BuildConfiguration, parse_tags
from src.infra import actions
from src.infra.github_client import GitHubClient

console = Console()


def load_config() -> BuildConfiguration:
    """Build the run configuration from action inputs."""
    username = actions.get_input("username")
    # "password" is the input name older workflows use
    secret = actions.get_input("secret") or actions.get_input("password")

    if bool(username) != bool(secret):
        console.print(
            "[yellow][CONFIG] Only one of username/secret supplied - images will not be pushed[/yellow]"
        )

    config = BuildConfiguration(
        platforms=actions.get_input("platforms", required=True),
        tags=parse_tags(actions.get_input("tags")),
        username=username or None,
        secret=secret or None,
    )
    if config.secret:
        actions.add_mask(config.secret)
    return config


def print_plan(plan) -> None:
    """Show the resolved build contexts."""
    table = Table(title="Images to build")
    table.add_column("Image", style="cyan")
    table.add_column("Context")
    for directory, name in plan.items():
        table.add_row(name, str(directory))
    console.print(table)


def run(orchestrator: BuildOrchestrator | None = None) -> int:
    """
    Execute one action run.

    Args:
        orchestrator: Injected orchestrator (tests); built lazily otherwise.

    Returns:
        Process exit code: 0 on success or nothing to build, 1 on failure.
    """
    try:
        token = actions.get_input("token", required=True)
        config = load_config()

        workspace = actions.get_env("GITHUB_WORKSPACE")
        event = load_push_event(actions.get_env("GITHUB_EVENT_PATH"))
        github = GitHubClient(
            token, actions.get_env("GITHUB_REPOSITORY"), api_url=os.getenv("GITHUB_API_URL")
        )

        resolver = ChangeSetResolver(github.get_commit_files, workspace)
        plan = resolver.resolve(event.refs)

        if not plan:
            console.print("No images to build!")
            return 0

        with actions.group("==> Print details"):
            print_plan(plan)

        orchestrator = orchestrator or BuildOrchestrator()
        orchestrator.run(plan, config, actor=actions.get_env("GITHUB_ACTOR"))

        console.print(f"[bold green][DOCKHAND] Built {len(plan)} image(s)[/bold green]")
        return 0

    except Exception as e:
        actions.set_failed(str(e))
        return 1


def main() -> None:
    load_dotenv()
    sys.exit(run())


if __name__ == "__main__":
    main()
