# =============================================================================
# DOCKHAND ORCHESTRATOR TESTS
# =============================================================================
# Tests for login, buildx provisioning and per-image builds.
# =============================================================================

from pathlib import Path
from unittest.mock import MagicMock, call

import pytest

from src.core.orchestrator import BINFMT_IMAGE, BuildOrchestrator
from src.domain.models import BuildConfiguration
from src.infra.command_runner import CommandError


@pytest.fixture
def orchestrator(mock_runner, mock_docker_provider):
    return BuildOrchestrator(runner=mock_runner, docker=mock_docker_provider)


@pytest.fixture
def plan():
    return {Path("/ws/services/api"): "api", Path("/ws/services/web"): "web"}


def build_calls(runner):
    """Argument lists of every 'docker buildx build' invocation."""
    return [c.args[1] for c in runner.run.call_args_list if c.args[1][:2] == ["buildx", "build"]]


class TestLogin:
    """Test registry login."""

    def test_login_with_credentials_uses_stdin(self, orchestrator, mock_runner, plan):
        config = BuildConfiguration(platforms="linux/amd64", username="alice", secret="s3cr3t")
        orchestrator.run(plan, config, actor="bot")

        first = mock_runner.run.call_args_list[0]
        assert first == call("docker", ["login", "--username", "alice", "--password-stdin"], stdin="s3cr3t")

    def test_secret_never_in_arguments(self, orchestrator, mock_runner, plan):
        config = BuildConfiguration(platforms="linux/amd64", username="alice", secret="s3cr3t")
        orchestrator.run(plan, config, actor="bot")

        for c in mock_runner.run.call_args_list:
            assert "s3cr3t" not in c.args[1]

    def test_no_login_without_credentials(self, orchestrator, mock_runner, plan):
        orchestrator.run(plan, BuildConfiguration(platforms="linux/amd64"), actor="bot")
        assert all(c.args[1][0] != "login" for c in mock_runner.run.call_args_list)

    def test_no_login_with_username_only(self, orchestrator, mock_runner, plan):
        config = BuildConfiguration(platforms="linux/amd64", username="alice")
        orchestrator.run(plan, config, actor="bot")
        assert all(c.args[1][0] != "login" for c in mock_runner.run.call_args_list)


class TestPrepareBuilder:
    """Test emulation and builder provisioning."""

    def test_provisioning_sequence(self, orchestrator, mock_runner, mock_docker_provider):
        orchestrator.prepare_builder()

        mock_docker_provider.run_privileged.assert_called_once_with(BINFMT_IMAGE)
        assert mock_runner.run.call_args_list == [
            call("docker", ["buildx", "create", "--use", "--name", "builder"]),
            call("docker", ["buildx", "inspect", "--bootstrap", "builder"]),
        ]

    def test_provisioning_runs_before_builds(self, mock_runner, plan):
        events = []
        docker = MagicMock()
        docker.run_privileged.side_effect = lambda image: events.append("binfmt")
        mock_runner.run.side_effect = lambda name, args, stdin=None: events.append(args[1])

        BuildOrchestrator(runner=mock_runner, docker=docker).run(
            plan, BuildConfiguration(platforms="linux/amd64"), actor="bot"
        )
        assert events == ["binfmt", "create", "inspect", "build", "build"]

    def test_builder_failure_aborts_builds(self, orchestrator, mock_runner, plan):
        mock_runner.run.side_effect = CommandError("buildx create failed", returncode=1)

        with pytest.raises(CommandError):
            orchestrator.run(plan, BuildConfiguration(platforms="linux/amd64"), actor="bot")
        assert build_calls(mock_runner) == []


class TestBuild:
    """Test per-image builds."""

    def test_push_flag_with_credentials(self, orchestrator, mock_runner, plan):
        config = BuildConfiguration(platforms="linux/amd64", username="alice", secret="s3cr3t")
        orchestrator.run(plan, config, actor="bot")

        builds = build_calls(mock_runner)
        assert len(builds) == 2
        assert all("--push" in args for args in builds)

    def test_no_push_flag_without_credentials(self, orchestrator, mock_runner, plan):
        orchestrator.run(plan, BuildConfiguration(platforms="linux/amd64"), actor="bot")

        builds = build_calls(mock_runner)
        assert len(builds) == 2
        assert all("--push" not in args for args in builds)

    def test_build_arguments(self, orchestrator, mock_runner):
        config = BuildConfiguration(
            platforms="linux/amd64,linux/arm64", tags="a,b", username="alice", secret="s3cr3t"
        )
        orchestrator.run({Path("/ws/svc"): "svc"}, config, actor="bot")

        assert build_calls(mock_runner) == [
            [
                "buildx", "build", "--push",
                "--platform", "linux/amd64,linux/arm64",
                "-t", "alice/svc:a",
                "-t", "alice/svc:b",
                "/ws/svc",
            ]
        ]

    def test_actor_owns_images_without_username(self, orchestrator, mock_runner):
        config = BuildConfiguration(platforms="linux/amd64", tags="a,b")
        orchestrator.run({Path("/ws/svc"): "svc"}, config, actor="bot")

        args = build_calls(mock_runner)[0]
        tags = {args[i + 1] for i, arg in enumerate(args) if arg == "-t"}
        assert tags == {"bot/svc:a", "bot/svc:b"}

    def test_builds_follow_plan_order(self, orchestrator, mock_runner, plan):
        orchestrator.run(plan, BuildConfiguration(platforms="linux/amd64"), actor="bot")
        assert [args[-1] for args in build_calls(mock_runner)] == ["/ws/services/api", "/ws/services/web"]

    def test_failed_build_stops_remaining_builds(self, mock_runner, mock_docker_provider, plan):
        def fail_first_build(name, args, stdin=None):
            if args[:2] == ["buildx", "build"]:
                raise CommandError("build failed", returncode=1)

        mock_runner.run.side_effect = fail_first_build
        orchestrator = BuildOrchestrator(runner=mock_runner, docker=mock_docker_provider)

        with pytest.raises(CommandError):
            orchestrator.run(plan, BuildConfiguration(platforms="linux/amd64"), actor="bot")
        assert len(build_calls(mock_runner)) == 1

    def test_output_grouped_per_image(self, orchestrator, mock_runner, capsys):
        orchestrator.build(Path("/ws/svc"), "svc", "bot", BuildConfiguration(platforms="linux/amd64"))

        out = capsys.readouterr().out
        assert "::group::==> Build 'svc' image" in out
        assert "::endgroup::" in out
