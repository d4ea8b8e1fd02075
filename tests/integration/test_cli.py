"""
Integration tests for the jcb command line.
"""
import os
import shutil
import zipfile
import pytest
from click.testing import CliRunner
from jcb.CLI import main
from jcb.CLI.main import cli
from jcb.RUNNERS.process_runner import ProcessResult


@pytest.fixture
def invoke(monkeypatch):
    """Runs the CLI from `cwd`, with external tools answered by `runner`."""
    def run(args, runner=None, cwd=None):
        if runner is not None:
            monkeypatch.setattr(main, "SubprocessRunner", lambda console: runner)
        if cwd is not None:
            monkeypatch.chdir(cwd)
        return CliRunner().invoke(cli, args)
    return run


def test_cli_help(invoke):
    result = invoke(['--help'])
    assert result.exit_code == 0
    assert 'Usage: jcb' in result.output


def test_cli_no_command_shows_help(invoke, fake_runner, project):
    result = invoke(['--no-push', '-v'], runner=fake_runner, cwd=str(project))
    assert result.exit_code == 0
    assert 'Usage: jcb' in result.output
    assert fake_runner.calls == []


def test_cli_help_needs_no_config(invoke, fake_runner, project):
    result = invoke(['build', 'help'], runner=fake_runner, cwd=str(project))
    assert result.exit_code == 0
    assert fake_runner.calls == []


@pytest.mark.parametrize("command", ["build", "clean", "zip"])
def test_cli_missing_config(invoke, fake_runner, project, command):
    result = invoke([command], runner=fake_runner, cwd=str(project))
    assert result.exit_code == 1
    assert '[error]:' in result.output
    assert fake_runner.calls == []


def test_cli_missing_repository(invoke, fake_runner, write_config):
    project = write_config(IMAGE_TAG="latest")
    result = invoke(['build', '--no-java'], runner=fake_runner, cwd=str(project))
    assert result.exit_code == 1
    assert 'IMAGE_REPOSITORY' in result.output
    assert fake_runner.calls == []


def test_cli_build_without_registry(invoke, fake_runner, write_config):
    project = write_config(IMAGE_REPOSITORY="app", IMAGE_TAG="latest", IMAGE_REGISTRY="")
    result = invoke(['build', '--no-java'], runner=fake_runner, cwd=str(project))
    assert result.exit_code == 0, result.output
    assert fake_runner.commands == [["docker", "build", "-t", "app:latest", "."]]
    assert 'all ok' in result.output


def test_cli_build_and_push(invoke, fake_runner, write_config):
    project = write_config(IMAGE_REPOSITORY="app", IMAGE_REGISTRY="quay.io",
                           IMAGE_NAMESPACE="team", JAVA_PROJECT_DIR="java")
    result = invoke(['build', '--no-cache'], runner=fake_runner, cwd=str(project))
    assert result.exit_code == 0, result.output
    assert fake_runner.commands == [
        ["mvn", "clean", "package"],
        ["docker", "build", "--no-cache", "-t", "quay.io/team/app", "."],
        ["docker", "push", "quay.io/team/app"],
    ]


def test_cli_build_no_push(invoke, fake_runner, write_config):
    project = write_config(IMAGE_REPOSITORY="app", IMAGE_REGISTRY="quay.io")
    result = invoke(['--no-push', 'build', '--no-java'], runner=fake_runner, cwd=str(project))
    assert result.exit_code == 0
    assert not fake_runner.ran("docker", "push")


def test_cli_java_failure_exits(invoke, make_runner, write_config):
    runner = make_runner({("mvn",): ProcessResult(1)})
    project = write_config(IMAGE_REPOSITORY="app", JAVA_PROJECT_DIR="java")
    result = invoke(['build'], runner=runner, cwd=str(project))
    assert result.exit_code == 1
    assert '[error]: java build failed' in result.output
    assert not runner.ran("docker")


def test_cli_dangling_without_config(invoke, fake_runner, tmp_path):
    result = invoke(['dangling'], runner=fake_runner, cwd=str(tmp_path))
    assert result.exit_code == 0
    assert 'no dangling images found' in result.output
    assert fake_runner.commands == [["docker", "images", "-f", "dangling=true", "-q"]]


def test_cli_last_command_wins(invoke, fake_runner, write_config):
    project = write_config(IMAGE_REPOSITORY="app")
    result = invoke(['build', 'clean'], runner=fake_runner, cwd=str(project))
    assert result.exit_code == 0
    assert not fake_runner.ran("docker")


def test_cli_zip_command(invoke, fake_runner, write_config):
    project = write_config(IMAGE_REPOSITORY="app")
    result = invoke(['zip'], runner=fake_runner, cwd=str(project))
    assert result.exit_code == 0
    assert fake_runner.commands == [["zip", "-r", "../proj.zip", ".", "-x", "*.iml"]]


@pytest.mark.skipif(shutil.which("zip") is None, reason="zip not installed")
def test_cli_zip_creates_archive(invoke, write_config):
    project = write_config(IMAGE_REPOSITORY="app")
    (project / "proj.iml").write_text("<module/>")
    (project / "src").mkdir()
    (project / "src" / "Main.java").write_text("class Main {}")
    (project / "entitlements").mkdir()
    (project / "entitlements" / "cert.pem").write_text("secret")

    result = invoke(['zip'], cwd=str(project))
    assert result.exit_code == 0, result.output

    archive = project.parent / "proj.zip"
    assert archive.exists()
    with zipfile.ZipFile(archive) as zf:
        names = zf.namelist()
    assert "Dockerfile" in names
    assert "src/Main.java" in names
    assert "proj.iml" not in names
    assert "entitlements/cert.pem" not in names


def test_cli_clean_removal_failure(invoke, fake_runner, write_config, monkeypatch):
    project = write_config(IMAGE_REPOSITORY="app")
    (project / "entitlements").mkdir()
    (project / "entitlements" / "a.pem").write_text("x")

    def deny(path):
        raise PermissionError(13, "Permission denied", path)
    monkeypatch.setattr(os, "remove", deny)

    result = invoke(['clean'], runner=fake_runner, cwd=str(project))
    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert '[error]: failed to remove entitlements' in result.output
