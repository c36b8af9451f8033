import pytest
from click.testing import CliRunner

from gitcommitcheck.cli import main
from gitcommitcheck.config import DEFAULT_CONFIG_FILENAME


@pytest.fixture
def runner():
    return CliRunner()


def test_issues_exit_one(runner, temp_git_repo):
    result = runner.invoke(main, ["--path", str(temp_git_repo), "--no-config"])
    assert result.exit_code == 1
    assert "WIP: tmp" in result.output


def test_passing_run_exits_zero(runner, temp_git_repo):
    result = runner.invoke(
        main, ["--path", str(temp_git_repo), "--no-config", "--ignore", "wip"]
    )
    assert result.exit_code == 0


def test_strict_flag(runner, temp_git_repo):
    result = runner.invoke(
        main, ["--path", str(temp_git_repo), "--no-config", "--ignore", "wip", "--strict"]
    )
    assert result.exit_code == 1


def test_comma_separated_and_repeated_names(runner, temp_git_repo):
    result = runner.invoke(main, [
        "--path", str(temp_git_repo), "--no-config",
        "--disable", "wip,short", "--disable", "ref", "--strict",
    ])
    # only the InvalidFormat info finding remains
    assert result.exit_code == 0


def test_quiet_passing_run_is_silent(runner, make_repo):
    repo_dir = make_repo(["feat(parser): handle empty input gracefully #42"])
    result = runner.invoke(main, ["-p", str(repo_dir), "--no-config", "-q"])
    assert result.exit_code == 0
    assert result.output == ""


def test_threshold_option(runner, make_repo):
    repo_dir = make_repo(["feat(parser): handle empty input #42"])
    result = runner.invoke(
        main, ["-p", str(repo_dir), "--no-config", "-t", "100", "--strict"]
    )
    assert result.exit_code == 1
    assert "threshold: 100 chars" in result.output


def test_unknown_alias_exits_two(runner, temp_git_repo):
    result = runner.invoke(
        main, ["--path", str(temp_git_repo), "--no-config", "--error", "typo"]
    )
    assert result.exit_code == 2
    assert "invalid validation name" in result.output


def test_invalid_config_file_exits_two(runner, temp_git_repo):
    (temp_git_repo / DEFAULT_CONFIG_FILENAME).write_text("threshold = \n")
    result = runner.invoke(main, ["--path", str(temp_git_repo)])
    assert result.exit_code == 2


def test_not_a_repository_exits_three(runner, tmp_path):
    result = runner.invoke(main, ["--path", str(tmp_path), "--no-config"])
    assert result.exit_code == 3
    assert "is not a git repository" in result.output


def test_missing_path_exits_three(runner, tmp_path):
    result = runner.invoke(main, ["--path", str(tmp_path / "missing"), "--no-config"])
    assert result.exit_code == 3


def test_config_list(runner, temp_git_repo):
    result = runner.invoke(main, [
        "--path", str(temp_git_repo), "--no-config", "--config-list", "--warn", "wip",
    ])
    assert result.exit_code == 0
    assert "Current Configuration Settings" in result.output
    assert "ShortCommit" in result.output
    assert "WipCommit" in result.output


def test_init_config(runner, tmp_path):
    result = runner.invoke(main, ["--path", str(tmp_path), "--init-config"])
    assert result.exit_code == 0
    config_file = tmp_path / DEFAULT_CONFIG_FILENAME
    assert config_file.exists()
    assert "threshold = 30" in config_file.read_text()

    result = runner.invoke(main, ["--path", str(tmp_path), "--init-config"])
    assert result.exit_code == 0
    assert "already exists" in result.output


def test_verbose_logs_each_commit(runner, temp_git_repo):
    result = runner.invoke(main, ["--path", str(temp_git_repo), "--no-config", "-v"])
    assert result.output.count("Checked ") == 2


def test_version(runner):
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "git-commit-check" in result.output


def test_runs_without_path_from_subdirectory(runner, temp_git_repo, monkeypatch):
    subdir = temp_git_repo / "src"
    subdir.mkdir()
    monkeypatch.chdir(subdir)

    result = runner.invoke(main, ["--no-config"])
    assert result.exit_code == 1
    assert "WIP: tmp" in result.output


def test_string_threshold_in_config_exits_two(runner, temp_git_repo):
    (temp_git_repo / DEFAULT_CONFIG_FILENAME).write_text('threshold = "30"\n')
    result = runner.invoke(main, ["--path", str(temp_git_repo)])
    assert result.exit_code == 2
    assert "threshold" in result.output
