import logging
from pathlib import Path
from typing import Dict, List, Union

import pytest

from integrity_blame.adapters.integrity.blame_strategy import IntegrityBlameStrategy
from integrity_blame.config import RootDirectoryConfig
from integrity_blame.domain.errors import (
    AuthenticationError,
    ConfigurationError,
    ExecutionError,
    InvalidArgumentError,
)
from integrity_blame.domain.models import (
    CommandInvocation,
    CommandOutcome,
    RepositoryEndpoint,
    WorkingContext,
)
from integrity_blame.ports.runner import CommandRunnerPort
from integrity_blame.services import BlameService, ProjectUrlService

PASSWORD = "p@$$ w0rd\"'!;`x`"

ANNOTATE_OK = (
    "Jun 12, 2013 CEST 9:42:17 AM\t1.1\tjdoe\n"
    "Jun 14, 2013 CEST 1:02:03 PM\t1.2\tasmith\n"
)


class FakeSiRunner(CommandRunnerPort):
    """Answers per sub-command (connect / annotate) and records every call."""

    def __init__(self, responses: Dict[str, Union[CommandOutcome, Exception]]):
        self.responses = responses
        self.calls: List[CommandInvocation] = []

    def subcommands(self) -> List[str]:
        return [c.arguments[0] for c in self.calls]

    def run(self, invocation: CommandInvocation) -> CommandOutcome:
        self.calls.append(invocation)
        response = self.responses[invocation.arguments[0]]
        if isinstance(response, Exception):
            raise response
        return response


def _endpoint(config_path="#/repo/proj") -> RepositoryEndpoint:
    return RepositoryEndpoint("mks.example.com", 7001, "jdoe", PASSWORD, config_path)


def _service(runner: CommandRunnerPort, root: Path) -> BlameService:
    urls = ProjectUrlService(RootDirectoryConfig(root_dir_override=str(root)))
    return BlameService(IntegrityBlameStrategy(runner, urls))


@pytest.mark.parametrize("filename", ["", None])
def test_missing_filename_fails_before_any_process(tmp_path: Path, filename):
    runner = FakeSiRunner({})
    with pytest.raises(InvalidArgumentError):
        _service(runner, tmp_path).execute_blame(
            _endpoint(), WorkingContext(tmp_path), filename
        )
    assert runner.calls == []


def test_successful_blame(tmp_path: Path):
    (tmp_path / "project.pj").write_text("")
    runner = FakeSiRunner(
        {"connect": CommandOutcome(0), "annotate": CommandOutcome(0, ANNOTATE_OK)}
    )
    result = _service(runner, tmp_path).execute_blame(
        _endpoint(), WorkingContext(tmp_path), "main.c"
    )
    assert runner.subcommands() == ["connect", "annotate"]
    assert result.success is True
    assert result.error_message is None
    assert result.provider_message == "Exit Code: 0"
    assert [(e.revision, e.author) for e in result.entries] == [
        ("1.1", "jdoe"),
        ("1.2", "asmith"),
    ]
    assert result.command_line.startswith("si annotate")


def test_connect_failure_raises_and_skips_annotate(tmp_path: Path, caplog):
    runner = FakeSiRunner(
        {
            "connect": CommandOutcome(
                128, "", f"bad credentials for --password={PASSWORD} ({PASSWORD})"
            ),
            "annotate": CommandOutcome(0, ANNOTATE_OK),
        }
    )
    caplog.set_level(logging.DEBUG)
    with pytest.raises(AuthenticationError) as exc:
        _service(runner, tmp_path).execute_blame(
            _endpoint(), WorkingContext(tmp_path), "main.c"
        )
    assert runner.subcommands() == ["connect"]
    assert exc.value.exit_code == 128
    assert "128" in str(exc.value)
    assert PASSWORD not in str(exc.value)
    assert PASSWORD not in exc.value.output
    assert PASSWORD not in caplog.text
    assert "--password=" in caplog.text


def test_connect_process_error_is_escalated(tmp_path: Path):
    runner = FakeSiRunner({"connect": ExecutionError("si: command not found")})
    with pytest.raises(AuthenticationError, match="command not found"):
        _service(runner, tmp_path).execute_blame(
            _endpoint(), WorkingContext(tmp_path), "main.c"
        )


def test_annotate_process_error_returns_failed_result(tmp_path: Path):
    (tmp_path / "project.pj").write_text("")
    runner = FakeSiRunner(
        {
            "connect": CommandOutcome(0),
            "annotate": ExecutionError("No such file", command_line="si annotate x"),
        }
    )
    result = _service(runner, tmp_path).execute_blame(
        _endpoint(), WorkingContext(tmp_path), "main.c"
    )
    assert result.success is False
    assert result.entries == ()
    assert result.error_message == "No such file"
    assert result.command_line == "si annotate x"


def test_annotate_nonzero_exit_is_a_failed_result_not_an_error(tmp_path: Path):
    (tmp_path / "project.pj").write_text("")
    runner = FakeSiRunner(
        {
            "connect": CommandOutcome(0),
            "annotate": CommandOutcome(1, "", "file is not a member\n"),
        }
    )
    result = _service(runner, tmp_path).execute_blame(
        _endpoint(), WorkingContext(tmp_path), "main.c"
    )
    assert result.success is False
    assert result.entries == ()
    assert result.provider_message == "Exit Code: 1"
    assert result.error_message == "file is not a member"


def test_project_file_present_means_no_project_argument(tmp_path: Path):
    (tmp_path / "project.pj").write_text("")
    runner = FakeSiRunner(
        {"connect": CommandOutcome(0), "annotate": CommandOutcome(0, ANNOTATE_OK)}
    )
    _service(runner, tmp_path).execute_blame(
        _endpoint(), WorkingContext(tmp_path), "main.c"
    )
    annotate = runner.calls[1]
    assert not [a for a in annotate.arguments if a.startswith("--project=")]


def test_project_file_absent_adds_exactly_one_resolved_project(tmp_path: Path):
    base = tmp_path / "module" / "src"
    base.mkdir(parents=True)
    runner = FakeSiRunner(
        {"connect": CommandOutcome(0), "annotate": CommandOutcome(0, ANNOTATE_OK)}
    )
    _service(runner, tmp_path).execute_blame(
        _endpoint(), WorkingContext(base), "main.c"
    )
    projects = [a for a in runner.calls[1].arguments if a.startswith("--project=")]
    expected = ProjectUrlService(
        RootDirectoryConfig(root_dir_override=str(tmp_path))
    ).resolve_project_url(base, "#/repo/proj")
    assert projects == [f"--project={expected}"]
    assert expected == "#/repo/proj/module/src"


def test_configuration_error_propagates(tmp_path: Path):
    outside = tmp_path / "outside"
    outside.mkdir()
    runner = FakeSiRunner({"connect": CommandOutcome(0)})
    with pytest.raises(ConfigurationError):
        _service(runner, tmp_path / "root").execute_blame(
            _endpoint(), WorkingContext(outside), "main.c"
        )
    assert runner.subcommands() == ["connect"]
