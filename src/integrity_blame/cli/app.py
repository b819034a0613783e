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

import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer

from ..adapters.integrity.blame_strategy import IntegrityBlameStrategy
from ..adapters.process.subprocess_runner import SubprocessRunner
from ..config import RootDirectoryConfig
from ..domain.errors import IntegrityBlameError
from ..domain.models import RepositoryEndpoint, WorkingContext
from ..ports.blame import BlameStrategyPort
from ..services import BlameReportService, BlameService, ProjectUrlService
from ..services.report_service import FORMATS

from ..logging_config import setup_logging

setup_logging()

app = typer.Typer(help="integrity-blame CLI - per-line blame for PTC Integrity files")

PROVIDERS: set[str] = {"integrity"}

logger = logging.getLogger(__name__)


def _parse_provider(provider: str) -> str:
    """
    Normalise and validate the --provider value.
    Raises Typer BadParameter for unknown providers.
    """
    name = (provider or "").strip().lower()
    if name not in PROVIDERS:
        raise typer.BadParameter(
            f"Unknown provider: {provider}. Valid options: {', '.join(sorted(PROVIDERS))}"
        )
    return name


def _parse_fmt(fmt: str) -> str:
    name = (fmt or "json").strip().lower()
    if name not in FORMATS:
        raise typer.BadParameter(
            f"Unknown format: {fmt}. Valid options: {', '.join(FORMATS)}"
        )
    return name


def _wire(
    provider: str = "integrity", timeout: Optional[float] = None
) -> tuple[BlameService, ProjectUrlService]:
    """
    Minimal composition root:
      SubprocessRunner + ProjectUrlService + IntegrityBlameStrategy -> BlameService
    """
    _parse_provider(provider)
    project_urls = ProjectUrlService(RootDirectoryConfig.from_environ())
    strategy: BlameStrategyPort = IntegrityBlameStrategy(
        SubprocessRunner(timeout=timeout), project_urls
    )
    return BlameService(strategy), project_urls


def _fail(e: IntegrityBlameError) -> NoReturn:
    typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=2)


@app.command()
def blame(
    filename: str = typer.Argument(..., help="File to blame, relative to --dir"),
    directory: Path = typer.Option(
        Path("."),
        "--dir",
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
        help="Working directory (sandbox directory holding the file)",
    ),
    host: str = typer.Option(..., "--host", help="Integrity server hostname"),
    port: int = typer.Option(7001, "--port", help="Integrity server port"),
    user: str = typer.Option(..., "--user", help="Integrity user"),
    password: str = typer.Option(
        ...,
        "--password",
        envvar="INTEGRITY_PASSWORD",
        prompt=True,
        hide_input=True,
        help="Integrity password (or set INTEGRITY_PASSWORD)",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config-path",
        help="Project configuration path, used when the directory has no project.pj",
    ),
    provider: str = typer.Option("integrity", "--provider", help="SCM provider"),
    fmt: str = typer.Option("json", "--fmt", help="Output format: json, ndjson, csv"),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "--output",
        help="Write the result to this path instead of stdout.",
        resolve_path=True,
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for each si process. Omit to wait indefinitely.",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose logging"),
):
    """
    Connect to the Integrity server and print per-line revision, author and date.
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Verbose logging enabled")

    fmt = _parse_fmt(fmt)
    service, _ = _wire(provider, timeout=timeout)
    endpoint = RepositoryEndpoint(
        host=host, port=port, user=user, password=password, config_path=config_path
    )

    try:
        result = service.execute_blame(endpoint, WorkingContext(directory), filename)
    except IntegrityBlameError as e:
        _fail(e)

    report = BlameReportService()
    if out is None:
        text = report.render(result, fmt)
        typer.echo(text, nl=not text.endswith("\n"))
    else:
        written = report.write(result, Path(out), fmt=fmt)
        typer.echo(f"Wrote {fmt} blame for {filename} to {written}")

    if not result.success:
        typer.secho(
            f"Blame failed: {result.error_message or result.provider_message}",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=1)


@app.command("project-url")
def project_url(
    directory: Path = typer.Option(
        Path("."),
        "--dir",
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
        help="Working directory",
    ),
    config_path: Optional[str] = typer.Option(
        None, "--config-path", help="Project configuration path"
    ),
):
    """
    Print the project identifier computed for a directory without project.pj.
    """
    _, project_urls = _wire()
    try:
        typer.echo(project_urls.resolve_project_url(directory, config_path))
    except IntegrityBlameError as e:
        _fail(e)


def main() -> None:
    app()
