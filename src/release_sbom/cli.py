"""Command-line interface for release_sbom.

Provides the main entry point and subcommands for describing a GitHub
release as an SPDX document and for analyzing local sources.
"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from release_sbom.exceptions import SbomError
from release_sbom.pipeline import describe_release
from release_sbom.reporters import TagValueReporter
from release_sbom.sources import analyze_local

app = typer.Typer(
    name="release-sbom",
    help="SPDX bill of materials for releases, cross-checked across git, tarball and zipball.",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)

# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger("release_sbom")


def _setup_logging(verbose: bool) -> None:
    """Configure logging level based on verbosity flag."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.getLogger("release_sbom").setLevel(level)


@app.command()
def describe(
    owner: Annotated[str, typer.Argument(help="Repository owner")],
    repo: Annotated[str, typer.Argument(help="Repository name")],
    tag: Annotated[str, typer.Argument(help="Release tag")],
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Output file path (stdout if omitted)",
        ),
    ] = None,
    github_token: Annotated[
        Optional[str],
        typer.Option(
            "--github-token",
            envvar="GITHUB_TOKEN",
            help="GitHub API token for higher rate limits",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output",
        ),
    ] = False,
) -> None:
    """Generate an SPDX document for a GitHub release.

    Analyzes the git checkout, tarball and zipball of the release and fails
    if they do not contain the same files.
    """
    _setup_logging(verbose)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=err_console,
        transient=True,
    ) as progress:
        progress.add_task(f"Analyzing {owner}/{repo} {tag}...", total=None)
        try:
            document = asyncio.run(
                describe_release(owner, repo, tag, github_token=github_token)
            )
        except (SbomError, OSError) as e:
            err_console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(code=1)

    reporter = TagValueReporter()
    if output is None:
        typer.echo(reporter.render(document), nl=False)
        raise typer.Exit(code=0)

    try:
        reporter.write(document, output)
    except OSError as e:
        err_console.print(f"[red]Error writing output:[/red] {e}")
        raise typer.Exit(code=1)

    console.print(
        f"[green]Generated:[/green] {output} "
        f"({len(document.files)} files, {len(document.packages)} packages)"
    )


@app.command()
def analyze(
    path: Annotated[
        Path,
        typer.Argument(
            help="Directory, .tar.gz or .zip file to analyze",
            exists=True,
            readable=True,
        ),
    ],
    ignore: Annotated[
        Optional[list[str]],
        typer.Option(
            "--ignore",
            "-i",
            help="Relative path to skip (repeatable)",
        ),
    ] = None,
    strip_components: Annotated[
        int,
        typer.Option(
            "--strip-components",
            help="Leading directories to strip from archive members",
        ),
    ] = 0,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output",
        ),
    ] = False,
) -> None:
    """Analyze a local source and list checksums and declared licenses."""
    _setup_logging(verbose)

    try:
        results = analyze_local(
            path, ignores=tuple(ignore or ()), strip_components=strip_components
        )
    except (SbomError, ValueError) as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    table = Table(title=str(path))
    table.add_column("Path")
    table.add_column("SHA1")
    table.add_column("License")
    for file_path in sorted(results):
        result = results[file_path]
        license_text = str(result.license_info) if result.license_info else "-"
        table.add_row(file_path, result.checksum.value, license_text)

    console.print(table)
    console.print(f"Analyzed [bold]{len(results)}[/bold] files")


if __name__ == "__main__":
    app()
