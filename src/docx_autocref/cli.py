"""Command-line interface for docx_autocref.

Provides commands for linking footnote cross-references in Word documents
produced by Pandoc and Supra.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer

from . import __version__
from .bookmarks import starting_bookmark
from .config import MissingReferencePolicy, ProcessOptions, load_options
from .constants import DOCUMENT_PART, FOOTNOTES_PART
from .errors import AutoCrossRefError, MissingReferenceError
from .lexer import lex
from .package import DocxPackage
from .parser import CrossRefBranch, FootnoteRefBranch, parse
from .pipeline import process_docx, process_xml_files

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="autocref",
    help="A Supra + Pandoc post-processor for footnote cross-references.",
    no_args_is_help=True,
)

# Verbosity 0-5, matching the levels critical, error, warning, info, debug, trace
LOG_LEVELS = {
    0: logging.CRITICAL,
    1: logging.ERROR,
    2: logging.WARNING,
    3: logging.INFO,
    4: logging.DEBUG,
    5: logging.DEBUG,
}


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"autocref version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: int) -> None:
    """Send log records at the chosen verbosity to stderr."""
    level = LOG_LEVELS.get(verbose, logging.INFO)
    fmt = "%(levelname)s %(name)s: %(message)s" if verbose >= 4 else "%(levelname)s: %(message)s"
    logging.basicConfig(level=level, format=fmt, force=True)
    logger.debug("Logger setup.")


def _echo_error(error: AutoCrossRefError) -> None:
    typer.echo(f"Error: {error}", err=True)
    if isinstance(error, MissingReferenceError):
        typer.echo(
            "Use --missing-reference skip to leave such references as plain text.", err=True
        )


def _build_options(
    config: Path | None,
    missing_reference: MissingReferencePolicy | None,
    no_validate: bool,
) -> ProcessOptions:
    options = load_options(config) if config else ProcessOptions()
    return options.merged(
        missing_reference=missing_reference, validate_output=False if no_validate else None
    )


MissingReferenceOption = Annotated[
    MissingReferencePolicy | None,
    typer.Option(
        "--missing-reference",
        "-m",
        help="What to do with a cross-reference to a footnote that does not exist.",
        case_sensitive=False,
    ),
]
NoValidateOption = Annotated[
    bool,
    typer.Option("--no-validate", help="Skip the well-formedness check of the rewritten XML."),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="YAML or JSON file with processing options"),
]


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            min=0,
            max=5,
            envvar="AUTOCREF_VERBOSE",
            help="Verbosity level between 0 (critical) and 5 (trace).",
        ),
    ] = 3,
) -> None:
    """A Supra + Pandoc post-processor for footnote cross-references."""
    configure_logging(verbose)


@app.command("process")
def process_command(
    file: Annotated[Path, typer.Argument(help="The .docx file to process")],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="The .docx file to output (blank overwrites input)"),
    ] = None,
    missing_reference: MissingReferenceOption = None,
    no_validate: NoValidateOption = False,
    config: ConfigOption = None,
) -> None:
    """Link the footnote cross-references in a .docx file."""
    try:
        options = _build_options(config, missing_reference, no_validate)
        output_path = output or file
        result = process_docx(file, output_path, options)
        typer.echo(f"{result} and saved to {output_path}")
    except AutoCrossRefError as e:
        _echo_error(e)
        raise typer.Exit(1)


@app.command("xml")
def xml_command(
    document: Annotated[Path, typer.Argument(help="Path to an extracted document.xml")],
    footnotes: Annotated[Path, typer.Argument(help="Path to an extracted footnotes.xml")],
    document_out: Annotated[
        Path | None,
        typer.Option("--document-out", help="Where to write document.xml (blank overwrites)"),
    ] = None,
    footnotes_out: Annotated[
        Path | None,
        typer.Option("--footnotes-out", help="Where to write footnotes.xml (blank overwrites)"),
    ] = None,
    missing_reference: MissingReferenceOption = None,
    no_validate: NoValidateOption = False,
    config: ConfigOption = None,
) -> None:
    """Link cross-references in already-extracted XML parts."""
    try:
        options = _build_options(config, missing_reference, no_validate)
        result = process_xml_files(document, footnotes, document_out, footnotes_out, options)
        saved = f"{document_out or document}, {footnotes_out or footnotes}"
        typer.echo(f"{result} and saved to {saved}")
    except AutoCrossRefError as e:
        _echo_error(e)
        raise typer.Exit(1)


@app.command()
def inspect(
    file: Annotated[Path, typer.Argument(help="Path to the .docx file")],
) -> None:
    """Show the footnotes and cross-references that would be linked."""
    try:
        with DocxPackage.open(file) as pkg:
            document_xml = pkg.get_part_text(DOCUMENT_PART)
            footnotes_xml = pkg.get_part_text(FOOTNOTES_PART)

        first_bookmark = starting_bookmark(document_xml)
        document_branches, footnote_branches, referenced = parse(*lex(document_xml, footnotes_xml))
    except AutoCrossRefError as e:
        _echo_error(e)
        raise typer.Exit(1)

    footnote_count = sum(1 for b in document_branches if isinstance(b, FootnoteRefBranch))
    cross_ref_count = sum(1 for b in footnote_branches if isinstance(b, CrossRefBranch))
    missing = [n for n in referenced if not 1 <= n <= footnote_count]

    typer.echo(f"File: {file}")
    typer.echo(f"Footnote references: {footnote_count}")
    typer.echo(f"Cross-references: {cross_ref_count}")
    typer.echo(f"Referenced footnotes: {', '.join(map(str, referenced)) or 'none'}")
    typer.echo(f"Next bookmark id: {first_bookmark}")
    if missing:
        typer.echo(f"Missing footnotes: {', '.join(map(str, missing))}")


if __name__ == "__main__":
    app()
