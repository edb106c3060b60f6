"""Typer command-line shell around :class:`~specimport.service.DescriptorImportService`.

Commands:

* ``specimport import SOURCE`` -- import a descriptor from a file, stdin
  (``-``) or a URL and print the resulting API entity as JSON.
* ``specimport visitors`` -- list the registered policy visitors.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. :class:`~specimport.exceptions.SpecimportError`
instances exit with the error's ``exit_code``.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from specimport import __version__
from specimport.exceptions import SpecimportError
from specimport.exit_codes import EXIT_GENERIC_FAILURE
from specimport.models import ImportFormat, ImportRequest, Version

app = typer.Typer(
    name="specimport",
    help="Import Swagger, OpenAPI and WSDL descriptors into a gateway API model.",
    no_args_is_help=True,
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"specimport {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging."
    ),
) -> None:
    """Configure logging before every sub-command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@app.command("import")
def import_command(
    source: str = typer.Argument(..., help="Descriptor file path, URL, or '-' for stdin."),
    wsdl: bool = typer.Option(False, "--wsdl", help="Parse the descriptor as WSDL."),
    policies: Optional[List[str]] = typer.Option(
        None, "--policy", "-P", help="Policy visitor id to apply (repeatable, in priority order)."
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="JSON configuration file."
    ),
    default_scheme: Optional[str] = typer.Option(
        None, "--default-scheme", help="Scheme used when the descriptor declares none."
    ),
    no_path_mapping: bool = typer.Option(
        False, "--no-path-mapping", help="Do not emit gateway path mappings."
    ),
) -> None:
    """Import a descriptor and print the API entity as JSON."""
    from specimport.config import load_import_config
    from specimport.parser.loader import read_payload
    from specimport.service import DescriptorImportService

    try:
        config = load_import_config(config_path, default_scheme=default_scheme)
        payload, source_kind = read_payload(source)
        request = ImportRequest(
            payload=payload,
            type=source_kind,
            format=ImportFormat.WSDL if wsdl else ImportFormat.API,
            with_policies=policies or None,
            with_path_mapping=not no_path_mapping,
        )
        entity = DescriptorImportService(config=config).create_api(request)
    except SpecimportError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=exc.exit_code) from None

    typer.echo(json.dumps(entity.model_dump(mode="json"), indent=2))


@app.command("visitors")
def visitors_command() -> None:
    """List the registered policy visitors and the formats they support."""
    from specimport.visitors.registry import default_registry

    table = Table(title="Policy visitors")
    table.add_column("Id", style="bold", no_wrap=True)
    table.add_column("Name")
    table.add_column("Swagger")
    table.add_column("OpenAPI")
    table.add_column("Description")

    for descriptor in default_registry().list_visitors():
        table.add_row(
            descriptor.id,
            descriptor.name,
            "yes" if descriptor.supports(Version.SWAGGER_V2) else "no",
            "yes" if descriptor.supports(Version.OAI_V3) else "no",
            descriptor.description,
        )

    Console().print(table)


def main() -> None:
    """CLI entry point invoked by the ``specimport`` console script.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except SpecimportError as exc:
        sys.stderr.write(f"Error: {exc}\n")
        sys.exit(exc.exit_code)
    except Exception as exc:
        sys.stderr.write(f"Unexpected error: {exc}\n")
        sys.exit(EXIT_GENERIC_FAILURE)


if __name__ == "__main__":
    main()
