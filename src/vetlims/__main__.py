"""
Command-line interface for vetlims.
Reads VetLIMS CSV exports into LIMSRow records and builds the controlled
vocabularies used for the "Materiale" and "Dyreart" columns.
"""

import click
import json
import logging
import pathlib
import requests
import sys
import typing

import pandas as pd
from stairval.notepad import create_notepad

from .errors import VetLIMSError
from .loader import load_lims_table
from .mapper import DefaultMapper
from .vocabulary import dedup_categories, load_name_list

_delimiter_option = click.option(
    "--delimiter",
    default=";",
    show_default=True,
    envvar="VETLIMS_DELIMITER",
    help="CSV field delimiter",
)
_decimal_option = click.option(
    "--decimal",
    default=",",
    show_default=True,
    envvar="VETLIMS_DECIMAL",
    help="decimal separator used in the export",
)
_csv_path_option = click.option(
    "-c",
    "--csv-path",
    "csv_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="path to the VetLIMS CSV export",
)


@click.group()
@click.option("--verbose-logging", is_flag=True, help="Also emit debug logs to stderr")
@click.option(
    "--log-file-path",
    type=click.Path(dir_okay=False, writable=True),
    help="Append timestamped logs to this file",
)
def main(verbose_logging: bool, log_file_path: typing.Optional[str]):
    """vetlims: typed records from VetLIMS CSV exports."""
    _configure_logging(verbose_logging, log_file_path)


def _configure_logging(verbose_logging: bool, log_file_path: typing.Optional[str]) -> None:
    handlers: list[logging.Handler] = []
    if log_file_path:
        handlers.append(logging.FileHandler(log_file_path, mode="a", encoding="utf-8"))
    if verbose_logging:
        handlers.append(logging.StreamHandler(sys.stderr))
    if handlers:
        logging.basicConfig(
            level=logging.DEBUG if verbose_logging else logging.INFO,
            format="%(asctime)s %(levelname)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            handlers=handlers,
            force=True,
        )


@main.command(name="parse-csv")
@_csv_path_option
@_delimiter_option
@_decimal_option
@click.option(
    "--workers",
    default=None,
    type=click.IntRange(min=1),
    envvar="VETLIMS_WORKERS",
    help="map rows on this many threads (default: serially)",
)
@click.option(
    "-o",
    "--output-path",
    "output_file",
    type=click.Path(dir_okay=False, writable=True),
    help="write the parsed records, normalized, to this CSV file",
)
def parse_csv(
    csv_file: str,
    delimiter: str,
    decimal: str,
    workers: typing.Optional[int],
    output_file: typing.Optional[str],
):
    """
    Map every row of the export to a LIMSRow. Stops at the first malformed row.
    """
    logging.info(f"Beginning parse of '{csv_file}'")
    table = load_lims_table(csv_file, delimiter=delimiter, decimal=decimal)
    try:
        records = DefaultMapper(max_workers=workers).apply_mapping(table)
    except VetLIMSError as e:
        logging.error(f"Failed to parse '{csv_file}': {e}")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if output_file:
        _write_records(records, pathlib.Path(output_file), delimiter)
        click.echo(f"Saved normalized records to {output_file}")
    click.echo(f"Created {len(records)} LIMSRow records")


def _write_records(records: list, output_path: pathlib.Path, delimiter: str) -> None:
    df = pd.DataFrame([record.to_dict() for record in records])
    df.to_csv(output_path, sep=delimiter, index=False)


@main.command(name="audit-csv")
@_csv_path_option
@_delimiter_option
@_decimal_option
@click.option("-r", "--raw-json", is_flag=True, help="print the issues as JSON")
def audit_csv(csv_file: str, delimiter: str, decimal: str, raw_json: bool):
    """
    Map every row of the export, reporting all malformed rows instead of
    stopping at the first one.
    """
    table = load_lims_table(csv_file, delimiter=delimiter, decimal=decimal)
    notepad = create_notepad("vetlims")
    records = DefaultMapper().audit_mapping(table, notepad)

    if raw_json:
        payload = [{"level": "error", "message": e.message} for e in notepad.errors()]
        payload += [{"level": "warning", "message": w.message} for w in notepad.warnings()]
        click.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    _report_issues(notepad)
    click.echo(f"{len(records)} of {len(table)} rows mapped cleanly")


def _report_issues(notepad):
    # if there were errors, show them
    if notepad.has_errors(include_subsections=True):
        click.echo("Errors found in mapping:")
        for err in notepad.errors():
            click.echo(f"- {err.message}")
    # show any warnings but keep going
    if notepad.has_warnings(include_subsections=True):
        click.echo("Warnings found in mapping:")
        for w in notepad.warnings():
            click.echo(f"- {w.message}")


@main.command(name="build-vocabulary")
@click.option(
    "-n",
    "--names-path",
    "names_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="name-list CSV with 'danish' and 'english' columns",
)
@_delimiter_option
@click.option(
    "-o",
    "--output-path",
    "output_file",
    type=click.Path(dir_okay=False, writable=True),
    help="write the vocabulary to this CSV file instead of stdout",
)
def build_vocabulary(names_file: str, delimiter: str, output_file: typing.Optional[str]):
    """
    Deduplicate a name list into sorted (key, danish, english) entries.
    """
    try:
        entries = dedup_categories(load_name_list(names_file, delimiter=delimiter))
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    df = pd.DataFrame(entries, columns=["key", "danish", "english"])
    if output_file:
        df.to_csv(output_file, sep=delimiter, index=False)
        click.echo(f"Wrote {len(entries)} entries to {output_file}")
    else:
        click.echo(df.to_csv(sep=delimiter, index=False), nl=False)


@main.command(name="download-names")
@click.option("-u", "--url", required=True, help="URL of a VetLIMS name-list export")
@click.option(
    "-o",
    "--output-path",
    "output_file",
    required=True,
    type=click.Path(dir_okay=False, writable=True),
    help="where to save the name list",
)
def download_names(url: str, output_file: str):
    """
    Download a name list (danish;english) from VetLIMS for build-vocabulary.
    """
    click.echo(f"Downloading name list from {url} …")
    resp = requests.get(url, timeout=60)
    resp.raise_for_status()

    out = pathlib.Path(output_file)
    out.parent.mkdir(parents=True, exist_ok=True)
    with open(out, "wb") as f:
        f.write(resp.content)

    click.echo(f"Saved name list to {out}")


if __name__ == "__main__":
    main()
