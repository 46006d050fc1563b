import abc
import logging
import typing

from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime

import pandas as pd
from stairval.notepad import Notepad

from .case_number import CaseNumber
from .errors import RowError, SchemaError
from .hosts import Host
from .materials import Material
from .record import LIMSRow
from .sample_number import SampleNumber
from .vnumber import VNumber

logger = logging.getLogger(__name__)

DATETIME_FORMAT = "%d/%m/%Y %H.%M"
DATE_FORMAT = "%d/%m/%Y"

# Columns of a VetLIMS CSV export. To be mapped to LIMSRow, the export must
# contain these columns at minimum, in any order.
NEEDED_COLUMNS = frozenset(
    {
        "Prøve id",
        "Internt nr.",
        "Sags ID",
        "Materiale",
        "Dyreart",
        "Modtagelsestidspunkt",
        "Udtagelsesdato",
    }
)


def _is_missing(value: typing.Any) -> bool:
    # None, NaN, pandas NA and empty/whitespace-only strings
    if isinstance(value, str):
        return not value.strip()
    return value is None or pd.isna(value)


def _required(parse: typing.Callable[[str], typing.Any]) -> typing.Callable[[typing.Any], typing.Any]:
    def parse_required(value: typing.Any) -> typing.Any:
        if _is_missing(value):
            raise ValueError("missing value in required column")
        return parse(value)

    return parse_required


def _optional(parse: typing.Callable[[str], typing.Any]) -> typing.Callable[[typing.Any], typing.Any]:
    def parse_optional(value: typing.Any) -> typing.Any:
        return None if _is_missing(value) else parse(value)

    return parse_optional


def _text(value: typing.Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"expected text, got {type(value).__name__}")
    return value.strip()


def parse_receive_time(value: str) -> datetime:
    return datetime.strptime(_text(value), DATETIME_FORMAT)


def parse_sample_date(value: str) -> date:
    return datetime.strptime(_text(value), DATE_FORMAT).date()


# (LIMSRow field, source column, cell parser)
ROW_FIELDS: typing.Tuple[typing.Tuple[str, str, typing.Callable[[typing.Any], typing.Any]], ...] = (
    ("samplenum", "Prøve id", _required(SampleNumber.parse)),
    ("vnum", "Internt nr.", _required(VNumber.parse)),
    ("sag", "Sags ID", _required(CaseNumber.parse)),
    ("sampledate", "Udtagelsesdato", _optional(parse_sample_date)),
    ("material", "Materiale", _optional(Material.parse)),
    ("host", "Dyreart", _required(Host.parse)),
    ("receivedate", "Modtagelsestidspunkt", _required(parse_receive_time)),
)


class TableMapper(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def apply_mapping(self, table: pd.DataFrame) -> typing.Sequence[LIMSRow]:
        raise NotImplementedError


class DefaultMapper(TableMapper):
    def __init__(
        self,
        required_columns: typing.Iterable[str] = NEEDED_COLUMNS,
        max_workers: typing.Optional[int] = None,
    ):
        """
        - required_columns: columns the export must have; the columns read into
          LIMSRow are always required
        - max_workers: map rows on a thread pool of this size (None or 1: serially)
        """
        self.required_columns = frozenset(required_columns) | NEEDED_COLUMNS
        self.max_workers = max_workers

    def apply_mapping(self, table: pd.DataFrame) -> list[LIMSRow]:
        """
        Map every row of `table` to a LIMSRow.

        Raises SchemaError before looking at any row if a required column is
        missing, and RowError for the first row (in table order) that fails.
        """
        self.check_columns(table.columns)

        # By first making a map from column names to column positions, then
        # passing it to the row parser, mapping is robust against changes in the
        # column order while every row is read as a plain tuple.
        namemap = self.column_positions(table.columns)
        rows = table.itertuples(index=False, name=None)
        logger.debug(f"Mapping {len(table)} rows with {len(table.columns)} columns")

        if self.max_workers is not None and self.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                records = list(
                    executor.map(
                        lambda item: self.parse_row(item[1], namemap, item[0]),
                        enumerate(rows),
                    )
                )
        else:
            records = [self.parse_row(row, namemap, index) for index, row in enumerate(rows)]

        logger.info(f"Created {len(records)} LIMSRow records")
        return records

    def audit_mapping(self, table: pd.DataFrame, notepad: Notepad) -> list[LIMSRow]:
        """
        Best-effort variant of apply_mapping: every failing row is reported to
        the notepad as an error and skipped. Returns the rows that mapped.
        """
        try:
            self.check_columns(table.columns)
        except SchemaError as e:
            notepad.add_error(str(e))
            return []

        namemap = self.column_positions(table.columns)
        extra = sorted(set(namemap) - self.required_columns)
        if extra:
            logger.debug(f"Ignoring {len(extra)} extra columns: {extra}")

        records: list[LIMSRow] = []
        for index, row in enumerate(table.itertuples(index=False, name=None)):
            try:
                records.append(self.parse_row(row, namemap, index))
            except RowError as e:
                notepad.add_error(str(e))
        return records

    def check_columns(self, columns: typing.Iterable[str]) -> None:
        missing = self.required_columns - set(columns)
        if missing:
            raise SchemaError(self.required_columns, missing)

    @staticmethod
    def column_positions(columns: typing.Iterable[str]) -> dict[str, int]:
        # First occurrence wins if a header is repeated
        namemap: dict[str, int] = {}
        for position, name in enumerate(columns):
            namemap.setdefault(name, position)
        return namemap

    @staticmethod
    def parse_row(row: typing.Sequence[typing.Any], namemap: dict[str, int], index: int) -> LIMSRow:
        """
        Parse one row (a tuple of cells in table order) into a LIMSRow.
        `index` is the 0-based position of the row and is only used for errors.
        """
        values: dict[str, typing.Any] = {}
        for field, column, parse in ROW_FIELDS:
            raw = row[namemap[column]]
            try:
                values[field] = parse(raw)
            except (ValueError, TypeError) as e:
                raise RowError(index, column, raw, str(e)) from e
        return LIMSRow(**values)


def lims_rows(table: pd.DataFrame, required_columns: typing.Iterable[str] = NEEDED_COLUMNS) -> list[LIMSRow]:
    """
    Create a list of LIMSRow from a table read from a VetLIMS export.
    The table must have the columns in `NEEDED_COLUMNS` at minimum, in any order.
    """
    return DefaultMapper(required_columns).apply_mapping(table)
