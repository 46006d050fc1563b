import logging
import typing

import pandas as pd

from .mapper import NEEDED_COLUMNS, lims_rows
from .record import LIMSRow

logger = logging.getLogger(__name__)


def load_lims_table(path_or_buffer, delimiter: str = ";", decimal: str = ",") -> pd.DataFrame:
    """
    Read a VetLIMS CSV export into a DataFrame:
      - every cell is read as a string, no type inference
      - only empty cells become missing (NaN); "NA", "null" etc. stay text
      - headers are stripped of surrounding whitespace, case is kept
    """
    df = pd.read_csv(
        path_or_buffer,
        sep=delimiter,
        decimal=decimal,
        dtype=str,
        keep_default_na=False,
        na_values=[""],
        encoding="utf-8-sig",
    )
    df.columns = df.columns.str.strip()
    logger.debug(f"Loaded {len(df)} rows, columns: {list(df.columns)}")
    return df


def read_lims_rows(
    path_or_buffer,
    delimiter: str = ";",
    decimal: str = ",",
    required_columns: typing.Iterable[str] = NEEDED_COLUMNS,
) -> list[LIMSRow]:
    """
    Create a list of LIMSRow from the CSV export at `path_or_buffer`.
    The export must have the columns in `NEEDED_COLUMNS` at minimum, in any order.
    """
    return lims_rows(load_lims_table(path_or_buffer, delimiter, decimal), required_columns)
