import os

import pandas as pd
import pytest


@pytest.fixture(scope="session")
def fpath_test_dir() -> str:
    """
    Path to `tests/data/` folder.
    """
    return os.path.join(os.path.dirname(__file__), "data")


@pytest.fixture(scope="session")
def fpath_export(fpath_test_dir: str) -> str:
    return os.path.join(fpath_test_dir, "vetlims_export.csv")


@pytest.fixture(scope="session")
def fpath_bad_export(fpath_test_dir: str) -> str:
    return os.path.join(fpath_test_dir, "vetlims_export_bad.csv")


@pytest.fixture
def sample_row() -> dict:
    """
    A single valid row, as handed over by the CSV reader.
    Individual tests override cells as needed.
    """
    return {
        "Prøve id": "12.1",
        "Internt nr.": "V000012345",
        "Sags ID": "SAG-01234-890AKM",
        "Materiale": "",
        "Dyreart": "Okse",
        "Modtagelsestidspunkt": "01/02/2023 10.30",
        "Udtagelsesdato": "",
    }


@pytest.fixture
def make_table():
    """Build a one-column-per-key DataFrame from row dicts."""

    def _make_table(*rows: dict) -> pd.DataFrame:
        return pd.DataFrame(list(rows))

    return _make_table
