"""
Controlled vocabularies (hosts, materials) sourced from VetLIMS name lists.

To create an enum, we fetch a list of (danish, english) names from VetLIMS,
derive a symbol from each Danish name with `to_symbol`, and make sure there are
no conflicting duplicates with `dedup_categories`. `make_vocabulary_enum` then
turns the deduplicated entries into an Enum class.
"""

from __future__ import annotations

import logging
import typing
from enum import Enum
from functools import lru_cache

import pandas as pd

from .errors import DuplicateSymbolError, FormatError

logger = logging.getLogger(__name__)

NamePair = typing.Tuple[str, typing.Optional[str]]

# Columns of a name-list CSV
NAME_LIST_COLUMNS = ("danish", "english")


class VocabularyEntry(typing.NamedTuple):
    key: str
    danish: str
    english: typing.Optional[str]


def to_symbol(name: str) -> str:
    """
    Derive a symbol from a category name: letters and digits are kept, every
    run of other characters becomes a single "_", and no "_" is left at
    either end.

    >>> to_symbol("Hund (tæve), voksen")
    'Hund_tæve_voksen'
    """
    chars: list[str] = []
    for char in name:
        if char.isalpha() or "0" <= char <= "9":
            chars.append(char)
        elif chars and chars[-1] != "_":
            chars.append("_")
    symbol = "".join(chars).rstrip("_")
    if not symbol:
        raise ValueError(f"Cannot derive a symbol from {name!r}")
    return symbol


def dedup_categories(pairs: typing.Iterable[NamePair]) -> list[VocabularyEntry]:
    """
    Deduplicate (danish, english) pairs by their derived symbol.

    Two pairs with the same symbol are merged if the Danish names are identical
    and the English names are equal or one of them is missing; the merged entry
    keeps the English name. Anything else raises DuplicateSymbolError.
    The result is sorted by symbol.
    """
    by_symbol: dict[str, NamePair] = {}
    for danish, english in pairs:
        symbol = to_symbol(danish)
        existing = by_symbol.get(symbol)
        if existing is None:
            by_symbol[symbol] = (danish, english)
            continue
        old_danish, old_english = existing
        if old_danish != danish:
            raise DuplicateSymbolError(symbol)
        if old_english is None or english is None or old_english == english:
            by_symbol[symbol] = (danish, english if english is not None else old_english)
        else:
            raise DuplicateSymbolError(symbol)
    return [VocabularyEntry(k, *by_symbol[k]) for k in sorted(by_symbol)]


def load_name_list(path, delimiter: str = ";") -> list[NamePair]:
    """
    Read a name-list CSV with a `danish` and an `english` column.
    Blank English names are read as None.
    """
    df = pd.read_csv(
        path,
        sep=delimiter,
        dtype=str,
        keep_default_na=False,
        encoding="utf-8-sig",
    )
    df.columns = df.columns.str.strip().str.lower()
    missing = [c for c in NAME_LIST_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Name list {path!s} is missing columns: {missing}")

    pairs: list[NamePair] = []
    for danish, english in df[list(NAME_LIST_COLUMNS)].itertuples(index=False, name=None):
        danish = danish.strip()
        if not danish:
            continue
        # short rows leave the English cell as NaN
        english = english.strip() if isinstance(english, str) else ""
        pairs.append((danish, english or None))
    logger.debug(f"Read {len(pairs)} names from {path!s}")
    return pairs


class VocabularyEnum(Enum):
    """
    Base class for enums built from a VetLIMS name list.
    Each member's value is its (danish, english) pair.
    """

    def __init__(self, danish: str, english: typing.Optional[str]):
        self.danish = danish
        self.english = english

    @classmethod
    def parse(cls, text: str):
        """Look up a member by its Danish name."""
        member = _danish_lookup(cls).get(text.strip()) if isinstance(text, str) else None
        if member is None:
            raise FormatError(cls.__name__, text, "unknown category")
        return member

    @classmethod
    def try_parse(cls, text: str):
        try:
            return cls.parse(text)
        except FormatError:
            return None

    def __str__(self) -> str:
        return self.danish


@lru_cache(maxsize=None)
def _danish_lookup(enum_cls) -> dict:
    return {member.danish: member for member in enum_cls}


def make_vocabulary_enum(name: str, entries: typing.Sequence[VocabularyEntry], module: typing.Optional[str] = None):
    """Create a VocabularyEnum subclass with one member per entry, named by its symbol."""
    # Members must not shadow methods or the per-member attributes
    reserved = {attr for klass in VocabularyEnum.__mro__ for attr in vars(klass)}
    reserved |= {"danish", "english"}
    clashes = sorted(entry.key for entry in entries if entry.key in reserved)
    if clashes:
        raise ValueError(f"Symbols clash with {name} attributes: {clashes}")
    enum_cls = VocabularyEnum(
        name,
        [(entry.key, (entry.danish, entry.english)) for entry in entries],
        module=module,
    )
    logger.debug(f"Built {name} with {len(entries)} members")
    return enum_cls
