"""
Case number ("Sags ID") domain model.

VetLIMS has issued case numbers in two formats over time:

- legacy: "SAG-01234-890AKM", a 5-digit number and a 6-character base-36 code
- year:   "2023-01234", a year in 2000..2100 and a 5-digit number

Both are subclasses of CaseNumber. CaseNumber.parse tries the legacy shape
first and falls back to the year shape only if the string is not shaped like
a legacy case number (length, prefix and separator position).
"""

import re
import string
import typing
from dataclasses import dataclass

from .errors import FormatError

_FIVE_DIGITS = re.compile(r"[0-9]{5}")
_FOUR_DIGITS = re.compile(r"[0-9]{4}")
_BASE36_CODE = re.compile(r"[0-9A-Za-z]{6}")
_BASE36_ALPHABET = string.digits + string.ascii_uppercase

NUMBERS_MAX = 99_999
LETTERS_MAX = 0x81BF0FFF  # int("ZZZZZZ", 36)
YEAR_MIN, YEAR_MAX = 2000, 2100


class CaseNumber:
    """Case number in VetLIMS, in either the legacy or the year format."""

    numbers: int

    @classmethod
    def parse(cls, text: str) -> "CaseNumber":
        if not isinstance(text, str):
            raise FormatError(cls.__name__, text)
        variants = _VARIANTS if cls is CaseNumber else (cls,)
        for variant in variants:
            if variant._has_shape(text):
                return variant._parse_shaped(text)
        raise FormatError(cls.__name__, text)

    @classmethod
    def try_parse(cls, text: str) -> typing.Optional["CaseNumber"]:
        try:
            return cls.parse(text)
        except FormatError:
            return None

    @staticmethod
    def _has_shape(text: str) -> bool:
        raise NotImplementedError

    @classmethod
    def _parse_shaped(cls, text: str) -> "CaseNumber":
        raise NotImplementedError

    def matches_number(self, n: int) -> bool:
        """True if the 5-digit number part of this case number is `n`."""
        return self.numbers == n

    def __repr__(self) -> str:
        return f'CaseNumber("{self}")'


@dataclass(frozen=True, repr=False)
class LegacyCaseNumber(CaseNumber):
    """
    >>> str(CaseNumber.parse("SAG-01234-890akm"))
    'SAG-01234-890AKM'
    >>> LegacyCaseNumber(1234, 498859654)
    CaseNumber("SAG-01234-890AKM")
    """

    numbers: int
    letters: int

    def __post_init__(self) -> None:
        _check_range(self, "numbers", 0, NUMBERS_MAX, "must be at most 5 digits")
        _check_range(self, "letters", 0, LETTERS_MAX, 'must be at most "ZZZZZZ" base 36')

    @staticmethod
    def _has_shape(text: str) -> bool:
        return len(text) == 16 and text.startswith("SAG-") and text[9] == "-"

    @classmethod
    def _parse_shaped(cls, text: str) -> "LegacyCaseNumber":
        numbers, letters = text[4:9], text[10:16]
        if not _FIVE_DIGITS.fullmatch(numbers) or not _BASE36_CODE.fullmatch(letters):
            raise FormatError(cls.__name__, text)
        return cls(int(numbers), int(letters, 36))

    @property
    def code(self) -> str:
        """The 6-character uppercase base-36 part."""
        digits = []
        value = self.letters
        while value:
            value, rem = divmod(value, 36)
            digits.append(_BASE36_ALPHABET[rem])
        return "".join(reversed(digits)).rjust(6, "0")

    def __str__(self) -> str:
        return f"SAG-{self.numbers:05d}-{self.code}"


@dataclass(frozen=True, repr=False)
class YearCaseNumber(CaseNumber):
    """
    >>> YearCaseNumber(2023, 42)
    CaseNumber("2023-00042")
    """

    year: int
    numbers: int

    def __post_init__(self) -> None:
        _check_range(self, "year", YEAR_MIN, YEAR_MAX, f"year must be in {YEAR_MIN}..{YEAR_MAX}")
        _check_range(self, "numbers", 0, NUMBERS_MAX, "must be at most 5 digits")

    @staticmethod
    def _has_shape(text: str) -> bool:
        return len(text) == 10 and text[4] == "-"

    @classmethod
    def _parse_shaped(cls, text: str) -> "YearCaseNumber":
        year, numbers = text[:4], text[5:]
        if not _FOUR_DIGITS.fullmatch(year) or not _FIVE_DIGITS.fullmatch(numbers):
            raise FormatError(cls.__name__, text)
        return cls(int(year), int(numbers))

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.numbers:05d}"


# Order matters: the legacy shape is tried first.
_VARIANTS: typing.Tuple[typing.Type[CaseNumber], ...] = (LegacyCaseNumber, YearCaseNumber)


def _check_range(obj: CaseNumber, attr: str, low: int, high: int, reason: str) -> None:
    val = getattr(obj, attr)
    if isinstance(val, bool) or not isinstance(val, int) or not low <= val <= high:
        raise FormatError(type(obj).__name__, val, reason)
