"""
Internal number ("V-nummer") domain model.

VetLIMS assigns every sample a 9-digit internal number, written with a
leading "V", e.g. "V000012345".
"""

import re
import typing
from dataclasses import dataclass

from .errors import FormatError

_NINE_DIGITS = re.compile(r"[0-9]{9}")
VNUMBER_MAX = 999_999_999


@dataclass(frozen=True, repr=False)
class VNumber:
    """
    The internal number used by VetLIMS for samples.

    >>> VNumber.parse("V000012345") == VNumber(12345)
    True
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise FormatError("VNumber", self.value)
        if not 0 <= self.value <= VNUMBER_MAX:
            raise FormatError("VNumber", self.value, "must be at most 9 digits")

    @classmethod
    def parse(cls, text: str) -> "VNumber":
        if not isinstance(text, str) or len(text) != 10 or text[0] != "V":
            raise FormatError("VNumber", text)
        digits = text[1:]
        if not _NINE_DIGITS.fullmatch(digits):
            raise FormatError("VNumber", text)
        return cls(int(digits))

    @classmethod
    def try_parse(cls, text: str) -> typing.Optional["VNumber"]:
        try:
            return cls.parse(text)
        except FormatError:
            return None

    def __str__(self) -> str:
        return f"V{self.value:09d}"

    def __repr__(self) -> str:
        return f'VNumber("{self}")'
