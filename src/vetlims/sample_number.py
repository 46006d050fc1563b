"""
Sample number domain model.

A VetLIMS sample is identified by a sample number and an optional subsample
number, written "12" or "12.1" in the "Prøve id" column.
"""

import re
import typing
from dataclasses import dataclass

from .errors import FormatError

_DIGITS = re.compile(r"[0-9]+")
_UINT16_MAX = 0xFFFF


@dataclass(frozen=True, repr=False)
class SampleNumber:
    """
    Sample number and subsample number.

    Attributes:
        number: Primary sample index (unsigned 16-bit).
        subnumber: Subsample index (unsigned 16-bit). 0 means not applicable.

    >>> SampleNumber(4, 0)  # zero-subsample is omitted
    SampleNumber(4)
    >>> str(SampleNumber(12, 1))
    '12.1'
    """

    number: int
    subnumber: int = 0

    def __post_init__(self) -> None:
        for attr in ("number", "subnumber"):
            val = getattr(self, attr)
            if isinstance(val, bool) or not isinstance(val, int) or not 0 <= val <= _UINT16_MAX:
                raise FormatError("SampleNumber", val, f"{attr} must fit in 16 bits")

    @classmethod
    def parse(cls, text: str) -> "SampleNumber":
        """Parse "N" or "N.M", ignoring surrounding whitespace."""
        if not isinstance(text, str):
            raise FormatError("SampleNumber", text)
        stripped = text.strip()
        head, dot, tail = stripped.partition(".")
        number = _parse_uint16(head, text)
        subnumber = _parse_uint16(tail, text) if dot else 0
        return cls(number, subnumber)

    @classmethod
    def try_parse(cls, text: str) -> typing.Optional["SampleNumber"]:
        try:
            return cls.parse(text)
        except FormatError:
            return None

    def __str__(self) -> str:
        if self.subnumber == 0:
            return str(self.number)
        return f"{self.number}.{self.subnumber}"

    def __repr__(self) -> str:
        if self.subnumber == 0:
            return f"SampleNumber({self.number})"
        return f"SampleNumber({self.number}, {self.subnumber})"


def _parse_uint16(part: str, text: str) -> int:
    if not _DIGITS.fullmatch(part):
        raise FormatError("SampleNumber", text)
    value = int(part)
    if value > _UINT16_MAX:
        raise FormatError("SampleNumber", text, "exceeds 16 bits")
    return value
