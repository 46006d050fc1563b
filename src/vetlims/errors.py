"""
Error types raised while reading VetLIMS exports.

- FormatError: an identifier or category cell does not match its fixed grammar.
- SchemaError: the export lacks one of the required columns (fatal for the file).
- DuplicateSymbolError: two vocabulary names derive the same symbol but disagree.
- RowError: a single row failed to map; carries the row index, column and raw value.
"""

import typing


class VetLIMSError(Exception):
    """Base class for every error raised by vetlims."""


class FormatError(VetLIMSError, ValueError):
    def __init__(self, kind: str, text: typing.Any, reason: typing.Optional[str] = None):
        self.kind = kind
        self.text = text
        message = f"Invalid {kind}: {text!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class SchemaError(VetLIMSError):
    def __init__(self, expected: typing.Iterable[str], missing: typing.Iterable[str]):
        self.expected = sorted(expected)
        self.missing = sorted(missing)
        super().__init__(
            f"Found wrong columns, expected {self.expected} (missing: {self.missing})"
        )


class DuplicateSymbolError(VetLIMSError, ValueError):
    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f'Duplicate symbol: "{symbol}"')


class RowError(VetLIMSError):
    """
    Raised when a row of the export cannot be mapped to a LIMSRow.
    The underlying error is available as `__cause__`.
    """

    def __init__(self, row: int, column: str, value: typing.Any, reason: str):
        self.row = row
        self.column = column
        self.value = value
        self.reason = reason
        super().__init__(f"Row {row}, column {column!r}, value {value!r}: {reason}")
