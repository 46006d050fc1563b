import pytest

from vetlims.errors import FormatError
from vetlims.sample_number import SampleNumber


@pytest.mark.parametrize(
    "text, expected",
    [
        ("12", SampleNumber(12, 0)),
        ("12.1", SampleNumber(12, 1)),
        ("  4.0 ", SampleNumber(4)),
        ("007.02", SampleNumber(7, 2)),
        ("65535.65535", SampleNumber(65535, 65535)),
    ],
)
def test_parse_valid(text, expected):
    assert SampleNumber.parse(text) == expected


@pytest.mark.parametrize(
    "text", ["", " ", ".", "12.", ".1", "12.1.1", "a.1", "-1", "+1", "1_000", "65536", "1.65536", "1 .2"]
)
def test_parse_invalid_raises(text):
    """Anything other than N or N.M with 16-bit parts is a format error."""
    with pytest.raises(FormatError):
        SampleNumber.parse(text)


def test_try_parse_returns_none_on_error():
    assert SampleNumber.try_parse("x") is None
    assert SampleNumber.try_parse("3.2") == SampleNumber(3, 2)


def test_zero_subnumber_is_omitted():
    assert str(SampleNumber(4, 0)) == "4"
    assert repr(SampleNumber(4, 0)) == "SampleNumber(4)"
    assert repr(SampleNumber(2, 1)) == "SampleNumber(2, 1)"


@pytest.mark.parametrize("n, sn", [(0, 0), (1, 0), (12, 1), (999, 65535), (65535, 0), (65535, 65535)])
def test_round_trip(n, sn):
    rendered = str(SampleNumber(n, sn))
    assert SampleNumber.parse(rendered) == SampleNumber(n, sn)
    assert ("." in rendered) == (sn != 0)


def test_canonical_rendering_drops_padding():
    assert str(SampleNumber.parse(" 007.00 ")) == "7"


@pytest.mark.parametrize("n, sn", [(-1, 0), (65536, 0), (0, 70000), (True, 0)])
def test_out_of_range_construction_raises(n, sn):
    with pytest.raises(FormatError):
        SampleNumber(n, sn)
