import pytest

from vetlims.errors import DuplicateSymbolError, FormatError
from vetlims.vocabulary import (
    VocabularyEntry,
    dedup_categories,
    load_name_list,
    make_vocabulary_enum,
    to_symbol,
)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Okse", "Okse"),
        ("Blod, EDTA", "Blod_EDTA"),
        ("  Hund (tæve), voksen ", "Hund_tæve_voksen"),
        ("Kvæg--kalv", "Kvæg_kalv"),
        ("3 dages kylling", "3_dages_kylling"),
        ("Æg.", "Æg"),
    ],
)
def test_to_symbol(name, expected):
    assert to_symbol(name) == expected


def test_to_symbol_without_letters_raises():
    with pytest.raises(ValueError):
        to_symbol(" - ")


def test_absent_english_is_superseded():
    entries = dedup_categories([("Okse", "Cattle"), ("Okse", None)])
    assert entries == [VocabularyEntry("Okse", "Okse", "Cattle")]

    entries = dedup_categories([("Okse", None), ("Okse", "Cattle")])
    assert entries == [VocabularyEntry("Okse", "Okse", "Cattle")]


def test_identical_repeats_are_merged():
    entries = dedup_categories([("Okse", "Cattle"), ("Okse", "Cattle"), ("Foder", None), ("Foder", None)])
    assert entries == [
        VocabularyEntry("Foder", "Foder", None),
        VocabularyEntry("Okse", "Okse", "Cattle"),
    ]


def test_conflicting_english_raises():
    with pytest.raises(DuplicateSymbolError) as excinfo:
        dedup_categories([("Okse", "Cattle"), ("Okse", "Bovine")])
    assert excinfo.value.symbol == "Okse"


def test_different_danish_same_symbol_raises():
    """'Blod, EDTA' and 'Blod EDTA' derive the same symbol but are different names."""
    with pytest.raises(DuplicateSymbolError, match="Blod_EDTA"):
        dedup_categories([("Blod, EDTA", None), ("Blod EDTA", None)])


def test_output_is_sorted_by_key():
    entries = dedup_categories([("Svin", "Pig"), ("Hest", "Horse"), ("Okse", "Cattle")])
    assert [e.key for e in entries] == ["Hest", "Okse", "Svin"]


def test_load_name_list(tmp_path):
    path = tmp_path / "names.csv"
    path.write_text("danish;english\nOkse;Cattle\nFoder;\n\n  Hest ; Horse \n", encoding="utf-8")
    assert load_name_list(path) == [("Okse", "Cattle"), ("Foder", None), ("Hest", "Horse")]


def test_load_name_list_missing_column_raises(tmp_path):
    path = tmp_path / "names.csv"
    path.write_text("dansk;engelsk\nOkse;Cattle\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_name_list(path)


@pytest.fixture
def Species():
    entries = dedup_categories([("Okse", "Cattle"), ("Blod, EDTA", None)])
    return make_vocabulary_enum("Species", entries)


def test_vocabulary_enum_members(Species):
    assert [m.name for m in Species] == ["Blod_EDTA", "Okse"]
    assert Species.Okse.danish == "Okse"
    assert Species.Okse.english == "Cattle"
    assert Species["Blod_EDTA"].english is None
    assert str(Species.Okse) == "Okse"


def test_vocabulary_enum_parse(Species):
    assert Species.parse("Okse") is Species.Okse
    assert Species.parse(" Blod, EDTA ") is Species.Blod_EDTA
    with pytest.raises(FormatError):
        Species.parse("Cattle")
    assert Species.try_parse("okse") is None


@pytest.mark.parametrize("name", ["parse", "try_parse", "english", "value"])
def test_symbol_shadowing_enum_attribute_raises(name):
    entries = dedup_categories([(name, None), ("Okse", None)])
    with pytest.raises(ValueError, match=name):
        make_vocabulary_enum("Clashing", entries)
