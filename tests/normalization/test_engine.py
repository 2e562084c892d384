"""Tests for guess normalization."""

from wine_lens import GuessedWine, normalize_guess
from wine_lens.normalization import normalize_guesses, normalize_type


def test_normalize_guess_parses_short_year():
    guess = GuessedWine(name="Comenda Grande", type="red", year="21", price="11.99")

    result = normalize_guess(guess)

    assert result.name == "Comenda Grande"
    assert result.type == "red"
    assert result.year == 2021


def test_normalize_guess_unknown_year():
    guess = GuessedWine(name="Vila Santa", type="red", year="N/A", price="N/A")

    result = normalize_guess(guess)

    assert result.year is None


def test_normalize_guess_keeps_name_verbatim():
    guess = GuessedWine(name="  Quinta do Carmo ", type="red", year="2018")

    assert normalize_guess(guess).name == "  Quinta do Carmo "


def test_normalize_type_known_colors():
    assert normalize_type("red") == "red"
    assert normalize_type("Red") == "red"
    assert normalize_type(" white ") == "white"


def test_normalize_type_unrecognized_is_none():
    assert normalize_type("rosé") is None
    assert normalize_type("tinto") is None
    assert normalize_type("") is None
    assert normalize_type(None) is None


def test_normalize_guesses_preserves_order():
    guesses = [
        GuessedWine(name="A", type="red", year="2018"),
        GuessedWine(name="B", type="white", year="85"),
        GuessedWine(name="C", type="sparkling", year=None),
    ]

    result = normalize_guesses(guesses)

    assert [item.name for item in result] == ["A", "B", "C"]
    assert [item.year for item in result] == [2018, 1985, None]
    assert [item.type for item in result] == ["red", "white", None]
