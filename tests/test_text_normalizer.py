"""Text normalizer tests."""

import unicodedata

from src.services.text_normalizer import fold_case, normalize


def test_folds_swedish_capitals():
    """Test that Å, Ä and Ö fold to their lower-case forms."""
    assert normalize("ÄGG") == "ägg"
    assert normalize("SMÖR") == "smör"
    assert normalize("Ål") == "ål"


def test_decomposed_letters_compare_equal():
    """Test that decomposed accents normalize to the composed form."""
    decomposed = unicodedata.normalize("NFD", "Mjölk")
    assert decomposed != "Mjölk"
    assert normalize(decomposed) == normalize("Mjölk") == "mjölk"


def test_strips_parenthetical_modifiers():
    """Test that parenthetical qualifiers are dropped for matching."""
    assert normalize("citron (finrivet skal)") == "citron"
    assert normalize("Smör (rumstempererat)") == "smör"
    assert normalize("olivolja (extra virgin) till stekning") == "olivolja till stekning"


def test_keeps_multi_word_phrases():
    """Test that phrases stay whole with collapsed whitespace."""
    assert normalize("  Dulce   de\tleche ") == "dulce de leche"


def test_empty_inputs():
    """Test that empty and whitespace input normalize to an empty string."""
    assert normalize(None) == ""
    assert normalize("") == ""
    assert normalize("   ") == ""
    assert normalize("(bara parentes)") == ""


def test_truncates_long_input():
    """Test that input is capped at 200 characters."""
    assert len(normalize("a" * 500)) == 200


def test_fold_case_keeps_parentheses():
    """Test that fold_case only folds case."""
    assert fold_case("Citron (Skal)") == "citron (skal)"
