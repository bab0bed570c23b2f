"""Unit tests for chord-symbol parsing."""

import pytest

from chordbook.chord_parser import (
    DEFAULT_CHORD,
    ParsedChord,
    match_root_token,
    parse_chord,
    with_quality,
    with_root,
)


def test_sharp_root_preferred_over_bare_letter() -> None:
    assert parse_chord("C#m7") == ParsedChord(root_index=1, quality="m7", original_root_token="C#")


def test_solfege_root() -> None:
    assert parse_chord("Dosus4") == ParsedChord(root_index=2, quality="sus4", original_root_token="Do")


def test_solfege_sharp_preferred_over_bare_solfege() -> None:
    parsed = parse_chord("Sol#m")
    assert parsed.root_index == 8
    assert parsed.quality == "m"


@pytest.mark.parametrize(
    ("text", "root", "quality"),
    [
        ("Bbmaj7", 10, "maj7"),
        ("Eb", 3, ""),
        ("Mib7", 3, "7"),
        ("Lam", 9, "m"),
        ("Sim7b5", 11, "m7b5"),
        ("G", 7, ""),
    ],
)
def test_roots_and_qualities(text: str, root: int, quality: str) -> None:
    parsed = parse_chord(text)
    assert parsed.root_index == root
    assert parsed.quality == quality


def test_matching_is_case_insensitive_but_keeps_token_text() -> None:
    parsed = parse_chord("c#m")
    assert parsed.root_index == 1
    assert parsed.original_root_token == "c#"
    assert parsed.quality == "m"


def test_quality_is_kept_verbatim() -> None:
    assert parse_chord("Am7(b13)").quality == "m7(b13)"


def test_empty_input_defaults_to_c() -> None:
    assert parse_chord("") == DEFAULT_CHORD
    assert DEFAULT_CHORD.root_index == 0
    assert not DEFAULT_CHORD.has_root


def test_unrecognized_root_defaults_to_c() -> None:
    assert parse_chord("#m7") == DEFAULT_CHORD
    assert parse_chord("Hm") == DEFAULT_CHORD


def test_solfege_is_tried_before_its_leading_letter() -> None:
    assert match_root_token("Fa#") == "Fa#"
    assert match_root_token("Fadd9") == "Fa"


def test_with_root_replaces_only_the_root() -> None:
    assert with_root("Dosus4", 9) == "Asus4"


def test_with_quality_keeps_root_as_typed() -> None:
    assert with_quality("Sol7", "m") == "Solm"
    assert with_quality("", "m7") == "Cm7"
