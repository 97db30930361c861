# tests/test_decoder.py
"""Tests for prefix/root/suffix segmentation and glossing."""

import pytest

from mediyap.core.config import DecoderConfig
from mediyap.core.decoder import ComponentMatch, DecodedTerm, MedicalDecoder
from mediyap.core.dictionary import MedicalDictionary


# === Reference terms ===

@pytest.mark.parametrize("term, expected", [
    ("hypoglycemia", "low glucose/sugar presence in blood"),
    ("hyperglycemia", "high glucose/sugar presence in blood"),
    ("tachycardia", "fast heart"),
    ("nephritis", "kidney inflammation"),
    ("carditis", "heart inflammation"),
    ("thrombocytopenia", "clot cell deficiency"),
    ("leukemia", "white presence in blood"),
    ("gastritis", "stomach inflammation"),
    ("colostomy", "colon surgical opening"),
])
def test_decode_reference_terms(decoder, term, expected):
    assert decoder.decode(term) == expected


def test_prefix_root_suffix_order(decoder):
    assert decoder.decode("polyneuropathy") == "many nerve disease"


def test_empty_term(decoder):
    assert decoder.decode("") == "Unable to decode ''"


def test_case_insensitive(decoder):
    assert decoder.decode("NEPHRITIS") == decoder.decode("nephritis")
    assert decoder.decode("HypoGlycemia") == "low glucose/sugar presence in blood"


def test_unknown_term_keeps_original_case(decoder):
    assert decoder.decode("Hello") == "Unable to decode 'Hello'"
    assert decoder.decode("XYZ") == "Unable to decode 'XYZ'"


def test_repeated_calls_identical(decoder):
    first = decoder.decode("thrombocytopenia")
    second = decoder.decode("thrombocytopenia")
    assert first == second
    assert len(decoder.dictionary.roots) == 52


# === Edge cases ===

def test_suffix_only(decoder):
    # no prefix, so no bracketed fragment for the empty root
    assert decoder.decode("itis") == "inflammation"


def test_prefix_with_unknown_root(decoder):
    assert decoder.decode("hypoxia") == "low [xia]"


def test_unknown_root_without_prefix_is_dropped(decoder):
    assert decoder.decode("xyzitis") == "inflammation"


def test_prefix_only(decoder):
    assert decoder.decode("hypo") == "low"


def test_root_found_inside_remaining_text(decoder):
    assert decoder.decode("xxnephrxx") == "kidney"


def test_non_letter_input(decoder):
    assert decoder.decode("123-!") == "Unable to decode '123-!'"


# === Tie-break policy ===

def test_longest_prefix_wins(decoder):
    # "an" beats "a", leaving an empty root
    assert decoder.decode("anemia") == "without presence in blood"


def test_longest_suffix_wins(decoder):
    # "cytosis" beats "osis"
    assert decoder.decode("leukocytosis") == "white increase in cells"


def test_declared_order():
    decoder = MedicalDecoder(config=DecoderConfig(match_order="declared"))
    # "a" is declared before "an"
    assert decoder.decode("anemia") == "without [n] presence in blood"


def test_equal_length_keeps_declaration_order():
    dictionary = MedicalDictionary(
        prefixes={},
        suffixes={},
        roots={"abc": "first", "bcd": "second"},
    )
    decoder = MedicalDecoder(dictionary)
    assert decoder.decode("abcd") == "first"


def test_custom_dictionary():
    dictionary = MedicalDictionary(
        prefixes={"Ab": "away from"},
        suffixes={"ion": "process"},
        roots={"duct": "leading"},
    )
    decoder = MedicalDecoder(dictionary)
    assert decoder.decode("abduction") == "away from leading process"


# === Structured result ===

def test_analyze_components(decoder):
    decoded = decoder.analyze("hypoglycemia")

    assert isinstance(decoded, DecodedTerm)
    assert decoded.recognized
    assert decoded.components == (
        ComponentMatch("prefix", "hypo", "low", 0, 4),
        ComponentMatch("root", "glyc", "glucose/sugar", 4, 8),
        ComponentMatch("suffix", "emia", "presence in blood", 8, 12),
    )
    assert decoded.parts == ["low", "glucose/sugar", "presence in blood"]
    assert str(decoded) == "low glucose/sugar presence in blood"


def test_analyze_unknown_fragment(decoder):
    decoded = decoder.analyze("hypoxia")
    root = decoded.component("root")

    assert root.text == "xia"
    assert root.meaning is None
    assert not root.recognized
    assert root.render() == "[xia]"
    assert decoded.component("suffix") is None


def test_analyze_unrecognized(decoder):
    decoded = decoder.analyze("Hello")
    assert not decoded.recognized
    assert decoded.parts == []
    assert decoded.to_text() == "Unable to decode 'Hello'"


@pytest.mark.parametrize("term", [
    "hypoglycemia", "thrombocytopenia", "xxnephrxx", "hypoxia", "anemia", "colostomy",
])
def test_spans_do_not_overlap(decoder, term):
    components = decoder.analyze(term).components
    for left, right in zip(components, components[1:]):
        assert left.end <= right.start
    for component in components:
        assert term.lower()[component.start:component.end] == component.text


def test_to_dict(decoder):
    data = decoder.analyze("nephritis").to_dict()

    assert data["term"] == "nephritis"
    assert data["decoded"] == "kidney inflammation"
    assert [c["kind"] for c in data["components"]] == ["root", "suffix"]
    assert data["components"][1] == {
        "kind": "suffix", "text": "itis", "meaning": "inflammation", "start": 5, "end": 9,
    }
