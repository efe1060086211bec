import pytest

from association_cms.i18n.detection import (
    detect_locale_from_header,
    match_candidate,
    parse_accept_language,
)


def test_quality_overrides_header_order() -> None:
    assert detect_locale_from_header("de;q=0.5,en;q=0.9", ["en", "de"], "en") == "en"
    assert detect_locale_from_header("en;q=0.5,de;q=0.9", ["en", "de"], "en") == "de"


@pytest.mark.parametrize("header", [None, ""])
def test_missing_header_returns_default(header: str | None) -> None:
    assert detect_locale_from_header(header, ["en", "de"], "en") == "en"


def test_no_match_returns_default() -> None:
    assert detect_locale_from_header("fr-FR,fr;q=0.9", ["en", "de"], "de") == "de"


def test_exact_match_is_case_insensitive() -> None:
    assert detect_locale_from_header("DE-at", ["en", "de-AT"], "en") == "de-AT"


def test_language_prefix_takes_first_declared_locale() -> None:
    # Unlike resolve_locale, the default locale is not preferred
    configured = ["en", "de-CH", "de-AT"]
    assert detect_locale_from_header("de", configured, "de-AT") == "de-CH"


def test_exact_match_beats_earlier_prefix_match() -> None:
    configured = ["en", "de-CH", "de", "de-AT"]
    assert detect_locale_from_header("de", configured, "de-AT") == "de"


def test_region_candidate_matches_other_region() -> None:
    assert detect_locale_from_header("en-GB", ["de", "en-US"], "de") == "en-US"


def test_equal_weights_keep_header_order() -> None:
    assert detect_locale_from_header("de, en", ["en", "de"], "en") == "de"


def test_later_candidates_are_tried() -> None:
    header = "fr-CH, fr;q=0.9, de;q=0.7, *;q=0.5"
    assert detect_locale_from_header(header, ["en", "de-AT"], "en") == "de-AT"


def test_parse_accept_language() -> None:
    parsed = parse_accept_language("en-US,en;q=0.9, DE;q=0.8 ,fr;q=bad,,")
    assert parsed == [("en-us", 1.0), ("fr", 1.0), ("en", 0.9), ("de", 0.8)]


def test_zero_or_invalid_quality_counts_as_unweighted() -> None:
    assert parse_accept_language("de;q=0, en;q=0.5, fr;q=nan") == [
        ("de", 1.0),
        ("fr", 1.0),
        ("en", 0.5),
    ]


def test_zero_quality_candidate_is_still_matched() -> None:
    assert detect_locale_from_header("de;q=0", ["en", "de"], "en") == "de"


def test_parse_accept_language_ignores_other_params() -> None:
    assert parse_accept_language("de;level=1;q=0.4") == [("de", 0.4)]


def test_wildcard_matches_nothing() -> None:
    assert match_candidate("*", ["en", "de"]) is None
