import pytest

from unprefixed_intl.core.accept_language import parse_accept_language
from unprefixed_intl.core.resolver import best_match


@pytest.mark.parametrize(
    "header,expected",
    [
        ("fr-CH, fr;q=0.9, en;q=0.8, de;q=0.7, *;q=0.5", ["fr-CH", "fr", "en", "de"]),
        ("en;q=0.5, es", ["es", "en"]),
        ("de, en, es", ["de", "en", "es"]),
        ("en;q=0, es;q=abc, pt", ["pt"]),
        ("", []),
        (None, []),
        (" , ;q=1", []),
        ("en;q=1.5, es;q=inf, fr;q=nan, de;q=1", ["de"]),
    ],
)
def test_parse_accept_language(header, expected):
    assert parse_accept_language(header) == expected


def test_limit():
    assert parse_accept_language("a, b, c, d", limit=2) == ["a", "b"]


@pytest.mark.parametrize("limit", [0, -1, None])
def test_non_positive_limit_keeps_everything(limit):
    assert parse_accept_language("a, b, c, d", limit=limit) == ["a", "b", "c", "d"]


def test_header_feeds_best_match(scenario_store):
    accepted = parse_accept_language("fr-FR;q=0.9, es-MX;q=0.8, en;q=0.1")
    assert best_match(accepted, scenario_store) == "es"
