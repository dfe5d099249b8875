"""
Search URL pattern test cases (no browser)
"""
import pytest

from pages.search_results_page import search_url_pattern


@pytest.mark.parametrize(
    "keyword, url",
    [
        ("software developer", "https://dealls.com/loker?searchJob=software+developer"),
        ("developer", "https://dealls.com/loker?searchJob=developer&page=1"),
        ("senior software developer", "https://dealls.com/loker?sort=new&searchJob=senior+software+developer"),
        ("c++ developer", "http://127.0.0.1:8000/jobs?searchJob=c%2B%2B+developer"),
        ("ui/ux", "http://127.0.0.1:8000/jobs?searchJob=ui%2Fux"),
        ("ui~ux", "http://127.0.0.1:8000/jobs?searchJob=ui%7Eux"),
    ],
)
def test_pattern_matches_form_encoded_keyword(keyword, url):
    assert search_url_pattern(keyword).search(url)


def test_spaces_must_be_plus_encoded():
    pattern = search_url_pattern("software developer")

    assert not pattern.search("https://dealls.com/loker?searchJob=software%20developer")
    assert not pattern.search("https://dealls.com/loker?searchJob=softwaredeveloper")


def test_regex_metacharacters_are_literal():
    pattern = search_url_pattern("c++")

    assert pattern.pattern == r"searchJob=c%2B%2B"
    assert not pattern.search("https://dealls.com/loker?searchJob=cc")


def test_other_keyword_does_not_match():
    assert not search_url_pattern("data analyst").search(
        "https://dealls.com/loker?searchJob=software+developer"
    )


def test_tilde_is_percent_encoded_like_the_browser():
    pattern = search_url_pattern("ui~ux")

    assert pattern.pattern == r"searchJob=ui%7Eux"
    assert not pattern.search("http://127.0.0.1:8000/jobs?searchJob=ui~ux")
