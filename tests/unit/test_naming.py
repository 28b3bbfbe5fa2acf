"""Unit tests for argument name normalization."""

import pytest

from argschema.naming import camel_case, kebab_case, words


class TestWords:
    """Tests for word splitting."""

    def test_splits_lower_to_upper(self):
        assert words("chromedriverPort") == ["chromedriver", "Port"]

    def test_splits_acronyms(self):
        assert words("XMLHttpRequest") == ["XML", "Http", "Request"]

    def test_splits_digits(self):
        assert words("port2") == ["port", "2"]

    def test_drops_separators(self):
        assert words("__private_flag--name ") == ["private", "flag", "name"]

    def test_empty(self):
        assert words("") == []


class TestKebabCase:
    """Tests for kebab_case."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("someArg", "some-arg"),
            ("chromedriverExecutable", "chromedriver-executable"),
            ("XMLHttpRequest", "xml-http-request"),
            ("allowInsecure", "allow-insecure"),
            ("snake_case_name", "snake-case-name"),
            ("port", "port"),
        ],
    )
    def test_known_names(self, name, expected):
        assert kebab_case(name) == expected

    @pytest.mark.parametrize("name", ["some-arg", "port", "xml-http-request", "port-2"])
    def test_idempotent_on_kebab_input(self, name):
        """Kebab-casing an already kebab-case string is a no-op."""
        assert kebab_case(name) == name
        assert kebab_case(kebab_case(name)) == kebab_case(name)


class TestCamelCase:
    """Tests for camel_case."""

    def test_from_kebab(self):
        assert camel_case("some-arg") == "someArg"

    def test_lowercases_leading_acronym(self):
        assert camel_case("XMLHttpRequest") == "xmlHttpRequest"

    def test_single_word_matches_kebab(self):
        assert camel_case("port") == kebab_case("port") == "port"

    def test_multi_word_differs_from_kebab(self):
        assert camel_case("someArg") != kebab_case("someArg")


class TestNonAsciiNames:
    """Tests for names containing letters outside ASCII."""

    def test_accented_letters_are_kept(self):
        assert words("caféMode") == ["café", "Mode"]
        assert kebab_case("caféMode") == "café-mode"
        assert camel_case("café-mode") == "caféMode"

    def test_accented_name_does_not_merge_with_ascii_name(self):
        assert kebab_case("caféMode") != kebab_case("cafMode")

    def test_non_ascii_upper_starts_a_word(self):
        assert kebab_case("modeÉté") == "mode-été"

    def test_uncased_letters_stay_in_one_word(self):
        assert words("端口Port") == ["端口", "Port"]
