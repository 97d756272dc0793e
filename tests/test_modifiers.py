"""Tests for tagexpander.modifiers module."""

import pytest

from tagexpander.modifiers import (
    BASE_MODIFIERS,
    a,
    capitalize,
    capitalize_all,
    ed,
    first_s,
    replace,
    s,
)


class TestArticles:
    """Tests for the a modifier."""

    @pytest.mark.parametrize(
        "word, expected",
        [
            ("cat", "a cat"),
            ("owl", "an owl"),
            ("Apple", "an Apple"),
            ("unicorn", "a unicorn"),
            ("umbrella", "an umbrella"),
            ("", "a "),
        ],
    )
    def test_article(self, word, expected):
        assert a(word, []) == expected


class TestPlurals:
    """Tests for s and firstS."""

    @pytest.mark.parametrize(
        "word, expected",
        [
            ("cat", "cats"),
            ("bus", "buses"),
            ("wish", "wishes"),
            ("box", "boxes"),
            ("city", "cities"),
            ("day", "days"),
        ],
    )
    def test_s(self, word, expected):
        assert s(word, []) == expected

    def test_first_s(self):
        assert first_s("cat of the house", []) == "cats of the house"

    def test_first_s_single_word(self):
        assert first_s("fox", []) == "foxes"


class TestPastTense:
    """Tests for ed."""

    @pytest.mark.parametrize(
        "word, expected",
        [
            ("walk", "walked"),
            ("bake", "baked"),
            ("fix", "fixed"),
            ("cry", "cried"),
            ("play", "played"),
        ],
    )
    def test_ed(self, word, expected):
        assert ed(word, []) == expected


class TestCapitalization:
    """Tests for capitalize and capitalizeAll."""

    def test_capitalize(self):
        assert capitalize("hello world", []) == "Hello world"

    def test_capitalize_empty(self):
        assert capitalize("", []) == ""

    def test_capitalize_all(self):
        assert capitalize_all("the old-time tale", []) == "The Old-Time Tale"


class TestReplace:
    """Tests for replace."""

    def test_replace_all(self):
        assert replace("a-b-c", ["-", "+"]) == "a+b+c"

    def test_missing_params(self):
        assert replace("abc", ["a"]) == "abc"


class TestRegistry:
    """The registry names match the rule syntax."""

    def test_names(self):
        assert set(BASE_MODIFIERS) == {"replace", "capitalizeAll", "capitalize", "a", "firstS", "s", "ed"}
