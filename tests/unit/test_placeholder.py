"""Unit tests for placeholder expansion."""

from __future__ import annotations

import pytest

from row_seed.blueprint.placeholder import (
    alpha_label,
    ancestor_layers,
    expand,
    expand_one,
    expand_value,
    is_ancestor_placeholder,
    substitute_ancestors,
)
from row_seed.core.exceptions import InvalidCountError, PlaceholderError


class TestAlphaLabel:
    def test_single_letters(self) -> None:
        assert alpha_label(1) == "A"
        assert alpha_label(26) == "Z"

    def test_double_letters(self) -> None:
        assert alpha_label(27) == "AA"
        assert alpha_label(28) == "AB"
        assert alpha_label(52) == "AZ"
        assert alpha_label(53) == "BA"

    def test_triple_letters(self) -> None:
        assert alpha_label(702) == "ZZ"
        assert alpha_label(703) == "AAA"

    def test_zero_rejected(self) -> None:
        with pytest.raises(ValueError):
            alpha_label(0)


class TestExpand:
    def test_numeric_sequence(self) -> None:
        assert expand("{#}", 3) == ["1", "2", "3"]

    def test_upper_alpha_sequence(self) -> None:
        labels = expand("{A}", 28)
        assert labels[:3] == ["A", "B", "C"]
        assert labels[25] == "Z"
        assert labels[26:] == ["AA", "AB"]

    def test_lower_alpha_mirrors_upper(self) -> None:
        assert expand("{a}", 28) == [label.lower() for label in expand("{A}", 28)]

    def test_multiple_tokens_share_index(self) -> None:
        assert expand("acc-{#}-{A}-{a}", 2) == ["acc-1-A-a", "acc-2-B-b"]

    def test_zero_count_is_empty(self) -> None:
        assert expand("con{#}", 0) == []

    def test_negative_count_rejected(self) -> None:
        with pytest.raises(InvalidCountError):
            expand("con{#}", -1)

    def test_no_placeholders_repeats_template(self) -> None:
        assert expand("static", 2) == ["static", "static"]

    def test_ancestor_placeholder_untouched(self) -> None:
        assert expand("{P0}-{#}", 2) == ["{P0}-1", "{P0}-2"]

    def test_unknown_token_kept_literal(self) -> None:
        assert expand('{"k": 1} {x}', 1) == ['{"k": 1} {x}']

    def test_unknown_token_rejected_in_strict_mode(self) -> None:
        with pytest.raises(PlaceholderError, match=r"\{x\}"):
            expand("{x}-{#}", 1, strict=True)

    def test_strict_mode_accepts_known_tokens(self) -> None:
        assert expand("{P1}{#}{A}{a}", 1, strict=True) == ["{P1}1Aa"]

    def test_expand_one_uses_zero_based_index(self) -> None:
        assert expand_one("row{#}", 4) == "row5"


class TestExpandValue:
    def test_strings_are_expanded(self) -> None:
        assert expand_value("n{#}", 2) == ["n1", "n2"]

    def test_non_strings_repeat(self) -> None:
        assert expand_value(42, 3) == [42, 42, 42]

    def test_non_string_negative_count_rejected(self) -> None:
        with pytest.raises(InvalidCountError):
            expand_value(None, -2)


class TestAncestorHelpers:
    def test_exact_placeholder(self) -> None:
        assert is_ancestor_placeholder("{P0}") == 0
        assert is_ancestor_placeholder("{P12}") == 12

    def test_embedded_placeholder_is_not_exact(self) -> None:
        assert is_ancestor_placeholder("x{P0}") is None
        assert is_ancestor_placeholder("acc") is None

    def test_layers_in_order_of_appearance(self) -> None:
        assert ancestor_layers("{P1}-{P0}-{P1}") == [1, 0]

    def test_substitute(self) -> None:
        names = {0: "acc", 1: "opp"}
        assert substitute_ancestors("{P0}/{P1}/{#}", names.__getitem__) == "acc/opp/{#}"
