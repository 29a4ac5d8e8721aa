"""Tests for free-text parsing: tokenizing, ring search, lookup priority."""

import pytest

from tagstring.catalog import build_index
from tagstring.parser import TextParser, ring_search, split_tokens
from tagstring.selection import SelectionStore
from tagstring.serializer import to_canonical_string
from tagstring.state_machine import CategoryStateMachine

RING_CATALOG = {
    "categories": [
        {"name": "A", "tags": [{"name": "x"}]},
        {"name": "B", "tags": [{"name": "y"}]},
        {"name": "C", "tags": [{"name": "x"}]},
    ]
}


def _parser_for(data_or_index):
    idx = data_or_index if not isinstance(data_or_index, dict) else build_index(data_or_index)
    store = SelectionStore(idx.categories)
    return TextParser(idx, store, CategoryStateMachine(idx, store))


@pytest.fixture
def parser(index):
    return _parser_for(index)


class TestSplitTokens:
    def test_trims_and_drops_empty(self):
        assert split_tokens(" a , b,, ,c ", ",") == ["a", "b", "c"]

    def test_keeps_casing(self):
        assert split_tokens("Foo, BAR", ", ") == ["Foo", "BAR"]

    def test_empty_text(self):
        assert split_tokens("", ", ") == []

    def test_multi_char_separator(self):
        assert split_tokens("a | b|c", " | ") == ["a", "b|c"]


class TestRingSearch:
    @pytest.mark.parametrize(
        "positions, last_idx, expected",
        [
            ([0, 2], -1, 0),
            ([0, 2], 0, 2),
            ([0, 2], 1, 2),
            ([0, 2], 2, 0),
            ([5], 9, 5),
            ([7, 3], -1, 3),
            ([], 0, None),
        ],
    )
    def test_next_after_cursor_with_wrap(self, positions, last_idx, expected):
        assert ring_search(positions, last_idx) == expected


class TestRingDisambiguation:
    def test_repeated_name_advances(self):
        result = _parser_for(RING_CATALOG).parse("x, x")
        assert result.positions == [0, 2]

    def test_third_occurrence_wraps(self):
        result = _parser_for(RING_CATALOG).parse("x, x, x")
        assert result.positions == [0, 2, 0]

    def test_cursor_moves_past_other_names(self):
        result = _parser_for(RING_CATALOG).parse("y, x")
        assert result.positions == [1, 2]

    def test_later_occurrence_owns_main(self):
        p = _parser_for(RING_CATALOG)
        p.parse("x, x")
        assert p.store.owner_category() == {"x": "C"}

    def test_deterministic(self):
        first = _parser_for(RING_CATALOG).parse("x, y, x, x")
        second = _parser_for(RING_CATALOG).parse("x, y, x, x")
        assert first.positions == second.positions


class TestLookupPriority:
    def test_alias(self, parser):
        result = parser.parse("vs")
        assert parser.store.is_selected("Mood", "Versus")
        assert result.resolved[0].source == "alias"

    def test_alias_is_case_insensitive(self, parser):
        parser.parse("SCENERY")
        assert parser.store.selected_mains("Subject") == frozenset({"Landscape"})

    def test_slash_expansion(self, parser):
        result = parser.parse("acrylic paint")
        assert parser.store.ordered_mains("Style") == ("Oil/Acrylic Paint",)
        assert result.resolved[0].source == "alt_name"

    def test_full_slash_name_by_name(self, parser):
        result = parser.parse("oil/acrylic paint")
        assert result.resolved[0].source == "name"
        assert result.resolved[0].position == 7

    def test_name_beats_alias(self):
        p = _parser_for(
            {
                "categories": [
                    {"name": "One", "tags": [{"name": "Other", "knownAs": ["Shared"]}]},
                    {"name": "Two", "tags": [{"name": "Shared"}]},
                ]
            }
        )
        result = p.parse("shared")
        assert result.resolved[0].source == "name"
        assert p.store.owner_category() == {"Shared": "Two"}

    def test_alias_beats_slash_expansion(self):
        p = _parser_for(
            {
                "categories": [
                    {"name": "One", "tags": [{"name": "A/B C"}]},
                    {"name": "Two", "tags": [{"name": "Z", "knownAs": ["a c"]}]},
                ]
            }
        )
        result = p.parse("A C")
        assert result.resolved[0].source == "alias"
        assert p.store.owner_category() == {"Z": "Two"}

    def test_variant_selected_as_representative(self, parser):
        parser.parse("luminous")
        assert parser.store.variant_of("Mood", "Bright") == "Luminous"


class TestParse:
    def test_unrecognized_kept_in_order_with_casing(self, parser):
        result = parser.parse("Portrait, Foo, bar ,  , Baz")
        assert result.unrecognized == ["Foo", "bar", "Baz"]
        assert parser.store.selected_mains("Subject") == frozenset({"Portrait"})

    def test_parse_resets_store(self, parser):
        parser.parse("Portrait, Dark")
        parser.parse("Versus")
        assert parser.store.owner_category() == {"Versus": "Mood"}

    def test_empty_text_clears(self, parser):
        parser.parse("Portrait")
        result = parser.parse("")
        assert parser.store.is_empty()
        assert result.tokens == []

    def test_single_category_last_token_wins(self, parser):
        parser.parse("Portrait, Landscape")
        assert parser.store.selected_mains("Subject") == frozenset({"Landscape"})

    def test_no_companion_cascade(self, parser):
        parser.parse("Dark")
        assert parser.store.selected_mains("Mood") == frozenset({"Dark"})

    def test_ordered_follows_input_with_mains_first(self, parser):
        parser.parse("Ink, Oil Paint, sketch")
        assert parser.store.ordered_mains("Style") == ("Oil/Acrylic Paint", "Ink", "Sketch")

    def test_custom_separator(self):
        p = _parser_for(
            {"separator": "|", "categories": [{"name": "A", "tags": [{"name": "a"}, {"name": "b"}]}]}
        )
        result = p.parse("a|b| c ")
        assert result.unrecognized == ["c"]
        assert p.store.selected_mains("A") == frozenset({"a", "b"})


class TestRoundTrip:
    def test_clicks_then_parse_reproduces_state(self, index):
        store = SelectionStore(index.categories)
        machine = CategoryStateMachine(index, store)
        for category, tag in [
            ("Subject", "Landscape"),
            ("Mood", "Luminous"),
            ("Mood", "Dark"),
            ("Style", "Sketch"),
            ("Style", "Watercolor"),
        ]:
            machine.on_toggle(category, tag)
        canonical = to_canonical_string(index, store)
        assert canonical == "Landscape, Luminous, Dark, Moody, Watercolor, Sketch, Ink"

        p = _parser_for(index)
        result = p.parse(canonical)
        assert result.unrecognized == []
        assert p.store.as_dict() == store.as_dict()


class TestRepeatedNamesInOneCategory:
    def test_ring_walks_within_category(self):
        p = _parser_for(
            {"categories": [{"name": "A", "tags": [{"name": "x"}, {"name": "y"}, {"name": "x"}]}]}
        )
        result = p.parse("x, x")
        assert result.positions == [0, 2]
        assert result.unrecognized == []
        assert p.store.selected_mains("A") == frozenset({"x"})
        assert to_canonical_string(p.index, p.store) == "x"

    def test_shared_variant_resolves_to_its_own_group(self):
        p = _parser_for(
            {
                "categories": [
                    {
                        "name": "Region",
                        "tags": [
                            {"name": ["Sneakers", "Trainers"], "alternative": "UK"},
                            {"name": ["Runners", "Trainers"], "alternative": "AU"},
                        ],
                    }
                ]
            }
        )
        result = p.parse("Trainers, Trainers")
        assert result.positions == [1, 3]
        assert p.store.variant_of("Region", "Sneakers") == "Trainers"
        assert p.store.variant_of("Region", "Runners") == "Trainers"
        assert to_canonical_string(p.index, p.store) == "Trainers, Trainers"


class TestCrossCategoryRoundTrip:
    def test_reparse_assigns_first_declaring_category(self):
        clicked = _parser_for(RING_CATALOG)
        clicked.machine.on_toggle("A", "x")
        clicked.machine.on_toggle("C", "x")
        assert clicked.store.owner_category() == {"x": "C"}

        canonical = to_canonical_string(clicked.index, clicked.store)
        p = _parser_for(RING_CATALOG)
        p.parse(canonical)
        assert canonical == "x"
        assert p.store.owner_category() == {"x": "A"}
