"""Tests for catalog validation and index building."""

import pytest

from tagstring.catalog import build_index, generate_alt_names
from tagstring.exceptions import CatalogError, TagstringError


class TestGenerateAltNames:
    def test_two_slash_groups(self):
        assert generate_alt_names("A/B C/D") == ["A C", "A D", "B C", "B D"]

    def test_single_group_with_plain_word(self):
        assert generate_alt_names("Oil/Acrylic Paint") == ["Oil Paint", "Acrylic Paint"]

    def test_empty_pieces_dropped(self):
        assert generate_alt_names("A/ B") == ["A B"]

    def test_duplicates_collapsed(self):
        assert generate_alt_names("A/A B") == ["A B"]

    def test_no_words(self):
        assert generate_alt_names("/") == []


class TestBuildIndex:
    def test_all_tags_in_order_follows_declaration(self, index):
        names = [e.name for e in index.all_tags_in_order]
        assert names == [
            "Portrait",
            "Landscape",
            "Bright",
            "Luminous",
            "Dark",
            "Moody",
            "Versus",
            "Oil/Acrylic Paint",
            "Sketch",
            "Ink",
            "Watercolor",
        ]
        assert [e.position for e in index.all_tags_in_order] == list(range(11))

    def test_variant_entries_point_at_main(self, index):
        entry = index.entry(3)
        assert entry.name == "Luminous"
        assert entry.main_name == "Bright"
        assert entry.category == "Mood"

    def test_name_index_is_lower_cased(self, index):
        assert index.name_index["luminous"] == [3]
        assert "Luminous" not in index.name_index

    def test_alias_index(self, index):
        assert index.alias_index == {"scenery": [1], "vs": [6]}

    def test_alt_name_index_only_for_slash_names(self, index):
        assert index.alt_name_index == {"oil paint": [7], "acrylic paint": [7]}

    def test_slash_names_with_variants_not_expanded(self):
        idx = build_index(
            {"categories": [{"name": "C", "tags": [{"name": ["A/B", "C/D"]}]}]}
        )
        assert idx.alt_name_index == {}

    def test_duplicate_names_across_categories_accumulate(self):
        idx = build_index(
            {
                "categories": [
                    {"name": "One", "tags": [{"name": "x"}]},
                    {"name": "Two", "tags": [{"name": "y"}, {"name": "X"}]},
                ]
            }
        )
        assert idx.name_index["x"] == [0, 2]

    def test_lookup_tables_priority(self, index):
        assert [name for name, _ in index.lookup_tables()] == ["name", "alias", "alt_name"]

    def test_defaults(self):
        idx = build_index({"categories": []})
        assert idx.separator == ", "
        assert idx.alternative_separator == ", "
        assert idx.character_limit is None
        assert idx.limit_configured is False
        assert idx.reference == ""

    def test_zero_limit_disables(self):
        assert build_index({"characterLimit": 0, "categories": []}).character_limit is None

    def test_fractional_limit_kept(self):
        idx = build_index({"characterLimit": 0.5, "categories": []})
        assert idx.character_limit == 0.5
        assert idx.limit_configured is True

    def test_category_fields(self, index):
        style = index.category("Style")
        assert style.type == "ordered"
        assert style.requirement == "atLeastOneMain"
        assert style.override_requirement_text == "Pick a main style"
        mood = index.category("Mood")
        assert mood.requirement == "none"
        assert mood.description == "Overall feeling"

    def test_tag_spec_fields(self, index):
        spec = index.category("Mood").spec_for("Bright")
        assert spec.names == ("Bright", "Luminous")
        assert spec.variants == ("Luminous",)
        assert spec.alternative == "well-lit"
        sketch = index.category("Style").spec_for("Sketch")
        assert sketch.required_tags == ("Ink", "Missing")
        dark = index.category("Mood").spec_for("Dark")
        assert dark.required_tags == ("Moody",)

    def test_tag_info_variant_flag(self, index):
        mood = index.category("Mood")
        assert mood.tag("Luminous").is_variant is True
        assert mood.tag("Bright").is_variant is False
        assert mood.tag("Luminous").main_name == "Bright"

    def test_unknown_category_raises(self, index):
        with pytest.raises(TagstringError, match="Unknown category 'Nope'"):
            index.category("Nope")

    def test_unknown_tag_raises(self, index):
        with pytest.raises(TagstringError, match="not found in category"):
            index.category("Mood").tag("Nope")

    def test_subgroups_first_seen_order(self, index):
        groups = index.category("Style").subgroups()
        assert [name for name, _ in groups] == ["", "Media"]
        assert [s.main_name for s in groups[1][1]] == ["Ink", "Watercolor"]

    def test_unknown_type_kept(self):
        idx = build_index({"categories": [{"name": "C", "type": "weird", "tags": []}]})
        assert idx.category("C").type == "weird"
        assert idx.category("C").is_known_type is False

    def test_missing_type_is_standard(self):
        idx = build_index({"categories": [{"name": "C", "tags": []}]})
        assert idx.category("C").type == "standard"

    def test_unknown_requirement_becomes_none(self):
        idx = build_index(
            {"categories": [{"name": "C", "requirement": "always", "tags": []}]}
        )
        assert idx.category("C").requirement == "none"


class TestCatalogValidation:
    @pytest.mark.parametrize(
        "data, message",
        [
            ([], "top level must be an object"),
            ({}, "categories array is required"),
            ({"categories": {}}, "categories array is required"),
            ({"categories": ["x"]}, "must be an object"),
            ({"categories": [{"tags": []}]}, "name must be a string"),
            ({"categories": [{"name": "C"}]}, "must contain a tags array"),
            ({"categories": [{"name": "C", "tags": [{}]}]}, "name must not be empty"),
            ({"categories": [{"name": "C", "tags": ["a"]}]}, "must be an object"),
            ({"categories": [{"name": "C", "tags": [{"name": []}]}]}, "must not be empty"),
            ({"categories": [{"name": "C", "tags": [{"name": [1]}]}]}, "string or list"),
            (
                {"categories": [{"name": "C", "tags": [{"name": "a", "knownAs": 3}]}]},
                "knownAs",
            ),
            ({"separator": "", "categories": []}, "separator must not be empty"),
            ({"separator": 1, "categories": []}, "separator must be a string"),
            ({"characterLimit": -1, "categories": []}, "characterLimit"),
            ({"characterLimit": "10", "categories": []}, "characterLimit"),
            ({"characterLimit": True, "categories": []}, "characterLimit"),
        ],
    )
    def test_malformed_catalog_raises(self, data, message):
        with pytest.raises(CatalogError, match=message):
            build_index(data)

    def test_duplicate_category(self):
        data = {"categories": [{"name": "C", "tags": []}, {"name": "C", "tags": []}]}
        with pytest.raises(CatalogError, match="declared twice"):
            build_index(data)

    def test_repeated_tag_in_category_loads(self):
        idx = build_index(
            {"categories": [{"name": "A", "tags": [{"name": "x"}, {"name": "y"}, {"name": "x"}]}]}
        )
        assert [e.name for e in idx.all_tags_in_order] == ["x", "y", "x"]
        assert idx.name_index["x"] == [0, 2]
        assert idx.entry(2).spec is idx.category("A").tag("x").spec

    def test_shared_variant_keeps_both_declarations(self):
        idx = build_index(
            {
                "categories": [
                    {
                        "name": "Region",
                        "tags": [
                            {"name": ["Sneakers", "Trainers"]},
                            {"name": ["Runners", "Trainers"]},
                        ],
                    }
                ]
            }
        )
        assert idx.name_index["trainers"] == [1, 3]
        assert idx.entry(1).main_name == "Sneakers"
        assert idx.category("Region").tag("Trainers").main_name == "Runners"
        assert idx.category("Region").spec_for("Sneakers").names == ("Sneakers", "Trainers")

    def test_catalog_error_exit_code(self):
        with pytest.raises(CatalogError) as exc_info:
            build_index({})
        assert exc_info.value.exit_code == 2
