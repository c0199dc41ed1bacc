from todo_api.tags import (
    add_tag,
    has_tag,
    normalize_tag,
    normalize_tags,
    remove_tag,
    unique_tags_across,
)


class TestNormalizeTag:
    def test_case_and_whitespace_variants_collapse(self):
        variants = ["Shopping", "shopping", "  SHOPPING ", "\tShOpPiNg\n"]
        assert {normalize_tag(v) for v in variants} == {"shopping"}

    def test_blank_input_normalizes_to_empty(self):
        assert normalize_tag("") == ""
        assert normalize_tag("   ") == ""

    def test_inner_whitespace_is_kept(self):
        assert normalize_tag("  Side Project ") == "side project"


class TestTagSet:
    def test_add_then_has_with_any_variant(self):
        tags = []
        add_tag(tags, "Work")
        assert has_tag(tags, "work")
        assert has_tag(tags, "  WORK  ")
        assert tags == ["work"]

    def test_adding_same_tag_twice_keeps_size(self):
        tags = []
        add_tag(tags, "home")
        add_tag(tags, " Home ")
        assert len(tags) == 1

    def test_blank_tag_is_never_added(self):
        tags = []
        add_tag(tags, "")
        add_tag(tags, "   ")
        assert tags == []

    def test_remove_uses_normalized_form(self):
        tags = ["urgent", "home"]
        remove_tag(tags, " URGENT")
        assert tags == ["home"]

    def test_remove_absent_tag_is_noop(self):
        tags = ["home"]
        remove_tag(tags, "work")
        assert tags == ["home"]

    def test_has_tag_false_when_missing(self):
        assert not has_tag(["home"], "work")


class TestNormalizeTags:
    def test_dedupes_and_drops_blanks(self):
        assert normalize_tags(["Shopping", " Personal ", "shopping", " "]) == ["shopping", "personal"]

    def test_none_is_empty(self):
        assert normalize_tags(None) == []


class TestUniqueTagsAcross:
    def test_sorted_distinct(self):
        todos = [
            {"tags": ["shopping", "personal"]},
            {"tags": ["work", "personal"]},
            {"tags": []},
        ]
        assert unique_tags_across(todos) == ["personal", "shopping", "work"]

    def test_empty_collection(self):
        assert unique_tags_across([]) == []
