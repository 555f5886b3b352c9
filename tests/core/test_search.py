import pytest

from lhq_editor.core.models import TreeElementPaths
from lhq_editor.core.search import (
    create_tree_element_paths,
    find_childs_by_paths,
    get_element_full_path,
    is_category_like_tree_element,
    is_subset_of_array,
    match_for_substring,
    resolve,
    str_compare,
)


@pytest.mark.parametrize(
    "value, pattern, ignore_case, expected",
    [
        ("ErrorDetail", "Detail", False, ("contains", ((5, 11),))),
        ("Error", "Error", False, ("equal", ((0, 5),))),
        ("Error", "error", True, ("equal", ((0, 5),))),
        ("ErrorDetail", "DETAIL", True, ("contains", ((5, 11),))),
        ("Error", "error", False, ("none", None)),
        ("", "x", False, ("none", None)),
        ("abc", "", False, ("none", None)),
        (None, "x", True, ("none", None)),
    ],
)
def test_match_for_substring(value, pattern, ignore_case, expected):
    result = match_for_substring(value, pattern, ignore_case)
    assert (result.match, result.highlights) == expected


def test_match_highlights_first_occurrence_only():
    result = match_for_substring("abab", "ab")
    assert result.match == "contains"
    assert result.highlights == ((0, 2),)


def test_ignore_case_span_indexes_original_value():
    # "İ".lower() is two characters long
    value = "İab"
    result = match_for_substring(value, "AB", ignore_case=True)
    assert result.match == "contains"
    assert result.highlights == ((1, 3),)
    start, end = result.highlights[0]
    assert value[start:end] == "ab"


def test_str_compare():
    assert str_compare("A", "a", True)
    assert not str_compare("A", "a")
    assert str_compare(None, None)
    assert not str_compare(None, "a")


def test_resolve_empty_path_is_empty(sample_root):
    assert resolve(sample_root, []) == []
    assert resolve(sample_root, "") == []
    assert find_childs_by_paths(sample_root, TreeElementPaths([])) == []


def test_resolve_final_segment_is_pattern(sample_root):
    found = resolve(sample_root, "/Messages/Err")
    assert [m.element.name for m in found] == ["Error", "ErrorDetail"]
    assert all(m.leaf for m in found)
    assert found[0].match.match == "contains"


def test_resolve_never_returns_intermediate_node(sample_root):
    found = resolve(sample_root, ["Messages", "e"])
    names = [m.element.name for m in found]
    assert "Messages" not in names
    assert names == ["Nested", "Error", "ErrorDetail"]


def test_resolve_categories_before_resources(sample_root):
    sample_root.add_resource("Lab")
    found = resolve(sample_root, "Lab")
    assert [(m.element.element_type, m.element.name) for m in found] == [
        ("category", "Labels"),
        ("resource", "Lab"),
    ]


def test_resolve_missing_segment_is_empty(sample_root):
    assert resolve(sample_root, "/Missing/Error") == []


def test_resolve_walks_categories_by_exact_name(sample_root):
    assert resolve(sample_root, "/messages/Err") == []
    assert len(resolve(sample_root, "/Messages/err")) == 2


def test_resolve_through_resource_stops(sample_root):
    assert resolve(sample_root, "/AppName/x") == []


def test_resolve_accepts_backslashes(sample_root):
    found = resolve(sample_root, "\\Messages\\Nested\\De")
    assert [m.element.name for m in found] == ["Deep"]
    assert resolve(sample_root, "\\Messages\\Nested\\De", any_slash=False) == []


def test_resolve_case_sensitive(sample_root):
    assert resolve(sample_root, "/Messages/err", ignore_case=False) == []


def test_helpers(sample_root):
    messages = sample_root.get_category("Messages")
    error = messages.get_resource("Error")
    assert is_category_like_tree_element(sample_root)
    assert is_category_like_tree_element(messages)
    assert not is_category_like_tree_element(error)
    assert not is_category_like_tree_element(None)
    assert get_element_full_path(error) == "/Messages/Error"
    assert get_element_full_path(sample_root) == "/"
    assert create_tree_element_paths("a\\b", True).get_paths() == ["a", "b"]


def test_is_subset_of_array():
    assert is_subset_of_array(["a", "b", "c"], ["a", "b"])
    assert is_subset_of_array(["a"], ["A", "b"], ignore_case=True)
    assert not is_subset_of_array(["a", "b"], ["a", "c"])
    assert not is_subset_of_array(["a"], [])
