import pytest

from lhq_editor.core.elements import VirtualRootElement
from lhq_editor.core.services.tree_editing_service import OperationResult, TreeEditingService


@pytest.fixture
def service():
    return TreeEditingService()


@pytest.fixture
def languages(sample_root):
    return VirtualRootElement(sample_root).languages_root


# ---------------------------
# Elements
# ---------------------------

def test_add_category_under_root(service, sample_root):
    result = service.add_element(sample_root, "category", "Dialogs")
    assert isinstance(result, OperationResult)
    assert result.success
    assert result.message == "Added new category 'Dialogs' under '/'"
    assert result.details["element"] is sample_root.get_category("Dialogs")


def test_add_on_resource_adds_sibling(service, sample_root):
    error = sample_root.get_category("Messages").get_resource("Error")
    result = service.add_element(error, "resource", "Info")
    assert result.success
    assert result.details["parent_path"] == "/Messages"
    assert sample_root.get_category("Messages").contains("Info", "resource")


def test_add_rejects_invalid_and_duplicate_names(service, sample_root):
    messages = sample_root.get_category("Messages")
    bad = service.add_element(messages, "resource", "1st")
    assert not bad.success
    assert bad.message == "Name cannot start with a number."
    dup = service.add_element(messages, "resource", "Error")
    assert not dup.success
    assert "already exists" in dup.message
    assert [r.name for r in messages.resources] == ["Error", "ErrorDetail", "Warning"]


def test_add_rejects_unknown_type_and_virtual_parent(service, sample_root, languages):
    assert not service.add_element(sample_root, "model", "X").success
    assert not service.add_element(languages, "category", "X").success


def test_rename_element(service, sample_root):
    warning = sample_root.get_category("Messages").get_resource("Warning")
    result = service.rename_element(warning, "Notice")
    assert result.success
    assert warning.name == "Notice"
    assert result.details["old_path"] == "/Messages/Warning"
    assert result.details["new_path"] == "/Messages/Notice"


def test_rename_rejections(service, sample_root, languages):
    error = sample_root.get_category("Messages").get_resource("Error")
    assert not service.rename_element(error, "Error").success
    assert not service.rename_element(error, "").success
    assert not service.rename_element(error, "Warning").success
    assert not service.rename_element(sample_root, "Other").success
    assert not service.rename_element(languages.find("en"), "xx").success
    assert error.name == "Error"


def test_delete_single_and_multiple(service, sample_root):
    messages = sample_root.get_category("Messages")
    result = service.delete_elements([messages.get_resource("Warning")])
    assert result.success
    assert result.message == "Successfully deleted resource '/Messages/Warning'."

    result = service.delete_elements(messages.resources)
    assert result.success
    assert result.message == "Successfully deleted 2 selected elements."
    assert not messages.has_resources


def test_delete_refuses_root_and_diff_parents(service, sample_root):
    assert not service.delete_elements([sample_root]).success
    error = sample_root.get_category("Messages").get_resource("Error")
    title = sample_root.get_category("Labels").get_resource("Title")
    result = service.delete_elements([error, title])
    assert not result.success
    assert "different parents" in result.message
    assert not service.delete_elements([]).success


def test_move_elements(service, sample_root):
    labels = sample_root.get_category("Labels")
    empty = sample_root.get_category("Empty")
    result = service.move_elements(labels.resources, empty)
    assert result.success
    assert [r.name for r in empty.resources] == ["Title", "Cancel"]
    assert result.details["skipped"] == []
    assert not labels.has_resources


def test_move_skips_name_clash(service, sample_root):
    labels = sample_root.get_category("Labels")
    messages = sample_root.get_category("Messages")
    labels.add_resource("Error")
    result = service.move_elements([labels.get_resource("Error"), labels.get_resource("Cancel")], messages)
    assert result.success
    assert result.details["skipped"] == ["/Labels/Error"]
    assert [x.name for x in result.details["moved"]] == ["Cancel"]


def test_move_refusals(service, sample_root):
    messages = sample_root.get_category("Messages")
    error = messages.get_resource("Error")
    assert not service.move_elements([error], messages).success
    assert not service.move_elements([error], error).success
    title = sample_root.get_category("Labels").get_resource("Title")
    assert not service.move_elements([error, title], sample_root).success
    result = service.move_elements([messages], messages.get_category("Nested"))
    assert not result.success
    assert messages.parent is sample_root


def test_get_category_like_parent(sample_root):
    app_name = sample_root.get_resource("AppName")
    assert TreeEditingService.get_category_like_parent(app_name) is sample_root
    assert TreeEditingService.get_category_like_parent(None) is None


# ---------------------------
# Languages
# ---------------------------

def test_add_languages(service, sample_root):
    result = service.add_languages(sample_root, ["it", "en"])
    assert result.success
    assert result.message == "Successfully added language: it"
    assert sample_root.languages == ["en", "fr", "de", "it"]
    assert not service.add_languages(sample_root, ["it"]).success


def test_delete_languages(service, sample_root, languages):
    result = service.delete_languages(sample_root, [languages.find("de")])
    assert result.success
    assert sample_root.languages == ["en", "fr"]
    assert result.details["removed"] == ["de"]


def test_delete_languages_protects_primary_and_last(service, sample_root, languages):
    result = service.delete_languages(sample_root, [languages.find("fr")])
    assert not result.success
    assert result.message == "Primary language 'fr' cannot be deleted."
    result = service.delete_languages(sample_root, languages.virtual_languages)
    assert not result.success
    assert "At least one language must remain" in result.message
    assert not service.delete_languages(sample_root, [sample_root]).success
    assert sample_root.languages == ["en", "fr", "de"]


def test_mark_language_as_primary(service, sample_root, languages):
    result = service.mark_language_as_primary(sample_root, [languages.find("de")])
    assert result.success
    assert sample_root.primary_language == "de"
    assert result.details["previous"] == "fr"


def test_mark_language_as_primary_rejections(service, sample_root, languages):
    assert not service.mark_language_as_primary(sample_root, [languages.find("fr")]).success
    assert not service.mark_language_as_primary(sample_root, [languages.find("en"), languages.find("de")]).success
    assert not service.mark_language_as_primary(sample_root, []).success
    assert sample_root.primary_language == "fr"
