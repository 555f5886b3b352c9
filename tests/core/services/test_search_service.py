import pytest

from lhq_editor.core.elements import VirtualRootElement
from lhq_editor.core.services.search_service import AdvancedFindService


@pytest.fixture
def service():
    return AdvancedFindService()


@pytest.fixture
def vroot(sample_root):
    return VirtualRootElement(sample_root)


def test_name_search_and_advance_wraps(service, sample_root, vroot):
    first = service.find(sample_root, vroot, "Error")
    assert not first.same_search
    assert first.total == 2
    assert first.element.name == "Error"
    assert service.options.type == "name"

    second = service.find(sample_root, vroot, "Error")
    assert second.same_search
    assert second.element.name == "ErrorDetail"

    third = service.find(sample_root, vroot, " Error ")
    assert third.element.name == "Error"


def test_hash_prefix_is_name_search(service, sample_root, vroot):
    result = service.find(sample_root, vroot, "#deep")
    assert result.element.name == "Deep"
    assert service.options.filter == "deep"


def test_new_search_restarts_at_first_match(service, sample_root, vroot):
    service.find(sample_root, vroot, "Error")
    service.find(sample_root, vroot, "Error")
    uid = service.options.uid
    result = service.find(sample_root, vroot, "Title")
    assert result.element.name == "Title"
    assert service.options.elem_idx == 0
    assert service.options.uid != uid


def test_path_search(service, sample_root, vroot):
    result = service.find(sample_root, vroot, "/Messages/Err")
    assert service.options.type == "path"
    assert service.options.paths == ["Messages", "Err"]
    assert result.total == 2
    assert result.element.name == "Error"
    assert service.find(sample_root, vroot, "/Messages/Err").element.name == "ErrorDetail"


def test_bare_slash_focuses_root(service, sample_root, vroot):
    assert service.find(sample_root, vroot, "/").element is sample_root
    assert service.find(sample_root, vroot, "\\").element is sample_root


def test_language_search(service, sample_root, vroot):
    result = service.find(sample_root, vroot, "@de")
    assert result.element is vroot.languages_root.find("de")
    assert service.find(sample_root, vroot, "@xx").element is None


def test_translation_search(service, sample_root, vroot):
    result = service.find(sample_root, vroot, "!fenster")
    assert service.options.type == "translation"
    assert result.element.name == "Title"
    match = service.options.find_match(result.element)
    assert match.match.match == "contains"
    assert match.match.highlights is None


def test_no_match_and_no_model(service, sample_root, vroot):
    result = service.find(sample_root, vroot, "Nothing")
    assert result.element is None
    assert result.total == 0
    assert service.find(None, None, "Error").element is None


def test_reset_clears_state(service, sample_root, vroot):
    service.find(sample_root, vroot, "Error")
    service.reset()
    assert service.options.elems == []
    assert service.options.search_text == ""


def test_case_sensitive_service(sample_root, vroot):
    service = AdvancedFindService(ignore_case=False)
    assert service.find(sample_root, vroot, "error").element is None
