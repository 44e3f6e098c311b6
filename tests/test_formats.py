import pytest

from kocha.formats import MIME_TYPE_FORMATS, MimeTypeFormats


@pytest.fixture
def formats():
    return MimeTypeFormats()


def test_default_has_four_entries(formats):
    assert len(formats) == 4


@pytest.mark.parametrize(
    "mime_type, ext",
    [
        ("application/json", "json"),
        ("application/xml", "xml"),
        ("text/html", "html"),
        ("text/plain", "txt"),
    ],
)
def test_default_entries(formats, mime_type, ext):
    assert mime_type in formats
    assert formats[mime_type] == ext


def test_module_default_matches_builtin():
    assert len(MIME_TYPE_FORMATS) == 4
    assert MIME_TYPE_FORMATS.get("text/html") == "html"


def test_get(formats):
    assert formats.get("application/json") == "json"
    assert formats.get("text/plain") == "txt"


def test_get_unknown_returns_empty(formats):
    assert formats.get("test/mime") == ""


def test_set(formats):
    assert formats.get("test/mime") == ""
    formats.set("test/mime", "testmimetype")
    assert formats.get("test/mime") == "testmimetype"
    assert len(formats) == 5


def test_set_replaces(formats):
    formats.set("text/html", "htm")
    assert formats.get("text/html") == "htm"
    assert len(formats) == 4


def test_delete(formats):
    assert formats.get("text/html") == "html"
    formats.delete("text/html")
    assert formats.get("text/html") == ""
    assert "text/html" not in formats
    assert len(formats) == 3


def test_delete_unknown_is_ignored(formats):
    formats.delete("unknown/type")
    assert len(formats) == 4


def test_instances_are_independent():
    first = MimeTypeFormats()
    second = MimeTypeFormats()
    first.delete("text/plain")
    assert second.get("text/plain") == "txt"


def test_custom_mapping():
    formats = MimeTypeFormats({"text/csv": "csv"})
    assert list(formats) == ["text/csv"]
    assert formats.get("text/html") == ""


def test_getitem_missing_raises(formats):
    with pytest.raises(KeyError) as info:
        _ = formats["missing/type"]
    assert info.value.args[0] == "missing/type"
    assert len(formats) == 4