"""Unit tests for the YAML front-matter helpers."""

import pytest
import yaml

from specsearch.utils import front_matter


pytestmark = pytest.mark.unit


def test_load_front_matter_returns_metadata_and_stripped_body() -> None:
    content = "---\nid: 3\ntitle: Hello\ntags: [a, b]\n---\n\n# Body\nContent\n"

    metadata, body = front_matter.load_front_matter(content)

    assert metadata == {"id": 3, "title": "Hello", "tags": ["a", "b"]}
    assert body == "# Body\nContent"


def test_load_front_matter_accepts_crlf() -> None:
    metadata, body = front_matter.load_front_matter("---\r\ntitle: Hi\r\n---\r\nText")

    assert metadata == {"title": "Hi"}
    assert body == "Text"


def test_load_front_matter_empty_block_is_empty_mapping() -> None:
    metadata, body = front_matter.load_front_matter("---\n\n---\nBody")

    assert metadata == {}
    assert body == "Body"


def test_load_front_matter_accepts_adjacent_delimiters() -> None:
    metadata, body = front_matter.load_front_matter("---\n---\nBody\n---\nmore")

    assert metadata == {}
    assert body == "Body\n---\nmore"


@pytest.mark.parametrize(
    "content",
    [
        "# No front matter\n",
        "---\ntitle: [unclosed\n---\nBody",
        "---\n- 1\n- 2\n---\nBody",
    ],
)
def test_load_front_matter_rejects_bad_input(content: str) -> None:
    with pytest.raises(front_matter.FrontMatterError):
        front_matter.load_front_matter(content)


def test_parse_front_matter_is_lenient() -> None:
    content = "---\n- 1\n---\nNo metadata\n"

    metadata, body = front_matter.parse_front_matter(content)

    assert metadata == {}
    assert body == content


def test_parse_front_matter_gracefully_handles_yaml_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    content = "---\nkey: value\n---\n# Body\n"

    def _raise_error(*args: object, **kwargs: object) -> None:
        raise yaml.YAMLError("boom")

    monkeypatch.setattr(front_matter.yaml, "safe_load", _raise_error)

    assert front_matter.parse_front_matter(content) == ({}, content)


def test_serialize_front_matter_sorts_keys_and_round_trips() -> None:
    serialized = front_matter.serialize_front_matter({"title": "Spec", "id": 2}, "# Body\n")

    assert serialized.splitlines()[:3] == ["---", "id: 2", "title: Spec"]
    assert front_matter.load_front_matter(serialized) == ({"id": 2, "title": "Spec"}, "# Body")


def test_serialize_without_metadata_returns_markdown() -> None:
    assert front_matter.serialize_front_matter({}, "# Only body") == "# Only body"
