import pytest

from ruleweave.errors import DocumentParseError
from ruleweave.frontmatter import parse_frontmatter, stringify_frontmatter


def test_parse_frontmatter_splits_body() -> None:
    fm, body = parse_frontmatter("---\nroot: true\nglobs: ['*.py']\n---\n\nHello\n")
    assert fm == {"root": True, "globs": ["*.py"]}
    assert body.strip() == "Hello"


def test_text_without_frontmatter_is_all_body() -> None:
    fm, body = parse_frontmatter("# Title\n\ntext\n")
    assert fm == {}
    assert body == "# Title\n\ntext\n"


def test_empty_frontmatter_block() -> None:
    fm, body = parse_frontmatter("---\n\n---\nbody")
    assert fm == {}
    assert body == "body"


def test_invalid_yaml_raises_parse_error() -> None:
    with pytest.raises(DocumentParseError) as exc_info:
        parse_frontmatter("---\nroot: [unclosed\n---\nbody", "rules/a.md")
    assert "rules/a.md" in str(exc_info.value)


def test_non_mapping_frontmatter_raises() -> None:
    with pytest.raises(DocumentParseError):
        parse_frontmatter("---\n- a\n- b\n---\nbody")


def test_stringify_without_frontmatter_returns_body() -> None:
    assert stringify_frontmatter("body", {}) == "body"
    assert stringify_frontmatter("body", {"description": None}) == "body"


def test_stringify_then_parse_keeps_values() -> None:
    text = stringify_frontmatter("Body text", {"description": "d", "alwaysApply": False})
    assert text.startswith("---\ndescription: d\nalwaysApply: false\n---\n")
    fm, body = parse_frontmatter(text)
    assert fm == {"description": "d", "alwaysApply": False}
    assert body.strip() == "Body text"
