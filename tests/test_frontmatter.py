import pytest

from conforme.frontmatter import FrontmatterError, parse, serialize


def test_parse_with_frontmatter():
    text = "---\nalwaysApply: true\ndescription: test\n---\n\nBody content here."
    fields, body = parse(text)
    assert fields.get("alwaysApply") is True
    assert fields.get("description") == "test"
    assert "Body content here." in body


def test_parse_without_frontmatter():
    fields, body = parse("Just plain markdown content.")
    assert fields == {}
    assert "Just plain markdown" in body


def test_serialize_roundtrip():
    output = serialize({"alwaysApply": True}, "Rule content here.")
    assert output.startswith("---\n")
    assert "alwaysApply: true" in output
    assert "Rule content here." in output


def test_serialize_empty_fields():
    assert serialize({}, "Just content.") == "Just content."


def test_parse_of_serialize_restores_fields_and_body():
    fields = {"trigger": "glob", "globs": "src/api/**, **/*.ts", "description": "API"}
    body = "Follow REST.\n"
    parsed_fields, parsed_body = parse(serialize(fields, body))
    assert parsed_fields == fields
    assert parsed_body.strip() == body.strip()


def test_serialize_sorts_keys():
    output = serialize({"trigger": "manual", "description": "x"}, "b")
    assert output.index("description") < output.index("trigger")


def test_empty_frontmatter_block():
    fields, body = parse("---\n---\nHello")
    assert fields == {}
    assert body == "Hello"


def test_invalid_yaml_raises():
    with pytest.raises(FrontmatterError):
        parse("---\nkey: [unclosed\n---\nbody")


def test_non_mapping_frontmatter_raises():
    with pytest.raises(FrontmatterError):
        parse("---\n- a\n- b\n---\nbody")