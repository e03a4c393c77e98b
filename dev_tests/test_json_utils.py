"""
Tests for json_utils.py - orjson wrapper and fenced JSON parsing.
"""

import uuid

import pytest

import json_utils as json


class TestDumpsLoads:

    def test_dumps_returns_string(self):
        result = json.dumps({"key": "value"})
        assert isinstance(result, str)
        assert result == '{"key":"value"}'

    def test_dumps_with_indent(self):
        result = json.dumps({"key": "value"}, indent=2)
        assert "\n" in result

    def test_dumps_uuid(self):
        value = uuid.UUID("12345678-1234-5678-1234-567812345678")
        assert "12345678-1234-5678-1234-567812345678" in json.dumps({"id": value})

    def test_dumps_uses_default_callable(self):
        class Custom:
            def __str__(self):
                return "custom"

        assert json.dumps({"x": Custom()}, default=str) == '{"x":"custom"}'

    def test_loads_accepts_bytes(self):
        assert json.loads(b'{"a": 1}') == {"a": 1}

    def test_loads_invalid_raises(self):
        with pytest.raises(json.JSONDecodeError):
            json.loads("{not json")


class TestCodeFences:

    def test_strip_plain_text_untouched(self):
        assert json.strip_code_fence("  hello  ") == "hello"

    def test_strip_json_fence(self):
        assert json.strip_code_fence('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_strip_bare_fence(self):
        assert json.strip_code_fence('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_multiple_fences_left_alone(self):
        content = "```a```\n```b```"
        assert json.strip_code_fence(content) == content

    def test_loads_object_with_fence(self):
        """
        Given: A JSON object wrapped in a ```json fence
        When: loads_object() is called
        Then: The object is parsed
        """
        assert json.loads_object('```json\n{"summary": "x"}\n```') == {"summary": "x"}

    def test_loads_object_invalid(self):
        with pytest.raises(json.JSONDecodeError):
            json.loads_object("Sorry, I cannot help with that.")
