import json

import pytest

from dd_switch.core.exceptions import InvalidContentError
from dd_switch.core.services.model_format import (
    is_canonical,
    normalize_document,
    normalize_model,
    validate_json,
)


class TestNormalizeModel:
    """Conversion of one hand-written model entry."""

    def test_snake_case_fields_are_converted(self):
        model = {
            "model_display_name": "Claude Sonnet",
            "model": "claude-sonnet",
            "base_url": "https://api.example.com",
            "api_key": "sk-test",
            "provider": "anthropic",
            "max_tokens": 4096,
            "supports_images": True,
        }
        assert normalize_model(model, 2) == {
            "model": "claude-sonnet",
            "id": "custom:Claude-Sonnet-2",
            "index": 2,
            "baseUrl": "https://api.example.com",
            "apiKey": "sk-test",
            "displayName": "Claude Sonnet",
            "maxOutputTokens": 4096,
            "noImageSupport": False,
            "provider": "anthropic",
        }

    def test_defaults(self):
        result = normalize_model({}, 0)
        assert result["displayName"] == "Unknown"
        assert result["id"] == "custom:Unknown-0"
        assert result["maxOutputTokens"] == 8192
        assert result["noImageSupport"] is False
        assert result["provider"] == "anthropic"
        assert result["baseUrl"] == ""

    def test_camel_case_partial_model_is_completed(self):
        result = normalize_model({"displayName": "GPT", "baseUrl": "u", "noImageSupport": True}, 1)
        assert result["baseUrl"] == "u"
        assert result["noImageSupport"] is True
        assert result["id"] == "custom:GPT-1"

    def test_canonical_model_is_untouched(self):
        model = {"id": "custom:x-9", "index": 9, "displayName": "x", "extra": 1}
        assert is_canonical(model)
        assert normalize_model(model, 0) is model

    def test_boolean_max_tokens_is_ignored(self):
        assert normalize_model({"max_tokens": True}, 0)["maxOutputTokens"] == 8192


class TestNormalizeDocument:

    def test_custom_models_key_is_replaced(self):
        text = json.dumps({"custom_models": [{"model": "m"}], "theme": "dark"})
        result = json.loads(normalize_document(text))
        assert "custom_models" not in result
        assert result["theme"] == "dark"
        assert result["customModels"][0]["model"] == "m"
        assert result["customModels"][0]["index"] == 0

    def test_missing_models_become_empty_list(self):
        assert json.loads(normalize_document('{"a": 1}')) == {"a": 1, "customModels": []}

    def test_output_is_pretty_printed_with_newline(self):
        out = normalize_document('{"customModels": []}')
        assert out == '{\n  "customModels": []\n}\n'

    @pytest.mark.parametrize("text", ["{not json", "[1, 2]", '"str"'])
    def test_invalid_content_raises(self, text):
        with pytest.raises(InvalidContentError):
            normalize_document(text)


def test_validate_json():
    assert validate_json('{"a": 1}') is None
    message = validate_json('{"a": }')
    assert message and "line 1" in message
