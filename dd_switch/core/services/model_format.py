from __future__ import annotations

"""Normalisation of custom model lists to the tool's canonical shape.

Entries written by hand often use snake_case keys (``custom_models``,
``base_url``, ``api_key``, ``supports_images`` ...). The tool itself expects
``customModels`` items with ``id``/``index``/``displayName`` and camelCase
fields. :func:`normalize_document` rewrites one into the other; models that
are already canonical are kept untouched.

This is an explicit user action. ``apply`` never rewrites content.

Examples
--------
    >>> normalize_model({"model": "m", "model_display_name": "My Model"}, 0)["id"]
    'custom:My-Model-0'
"""

import json
import logging
from typing import Any, Dict, List, Optional

from dd_switch.core.exceptions import InvalidContentError

__all__ = [
    "is_canonical",
    "normalize_model",
    "normalize_models",
    "normalize_document",
    "validate_json",
]

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER = "anthropic"
DEFAULT_MAX_OUTPUT_TOKENS = 8192


def _first(model: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in model and model[key] is not None:
            return model[key]
    return None


def _as_str(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def is_canonical(model: Any) -> bool:
    return isinstance(model, dict) and all(k in model for k in ("id", "index", "displayName"))


def normalize_model(model: Dict[str, Any], index: int) -> Dict[str, Any]:
    """Return *model* in canonical form, ``index`` being its list position."""
    if is_canonical(model):
        return model

    display_name = _as_str(_first(model, "model_display_name", "displayName"), "Unknown")

    max_tokens = _first(model, "max_tokens", "maxOutputTokens")
    # bool is an int subclass; reject it explicitly
    if not isinstance(max_tokens, int) or isinstance(max_tokens, bool):
        max_tokens = DEFAULT_MAX_OUTPUT_TOKENS

    supports_images = model.get("supports_images")
    if isinstance(supports_images, bool):
        no_image_support = not supports_images
    else:
        no_image_support = model.get("noImageSupport")
        if not isinstance(no_image_support, bool):
            no_image_support = False

    return {
        "model": _as_str(model.get("model")),
        "id": f"custom:{display_name.replace(' ', '-')}-{index}",
        "index": index,
        "baseUrl": _as_str(_first(model, "base_url", "baseUrl")),
        "apiKey": _as_str(_first(model, "api_key", "apiKey")),
        "displayName": display_name,
        "maxOutputTokens": max_tokens,
        "noImageSupport": no_image_support,
        "provider": _as_str(model.get("provider"), DEFAULT_PROVIDER),
    }


def normalize_models(document: Dict[str, Any]) -> List[Dict[str, Any]]:
    models = _first(document, "customModels", "custom_models")
    if not isinstance(models, list):
        return []
    return [normalize_model(m if isinstance(m, dict) else {}, i) for i, m in enumerate(models)]


def normalize_document(text: str) -> str:
    """Rewrite the model list of a JSON document; other keys are preserved.

    Raises InvalidContentError when *text* is not a JSON object.
    """
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidContentError(f"Invalid JSON: {exc.msg} (line {exc.lineno})", cause=exc) from exc
    if not isinstance(document, dict):
        raise InvalidContentError("Configuration must be a JSON object")

    models = normalize_models(document)
    out: Dict[str, Any] = {}
    for key, value in document.items():
        if key == "custom_models":
            continue
        out[key] = value
    out["customModels"] = models
    logger.debug("Normalised %d model(s)", len(models))
    return json.dumps(out, indent=2, ensure_ascii=False) + "\n"


def validate_json(text: str) -> Optional[str]:
    """Return an error message when *text* is not valid JSON, else None."""
    try:
        json.loads(text)
    except json.JSONDecodeError as exc:
        return f"{exc.msg} (line {exc.lineno}, column {exc.colno})"
    return None
