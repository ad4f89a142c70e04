"""Non-streaming response schema checks.

Each validator parses the raw body once and walks the fields a client of the
provider's API relies on, recording every problem as a field-path string in
``missing_fields`` (in check order) rather than stopping at the first one.
This is deliberately not a JSON-Schema validator: only presence and basic
shape are checked.
"""
from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from ..base.errors import ResponseValidationError
from ..providers.registry import ProviderKind

JSON_STRUCTURE_FIELD = "valid JSON structure"


@dataclass
class ValidationResult:
    """Outcome of validating one response body."""

    valid: bool = False
    has_content: bool = False
    has_choices: bool = False
    has_model: bool = False
    has_usage: bool = False
    missing_fields: List[str] = field(default_factory=list)


def _parse_object(body: Union[bytes, str]) -> Dict[str, Any] | None:
    try:
        parsed = json.loads(body)
    except (ValueError, TypeError):
        return None
    return parsed if isinstance(parsed, dict) else None


class ResponseValidator(ABC):
    """Validates a complete (non-streamed) chat response body."""

    def validate_basic_response(self, body: Union[bytes, str]) -> ValidationResult:
        """Validate ``body``.

        A body that is not a JSON object yields ``valid=False`` with the
        single missing field ``"valid JSON structure"``.

        Raises:
            ResponseValidationError: when the validator itself fails.
        """
        raw = _parse_object(body)
        if raw is None:
            return ValidationResult(valid=False, missing_fields=[JSON_STRUCTURE_FIELD])
        result = ValidationResult()
        try:
            self._check(raw, result)
        except (KeyError, IndexError, TypeError, AttributeError) as exc:
            raise ResponseValidationError(f"{type(self).__name__} failed: {exc}") from exc
        return result

    @abstractmethod
    def _check(self, raw: Dict[str, Any], result: ValidationResult) -> None:
        """Populate ``result`` from the parsed object ``raw``."""

    @staticmethod
    def _check_model(raw: Dict[str, Any], result: ValidationResult) -> None:
        if "model" not in raw:
            result.missing_fields.append("model")
        elif isinstance(raw["model"], str) and raw["model"]:
            result.has_model = True
        else:
            result.missing_fields.append("model (non-empty string)")

    @staticmethod
    def _check_usage(raw: Dict[str, Any], result: ValidationResult, *keys: str) -> None:
        if "usage" not in raw:
            result.missing_fields.append("usage")
            return
        usage = raw["usage"]
        if not isinstance(usage, dict):
            result.missing_fields.append("usage (object)")
            return
        result.has_usage = True
        for key in keys:
            if key not in usage:
                result.missing_fields.append(f"usage.{key}")


class AnthropicValidator(ResponseValidator):
    """Messages API: ``content`` blocks, ``model`` and token ``usage``."""

    def _check(self, raw: Dict[str, Any], result: ValidationResult) -> None:
        if "content" not in raw:
            result.missing_fields.append("content")
        elif isinstance(raw["content"], list) and raw["content"]:
            result.has_content = True
            for i, block in enumerate(raw["content"]):
                if isinstance(block, dict) and "type" not in block:
                    result.missing_fields.append(f"content[{i}].type")
        else:
            result.missing_fields.append("content (non-empty array)")

        self._check_model(raw, result)
        self._check_usage(raw, result, "input_tokens", "output_tokens")
        result.valid = result.has_content and result.has_model and not result.missing_fields


class OpenAIValidator(ResponseValidator):
    """Chat Completions API: ``choices[0].message.content``, ``model``, ``usage``."""

    def _check(self, raw: Dict[str, Any], result: ValidationResult) -> None:
        if "choices" not in raw:
            result.missing_fields.append("choices")
        elif isinstance(raw["choices"], list) and raw["choices"]:
            result.has_choices = True
            first = raw["choices"][0]
            if isinstance(first, dict):
                if "message" not in first:
                    result.missing_fields.append("choices[0].message")
                elif not isinstance(first["message"], dict):
                    result.missing_fields.append("choices[0].message (object)")
                elif "content" not in first["message"]:
                    result.missing_fields.append("choices[0].message.content")
                else:
                    result.has_content = True
        else:
            result.missing_fields.append("choices (non-empty array)")

        self._check_model(raw, result)
        self._check_usage(raw, result, "prompt_tokens", "completion_tokens")
        result.valid = (
            result.has_choices and result.has_content and result.has_model and not result.missing_fields
        )


def new_validator(provider: Union[str, ProviderKind]) -> ResponseValidator:
    """Return the validator for ``provider``; unknown names get the OpenAI one."""
    if provider == ProviderKind.ANTHROPIC:
        return AnthropicValidator()
    return OpenAIValidator()


__all__ = [
    "JSON_STRUCTURE_FIELD",
    "ValidationResult",
    "ResponseValidator",
    "AnthropicValidator",
    "OpenAIValidator",
    "new_validator",
]
