"""Token replacement over resource payloads."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict

if TYPE_CHECKING:
    from .config import AppConfig

TOKEN_DELIMITER = "%%"


def _wrap(key: str) -> str:
    if key.startswith(TOKEN_DELIMITER) and key.endswith(TOKEN_DELIMITER):
        return key
    return f"{TOKEN_DELIMITER}{key}{TOKEN_DELIMITER}"


def build_tokens(app_config: "AppConfig") -> Dict[str, str]:
    """Return the token map for `app_config`, keys wrapped in %% delimiters."""
    tokens = {_wrap("mlAppName"): app_config.name}
    for key, value in app_config.custom_tokens.items():
        tokens[_wrap(key)] = str(value)
    return tokens


def replace_tokens(value: Any, tokens: Dict[str, str]) -> Any:
    """Replace tokens in every string within `value`, returning a copy."""
    if isinstance(value, str):
        for token, replacement in tokens.items():
            if token in value:
                value = value.replace(token, replacement)
        return value
    if isinstance(value, dict):
        return {key: replace_tokens(item, tokens) for key, item in value.items()}
    if isinstance(value, list):
        return [replace_tokens(item, tokens) for item in value]
    return value
