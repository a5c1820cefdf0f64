import os
from typing import Any

import keyring
import requests
from keyring.errors import KeyringError

from orbit.core.errors import OrbitError

SERVICE = "orbit-gemini"
KEY_NAME = "api_key"
API = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
_ENV_KEYS = ("GEMINI_API_KEY", "API_KEY")


class ProviderError(OrbitError):
    pass


def api_key() -> str | None:
    for name in _ENV_KEYS:
        value = os.environ.get(name, "").strip()
        if value:
            return value
    try:
        return keyring.get_password(SERVICE, KEY_NAME)
    except KeyringError:
        return None


def build_body(
    prompt: str,
    *,
    system: str | None = None,
    schema: dict[str, Any] | None = None,
    max_tokens: int | None = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
    generation: dict[str, Any] = {}
    if schema is not None:
        generation["responseMimeType"] = "application/json"
        generation["responseSchema"] = schema
    if max_tokens is not None:
        generation["maxOutputTokens"] = max_tokens
    if generation:
        body["generationConfig"] = generation
    if system:
        body["systemInstruction"] = {"parts": [{"text": system}]}
    return body


def extract_text(payload: dict[str, Any]) -> str:
    """Concatenate the text parts of the first candidate. Empty string when there are none."""
    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return ""
    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return ""
    return "".join(p["text"] for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str))


def generate(
    prompt: str,
    *,
    key: str,
    model: str,
    timeout: float,
    system: str | None = None,
    schema: dict[str, Any] | None = None,
    max_tokens: int | None = None,
) -> str:
    url = API.format(model=model)
    body = build_body(prompt, system=system, schema=schema, max_tokens=max_tokens)
    try:
        resp = requests.post(url, params={"key": key}, json=body, timeout=timeout)
        resp.raise_for_status()
        payload = resp.json()
    except requests.RequestException as e:
        raise ProviderError(f"gemini request failed: {e}") from e
    except ValueError as e:
        raise ProviderError(f"gemini returned non-JSON body: {e}") from e
    if not isinstance(payload, dict):
        raise ProviderError("gemini returned an unexpected payload")
    return extract_text(payload).strip()
