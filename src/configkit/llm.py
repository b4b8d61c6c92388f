# src/configkit/llm.py
"""
LLM client utilities.

Purpose:
- Centralize the single interaction with the AI Gateway (OpenAI-compatible API).
- Provide a small primitive (chat_json) for JSON-only calls.
- Log latency and token usage for cost tracking.

Design choices:
- API key and gateway URL are read from the environment, never from code.
- Fence stripping + json.loads; anything that is not a JSON object raises LLMError.
- This module sits outside the pure derivation core and is the only place doing network I/O.
"""
from __future__ import annotations

import json
import logging
import os
import time
from typing import Any, Dict, Optional

from openai import OpenAI

logger = logging.getLogger("configkit.llm")

DEFAULT_MODEL = "gpt-4.1-mini"


class LLMError(RuntimeError):
    pass


def default_model() -> str:
    return os.environ.get("CONFIGKIT_MODEL", DEFAULT_MODEL)


def get_client() -> OpenAI:
    api_key = os.environ.get("API_KEY")
    if not api_key:
        raise LLMError("API_KEY is not set. Add it to your .env file.")
    # BASE_URL is optional: without it the client talks to the default OpenAI endpoint.
    return OpenAI(api_key=api_key, base_url=os.environ.get("BASE_URL") or None)


def _usage_dict(usage: Any) -> Optional[Dict[str, int]]:
    if usage is None:
        return None
    if isinstance(usage, dict):
        get = usage.get
    else:
        def get(key, default=0):
            return getattr(usage, key, default)
    try:
        return {
            "prompt_tokens": int(get("prompt_tokens", 0) or 0),
            "completion_tokens": int(get("completion_tokens", 0) or 0),
            "total_tokens": int(get("total_tokens", 0) or 0),
        }
    except (TypeError, ValueError):
        return None


def _strip_fences(txt: str) -> str:
    # Some models wrap JSON in ```json fences even when told not to.
    txt = txt.strip()
    if txt.startswith("```"):
        txt = txt.strip("`").strip()
        if txt.lower().startswith("json"):
            txt = txt[4:]
    return txt.strip()


def parse_json_object(txt: str) -> Dict[str, Any]:
    try:
        data = json.loads(_strip_fences(txt))
    except json.JSONDecodeError as e:
        raise LLMError(f"Model reply is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise LLMError(f"Expected a JSON object, got {type(data).__name__}.")
    return data


def chat_json(
    model: str,
    system: str,
    user: str,
    temperature: float = 0.3,
    max_tokens: int = 1000,
    operation: str = "unspecified",
    client: Optional[OpenAI] = None,
) -> Dict[str, Any]:
    """
    Call the LLM and parse a JSON object from the reply.

    The caller must instruct the model to return JSON only. Raises LLMError
    for an empty or non-JSON reply; transport errors from the openai package
    propagate unchanged.
    """
    client = client or get_client()

    t0 = time.perf_counter()
    resp = client.chat.completions.create(
        model=model,
        messages=[
            {"role": "system", "content": system},
            {"role": "user", "content": user},
        ],
        temperature=temperature,
        max_tokens=max_tokens,
    )
    dt_ms = (time.perf_counter() - t0) * 1000.0

    logger.info(
        "llm_call op=%s model=%s latency_ms=%.1f usage=%s",
        operation,
        model,
        dt_ms,
        _usage_dict(getattr(resp, "usage", None)),
    )

    if not resp.choices or not resp.choices[0].message.content:
        raise LLMError("Model returned an empty reply.")
    return parse_json_object(resp.choices[0].message.content)
