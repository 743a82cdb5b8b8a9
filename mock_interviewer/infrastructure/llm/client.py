"""
REST client for the chat-completion AI gateway.
"""
import json
import logging
from typing import Optional, Dict, Any, List

import requests

from ...config import ORACLE_BASE_URL, ORACLE_MODEL, ORACLE_TIMEOUT
from ...errors import OracleError, RateLimited, QuotaExhausted

logger = logging.getLogger("llm_client")


class GatewayClient:
    """REST client for an OpenAI-compatible chat completions gateway."""

    def __init__(self,
                 api_key: str,
                 base_url: str = ORACLE_BASE_URL,
                 model: str = ORACLE_MODEL,
                 timeout: int = ORACLE_TIMEOUT,
                 session: Optional[requests.Session] = None):
        if not api_key:
            raise ValueError("api_key is required for the AI gateway")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self._http = session or requests

    def chat(
        self,
        messages: List[Dict[str, str]],
        temperature: float = 0.0,
        top_p: Optional[float] = None,
    ) -> str:
        """
        Send a chat completion request and return the assistant message text.

        Raises:
            RateLimited: gateway answered 429
            QuotaExhausted: gateway answered 402
            OracleError: any other failure, including network errors
        """
        url = f"{self.base_url}/chat/completions"

        body: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": float(temperature),
        }
        if top_p is not None:
            body["top_p"] = float(top_p)

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            resp = self._http.post(url, headers=headers, json=body, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("AI gateway request failed: %s", e)
            raise OracleError(f"AI gateway unreachable: {e}") from e

        if resp.status_code == 429:
            logger.warning("AI gateway rate limited the request")
            raise RateLimited(status_code=429)
        if resp.status_code == 402:
            logger.warning("AI gateway credits exhausted")
            raise QuotaExhausted(status_code=402)
        if resp.status_code >= 400:
            logger.error("AI gateway error %s: %s", resp.status_code, resp.text)
            raise OracleError(f"AI gateway error: {resp.status_code}", status_code=resp.status_code)

        try:
            payload = resp.json()
        except ValueError as e:
            raise OracleError("AI gateway returned a non-JSON body") from e

        text = self._parse_response_text(payload)
        logger.debug("Raw gateway output: %s", repr(text))
        return text

    def _parse_response_text(self, resp_json: Dict[str, Any]) -> str:
        """
        Extract choices[0].message.content.
        Returns an empty string when the reply has no usable content so that
        callers fall back to their deterministic defaults.
        """
        choices = resp_json.get("choices") if isinstance(resp_json, dict) else None
        if isinstance(choices, list) and choices:
            first = choices[0] if isinstance(choices[0], dict) else {}
            message = first.get("message") or {}
            content = message.get("content") if isinstance(message, dict) else None
            if isinstance(content, str):
                return content
            # Legacy completion shape
            if isinstance(first.get("text"), str):
                return first["text"]

        logger.warning("Gateway reply had no message content: %s",
                       json.dumps(resp_json, separators=(",", ":"))[:500])
        return ""


def extract_json_span(text: str, opener: str, closer: str) -> Optional[str]:
    """
    Return the widest `opener ... closer` span in text, or None.
    Models often wrap JSON in prose or code fences.
    """
    if not text:
        return None
    start = text.find(opener)
    end = text.rfind(closer)
    if start == -1 or end == -1 or end <= start:
        return None
    return text[start:end + 1]


def parse_json_span(text: str, opener: str, closer: str) -> Any:
    """
    Decode the first JSON array/object embedded in text.

    Raises:
        ValueError: if no span is present or it does not decode
    """
    span = extract_json_span(text, opener, closer)
    if span is None:
        raise ValueError(f"No JSON {opener}{closer} found in LLM response")
    try:
        return json.loads(span)
    except json.JSONDecodeError as e:
        raise ValueError(f"Could not decode JSON from LLM response: {e}") from e
