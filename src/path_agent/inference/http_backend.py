"""
HTTP inference backend.

Posts the prompt to a chat endpoint that answers ``{"response": "..."}``.
"""
import logging
from typing import Mapping, Optional

import httpx
from pydantic import ValidationError

from ..exceptions import (
    InferenceTimeoutError,
    InferenceUnreachableError,
    MalformedInferenceResponseError,
)
from .backend import InferenceBackend
from .prompts import build_path_prompt
from .response_parser import InferenceReply

logger = logging.getLogger(__name__)


class HttpInferenceBackend(InferenceBackend):
    """
    Talks to a chat endpoint over HTTP.
    
    Request body: ``{"message": prompt, "provider": ..., "model": ...}``
    Reply body: ``{"response": text}`` (``message`` accepted as a fallback)
    """
    
    name = "http"
    
    def __init__(
        self,
        url: str,
        provider: str = "claude",
        model: str = "claude-3-sonnet-20240229",
        timeout: float = 12.0,
        username: str = "user",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        :param url: Chat endpoint URL
        :param provider: Provider name forwarded to the endpoint
        :param model: Model name forwarded to the endpoint
        :param timeout: Per-request HTTP timeout in seconds
        :param username: Account name mentioned in the prompt
        :param transport: Optional httpx transport (used by tests)
        """
        self.url = url
        self.provider = provider
        self.model = model
        self.timeout = timeout
        self.username = username
        self._transport = transport
    
    async def ainfer(self, query: str, known_dirs: Mapping[str, str]) -> str:
        payload = {
            "message": build_path_prompt(query, known_dirs, self.username),
            "provider": self.provider,
            "model": self.model,
        }
        
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.url, json=payload)
                response.raise_for_status()
        except httpx.TimeoutException as e:
            raise InferenceTimeoutError(f"Inference request timed out: {e}") from e
        except httpx.HTTPStatusError as e:
            raise InferenceUnreachableError(
                f"Inference endpoint returned {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise InferenceUnreachableError(f"Inference endpoint unreachable: {e}") from e
        
        try:
            body = response.json()
        except ValueError as e:
            raise MalformedInferenceResponseError("Inference reply is not JSON") from e
        
        if not isinstance(body, dict):
            raise MalformedInferenceResponseError("Inference reply is not a JSON object")
        
        try:
            reply = InferenceReply.model_validate(body)
        except ValidationError as e:
            raise MalformedInferenceResponseError(f"Unexpected inference reply: {e}") from e
        
        text = reply.text()
        if text is None:
            raise MalformedInferenceResponseError("Inference reply has no response text")
        
        logger.debug(f"Inference reply for '{query}': {text[:200]}")
        return text
