"""
Parsing of inference replies.

The backend is asked for a bare JSON array of path strings, but models often
wrap it in code fences or a sentence. Anything that is not, at its core, a
JSON array of strings is treated as malformed.
"""
import json
import logging
import re
from typing import List, Optional

from pydantic import BaseModel

from ..exceptions import MalformedInferenceResponseError

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)
_ARRAY = re.compile(r"\[.*\]", re.DOTALL)


class InferenceReply(BaseModel):
    """Body of the inference endpoint's reply."""
    response: Optional[str] = None
    message: Optional[str] = None
    
    def text(self) -> Optional[str]:
        return self.response if self.response is not None else self.message


def parse_path_list(raw: str) -> List[str]:
    """
    Extract a list of path strings from backend text.
    
    :param raw: Text returned by an inference backend
    :return: Non-empty, stripped path strings in reply order (may be empty for "[]")
    :raises: MalformedInferenceResponseError if no JSON array of strings is found
    """
    if raw is None:
        raise MalformedInferenceResponseError("Inference reply was empty")
    
    text = raw.strip()
    fenced = _CODE_FENCE.search(text)
    if fenced:
        text = fenced.group(1).strip()
    
    parsed = _load_json(text)
    if parsed is None:
        embedded = _ARRAY.search(text)
        if embedded:
            parsed = _load_json(embedded.group(0))
    
    if not isinstance(parsed, list):
        raise MalformedInferenceResponseError(
            f"Inference reply is not a JSON array: {raw[:120]!r}"
        )
    
    if not all(isinstance(item, str) for item in parsed):
        raise MalformedInferenceResponseError("Inference reply contains non-string items")
    
    return [item.strip() for item in parsed if item.strip()]


def _load_json(text: str):
    try:
        return json.loads(text)
    except ValueError:
        return None
