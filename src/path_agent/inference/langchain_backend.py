"""
LangChain inference backend.

Sends the path prompt to any LangChain chat model.
"""
import logging
from typing import Any, Mapping

from langchain_core.messages import HumanMessage

from ..exceptions import InferenceUnreachableError
from .backend import InferenceBackend
from .prompts import build_path_prompt

logger = logging.getLogger(__name__)


class LangChainInferenceBackend(InferenceBackend):
    """
    Wraps a LangChain chat model (ChatGroq, ChatOpenAI, ...).
    
    Usage:
        llm = get_llm_instance("groq", "llama-3.1-8b-instant")
        backend = LangChainInferenceBackend(llm)
    """
    
    name = "langchain"
    
    def __init__(self, llm: Any, username: str = "user"):
        """
        :param llm: LangChain chat model supporting ainvoke()
        :param username: Account name mentioned in the prompt
        """
        self._llm = llm
        self.username = username
    
    async def ainfer(self, query: str, known_dirs: Mapping[str, str]) -> str:
        prompt = build_path_prompt(query, known_dirs, self.username)
        try:
            message = await self._llm.ainvoke([HumanMessage(content=prompt)])
        except Exception as e:
            # Provider SDKs raise their own exception types
            raise InferenceUnreachableError(f"LLM call failed: {e}") from e
        
        return _message_text(message)


def _message_text(message: Any) -> str:
    content = getattr(message, "content", message)
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, dict):
                parts.append(str(part.get("text", "")))
            else:
                parts.append(str(part))
        return "".join(parts)
    return str(content)
