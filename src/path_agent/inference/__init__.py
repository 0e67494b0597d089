"""
Inference backends for the AI resolution stage.

Key components:
- InferenceBackend: Narrow async interface (query, known dirs) -> reply text
- HttpInferenceBackend: Chat endpoint over httpx
- LangChainInferenceBackend: Any LangChain chat model
- SimulatedInferenceBackend: Deterministic offline stand-in
- parse_path_list: Reply text -> list of path strings
"""
from .backend import InferenceBackend
from .http_backend import HttpInferenceBackend
from .langchain_backend import LangChainInferenceBackend
from .simulated_backend import SimulatedInferenceBackend
from .prompts import build_path_prompt
from .response_parser import InferenceReply, parse_path_list

__all__ = [
    "InferenceBackend",
    "HttpInferenceBackend",
    "LangChainInferenceBackend",
    "SimulatedInferenceBackend",
    "build_path_prompt",
    "InferenceReply",
    "parse_path_list",
]
