"""
Tests for inference backends and reply parsing.
"""
import asyncio
import json
from typing import Any, List, Optional

import httpx
import pytest
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage
from langchain_core.outputs import ChatGeneration, ChatResult

from path_agent.exceptions import (
    InferenceTimeoutError,
    InferenceUnreachableError,
    MalformedInferenceResponseError,
)
from path_agent.inference import (
    HttpInferenceBackend,
    LangChainInferenceBackend,
    SimulatedInferenceBackend,
    build_path_prompt,
    parse_path_list,
)

KNOWN_DIRS = {
    "desktop": "C:\\Users\\tester\\Desktop",
    "documents": "C:\\Users\\tester\\Documents",
    "project": "D:\\work",
}


class FixedReplyChatModel(BaseChatModel):
    """LangChain-compatible chat model that always answers with ``reply``."""

    reply: str = "[]"

    @property
    def _llm_type(self) -> str:
        return "fixed-reply"

    def _generate(
        self,
        messages: List[BaseMessage],
        stop: Optional[List[str]] = None,
        run_manager: Optional[Any] = None,
        **kwargs: Any,
    ) -> ChatResult:
        generation = ChatGeneration(message=AIMessage(content=self.reply))
        return ChatResult(generations=[generation])


class TestParsePathList:
    """Reply parsing."""

    def test_bare_array(self):
        assert parse_path_list('["C:\\\\a", "/mnt/c/a"]') == ["C:\\a", "/mnt/c/a"]

    def test_code_fence(self):
        assert parse_path_list('```json\n["/x"]\n```') == ["/x"]

    def test_array_inside_prose(self):
        assert parse_path_list('Sure! ["/x", "/y"] should work.') == ["/x", "/y"]

    def test_blank_items_are_dropped(self):
        assert parse_path_list('["/x", "  "]') == ["/x"]

    @pytest.mark.parametrize("raw", ["", "nope", '{"a": 1}', '[1]', "null"])
    def test_malformed(self, raw):
        with pytest.raises(MalformedInferenceResponseError):
            parse_path_list(raw)


class TestPrompt:
    """Prompt construction."""

    def test_prompt_lists_query_and_dirs(self):
        prompt = build_path_prompt("게임 폴더", KNOWN_DIRS, username="tester")

        assert '"게임 폴더"' in prompt
        assert "tester" in prompt
        assert "- project: D:\\work" in prompt
        assert "JSON array" in prompt


class TestHttpInferenceBackend:
    """HTTP backend against a mock transport."""

    def _backend(self, handler):
        return HttpInferenceBackend(
            url="http://inference.test/api/ai/chat",
            transport=httpx.MockTransport(handler),
        )

    def test_posts_message_and_returns_response(self):
        seen = {}

        def handler(request):
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"response": '["/x"]'})

        reply = asyncio.run(self._backend(handler).ainfer("게임", KNOWN_DIRS))

        assert reply == '["/x"]'
        assert seen["body"]["provider"] == "claude"
        assert seen["body"]["model"] == "claude-3-sonnet-20240229"
        assert "게임" in seen["body"]["message"]

    def test_message_field_fallback(self):
        backend = self._backend(lambda request: httpx.Response(200, json={"message": "[]"}))
        assert asyncio.run(backend.ainfer("q", KNOWN_DIRS)) == "[]"

    def test_server_error_is_unreachable(self):
        backend = self._backend(lambda request: httpx.Response(503))
        with pytest.raises(InferenceUnreachableError):
            asyncio.run(backend.ainfer("q", KNOWN_DIRS))

    def test_connection_error_is_unreachable(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(InferenceUnreachableError):
            asyncio.run(self._backend(handler).ainfer("q", KNOWN_DIRS))

    def test_read_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(InferenceTimeoutError):
            asyncio.run(self._backend(handler).ainfer("q", KNOWN_DIRS))

    def test_non_json_body_is_malformed(self):
        backend = self._backend(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(MalformedInferenceResponseError):
            asyncio.run(backend.ainfer("q", KNOWN_DIRS))

    def test_missing_text_is_malformed(self):
        backend = self._backend(lambda request: httpx.Response(200, json={"ok": True}))
        with pytest.raises(MalformedInferenceResponseError):
            asyncio.run(backend.ainfer("q", KNOWN_DIRS))


class TestLangChainInferenceBackend:
    """LangChain backend with a local chat model."""

    def test_returns_model_content(self):
        backend = LangChainInferenceBackend(FixedReplyChatModel(reply='["/x"]'))
        assert asyncio.run(backend.ainfer("q", KNOWN_DIRS)) == '["/x"]'

    def test_model_errors_become_unreachable(self):
        class FailingChatModel(FixedReplyChatModel):
            def _generate(self, messages, stop=None, run_manager=None, **kwargs):
                raise RuntimeError("quota exceeded")

        with pytest.raises(InferenceUnreachableError):
            asyncio.run(LangChainInferenceBackend(FailingChatModel()).ainfer("q", KNOWN_DIRS))


class TestSimulatedInferenceBackend:
    """Deterministic stand-in."""

    @pytest.mark.parametrize("query,expected", [
        ("바탕화면 프로그램", ["C:\\Users\\tester\\Desktop\\프로그램"]),
        ("프로젝트 백엔드", ["D:\\work\\backend"]),
        ("게임즈", ["C:\\Users\\tester\\Desktop\\Games"]),
        ("카톡 문서", ["C:\\Users\\tester\\Documents\\카카오톡 받은 파일"]),
        ("dev stuff", ["D:\\work"]),
        ("zzqx", []),
    ])
    def test_guesses(self, query, expected):
        backend = SimulatedInferenceBackend()
        reply = asyncio.run(backend.ainfer(query, KNOWN_DIRS))
        assert json.loads(reply) == expected

    def test_counts_calls(self):
        backend = SimulatedInferenceBackend()
        backend.infer("q", KNOWN_DIRS)
        backend.infer("q", KNOWN_DIRS)
        assert backend.call_count == 2
