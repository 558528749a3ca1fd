"""Unit tests for the conversation workflow."""

import asyncio
import json

import httpx
import pytest
import pytest_check as check

from pdf_chatbot.completion.client import CompletionClient
from pdf_chatbot.completion.config import CompletionConfig
from pdf_chatbot.models.schemas import Sender
from pdf_chatbot.session.conversation import (
    FALLBACK_REPLY,
    ConversationController,
    build_contents,
)
from pdf_chatbot.session.state import ChatSession
from pdf_chatbot.session.upload import UploadController
from tests.fakes import FakeFile


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request body it receives."""

    def __init__(self, respond) -> None:
        self.bodies: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            self.bodies.append(json.loads(request.content))
            return respond(request)

        super().__init__(handler)


def _controller(
    session: ChatSession, config: CompletionConfig, transport: httpx.MockTransport
) -> ConversationController:
    return ConversationController(session, CompletionClient(config, transport=transport))


class TestBuildContents:
    """Mapping the transcript to completion turns."""

    def test_maps_senders_to_roles_in_order(self) -> None:
        session = ChatSession()
        session.add_message(Sender.USER, "hi")
        session.add_message(Sender.AI, "hello")
        session.add_message(Sender.USER, "how are you")

        contents = build_contents(session.messages, None)

        check.equal([c.role for c in contents], ["user", "model", "user"])
        check.equal([c.parts[0].text for c in contents], ["hi", "hello", "how are you"])

    def test_document_turn_comes_first(self) -> None:
        session = ChatSession()
        session.add_message(Sender.USER, "Summarize the document")

        contents = build_contents(session.messages, "Full text")

        check.equal(len(contents), 2)
        check.equal(contents[0].role, "user")
        check.equal(contents[0].parts[0].text, "Here is the content of the uploaded PDF:\nFull text")
        check.equal(contents[1].parts[0].text, "Summarize the document")

    @pytest.mark.parametrize("document_text", [None, ""])
    def test_no_document_turn_without_text(self, document_text: str | None) -> None:
        session = ChatSession()
        session.add_message(Sender.USER, "hi")

        contents = build_contents(session.messages, document_text)

        assert [c.parts[0].text for c in contents] == ["hi"]


class TestSendMessage:
    """Sending turns through the controller."""

    @pytest.mark.parametrize("text", ["", "   ", "\n\t "])
    async def test_blank_input_is_ignored(
        self, completion_config: CompletionConfig, text: str
    ) -> None:
        session = ChatSession()
        typing_history: list[bool] = []
        session.subscribe(lambda: typing_history.append(session.is_typing))
        transport = RecordingTransport(lambda request: httpx.Response(500))

        await _controller(session, completion_config, transport).send_message(text)

        check.equal(session.messages, ())
        check.is_false(session.is_typing)
        check.equal(typing_history, [])
        check.equal(transport.bodies, [])

    async def test_success_appends_user_then_reply(
        self, completion_config: CompletionConfig, gemini_reply
    ) -> None:
        session = ChatSession()
        transport = RecordingTransport(lambda request: httpx.Response(200, json=gemini_reply("Hello!")))

        await _controller(session, completion_config, transport).send_message("  Hi there  ")

        check.equal([m.sender for m in session.messages], [Sender.USER, Sender.AI])
        check.equal([m.text for m in session.messages], ["Hi there", "Hello!"])
        check.is_false(session.is_typing)

    async def test_history_is_replayed(
        self, completion_config: CompletionConfig, gemini_reply
    ) -> None:
        session = ChatSession()
        replies = iter(["first answer", "second answer"])
        transport = RecordingTransport(
            lambda request: httpx.Response(200, json=gemini_reply(next(replies)))
        )
        controller = _controller(session, completion_config, transport)

        await controller.send_message("first question")
        await controller.send_message("second question")

        check.equal(
            transport.bodies[1]["contents"],
            [
                {"role": "user", "parts": [{"text": "first question"}]},
                {"role": "model", "parts": [{"text": "first answer"}]},
                {"role": "user", "parts": [{"text": "second question"}]},
            ],
        )

    async def test_extracted_text_is_sent_first(
        self, completion_config: CompletionConfig, gemini_reply
    ) -> None:
        session = ChatSession()
        session.update_upload(extracted_text="Revenue grew 12%.")
        transport = RecordingTransport(lambda request: httpx.Response(200, json=gemini_reply("ok")))

        await _controller(session, completion_config, transport).send_message("What grew?")

        contents = transport.bodies[0]["contents"]
        check.equal(
            contents[0],
            {
                "role": "user",
                "parts": [{"text": "Here is the content of the uploaded PDF:\nRevenue grew 12%."}],
            },
        )
        check.equal(contents[-1], {"role": "user", "parts": [{"text": "What grew?"}]})

    async def test_network_failure_appends_fallback(
        self, completion_config: CompletionConfig
    ) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("network down", request=request)

        session = ChatSession()

        await _controller(
            session, completion_config, httpx.MockTransport(handler)
        ).send_message("Anyone there?")

        check.equal([m.text for m in session.messages], ["Anyone there?", FALLBACK_REPLY])
        check.equal(session.messages[1].sender, Sender.AI)
        check.is_false(session.is_typing)

    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(500, text="Internal error"),
            httpx.Response(429, json={"error": {"message": "quota"}}),
            httpx.Response(200, json={"candidates": []}),
            httpx.Response(200, text="not json"),
        ],
    )
    async def test_bad_responses_append_fallback(
        self, completion_config: CompletionConfig, response: httpx.Response
    ) -> None:
        session = ChatSession()

        await _controller(
            session, completion_config, httpx.MockTransport(lambda request: response)
        ).send_message("Hello")

        check.equal(len(session.messages), 2)
        check.equal(session.messages[1].text, FALLBACK_REPLY)
        check.is_false(session.is_typing)

    async def test_typing_spans_request_and_clears_after_reply(
        self, completion_config: CompletionConfig, gemini_reply
    ) -> None:
        session = ChatSession()
        states: list[tuple[int, bool]] = []
        session.subscribe(lambda: states.append((len(session.messages), session.is_typing)))
        transport = RecordingTransport(lambda request: httpx.Response(200, json=gemini_reply("ok")))

        await _controller(session, completion_config, transport).send_message("Hello")

        check.equal(states, [(1, False), (1, True), (2, True), (2, False)])

    async def test_conversation_usable_after_failure(
        self, completion_config: CompletionConfig, gemini_reply
    ) -> None:
        responses = iter([httpx.Response(503), httpx.Response(200, json=gemini_reply("back"))])
        session = ChatSession()
        controller = _controller(
            session, completion_config, httpx.MockTransport(lambda request: next(responses))
        )

        await controller.send_message("one")
        await controller.send_message("two")

        check.equal(
            [m.text for m in session.messages], ["one", FALLBACK_REPLY, "two", "back"]
        )

    async def test_unexpected_transport_error_appends_fallback(
        self, completion_config: CompletionConfig
    ) -> None:
        """Errors outside the completion error type still end in the fallback reply."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise RuntimeError("h2 protocol blew up")

        session = ChatSession()

        await _controller(
            session, completion_config, httpx.MockTransport(handler)
        ).send_message("hi")

        check.equal([m.text for m in session.messages], ["hi", FALLBACK_REPLY])
        check.is_false(session.is_typing)

    async def test_malformed_base_url_appends_fallback(self, gemini_reply) -> None:
        config = CompletionConfig(api_key="k", base_url="http://[::1/v1")
        session = ChatSession()
        transport = RecordingTransport(lambda request: httpx.Response(200, json=gemini_reply("ok")))

        await _controller(session, config, transport).send_message("hi")

        check.equal([m.text for m in session.messages], ["hi", FALLBACK_REPLY])
        check.is_false(session.is_typing)


class GatedExtractor:
    """Extractor that holds until released, to keep an upload in flight."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def extract(self, content: bytes) -> str:
        self.started.set()
        await self.release.wait()
        return self.text


class TestSendDuringUpload:
    """A send issued while an upload is still processing."""

    async def _send_while_uploading(
        self,
        session: ChatSession,
        config: CompletionConfig,
        transport: RecordingTransport,
    ) -> None:
        extractor = GatedExtractor("new document")
        upload = asyncio.create_task(
            UploadController(session, extractor).submit_upload(
                FakeFile("new.pdf", "application/pdf", b"%PDF")
            )
        )
        await extractor.started.wait()
        check.is_true(session.upload.processing)

        await _controller(session, config, transport).send_message("question")

        check.is_true(session.upload.processing)
        extractor.release.set()
        await upload

        check.is_false(session.upload.processing)
        check.equal(session.upload.extracted_text, "new document")

    async def test_uses_text_present_when_payload_built(
        self, completion_config: CompletionConfig, gemini_reply
    ) -> None:
        session = ChatSession()
        session.update_upload(extracted_text="old document")
        transport = RecordingTransport(lambda request: httpx.Response(200, json=gemini_reply("ok")))

        await self._send_while_uploading(session, completion_config, transport)

        contents = transport.bodies[0]["contents"]
        check.equal(
            contents[0]["parts"][0]["text"],
            "Here is the content of the uploaded PDF:\nold document",
        )
        check.equal(contents[-1], {"role": "user", "parts": [{"text": "question"}]})

    async def test_no_document_turn_when_nothing_extracted_yet(
        self, completion_config: CompletionConfig, gemini_reply
    ) -> None:
        session = ChatSession()
        transport = RecordingTransport(lambda request: httpx.Response(200, json=gemini_reply("ok")))

        await self._send_while_uploading(session, completion_config, transport)

        check.equal(
            transport.bodies[0]["contents"],
            [{"role": "user", "parts": [{"text": "question"}]}],
        )
