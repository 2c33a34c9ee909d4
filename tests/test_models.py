"""Tests for chat request normalization."""

import pytest

from server.models import MAX_MESSAGE_CHARS, ChatRequest, InvalidChatRequest


class TestChatRequestShapes:
    """The three accepted chat body shapes."""

    def test_message_with_context(self):
        request = ChatRequest.from_payload({
            "message": "How do I pause a campaign?",
            "context": {
                "currentPage": "/guidelines/campaign-api",
                "conversationHistory": [
                    {"role": "user", "content": "hi"},
                    {"role": "assistant", "content": "hello"},
                ],
            },
        })

        assert request.message == "How do I pause a campaign?"
        assert [m.role for m in request.history] == ["user", "assistant"]
        assert request.current_page == "/guidelines/campaign-api"

    def test_message_without_context(self):
        request = ChatRequest.from_payload({"message": "hi"})
        assert request.history == []
        assert request.current_page is None

    def test_messages_list(self):
        request = ChatRequest.from_payload({"messages": [
            {"role": "system", "content": "be brief"},
            {"role": "user", "content": "first"},
            {"role": "assistant", "content": "answer"},
            {"role": "user", "content": "second"},
        ]})

        assert request.message == "second"
        assert [m.content for m in request.history] == ["be brief", "first", "answer"]

    def test_trailing_assistant_turn_is_the_question(self):
        request = ChatRequest.from_payload({"messages": [
            {"role": "user", "content": "q"},
            {"role": "assistant", "content": "a"},
        ]})

        assert request.message == "a"
        assert [(m.role, m.content) for m in request.history] == [("user", "q")]

    def test_prompt(self):
        request = ChatRequest.from_payload({"prompt": "What is a PMP deal?"})
        assert request.message == "What is a PMP deal?"
        assert request.history == []

    def test_messages_take_priority(self):
        request = ChatRequest.from_payload({
            "messages": [{"role": "user", "content": "from messages"}],
            "message": "from message",
            "prompt": "from prompt",
        })
        assert request.message == "from messages"

    def test_message_takes_priority_over_prompt(self):
        request = ChatRequest.from_payload({"message": "from message", "prompt": "from prompt"})
        assert request.message == "from message"


class TestChatRequestValidation:
    """Bodies that must be rejected before any network call."""

    def test_missing_fields(self):
        with pytest.raises(InvalidChatRequest) as exc_info:
            ChatRequest.from_payload({"question": "hi"})
        assert exc_info.value.to_dict() == {"error": "Missing message or prompt"}

    @pytest.mark.parametrize("message", ["", "   ", "\n\t"])
    def test_blank_message(self, message):
        with pytest.raises(InvalidChatRequest) as exc_info:
            ChatRequest.from_payload({"message": message})
        assert exc_info.value.error == "Invalid request"

    def test_message_too_long(self):
        with pytest.raises(InvalidChatRequest) as exc_info:
            ChatRequest.from_payload({"message": "a" * (MAX_MESSAGE_CHARS + 1)})
        assert exc_info.value.error == "Message too long"

    def test_message_at_limit_accepted(self):
        request = ChatRequest.from_payload({"message": "a" * MAX_MESSAGE_CHARS})
        assert len(request.message) == MAX_MESSAGE_CHARS

    def test_non_string_message(self):
        with pytest.raises(InvalidChatRequest):
            ChatRequest.from_payload({"message": 42})

    def test_empty_messages_list(self):
        with pytest.raises(InvalidChatRequest):
            ChatRequest.from_payload({"messages": []})

    def test_messages_not_a_list(self):
        with pytest.raises(InvalidChatRequest):
            ChatRequest.from_payload({"messages": "hi"})

    def test_unknown_role(self):
        with pytest.raises(InvalidChatRequest):
            ChatRequest.from_payload({"messages": [{"role": "tool", "content": "x"}]})

    def test_context_must_be_object(self):
        with pytest.raises(InvalidChatRequest):
            ChatRequest.from_payload({"message": "hi", "context": "page"})

    def test_history_must_be_list(self):
        with pytest.raises(InvalidChatRequest):
            ChatRequest.from_payload({"message": "hi", "context": {"conversationHistory": {"role": "user"}}})
