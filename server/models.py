"""Request and response shapes for the chat HTTP surface.

Chat bodies arrive in three historical shapes and are normalized into a
single ``ChatRequest``:

* ``{"messages": [{"role", "content"}, ...]}`` (chat-completion style); the
  last message is the question, the rest is history
* ``{"message": str, "context": {...}}``; history is read from
  ``context.conversationHistory``
* ``{"prompt": str}`` (completion style)

The first key present, in that order, decides the shape.
"""

from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field, ValidationError

MAX_MESSAGE_CHARS = 2000


class InvalidChatRequest(ValueError):
    """Raised when a chat body cannot be normalized."""

    def __init__(self, error: str, details: Optional[str] = None):
        super().__init__(error if not details else f"{error}: {details}")
        self.error = error
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        body = {"error": self.error}
        if self.details:
            body["details"] = self.details
        return body


class ChatMessage(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1)
    history: List[ChatMessage] = Field(default_factory=list)
    page_context: Dict[str, Any] = Field(default_factory=dict)

    @property
    def current_page(self) -> Optional[str]:
        page = self.page_context.get("currentPage")
        return page if isinstance(page, str) and page else None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "ChatRequest":
        """Pick the body shape by field presence and normalize it."""
        if "messages" in payload:
            message, history, page_context = _from_messages(payload["messages"])
        elif "message" in payload:
            message, history, page_context = _from_message(payload["message"], payload.get("context"))
        elif "prompt" in payload:
            message, history, page_context = _require_text(payload["prompt"], "prompt"), [], {}
        else:
            raise InvalidChatRequest("Missing message or prompt")

        if not message.strip():
            raise InvalidChatRequest("Invalid request", "Message is required and must be a non-empty string")
        if len(message) > MAX_MESSAGE_CHARS:
            raise InvalidChatRequest("Message too long", f"Message must be {MAX_MESSAGE_CHARS} characters or less")

        return cls(message=message, history=history, page_context=page_context)


def _require_text(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise InvalidChatRequest("Invalid request", f"{field_name} must be a string")
    return value


def _parse_history(items: Any, field_name: str) -> List[ChatMessage]:
    if not isinstance(items, list):
        raise InvalidChatRequest("Invalid request", f"{field_name} must be a list of messages")
    try:
        return [ChatMessage.model_validate(item) for item in items]
    except ValidationError as e:
        raise InvalidChatRequest("Invalid request", f"{field_name} contains an invalid message: {e.errors()[0]['msg']}")


def _from_messages(messages: Any):
    history = _parse_history(messages, "messages")
    if not history:
        raise InvalidChatRequest("Invalid request", "messages must not be empty")
    # The last entry is the question whatever its role
    return history[-1].content, history[:-1], {}


def _from_message(message: Any, context: Any):
    text = _require_text(message, "message")
    if context is None:
        return text, [], {}
    if not isinstance(context, dict):
        raise InvalidChatRequest("Invalid request", "context must be an object")

    history = []
    if context.get("conversationHistory") is not None:
        history = _parse_history(context["conversationHistory"], "context.conversationHistory")
    return text, history, context


class AssistantReply(BaseModel):
    """Native chat response body."""
    response: str
    actions: List[Dict[str, Any]] = Field(default_factory=list)
    model: str
    success: bool
    error: Optional[str] = None


class CompletionReply(BaseModel):
    """Generation-service compatible response body."""
    content: str
    model: str
    stop: bool = True


class SearchRequest(BaseModel):
    query: str
    max_results: int = Field(default=5, ge=0)


class SearchHit(BaseModel):
    title: str
    url: str
    snippet: str
    score: float
