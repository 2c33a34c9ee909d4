"""Chat orchestration for the documentation assistant.

Turns one normalized chat request into exactly one completion call:
retrieve documentation (best effort), build the prompt, call the
generation service, then dispatch any tool calls found in the reply.
"""

import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from catalog import EndpointCatalog
from clients.generation_client import GenerationClient
from clients.search_client import DocumentSearchClient, DocSearchResult
from config import AssistantConfig
from observability.prometheus_metrics import record_chat_metrics
from .models import ChatMessage
from .prompt_builder import PromptBuilder, TOOL_CALL_MARKER, build_tool_section
from .tools import ToolRegistry, UnknownToolError, create_default_registry

logger = logging.getLogger(__name__)

RAG_RESULTS = 3


@dataclass
class AssistantResponse:
    text: str
    model: str
    success: bool
    actions: List[Dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None


def extract_tool_calls(text: str) -> Tuple[str, List[Dict[str, Any]]]:
    """Split model output into visible text and the tool calls it requested.

    Calls are a JSON array following the ``[TOOL_CALLS]`` marker. When the
    array cannot be parsed the text is returned untouched with no calls.
    """
    marker_at = text.find(TOOL_CALL_MARKER)
    if marker_at < 0:
        return text, []

    remainder = text[marker_at + len(TOOL_CALL_MARKER):]
    stripped = remainder.lstrip()
    try:
        calls, end = json.JSONDecoder().raw_decode(stripped)
    except ValueError:
        logger.warning("Ignoring malformed tool call block in model output")
        return text, []

    if not isinstance(calls, list) or not all(isinstance(call, dict) for call in calls):
        logger.warning("Ignoring tool call block that is not a list of objects")
        return text, []

    visible = (text[:marker_at].rstrip() + " " + stripped[end:].strip()).strip()
    return visible, calls


class DocAssistant:
    """Owns the catalog, service clients, tools and prompt builder."""

    def __init__(self, catalog: EndpointCatalog, search_client: DocumentSearchClient,
                 generation_client: GenerationClient, tools: Optional[ToolRegistry] = None,
                 prompt_builder: Optional[PromptBuilder] = None):
        self.catalog = catalog
        self.search_client = search_client
        self.generation_client = generation_client
        self.tools = tools or create_default_registry(catalog, search_client)
        self.prompt_builder = prompt_builder or PromptBuilder(
            tool_section=build_tool_section(self.tools.get_tool_specs())
        )

    @classmethod
    def from_config(cls, config: AssistantConfig,
                    catalog: Optional[EndpointCatalog] = None) -> "DocAssistant":
        search_client = DocumentSearchClient(
            app_id=config.search_app_id,
            api_key=config.search_api_key,
            index_name=config.search_index_name,
            host=config.search_host,
            timeout=min(config.request_timeout, 10.0),
        )
        generation_client = GenerationClient(
            base_url=config.generation_url,
            model_name=config.model_name,
            timeout=config.request_timeout,
        )
        catalog = catalog or EndpointCatalog.default()
        tools = create_default_registry(catalog, search_client)
        prompt_builder = PromptBuilder(
            tool_section=build_tool_section(tools.get_tool_specs()),
            max_tokens=config.max_tokens,
        )
        return cls(catalog, search_client, generation_client, tools, prompt_builder)

    def search_docs(self, query: str, max_results: int = 5) -> List[DocSearchResult]:
        return self.search_client.search(query, max_results)

    def _retrieve_documentation(self, message: str) -> List[DocSearchResult]:
        try:
            return self.search_client.search(message, RAG_RESULTS)
        except Exception:
            # Retrieval is best effort
            logger.exception("Documentation retrieval failed, continuing without context")
            return []

    def build_prompt(self, message: str, history: Optional[List[ChatMessage]] = None,
                     page_context: Optional[Dict[str, Any]] = None) -> str:
        """Retrieve documentation for ``message`` and compose the full prompt."""
        page_context = page_context or {}
        current_page = page_context.get("currentPage")
        if not isinstance(current_page, str):
            current_page = None

        return self.prompt_builder.build(
            message,
            history=history,
            current_page=current_page,
            documentation=self._retrieve_documentation(message),
        )

    def chat(self, message: str, history: Optional[List[ChatMessage]] = None,
             page_context: Optional[Dict[str, Any]] = None) -> AssistantResponse:
        prompt = self.build_prompt(message, history, page_context)

        started = time.time()
        result = self.generation_client.complete(prompt, self.prompt_builder.generation_params())
        record_chat_metrics(time.time() - started, result.success)

        if not result.success:
            return AssistantResponse(
                text="",
                model=result.model,
                success=False,
                error=result.error or "Generation failed",
            )

        text, calls = extract_tool_calls(result.text)
        actions = [self.dispatch_tool_call(call) for call in calls]

        logger.info(f"Chat answered by {result.model} with {len(actions)} tool call(s)")
        return AssistantResponse(text=text, model=result.model, success=True, actions=actions)

    def dispatch_tool_call(self, call: Dict[str, Any]) -> Dict[str, Any]:
        """Run one model-requested tool call and describe its outcome."""
        name = str(call.get("name", ""))
        arguments = call.get("arguments") or {}
        if isinstance(arguments, str):
            try:
                arguments = json.loads(arguments)
            except ValueError:
                return {"tool": name, "arguments": arguments, "error": "Arguments are not valid JSON"}
        if not isinstance(arguments, dict):
            return {"tool": name, "arguments": arguments, "error": "Arguments must be an object"}

        action: Dict[str, Any] = {"tool": name, "arguments": arguments}
        try:
            action["result"] = self.tools.invoke(name, arguments)
        except UnknownToolError as e:
            logger.warning(f"Model requested unknown tool: {name}")
            action["error"] = str(e)
        except Exception as e:
            logger.exception(f"Tool {name} failed")
            action["error"] = f"Tool failed: {e}"
        return action
