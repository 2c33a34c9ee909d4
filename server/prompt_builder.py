"""Prompt assembly for the documentation assistant.

The composed prompt always has the same section order: system instruction,
retrieved documentation, the page the user is viewing, prior conversation,
then the question. The whole block is wrapped in the Mistral instruct tags
the generation service expects.
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence

from clients.generation_client import GenerationParams
from clients.search_client import DocSearchResult
from .models import ChatMessage

SNIPPET_CHAR_LIMIT = 500
INSTRUCTION_OPEN = "<s>[INST] "
INSTRUCTION_CLOSE = " [/INST]"
TOOL_CALL_MARKER = "[TOOL_CALLS]"

SYSTEM_INSTRUCTION = """You are an AI assistant for IQM's programmatic advertising API documentation.

## Available Documentation Pages

Getting Started:
- /getting-started/ - Overview of IQM platform
- /getting-started/before-you-begin - Prerequisites
- /getting-started/api-pagination-guide - Pagination patterns
- /getting-started/typescript-prerequisites - TypeScript setup

API Guidelines:
- /guidelines/campaign-api - Campaign management
- /guidelines/creative-api - Creative upload/management
- /guidelines/audience-api - Audience targeting
- /guidelines/reports-api - Reporting endpoints
- /guidelines/conversion-api - Conversion tracking
- /guidelines/dashboard-api - Dashboard metrics
- /guidelines/insights-api - Performance insights

Quickstarts:
- /quickstart-guides/authentication-quickstart-guide - Auth setup
- /quickstart-guides/create-a-campaign-quickstart - Campaign creation
- /quickstart-guides/reporting-api-quickstart-guide - Reporting
- /quickstart-guides/upload-a-creative-quickstart - Creative upload

RULES:
- Be concise and accurate
- Only reference pages that exist above
- Provide code examples when helpful
- Use markdown formatting"""


def build_tool_section(tool_specs: Iterable[Dict[str, Any]]) -> str:
    """Describe the callable tools and the call syntax the model should emit."""
    lines = [f"- {spec['name']}: {spec['description']}" for spec in tool_specs]
    if not lines:
        return ""
    return (
        "## Tools\n"
        "To look something up, end your answer with "
        f'{TOOL_CALL_MARKER} [{{"name": "<tool>", "arguments": {{...}}}}]\n'
        + "\n".join(lines)
    )


def format_documentation_context(results: Sequence[DocSearchResult]) -> str:
    """Render search hits as headed snippets, each cut at a fixed length."""
    blocks = []
    for result in results:
        snippet = result.content[:SNIPPET_CHAR_LIMIT]
        if len(result.content) > SNIPPET_CHAR_LIMIT:
            snippet += "..."
        blocks.append(f"### {result.title}\n{snippet}\n\n")
    return "".join(blocks)


class PromptBuilder:
    """Builds the single prompt string sent to the generation service."""

    def __init__(self, system_instruction: str = SYSTEM_INSTRUCTION, tool_section: str = "",
                 max_tokens: int = 512):
        self.system_instruction = system_instruction
        if tool_section:
            self.system_instruction = f"{system_instruction}\n\n{tool_section}"
        self.max_tokens = max_tokens

    def generation_params(self) -> GenerationParams:
        return GenerationParams(
            max_tokens=self.max_tokens,
            temperature=0.7,
            top_p=0.9,
            stop=["</s>", "[INST]"],
        )

    def build(self, message: str, history: Optional[List[ChatMessage]] = None,
              current_page: Optional[str] = None,
              documentation: Sequence[DocSearchResult] = ()) -> str:
        parts = [INSTRUCTION_OPEN, self.system_instruction, "\n\n"]

        doc_context = format_documentation_context(documentation)
        if doc_context:
            parts.append(f"## Relevant Documentation\n{doc_context}\n\n")

        if current_page:
            parts.append(f"User is currently viewing: {current_page}\n\n")

        for entry in history or []:
            # System turns are covered by the instruction block
            if entry.role == "user":
                parts.append(f"User: {entry.content}\n")
            elif entry.role == "assistant":
                parts.append(f"Assistant: {entry.content}\n")

        parts.append(f"User: {message}{INSTRUCTION_CLOSE}")
        return "".join(parts)
