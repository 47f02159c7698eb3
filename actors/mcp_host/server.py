"""Model Context Protocol host exposing the Grok tools over stdio.

Tool signatures are introspected by FastMCP to build input schemas, so
annotations in this module stay evaluated at definition time.
"""

from contextlib import asynccontextmanager
from typing import Annotated, AsyncIterator

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult, TextContent
from pydantic import Field

from packages.grok_shared.result import Result
from services.action.grok_tools import (
    DEFAULT_EMBEDDING_MODEL,
    DEFAULT_MODEL,
    GrokToolsService,
    ImageDetail,
    SearchType,
)

SERVER_NAME = "grok-chat"
SERVER_INSTRUCTIONS = (
    "xAI Grok MCP server. Tools: chat, chat_with_vision, chat_with_search, "
    "embedding, list_models."
)
INVALID_PARAMS_PREFIX = "Invalid parameters: "

_MODEL_HELP = f"Model to use. Defaults to {DEFAULT_MODEL}."
_TEMPERATURE_HELP = "Sampling temperature (0.0 - 2.0)"
_MAX_TOKENS_HELP = "Maximum tokens to generate"


def tool_result(result: Result[str]) -> CallToolResult:
    """Map one service result to the tool reply the caller receives.

    Failures are flagged ``isError`` with their text as the only content;
    validation failures are prefixed so callers can tell rejected input from
    upstream failures.
    """
    if result.ok:
        return _text_result(result.payload or "", is_error=False)
    text = result.error_text()
    if result.invalid_params:
        text = f"{INVALID_PARAMS_PREFIX}{text}"
    return _text_result(text, is_error=True)


def _text_result(text: str, *, is_error: bool) -> CallToolResult:
    return CallToolResult(
        content=[TextContent(type="text", text=text)], isError=is_error
    )


def build_server(service: GrokToolsService) -> FastMCP:
    """Register the five tools against ``service`` on a new FastMCP server."""

    @asynccontextmanager
    async def lifespan(_: FastMCP) -> AsyncIterator[None]:
        try:
            yield
        finally:
            await service.aclose()

    server = FastMCP(SERVER_NAME, instructions=SERVER_INSTRUCTIONS, lifespan=lifespan)

    @server.tool(
        description=(
            "Send a chat completion request to Grok. Supports multi-turn "
            "conversations, structured output via JSON schema, and model selection."
        )
    )
    async def chat(
        prompt: Annotated[str, Field(description="The user message / prompt to send to Grok")],
        system_prompt: Annotated[
            str | None, Field(description="Optional system prompt to set context/behaviour")
        ] = None,
        messages: Annotated[
            str | None,
            Field(
                description=(
                    "Full conversation history as JSON array of {role, content} "
                    "objects. When provided, 'prompt' is appended as the final "
                    "user message."
                )
            ),
        ] = None,
        model: Annotated[str | None, Field(description=_MODEL_HELP)] = None,
        temperature: Annotated[float | None, Field(description=_TEMPERATURE_HELP)] = None,
        max_tokens: Annotated[int | None, Field(description=_MAX_TOKENS_HELP)] = None,
        response_schema: Annotated[
            str | None,
            Field(
                description=(
                    "Optional JSON schema string to enforce structured output. "
                    "The model response will conform to this schema."
                )
            ),
        ] = None,
    ) -> CallToolResult:
        return tool_result(
            await service.chat(
                prompt=prompt,
                system_prompt=system_prompt,
                messages=messages,
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
                response_schema=response_schema,
            )
        )

    @server.tool(
        description=(
            "Analyse an image with Grok's vision capabilities. "
            "Provide an image URL and a text prompt."
        )
    )
    async def chat_with_vision(
        prompt: Annotated[
            str, Field(description="Text prompt describing what to analyse in the image")
        ],
        image_url: Annotated[
            str,
            Field(description="URL of the image to analyse (must be http:// or https://)"),
        ],
        detail: Annotated[
            ImageDetail | None,
            Field(description='Image detail level: "low", "high" or "auto" (default: "high")'),
        ] = None,
        model: Annotated[str | None, Field(description=_MODEL_HELP)] = None,
        temperature: Annotated[float | None, Field(description=_TEMPERATURE_HELP)] = None,
        max_tokens: Annotated[int | None, Field(description=_MAX_TOKENS_HELP)] = None,
    ) -> CallToolResult:
        return tool_result(
            await service.chat_with_vision(
                prompt=prompt,
                image_url=image_url,
                detail=detail,
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        )

    @server.tool(
        description=(
            "Chat with Grok using live web search and/or X (Twitter) search. "
            "The model will automatically search the internet to ground its response."
        )
    )
    async def chat_with_search(
        prompt: Annotated[str, Field(description="The user message / prompt")],
        system_prompt: Annotated[
            str | None, Field(description="Optional system prompt")
        ] = None,
        search_type: Annotated[
            SearchType | None,
            Field(
                description=(
                    'Search type to enable: "web", "x" (X/Twitter), or "both" '
                    '(default: "both")'
                )
            ),
        ] = None,
        model: Annotated[str | None, Field(description=_MODEL_HELP)] = None,
        temperature: Annotated[float | None, Field(description=_TEMPERATURE_HELP)] = None,
        max_tokens: Annotated[int | None, Field(description=_MAX_TOKENS_HELP)] = None,
    ) -> CallToolResult:
        return tool_result(
            await service.chat_with_search(
                prompt=prompt,
                system_prompt=system_prompt,
                search_type=search_type,
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        )

    @server.tool(description="Generate text embeddings using Grok's embedding model.")
    async def embedding(
        input: Annotated[
            str,
            Field(description="Text to embed as JSON: a single string or array of strings."),
        ],
        model: Annotated[
            str | None,
            Field(description=f"Embedding model to use (default: {DEFAULT_EMBEDDING_MODEL})"),
        ] = None,
    ) -> CallToolResult:
        return tool_result(await service.embedding(input=input, model=model))

    @server.tool(description="List all available Grok models and their IDs.")
    async def list_models() -> CallToolResult:
        return tool_result(await service.list_models())

    return server
