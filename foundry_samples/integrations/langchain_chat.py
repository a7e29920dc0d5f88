"""Tool-calling chat loop over a LangChain chat model.

Usage::

    assistant = ProjectAssistant(build_chat_model(settings), build_project_tools(project))
    print(assistant.chat("List all my available connections"))
"""

from __future__ import annotations

from typing import Any, Sequence

import structlog
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage, ToolMessage
from langchain_core.tools import BaseTool

from foundry_samples.common.constants import (
    LANGCHAIN_MAX_TOOL_ROUNDS,
    LANGCHAIN_MEMORY_MESSAGES,
    LANGCHAIN_SYSTEM_PROMPT,
)
from foundry_samples.common.errors import FoundrySampleError

_log = structlog.get_logger("langchain")


def content_text(message: BaseMessage) -> str:
    """Plain text of a message whose content may be a list of parts."""
    content = message.content
    if isinstance(content, str):
        return content
    return "".join(
        part if isinstance(part, str) else part.get("text", "")
        for part in content
    )


class ProjectAssistant:
    """Chat with a model that may call project tools before it answers.

    The model sees the system prompt plus a sliding window of the most
    recent messages.  The window always starts at a user turn so tool
    results are never sent without the call that produced them.
    """

    def __init__(
        self,
        model: Any,
        tools: Sequence[BaseTool],
        *,
        system_prompt: str = LANGCHAIN_SYSTEM_PROMPT,
        max_messages: int = LANGCHAIN_MEMORY_MESSAGES,
        max_tool_rounds: int = LANGCHAIN_MAX_TOOL_ROUNDS,
    ) -> None:
        self._model = model.bind_tools(list(tools))
        self._tools = {t.name: t for t in tools}
        self._system = SystemMessage(content=system_prompt)
        self._max_messages = max_messages
        self._max_tool_rounds = max_tool_rounds
        self.history: list[BaseMessage] = []

    def window(self) -> list[BaseMessage]:
        turns = [i for i, m in enumerate(self.history) if isinstance(m, HumanMessage)]
        start = len(self.history) - self._max_messages
        begin = next((i for i in turns if i >= start), turns[-1])
        return self.history[begin:]

    def chat(self, message: str) -> str:
        """Answer *message*, running any tools the model asks for."""
        self.history.append(HumanMessage(content=message))
        for _ in range(self._max_tool_rounds + 1):
            reply = self._model.invoke([self._system, *self.window()])
            self.history.append(reply)
            if not reply.tool_calls:
                return content_text(reply)
            for call in reply.tool_calls:
                self.history.append(self._run_tool(call))
        raise FoundrySampleError(
            f"No answer after {self._max_tool_rounds} rounds of tool calls"
        )

    def _run_tool(self, call: dict) -> ToolMessage:
        name = call.get("name", "unknown")
        tool = self._tools.get(name)
        if tool is None:
            output = f"Unknown tool: {name}"
        else:
            output = tool.invoke(call.get("args", {}))
        _log.info("tool_called", tool=name, args=call.get("args", {}))
        return ToolMessage(content=str(output), name=name, tool_call_id=call.get("id", ""))
