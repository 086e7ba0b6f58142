"""Agents whose behaviour is supplied as callables instead of a subclass."""

from __future__ import annotations

import copy
import inspect
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional, Union

from agentweave.agent import Agent, AgentMetadata
from agentweave.agent_id import AgentId
from agentweave.errors import AutoGenError

MessageHandler = Callable[[Any, Any], Union[Awaitable[Optional[Any]], Optional[Any]]]
LifecycleHandler = Callable[[], Union[Awaitable[None], None]]


async def _resolve(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


@dataclass
class ClosureContext:
    """State and metadata held by a closure agent."""

    state: dict[str, Any] = field(default_factory=dict)
    metadata: AgentMetadata = field(default_factory=AgentMetadata)

    def get_state(self, key: str) -> Any | None:
        return self.state.get(key)

    def set_state(self, key: str, value: Any) -> None:
        self.state[key] = value


class ClosureAgent(Agent):
    """Agent that delegates message handling and lifecycle hooks to callables.

    Handlers may be coroutine functions or plain callables.  Without a
    message handler every message is answered with None.
    """

    def __init__(self, id: AgentId) -> None:
        self.id = id
        self.context = ClosureContext()
        self._message_handler: MessageHandler | None = None
        self._start_handler: LifecycleHandler | None = None
        self._stop_handler: LifecycleHandler | None = None

    def with_message_handler(self, handler: MessageHandler) -> ClosureAgent:
        self._message_handler = handler
        return self

    def with_start_handler(self, handler: LifecycleHandler) -> ClosureAgent:
        self._start_handler = handler
        return self

    def with_stop_handler(self, handler: LifecycleHandler) -> ClosureAgent:
        self._stop_handler = handler
        return self

    def with_state(self, state: dict[str, Any]) -> ClosureAgent:
        self.context.state = state
        return self

    def with_metadata(self, metadata: AgentMetadata) -> ClosureAgent:
        self.context.metadata = metadata
        return self

    async def handle_message(self, message: Any, context: Any) -> Any | None:
        if self._message_handler is None:
            return None
        return await _resolve(self._message_handler(message, context))

    def metadata(self) -> AgentMetadata:
        return copy.deepcopy(self.context.metadata)

    async def on_start(self) -> None:
        if self._start_handler is not None:
            await _resolve(self._start_handler())

    async def on_stop(self) -> None:
        if self._stop_handler is not None:
            await _resolve(self._stop_handler())

    async def save_state(self) -> dict[str, Any]:
        return copy.deepcopy(self.context.state)

    async def load_state(self, state: dict[str, Any]) -> None:
        self.context.state = dict(state)

    async def close(self) -> None:
        await self.on_stop()


class ClosureAgentBuilder:
    """Fluent construction of ClosureAgent instances."""

    def __init__(self) -> None:
        self._id: AgentId | None = None
        self._context = ClosureContext()
        self._message_handler: MessageHandler | None = None
        self._start_handler: LifecycleHandler | None = None
        self._stop_handler: LifecycleHandler | None = None

    def with_id(self, id: AgentId) -> ClosureAgentBuilder:
        self._id = id
        return self

    def with_message_handler(self, handler: MessageHandler) -> ClosureAgentBuilder:
        self._message_handler = handler
        return self

    def with_start_handler(self, handler: LifecycleHandler) -> ClosureAgentBuilder:
        self._start_handler = handler
        return self

    def with_stop_handler(self, handler: LifecycleHandler) -> ClosureAgentBuilder:
        self._stop_handler = handler
        return self

    def with_state(self, state: dict[str, Any]) -> ClosureAgentBuilder:
        self._context.state = state
        return self

    def with_metadata(self, metadata: AgentMetadata) -> ClosureAgentBuilder:
        self._context.metadata = metadata
        return self

    def build(self) -> ClosureAgent:
        """Create the agent; raises AutoGenError if no id was given."""
        if self._id is None:
            raise AutoGenError("Agent ID is required")
        agent = ClosureAgent(self._id)
        agent.context = self._context
        agent._message_handler = self._message_handler
        agent._start_handler = self._start_handler
        agent._stop_handler = self._stop_handler
        return agent


def closure_agent(id: AgentId, handler: MessageHandler) -> ClosureAgent:
    """Create a closure agent with just a message handler."""
    return ClosureAgent(id).with_message_handler(handler)