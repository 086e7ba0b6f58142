"""A ready-made agent with state storage, metadata and lifecycle tracking."""

from __future__ import annotations

import copy
from typing import Any

from agentweave.agent import Agent, AgentMetadata
from agentweave.agent_id import AgentId
from agentweave.errors import AutoGenError


class BaseAgent(Agent):
    """Agent with a key/value state store and a running flag.

    Subclasses override handle_message to respond to messages; by default
    no response is produced.
    """

    def __init__(self, id: AgentId, metadata: AgentMetadata | None = None) -> None:
        self.id = id
        self._metadata = metadata if metadata is not None else AgentMetadata()
        self.state: dict[str, Any] = {}
        self._running = False

    @classmethod
    def with_description(cls, id: AgentId, description: str) -> BaseAgent:
        """Create an agent whose metadata carries a description."""
        return cls(id, AgentMetadata(description=description))

    @property
    def is_running(self) -> bool:
        return self._running

    def set_state(self, key: str, value: Any) -> None:
        self.state[key] = value

    def get_state(self, key: str) -> Any | None:
        return self.state.get(key)

    def remove_state(self, key: str) -> Any | None:
        """Remove a key, returning its value or None if it was absent."""
        return self.state.pop(key, None)

    def clear_state(self) -> None:
        self.state.clear()

    def set_metadata(self, metadata: AgentMetadata) -> None:
        self._metadata = metadata

    def add_tag(self, tag: str) -> None:
        self._metadata.tags.append(tag)

    def set_property(self, key: str, value: str) -> None:
        self._metadata.properties[key] = value

    async def handle_message(self, message: Any, context: Any) -> Any | None:
        return None

    def metadata(self) -> AgentMetadata:
        return copy.deepcopy(self._metadata)

    async def on_start(self) -> None:
        self._running = True

    async def on_stop(self) -> None:
        self._running = False

    async def save_state(self) -> dict[str, Any]:
        return copy.deepcopy(self.state)

    async def load_state(self, state: dict[str, Any]) -> None:
        self.state = dict(state)

    async def close(self) -> None:
        await self.on_stop()


class BaseAgentBuilder:
    """Fluent construction of BaseAgent instances."""

    def __init__(self) -> None:
        self._id: AgentId | None = None
        self._metadata = AgentMetadata()
        self._initial_state: dict[str, Any] = {}

    def with_id(self, id: AgentId) -> BaseAgentBuilder:
        self._id = id
        return self

    def with_description(self, description: str) -> BaseAgentBuilder:
        self._metadata.description = description
        return self

    def with_tag(self, tag: str) -> BaseAgentBuilder:
        self._metadata.tags.append(tag)
        return self

    def with_property(self, key: str, value: str) -> BaseAgentBuilder:
        self._metadata.properties[key] = value
        return self

    def with_state(self, key: str, value: Any) -> BaseAgentBuilder:
        self._initial_state[key] = value
        return self

    def with_concurrency(self, max_concurrent: int | None) -> BaseAgentBuilder:
        """Allow concurrent handling; None means no upper limit."""
        self._metadata.concurrent = True
        self._metadata.max_concurrent = max_concurrent
        return self

    def build(self) -> BaseAgent:
        """Create the agent; raises AutoGenError if no id was given."""
        if self._id is None:
            raise AutoGenError("Agent ID is required")
        agent = BaseAgent(self._id, copy.deepcopy(self._metadata))
        agent.state = dict(self._initial_state)
        return agent