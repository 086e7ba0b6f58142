"""The agent interface and the metadata an agent reports about itself."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from agentweave.agent_id import AgentId


@dataclass
class AgentMetadata:
    """Capabilities and configuration an agent advertises to the runtime."""

    description: str | None = None
    tags: list[str] = field(default_factory=list)
    properties: dict[str, str] = field(default_factory=dict)
    concurrent: bool = False
    max_concurrent: int | None = None


class Agent(ABC):
    """Base interface for every agent.

    Concrete agents provide an ``id`` attribute holding their AgentId and
    implement handle_message; the lifecycle and state hooks default to
    doing nothing.
    """

    id: AgentId

    @abstractmethod
    async def handle_message(self, message: Any, context: Any) -> Any | None:
        """Process one incoming message and return an optional response."""

    def metadata(self) -> AgentMetadata:
        """Information about the agent that the runtime can use."""
        return AgentMetadata()

    async def on_start(self) -> None:
        """Called when the agent is registered with a runtime."""

    async def on_stop(self) -> None:
        """Called when the agent is being stopped."""

    async def save_state(self) -> dict[str, Any]:
        """Return a JSON-serialisable snapshot of the agent's state."""
        return {}

    async def load_state(self, state: dict[str, Any]) -> None:
        """Restore state produced by save_state."""

    async def close(self) -> None:
        """Release resources before the runtime shuts down."""


def copy_metadata(metadata: AgentMetadata) -> AgentMetadata:
    """An independent copy of metadata."""
    return copy.deepcopy(metadata)