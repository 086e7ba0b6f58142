"""Agent registry, runtime configuration and statistics, and runtime events."""

from __future__ import annotations

import asyncio
import dataclasses
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable, Union

from agentweave.agent import Agent, AgentMetadata, copy_metadata
from agentweave.agent_id import AgentId
from agentweave.errors import AgentError, AgentErrorKind, AutoGenError


@dataclass
class RegistryMetrics:
    """Counters kept by an AgentRegistry."""

    agent_count: int = 0
    messages_routed: int = 0
    avg_routing_time_us: float = 0.0
    cache_hit_rate: float = 0.0


class AgentRegistry:
    """Agents indexed by id, with cached metadata and usage metrics."""

    def __init__(self) -> None:
        self._agents: dict[AgentId, Agent] = {}
        self._metadata_cache: dict[AgentId, AgentMetadata] = {}
        self._metrics = RegistryMetrics()
        self._lock = asyncio.Lock()

    async def register_agent(self, agent_id: AgentId, agent: Agent) -> None:
        """Add an agent; raises AutoGenError if the id is already taken."""
        async with self._lock:
            if agent_id in self._agents:
                raise AutoGenError(f"Agent with ID {agent_id} already registered")
            self._agents[agent_id] = agent
            self._metadata_cache[agent_id] = agent.metadata()
            self._metrics.agent_count += 1

    async def unregister_agent(self, agent_id: AgentId) -> None:
        """Remove an agent; raises AgentError(NOT_FOUND) if it is unknown."""
        async with self._lock:
            if self._agents.pop(agent_id, None) is None:
                raise AgentError(AgentErrorKind.NOT_FOUND, agent_id=str(agent_id))
            self._metadata_cache.pop(agent_id, None)
            self._metrics.agent_count = max(0, self._metrics.agent_count - 1)

    async def get_agent(self, agent_id: AgentId) -> Agent | None:
        async with self._lock:
            return self._agents.get(agent_id)

    async def get_agent_metadata(self, agent_id: AgentId) -> AgentMetadata | None:
        """Metadata captured when the agent was registered."""
        async with self._lock:
            metadata = self._metadata_cache.get(agent_id)
            return None if metadata is None else copy_metadata(metadata)

    async def list_agents(self) -> list[AgentId]:
        async with self._lock:
            return list(self._agents)

    async def agent_count(self) -> int:
        async with self._lock:
            return len(self._agents)

    async def get_metrics(self) -> RegistryMetrics:
        """A snapshot of the current metrics."""
        async with self._lock:
            return dataclasses.replace(self._metrics)

    async def batch_register_agents(
        self, agents: Iterable[tuple[AgentId, Agent]]
    ) -> list[AutoGenError | None]:
        """Register each agent in turn; one outcome per agent, None on success."""
        results: list[AutoGenError | None] = []
        for agent_id, agent in agents:
            try:
                await self.register_agent(agent_id, agent)
            except AutoGenError as exc:
                results.append(exc)
            else:
                results.append(None)
        return results


@dataclass
class RuntimeConfig:
    """Options for an agent runtime."""

    max_concurrent_handlers: int = 100
    message_queue_size: int = 1000
    enable_telemetry: bool = False
    properties: dict[str, str] = field(default_factory=dict)


@dataclass
class RuntimeStats:
    """Counters describing message processing in a runtime."""

    messages_processed: int = 0
    messages_published: int = 0
    rpc_requests_processed: int = 0
    active_agents: int = 0
    queued_messages: int = 0
    avg_processing_time_ms: float = 0.0


@dataclass(frozen=True)
class AgentRegistered:
    agent_id: AgentId
    agent_type: str


@dataclass(frozen=True)
class AgentUnregistered:
    agent_id: AgentId


@dataclass(frozen=True)
class MessageSent:
    sender: AgentId | None
    recipient: AgentId
    message_type: str


@dataclass(frozen=True)
class MessagePublished:
    sender: AgentId | None
    topic_id: object
    message_type: str


@dataclass(frozen=True)
class RpcRequest:
    sender: AgentId | None
    recipient: AgentId
    request_type: str


@dataclass(frozen=True)
class RuntimeStarted:
    pass


@dataclass(frozen=True)
class RuntimeStopped:
    pass


@dataclass(frozen=True)
class RuntimeErrorEvent:
    message: str
    agent_id: AgentId | None = None


RuntimeEvent = Union[
    AgentRegistered,
    AgentUnregistered,
    MessageSent,
    MessagePublished,
    RpcRequest,
    RuntimeStarted,
    RuntimeStopped,
    RuntimeErrorEvent,
]


class RuntimeEventHandler(ABC):
    """Receives runtime events for monitoring and debugging."""

    @abstractmethod
    async def handle_event(self, event: RuntimeEvent) -> None:
        """Handle one runtime event."""


def _optional(agent_id: AgentId | None) -> str:
    return "None" if agent_id is None else str(agent_id)


class LoggingEventHandler(RuntimeEventHandler):
    """Writes a line describing each event to standard output."""

    def format_event(self, event: RuntimeEvent) -> str:
        """The line printed for event."""
        match event:
            case AgentRegistered(agent_id=agent_id, agent_type=agent_type):
                return f"Agent registered: {agent_id} (type: {agent_type})"
            case AgentUnregistered(agent_id=agent_id):
                return f"Agent unregistered: {agent_id}"
            case MessageSent(sender=sender, recipient=recipient, message_type=kind):
                return f"Message sent: {_optional(sender)} -> {recipient} ({kind})"
            case MessagePublished(sender=sender, topic_id=topic, message_type=kind):
                return f"Message published: {_optional(sender)} -> {topic} ({kind})"
            case RpcRequest(sender=sender, recipient=recipient, request_type=kind):
                return f"RPC request: {_optional(sender)} -> {recipient} ({kind})"
            case RuntimeStarted():
                return "Runtime started"
            case RuntimeStopped():
                return "Runtime stopped"
            case RuntimeErrorEvent(message=message, agent_id=agent_id):
                return f"Runtime error: {message} (agent: {_optional(agent_id)})"
        raise TypeError(f"unknown runtime event: {event!r}")

    async def handle_event(self, event: RuntimeEvent) -> None:
        print(self.format_event(event))