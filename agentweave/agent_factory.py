"""Factories that create agents, and a registry of factories by type name."""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable

from agentweave.agent import Agent
from agentweave.agent_id import AgentId
from agentweave.errors import AutoGenError

FactoryFn = Callable[[AgentId, Any], Any]
AsyncFactoryFn = Callable[[AgentId, Any], Awaitable[Agent]]


class AgentFactory(ABC):
    """Creates agents of one kind."""

    agent_class: type[Agent] = Agent

    @abstractmethod
    async def create_agent(self, agent_id: AgentId, config: Any | None = None) -> Agent:
        """Create a new agent with the given id and optional configuration."""

    def agent_type_name(self) -> str:
        """Fully qualified name of the class of agents this factory makes."""
        cls = self.agent_class
        return f"{cls.__module__}.{cls.__qualname__}"

    def validate_config(self, config: Any) -> None:
        """Raise if config is unacceptable; every config is accepted by default."""


class ClosureAgentFactory(AgentFactory):
    """Factory backed by a plain callable ``(agent_id, config) -> agent``."""

    def __init__(self, factory_fn: FactoryFn, agent_class: type[Agent] = Agent) -> None:
        self._factory_fn = factory_fn
        self.agent_class = agent_class

    async def create_agent(self, agent_id: AgentId, config: Any | None = None) -> Agent:
        return self._factory_fn(agent_id, config)


class AsyncClosureAgentFactory(AgentFactory):
    """Factory backed by a coroutine function ``(agent_id, config) -> agent``."""

    def __init__(
        self, factory_fn: AsyncFactoryFn, agent_class: type[Agent] = Agent
    ) -> None:
        self._factory_fn = factory_fn
        self.agent_class = agent_class

    async def create_agent(self, agent_id: AgentId, config: Any | None = None) -> Agent:
        return await self._factory_fn(agent_id, config)


class AgentFactoryRegistry:
    """Factory callables keyed by agent type name."""

    def __init__(self) -> None:
        self._factories: dict[str, Callable[[AgentId, Any], Any]] = {}

    def register_factory(
        self, type_name: str, factory: Callable[[AgentId, Any], Any]
    ) -> None:
        """Register (or replace) the factory for type_name.

        The factory may return an agent directly or an awaitable of one.
        """
        self._factories[type_name] = factory

    async def create_agent(
        self, type_name: str, agent_id: AgentId, config: Any | None = None
    ) -> Agent:
        try:
            factory = self._factories[type_name]
        except KeyError:
            raise AutoGenError(
                f"No factory registered for agent type: {type_name}"
            ) from None
        result = factory(agent_id, config)
        if inspect.isawaitable(result):
            result = await result
        return result

    def has_factory(self, type_name: str) -> bool:
        return type_name in self._factories

    def registered_types(self) -> list[str]:
        return list(self._factories)