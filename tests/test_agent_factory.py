import pytest

from agentweave.agent import Agent
from agentweave.agent_factory import (
    AgentFactoryRegistry,
    AsyncClosureAgentFactory,
    ClosureAgentFactory,
)
from agentweave.agent_id import AgentId
from agentweave.errors import AutoGenError


class EchoAgent(Agent):
    def __init__(self, id, value):
        self.id = id
        self.value = value

    async def handle_message(self, message, context):
        return f"TestAgent: {self.value}"


@pytest.mark.asyncio
async def test_closure_agent_factory():
    factory = ClosureAgentFactory(lambda id, config: EchoAgent(id, "test"))
    agent_id = AgentId("test", "agent")
    agent = await factory.create_agent(agent_id, None)
    assert agent.id == agent_id
    assert await agent.handle_message("hi", None) == "TestAgent: test"


@pytest.mark.asyncio
async def test_closure_factory_passes_config():
    factory = ClosureAgentFactory(lambda id, config: EchoAgent(id, config["value"]))
    agent = await factory.create_agent(AgentId("t", "k"), {"value": "cfg"})
    assert agent.value == "cfg"


@pytest.mark.asyncio
async def test_async_closure_agent_factory():
    async def make(id, config):
        return EchoAgent(id, "async")

    factory = AsyncClosureAgentFactory(make, EchoAgent)
    agent_id = AgentId("test", "async")
    agent = await factory.create_agent(agent_id)
    assert agent.id == agent_id
    assert agent.value == "async"


def test_agent_type_name():
    factory = ClosureAgentFactory(lambda id, config: EchoAgent(id, "x"), EchoAgent)
    assert factory.agent_type_name().endswith("EchoAgent")


@pytest.mark.asyncio
async def test_agent_factory_registry():
    registry = AgentFactoryRegistry()

    async def make(id, config):
        return EchoAgent(id, "registry_test")

    registry.register_factory("TestAgent", make)
    assert registry.has_factory("TestAgent")
    assert not registry.has_factory("Other")

    agent_id = AgentId("test", "registry")
    agent = await registry.create_agent("TestAgent", agent_id, None)
    assert agent.id == agent_id
    assert agent.value == "registry_test"


@pytest.mark.asyncio
async def test_registry_unknown_type():
    registry = AgentFactoryRegistry()
    with pytest.raises(AutoGenError, match="No factory registered for agent type: Missing"):
        await registry.create_agent("Missing", AgentId("t", "k"))


def test_registered_types():
    registry = AgentFactoryRegistry()
    assert registry.registered_types() == []
    registry.register_factory("A", lambda id, config: EchoAgent(id, "a"))
    registry.register_factory("B", lambda id, config: EchoAgent(id, "b"))
    assert sorted(registry.registered_types()) == ["A", "B"]


@pytest.mark.asyncio
async def test_register_replaces_existing():
    registry = AgentFactoryRegistry()
    registry.register_factory("A", lambda id, config: EchoAgent(id, "first"))
    registry.register_factory("A", lambda id, config: EchoAgent(id, "second"))
    agent = await registry.create_agent("A", AgentId("t", "k"))
    assert agent.value == "second"
    assert registry.registered_types() == ["A"]