import pytest

from agentweave.agent import Agent, AgentMetadata
from agentweave.agent_id import AgentId


class EchoAgent(Agent):
    def __init__(self, id):
        self.id = id

    async def handle_message(self, message, context):
        return f"echo:{message}"


def test_agent_metadata_default():
    metadata = AgentMetadata()
    assert metadata.description is None
    assert metadata.tags == []
    assert metadata.properties == {}
    assert metadata.concurrent is False
    assert metadata.max_concurrent is None


def test_metadata_defaults_not_shared():
    first = AgentMetadata()
    second = AgentMetadata()
    first.tags.append("x")
    first.properties["k"] = "v"
    assert second.tags == []
    assert second.properties == {}


def test_agent_is_abstract():
    with pytest.raises(TypeError):
        Agent()


@pytest.mark.asyncio
async def test_handle_message_and_id():
    agent_id = AgentId("test", "agent")
    agent = EchoAgent(agent_id)
    assert agent.id == agent_id
    assert await agent.handle_message("hi", None) == "echo:hi"


@pytest.mark.asyncio
async def test_default_hooks():
    agent = EchoAgent(AgentId("test", "agent"))
    assert agent.metadata() == AgentMetadata()
    assert await agent.save_state() == {}
    assert await agent.load_state({"a": 1}) is None
    assert await agent.save_state() == {}
    assert await agent.on_start() is None
    assert await agent.on_stop() is None
    assert await agent.close() is None