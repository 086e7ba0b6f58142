# agentweave

Building blocks for asynchronous multi-agent applications written with
`asyncio`: validated agent identifiers, an `Agent` base class with lifecycle
and state hooks, two ready-made agents, agent factories, an in-memory cache
with time-to-live, handler decorators and an agent registry. It has no
dependencies outside the standard library.

## Install

```
pip install agentweave
```

To run the test suite, install the `test` extra and run `pytest` from the
project directory:

```
pip install "agentweave[test]"
pytest
```

## Errors

`agentweave.errors.AutoGenError` is the base of the package's own errors and
is also raised directly for generic failures. Each error family is a subclass
paired with an enum of kinds whose values are the message templates:
`AgentError`/`AgentErrorKind`, `MessageError`, `AgentRuntimeError`,
`StateError`, `CacheError`, `SerializationError`, `NetworkError`,
`ConfigError` and `ValidationError`. The keyword fields fill in the template
and become attributes:

```python
from agentweave.errors import AgentError, AgentErrorKind

err = AgentError(AgentErrorKind.NOT_FOUND, agent_id="assistant/main")
str(err)             # "Agent error: Agent 'assistant/main' not found"
err.agent_id         # 'assistant/main'
err.is_recoverable() # False
```

`is_recoverable()` is true for every `NetworkError`, for `CacheError` of kind
`MISS`, `AgentRuntimeError` of kind `CONCURRENCY_LIMIT_EXCEEDED` and
`MessageError` of kind `TIMEOUT`, and false otherwise.

## Agent identifiers

`agentweave.agent_id.AgentId` is a frozen pair of an agent type and a key,
written `type/key`. Types must be a non-empty run of word characters, `-` and
`.` (`is_valid_agent_type` checks this); `AgentType` is a validated type name.

```python
from agentweave.agent_id import AgentId

agent_id = AgentId.from_str("assistant/main")
print(agent_id)              # assistant/main
print(agent_id.to_dict())    # {'type': 'assistant', 'key': 'main'}
AgentId.from_dict({"type": "assistant", "key": "main"}) == agent_id  # True
```

`from_str` splits at the first `/`. An invalid type, or a string without
`/`, raises `ValidationError`; `from_dict` raises `SerializationError` when
a field is missing.

## Agents

Subclass `agentweave.agent.Agent`, set `self.id` and implement the coroutine
`handle_message(message, context)`, returning a response or `None`. Messages
and contexts are whatever objects your application uses. The coroutines
`on_start`, `on_stop`, `save_state`, `load_state` and `close` default to doing
nothing (`save_state` returns `{}`), and `metadata()` returns an
`AgentMetadata` with `description`, `tags`, `properties`, `concurrent` and
`max_concurrent`.

`agentweave.base_agent.BaseAgent` keeps a `state` dictionary
(`set_state`, `get_state`, `remove_state`, `clear_state`), editable metadata
(`set_metadata`, `add_tag`, `set_property`) and an `is_running` flag set by
`on_start` and cleared by `on_stop` and `close`. Its `handle_message` returns
`None`; override it to respond. `BaseAgentBuilder` configures one fluently and
raises `AutoGenError` from `build()` when no id was given:

```python
from agentweave.base_agent import BaseAgentBuilder

agent = (
    BaseAgentBuilder()
    .with_id(agent_id)
    .with_description("Test agent")
    .with_tag("test")
    .with_property("env", "test")
    .with_state("counter", 0)
    .with_concurrency(5)
    .build()
)
```

`agentweave.closure_agent.ClosureAgent` takes its behaviour from callables,
which may be coroutine functions or plain functions; without a message
handler it answers `None`. `closure_agent(id, handler)` is the short form and
`ClosureAgentBuilder` also accepts start and stop handlers, initial state and
metadata:

```python
from agentweave.closure_agent import closure_agent

async def echo(message, context):
    return f"Echo: {message}"

agent = closure_agent(agent_id, echo)
await agent.handle_message("Hello", None)   # 'Echo: Hello'
```

## Factories

`agentweave.agent_factory` has the abstract `AgentFactory`
(`create_agent`, `agent_type_name`, `validate_config`),
`ClosureAgentFactory` for a plain `(agent_id, config) -> agent` callable and
`AsyncClosureAgentFactory` for a coroutine function. `AgentFactoryRegistry`
keeps factories by type name (`register_factory`, `has_factory`,
`registered_types`); its `create_agent(type_name, agent_id, config)` awaits
the factory's result if needed and raises `AutoGenError` for an unknown type.

## Cache

`agentweave.cache.InMemoryStore` is an async key/value store. `set` takes an
optional time-to-live in seconds or as a `timedelta`;
`InMemoryStore.with_default_ttl(...)` applies one to entries stored without
their own. Expired entries are never returned and are dropped by `get`,
`size` and `keys`. Values are copied in and out.

```python
from agentweave.cache import InMemoryStore

store = InMemoryStore()
await store.set("key1", {"test": "value"}, ttl=0.05)
await store.get("key1")      # {'test': 'value'}
await store.exists("key1")   # True until the entry expires
```

`TypedCache(store, cls)` stores values of one type as JSON-compatible data:
dataclasses as dicts, other types passed through and rebuilt with
`cls(value)`, or with your own `encode`/`decode` callables. Values that cannot
be converted raise `AutoGenError`.

## Handler decorators

`agentweave.handlers.event_handler` wraps a sync or async function into a
coroutine that always returns `None`; `rpc_handler` wraps one into a coroutine
that returns the function's result.

## Registry and runtime events

`agentweave.agent_runtime.AgentRegistry` holds agents by `AgentId`:
`register_agent` (raises `AutoGenError` for a duplicate id),
`unregister_agent` (raises `AgentError` of kind `NOT_FOUND`), `get_agent`,
`get_agent_metadata` (captured at registration), `list_agents`,
`agent_count`, `get_metrics` (a `RegistryMetrics` snapshot) and
`batch_register_agents`, which returns one entry per agent: `None` on success
or the error raised.

The module also defines the `RuntimeConfig` and `RuntimeStats` dataclasses,
the event types `AgentRegistered`, `AgentUnregistered`, `MessageSent`,
`MessagePublished`, `RpcRequest`, `RuntimeStarted`, `RuntimeStopped` and
`RuntimeErrorEvent`, the abstract `RuntimeEventHandler`, and
`LoggingEventHandler`, which prints the line given by `format_event`.

## What the package does not do

There is no runtime that runs agents: nothing delivers messages between
agents, publishes to topics, answers requests, or uses `RuntimeConfig` and
`RuntimeStats`. There are no built-in message or context types, and the cache
keeps entries in memory only.