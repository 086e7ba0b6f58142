import pytest

from agentweave.handlers import event_handler, rpc_handler


@pytest.mark.asyncio
async def test_event_handler_discards_result_and_runs_body():
    seen = []

    async def log_text(msg, ctx):
        seen.append(msg)
        return "ignored"

    wrapped = event_handler(log_text)
    assert await wrapped("test", None) is None
    assert seen == ["test"]


@pytest.mark.asyncio
async def test_rpc_handler_returns_response():
    async def process(req, ctx):
        return f"Processed {req}"

    wrapped = rpc_handler(process)
    assert await wrapped("x", None) == "Processed x"


@pytest.mark.asyncio
async def test_sync_functions_are_supported():
    def double(value, ctx):
        return value * 2

    calls = []

    def record(value, ctx):
        calls.append(value)
        return value

    wrapped_double = rpc_handler(double)
    wrapped_record = event_handler(record)
    assert await wrapped_double(4, None) == 8
    assert await wrapped_record(5, None) is None
    assert calls == [5]


@pytest.mark.asyncio
async def test_errors_propagate():
    async def failing(msg, ctx):
        raise ValueError("boom")

    wrapped = event_handler(failing)
    with pytest.raises(ValueError, match="boom"):
        await wrapped("m", None)


@pytest.mark.asyncio
async def test_works_as_method_and_keeps_name():
    async def handle_text(self, msg, ctx):
        self.count += 1
        return f"{msg}:{self.count}"

    wrapped = rpc_handler(handle_text)

    class Handler:
        def __init__(self):
            self.count = 0

    Handler.handle_text = wrapped

    handler = Handler()
    assert await handler.handle_text("a", None) == "a:1"
    assert await handler.handle_text("b", None) == "b:2"
    assert wrapped.__name__ == "handle_text"