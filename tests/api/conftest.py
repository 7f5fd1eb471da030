"""API test fixtures: FastAPI app over ASGITransport with a scripted model.

Invariants:
    - get_model_invoker overridden per test with a MockAnthropicClient script
    - get_tool_dispatch overridden with the static sample directory (no network)
"""

import pytest
from httpx import ASGITransport, AsyncClient

from homecalc.api.dependencies import get_model_invoker, get_tool_dispatch
from homecalc.infrastructure.places import StaticProviderDirectory
from homecalc.main import app
from homecalc.services.model_invoker import ModelInvoker
from homecalc.services.tool_dispatch import ToolDispatch

from tests.services.mock_anthropic import MockAnthropicClient


@pytest.fixture
def script():
    """Set the model responses for the next requests: script(response, ...)."""
    holder = {"client": MockAnthropicClient([])}

    def _set(*responses):
        holder["client"] = MockAnthropicClient(list(responses))
        return holder["client"]

    _set.holder = holder
    return _set


@pytest.fixture
async def client(script):
    app.dependency_overrides[get_model_invoker] = lambda: ModelInvoker(
        script.holder["client"], model="claude-test", request_timeout_seconds=2.0,
    )
    app.dependency_overrides[get_tool_dispatch] = lambda: ToolDispatch(
        StaticProviderDirectory(), timeout_seconds=1.0,
    )
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()
