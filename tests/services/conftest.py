"""Service test fixtures: real catalog, recording provider directory, invoker factory.

Invariants:
    - Model boundary replaced by MockAnthropicClient; everything above it is real
    - RecordingDirectory logs every lookup so tests can count tool round-trips
"""

import pytest

from homecalc.core.catalog import default_catalog
from homecalc.infrastructure.places import StaticProviderDirectory
from homecalc.services.model_invoker import ModelInvoker
from homecalc.services.tool_dispatch import ToolDispatch


class RecordingDirectory:
    """Wraps StaticProviderDirectory; result or error configurable."""

    def __init__(self):
        self.log = []
        self.result = None
        self.error = None
        self._static = StaticProviderDirectory()

    async def find(self, service, location):
        self.log.append((service, location))
        if self.error is not None:
            raise self.error
        if self.result is not None:
            return self.result
        return await self._static.find(service, location)


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def directory():
    return RecordingDirectory()


@pytest.fixture
def dispatch(directory):
    return ToolDispatch(directory, timeout_seconds=0.5)


@pytest.fixture
def make_invoker():
    def _make(client, **kwargs):
        kwargs.setdefault("model", "claude-test")
        kwargs.setdefault("request_timeout_seconds", 2.0)
        return ModelInvoker(client, **kwargs)
    return _make
