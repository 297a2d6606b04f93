"""Shared fixtures for MCP tests."""

import asyncio
from typing import List, Optional, Sequence

import pytest

from glab_mcp.adapters import CallResult
from glab_mcp.dispatcher import Dispatcher


class RecordingAdapter:
    """Stands in for GlabAdapter: records argv and echoes it back."""

    program = "glab"

    def __init__(self, result: Optional[CallResult] = None, delays: Optional[dict] = None):
        self.result = result
        self.delays = delays or {}
        self.calls: List[List[str]] = []

    async def run(self, argv: Sequence[str]) -> CallResult:
        argv = list(argv)
        self.calls.append(argv)
        delay = self.delays.get(argv[1] if len(argv) > 1 else "")
        if delay:
            await asyncio.sleep(delay)
        if self.result is not None:
            return self.result
        return CallResult.success_result(" ".join(argv), argv=argv)


@pytest.fixture
def recording_adapter():
    return RecordingAdapter()


@pytest.fixture
def dispatcher(recording_adapter):
    return Dispatcher(recording_adapter)


@pytest.fixture
def adapter_factory():
    """Build RecordingAdapters with canned results or per-verb delays."""
    return RecordingAdapter
