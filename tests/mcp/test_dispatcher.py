"""Tests for the tool call dispatcher."""

import asyncio
import sys

import pytest

from glab_mcp.adapters import CallResult, GlabAdapter
from glab_mcp.dispatcher import Dispatcher
from glab_mcp.tools import list_tools


class TestListCapabilities:

    def test_returns_catalog(self, dispatcher):
        assert dispatcher.handle_list_capabilities() == list_tools()

    def test_default_adapter_runs_glab(self):
        assert Dispatcher().adapter.program == "glab"


class TestHandleInvoke:

    @pytest.mark.asyncio
    async def test_success_relays_output(self, dispatcher, recording_adapter):
        result = await dispatcher.handle_invoke(
            "issue_view", {"issue_id": 42, "repo": "a/b", "comments": True}
        )

        assert result.success
        assert recording_adapter.calls == [["issue", "view", "42", "-R", "a/b", "--comments"]]
        assert result.text == "issue view 42 -R a/b --comments"

    @pytest.mark.asyncio
    async def test_unknown_tool_spawns_nothing(self, dispatcher, recording_adapter):
        result = await dispatcher.handle_invoke("issue_delete", {"issue_id": 1})

        assert not result.success
        assert result.message == "Unknown tool: issue_delete"
        assert recording_adapter.calls == []

    @pytest.mark.asyncio
    async def test_missing_required_spawns_nothing(self, dispatcher, recording_adapter):
        result = await dispatcher.handle_invoke("issue_note", {"issue_id": 1})

        assert not result.success
        assert "missing required parameter 'message'" in result.message
        assert recording_adapter.calls == []

    @pytest.mark.asyncio
    async def test_none_arguments(self, dispatcher, recording_adapter):
        result = await dispatcher.handle_invoke("issue_list", None)

        assert result.success
        assert recording_adapter.calls == [["issue", "list"]]

    @pytest.mark.asyncio
    async def test_failure_result_is_returned_not_raised(self, adapter_factory):
        failing = adapter_factory(
            result=CallResult.error_result("glab exited with code 1", exit_code=1)
        )
        result = await Dispatcher(failing).handle_invoke("issue_close", {"issue_id": 5})

        assert not result.success
        assert result.exit_code == 1

    @pytest.mark.asyncio
    async def test_spawn_failure_does_not_raise(self):
        dispatcher = Dispatcher(GlabAdapter(program="glab-binary-that-does-not-exist"))

        envelope = await dispatcher.invoke("issue_list", {})

        assert envelope["isError"] is True
        assert envelope["content"][0]["text"].startswith("Error: ")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "tool_name,arguments",
        [
            ("issue_create", {"title": "a\x00b"}),
            ("issue_list", {"search": "\ud800"}),
        ],
    )
    async def test_unpassable_argument_does_not_raise(self, tool_name, arguments):
        dispatcher = Dispatcher(GlabAdapter(program=sys.executable))

        result = await dispatcher.handle_invoke(tool_name, arguments)

        assert not result.success
        assert result.to_dict()["isError"] is True

    @pytest.mark.asyncio
    async def test_unexpected_adapter_error_becomes_failure(self, adapter_factory):
        class BrokenAdapter(adapter_factory):
            async def run(self, argv):
                raise RuntimeError("event loop closed")

        result = await Dispatcher(BrokenAdapter()).handle_invoke("issue_close", {"issue_id": 5})

        assert not result.success
        assert result.text == "Error: event loop closed"
        assert result.argv == ["issue", "close", "5"]


class TestInvokeEnvelope:

    @pytest.mark.asyncio
    async def test_success_envelope(self, adapter_factory):
        adapter = adapter_factory(result=CallResult.success_result("done"))

        envelope = await Dispatcher(adapter).invoke("issue_list")

        assert envelope == {"content": [{"type": "text", "text": "done"}]}

    @pytest.mark.asyncio
    async def test_unknown_tool_envelope(self, dispatcher):
        envelope = await dispatcher.invoke("nope", {})

        assert envelope == {
            "content": [{"type": "text", "text": "Error: Unknown tool: nope"}],
            "isError": True,
        }

    @pytest.mark.asyncio
    async def test_nonzero_exit_envelope(self):
        dispatcher = Dispatcher(GlabAdapter(program=sys.executable))
        # python is handed "issue list" and fails to open the script "issue"
        envelope = await dispatcher.invoke("issue_list", {})

        assert envelope["isError"] is True


class TestConcurrency:

    @pytest.mark.asyncio
    async def test_concurrent_calls_do_not_interfere(self, adapter_factory):
        # The slower call is issued first, so responses arrive out of order
        adapter = adapter_factory(delays={"view": 0.05, "close": 0.0})
        dispatcher = Dispatcher(adapter)

        view, close = await asyncio.gather(
            dispatcher.handle_invoke("issue_view", {"issue_id": 1}),
            dispatcher.handle_invoke("issue_close", {"issue_id": 2, "repo": "a/b"}),
        )

        assert view.text == "issue view 1"
        assert close.text == "issue close 2 -R a/b"
        assert sorted(adapter.calls) == sorted([
            ["issue", "view", "1"],
            ["issue", "close", "2", "-R", "a/b"],
        ])

    @pytest.mark.asyncio
    async def test_concurrent_real_processes(self):
        dispatcher = Dispatcher(GlabAdapter(program=sys.executable))
        script = "import sys; sys.stdout.write(sys.argv[1])"

        first, second = await asyncio.gather(
            dispatcher.adapter.run(["-c", script, "first"]),
            dispatcher.adapter.run(["-c", script, "second"]),
        )

        assert first.text == "first"
        assert second.text == "second"
