"""
Unit tests for ActionExecutor.

Tests event ordering, failure reporting and refresh policies.
"""
from unittest.mock import AsyncMock

import pytest

from device_sync.actions.executor import CommandSpec, QuerySpec, RefreshPolicy
from device_sync.events.types import ApiError, MethodCalled, PropertyChanged
from device_sync.exceptions import RemoteCallError

STATUS = QuerySpec(
    property="domeStatus",
    description="fetch dome status",
    to_fields=lambda state: {"dome_status": state},
)


def command(refresh=RefreshPolicy.NONE, **kwargs):
    return CommandSpec("openShutter", "openShutter dome", refresh, **kwargs)


class TestRunQuery:
    """Test query execution."""

    @pytest.mark.asyncio
    async def test_success_updates_cache_then_emits(self, executor, cache, sink, dome_record):
        """Test cache holds the new value when the event is emitted."""
        result = await executor.run_query(
            dome_record.id, STATUS, AsyncMock(return_value={"azimuth": 90.0})
        )

        assert result == {"azimuth": 90.0}
        assert cache.get_by_id(dome_record.id).dome_status == {"azimuth": 90.0}
        event, snapshot = sink.snapshots[0]
        assert event == PropertyChanged(dome_record.id, "domeStatus", {"azimuth": 90.0})
        assert snapshot.dome_status == {"azimuth": 90.0}

    @pytest.mark.asyncio
    async def test_failure_leaves_cache_and_emits_one_error(self, executor, cache, sink, dome_record):
        """Test a failed query reports ApiError and keeps the old value."""
        cache.update(dome_record.id, {"dome_status": {"azimuth": 10.0}})

        result = await executor.run_query(
            dome_record.id,
            STATUS,
            AsyncMock(side_effect=RemoteCallError("get", "timeout")),
        )

        assert result is None
        assert cache.get_by_id(dome_record.id).dome_status == {"azimuth": 10.0}
        assert sink.events == [ApiError(dome_record.id, "Failed to fetch dome status: timeout")]

    @pytest.mark.asyncio
    async def test_custom_event_value(self, executor, sink, dome_record):
        spec = QuerySpec(
            property="switchDetails",
            description="fetch switch details",
            to_fields=lambda r: {"max_switch": r},
            to_value=lambda r: {"maxSwitch": r},
        )

        await executor.run_query(dome_record.id, spec, AsyncMock(return_value=4))

        assert sink.events[0].value == {"maxSwitch": 4}


class TestRunCommand:
    """Test command execution."""

    @pytest.mark.asyncio
    async def test_success_emits_method_called(self, executor, sink, dome_record):
        outcome = await executor.run_command(
            dome_record.id, command(), AsyncMock(return_value=None), args=(1, 2)
        )

        assert outcome.ok
        assert sink.events == [MethodCalled(dome_record.id, "openShutter", (1, 2), "success")]

    @pytest.mark.asyncio
    async def test_report_result(self, executor, sink, dome_record):
        spec = CommandSpec("isStateChangeComplete", "check", report_result=True)

        outcome = await executor.run_command(dome_record.id, spec, AsyncMock(return_value=True))

        assert outcome.result is True
        assert sink.events[0].result is True

    @pytest.mark.asyncio
    async def test_silent_command(self, executor, sink, dome_record):
        outcome = await executor.run_command(
            dome_record.id, command(announce=False), AsyncMock(return_value=None)
        )

        assert outcome.ok
        assert sink.events == []

    @pytest.mark.asyncio
    async def test_failure_emits_api_error(self, executor, sink, dome_record):
        outcome = await executor.run_command(
            dome_record.id,
            command(),
            AsyncMock(side_effect=RemoteCallError("open_shutter", "Shutter jammed")),
        )

        assert not outcome.ok
        assert outcome.error == "Failed to openShutter dome: Shutter jammed"
        assert sink.events == [ApiError(dome_record.id, outcome.error)]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "policy, succeed, refreshed",
        [
            (RefreshPolicy.NONE, True, False),
            (RefreshPolicy.NONE, False, False),
            (RefreshPolicy.ON_SUCCESS, True, True),
            (RefreshPolicy.ON_SUCCESS, False, False),
            (RefreshPolicy.ON_FAILURE, True, False),
            (RefreshPolicy.ON_FAILURE, False, True),
            (RefreshPolicy.ALWAYS, True, True),
            (RefreshPolicy.ALWAYS, False, True),
        ],
    )
    async def test_refresh_policy(self, executor, dome_record, policy, succeed, refreshed):
        """Test refresh runs exactly when the policy asks for it."""
        call = AsyncMock() if succeed else AsyncMock(side_effect=RemoteCallError("x", "boom"))
        refresh = AsyncMock()

        await executor.run_command(dome_record.id, command(policy), call, refresh=refresh)

        assert refresh.await_count == (1 if refreshed else 0)

    @pytest.mark.asyncio
    async def test_refresh_precedes_method_called(self, executor, sink, dome_record):
        """Test the refresh's events come before MethodCalled."""

        async def refresh():
            sink.emit(PropertyChanged(dome_record.id, "domeStatus", {}))

        await executor.run_command(
            dome_record.id, command(RefreshPolicy.ALWAYS), AsyncMock(), refresh=refresh
        )

        assert [e.type for e in sink.events] == ["devicePropertyChanged", "deviceMethodCalled"]

    @pytest.mark.asyncio
    async def test_failing_follow_up_counts_as_failure(self, executor, sink, dome_record):
        """Test an on_success failure reports ApiError and refreshes on failure."""
        refresh = AsyncMock()

        outcome = await executor.run_command(
            dome_record.id,
            command(RefreshPolicy.ON_FAILURE),
            AsyncMock(),
            refresh=refresh,
            on_success=AsyncMock(side_effect=RemoteCallError("read", "lost")),
        )

        assert not outcome.ok
        refresh.assert_awaited_once()
        assert isinstance(sink.events[0], ApiError)


class TestUpdateAndNotify:
    """Test targeted updates."""

    def test_updates_then_emits(self, executor, cache, sink, dome_record):
        executor.update_and_notify(dome_record.id, {"dome_slaved": True}, "slaved", True)

        event, snapshot = sink.snapshots[0]
        assert event == PropertyChanged(dome_record.id, "slaved", True)
        assert snapshot.dome_slaved is True


class TestMalformedResults:
    """Test results that cannot be turned into cache fields."""

    @pytest.mark.asyncio
    async def test_unusable_result_reports_error_and_keeps_cache(
        self, executor, cache, sink, dome_record
    ):
        """Test a result rejected by to_fields is reported like a failed call."""
        spec = QuerySpec(
            property="domeStatus",
            description="fetch dome status",
            to_fields=lambda state: {"dome_status": dict(state)},
        )
        cache.update(dome_record.id, {"dome_status": {"azimuth": 10.0}})

        result = await executor.run_query(dome_record.id, spec, AsyncMock(return_value=None))

        assert result is None
        assert cache.get_by_id(dome_record.id).dome_status == {"azimuth": 10.0}
        assert len(sink.events) == 1
        assert isinstance(sink.events[0], ApiError)
        assert sink.events[0].error.startswith("Failed to fetch dome status:")

    @pytest.mark.asyncio
    async def test_unusable_event_value_leaves_cache(self, executor, cache, sink, dome_record):
        spec = QuerySpec(
            property="switchDetails",
            description="fetch switch details",
            to_fields=lambda r: {"max_switch": r},
            to_value=lambda r: {"maxSwitch": r[0]},
        )

        await executor.run_query(dome_record.id, spec, AsyncMock(return_value=4))

        assert cache.get_by_id(dome_record.id).max_switch is None
        assert [type(e) for e in sink.events] == [ApiError]
