"""Tests for core.cricket.refresh module."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from config.constants import ERROR_REFRESH_FAILED, REFRESH_JOB_ID
from core.cricket.models import Match, MatchStatus, RefreshState, TeamRef
from core.cricket.refresh import RefreshScheduler
from core.cricket.repository import MatchRepository

# Requests per refresh cycle: live, upcoming, past
CYCLE_CALLS = 3


@pytest.fixture
def responses(
    nested_endpoints,
    nested_live_payload,
    nested_upcoming_payload,
    nested_past_payload,
):
    return {
        nested_endpoints["live"]: nested_live_payload,
        nested_endpoints["upcoming"]: nested_upcoming_payload,
        nested_endpoints["past"]: nested_past_payload,
    }


async def _stop(refresher):
    refresher.stop()
    # AsyncIOScheduler.shutdown runs on the next loop iteration
    await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_start_refreshes_immediately(make_fetcher, responses):
    """Test start() triggers one refresh right away."""
    fetcher = make_fetcher(responses)
    refresher = RefreshScheduler(MatchRepository(fetcher), interval=60)

    task = refresher.start()
    await task

    assert len(fetcher.calls) == CYCLE_CALLS
    state = refresher.state
    assert [m.id for m in state.live] == ["101"]
    assert state.loading is False
    assert state.error is None

    await _stop(refresher)


@pytest.mark.asyncio
async def test_refresh_now_is_coalesced_while_in_flight(
    make_fetcher, responses
):
    """Test a manual refresh during a running one issues no new fetches."""
    gate = asyncio.Event()
    fetcher = make_fetcher(responses, gate=gate)
    refresher = RefreshScheduler(MatchRepository(fetcher), interval=60)

    first = refresher.start()
    await asyncio.sleep(0.01)
    assert refresher.refreshing
    assert refresher.state.loading is True

    second = refresher.refresh_now()
    third = refresher.refresh_now()
    await asyncio.sleep(0.01)

    assert second is first
    assert third is first
    assert len(fetcher.calls) == CYCLE_CALLS

    gate.set()
    await first
    assert len(fetcher.calls) == CYCLE_CALLS
    assert refresher.state.loading is False

    await _stop(refresher)


@pytest.mark.asyncio
async def test_refresh_now_after_completion_fetches_again(
    make_fetcher, responses
):
    """Test a manual refresh after the previous one finished runs again."""
    fetcher = make_fetcher(responses)
    refresher = RefreshScheduler(MatchRepository(fetcher), interval=60)

    await refresher.start()
    await refresher.refresh_now()

    assert len(fetcher.calls) == 2 * CYCLE_CALLS

    await _stop(refresher)


@pytest.mark.asyncio
async def test_interval_refreshes(make_fetcher, responses):
    """Test the scheduled job keeps refreshing on the interval."""
    fetcher = make_fetcher(responses)
    refresher = RefreshScheduler(MatchRepository(fetcher), interval=0.05)

    await refresher.start()
    await asyncio.sleep(0.3)

    assert len(fetcher.calls) >= 2 * CYCLE_CALLS

    await _stop(refresher)


@pytest.mark.asyncio
async def test_no_refresh_after_stop(make_fetcher, responses):
    """Test no scheduled fetch happens after teardown."""
    fetcher = make_fetcher(responses)
    refresher = RefreshScheduler(MatchRepository(fetcher), interval=0.05)

    await refresher.start()
    await _stop(refresher)
    calls_at_stop = len(fetcher.calls)

    await asyncio.sleep(0.3)

    assert len(fetcher.calls) == calls_at_stop
    assert refresher.running is False
    assert refresher.refresh_now() is None


@pytest.mark.asyncio
async def test_restart_right_after_stop_keeps_refreshing(
    make_fetcher, responses
):
    """Test start() straight after stop() schedules refreshes again."""
    fetcher = make_fetcher(responses)
    refresher = RefreshScheduler(MatchRepository(fetcher), interval=0.05)

    await refresher.start()
    refresher.stop()
    await refresher.start()
    calls_at_restart = len(fetcher.calls)

    await asyncio.sleep(0.3)

    assert refresher.running
    assert len(fetcher.calls) > calls_at_restart

    await _stop(refresher)


@pytest.mark.asyncio
async def test_restart_after_stop_completes(make_fetcher, responses):
    """Test a refresher can be restarted once its scheduler shut down."""
    fetcher = make_fetcher(responses)
    refresher = RefreshScheduler(MatchRepository(fetcher), interval=60)

    await refresher.start()
    await _stop(refresher)
    await refresher.start()

    assert len(fetcher.calls) == 2 * CYCLE_CALLS
    assert refresher.running

    await _stop(refresher)


@pytest.mark.asyncio
async def test_in_flight_result_discarded_after_stop(make_fetcher, responses):
    """Test a refresh completing after stop does not update the state."""
    gate = asyncio.Event()
    fetcher = make_fetcher(responses, gate=gate)
    refresher = RefreshScheduler(MatchRepository(fetcher), interval=60)

    task = refresher.start()
    await asyncio.sleep(0.01)
    await _stop(refresher)

    gate.set()
    await task

    assert refresher.state.live == ()
    assert refresher.state.refreshed_at is None


@pytest.mark.asyncio
async def test_unexpected_failure_keeps_previous_lists():
    """Test an unexpected error is recorded without dropping old data."""
    match = Match(
        id="1",
        team1=TeamRef(name="A"),
        team2=TeamRef(name="B"),
        status=MatchStatus.LIVE,
        match_type="T20",
        venue="Oval",
    )
    repository = MagicMock(spec=MatchRepository)
    repository.refresh_all = AsyncMock(
        side_effect=[
            RefreshState(live=(match,), refreshed_at="t1"),
            RuntimeError("boom"),
        ]
    )
    refresher = RefreshScheduler(repository, interval=60)

    await refresher.start()
    await refresher.refresh_now()

    state = refresher.state
    assert state.live == (match,)
    assert state.error == ERROR_REFRESH_FAILED

    await _stop(refresher)


@pytest.mark.asyncio
async def test_shared_scheduler_only_loses_the_job(make_fetcher, responses):
    """Test stop() removes the job but leaves a shared scheduler running."""
    scheduler = AsyncIOScheduler()
    fetcher = make_fetcher(responses)
    refresher = RefreshScheduler(
        MatchRepository(fetcher), interval=60, scheduler=scheduler
    )

    await refresher.start()
    assert scheduler.get_job(REFRESH_JOB_ID) is not None

    refresher.stop()
    assert scheduler.get_job(REFRESH_JOB_ID) is None
    assert scheduler.running

    scheduler.shutdown(wait=False)
    await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_start_twice_does_not_double_schedule(make_fetcher, responses):
    """Test calling start() again while running is a no-op."""
    fetcher = make_fetcher(responses)
    refresher = RefreshScheduler(MatchRepository(fetcher), interval=60)

    await refresher.start()
    await refresher.start()

    assert len(fetcher.calls) == CYCLE_CALLS

    await _stop(refresher)


@pytest.mark.asyncio
async def test_fetch_detail_passes_through():
    """Test detail fetches go straight to the repository."""
    repository = MagicMock(spec=MatchRepository)
    repository.fetch_detail = AsyncMock(return_value="detail")
    refresher = RefreshScheduler(repository)

    result = await refresher.fetch_detail("101")

    assert result == "detail"
    repository.fetch_detail.assert_awaited_once_with("101")
