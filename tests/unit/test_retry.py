"""Tests for the async retry helper."""

from unittest.mock import AsyncMock, patch

import pytest

from vestri.utils.retry import retry_async


class Flaky(Exception):
    pass


async def test_returns_first_success():
    fn = AsyncMock(return_value="ok")

    assert await retry_async(fn, attempts=3, base_delay=0) == "ok"
    assert fn.await_count == 1


async def test_retries_until_success():
    fn = AsyncMock(side_effect=[Flaky("down"), Flaky("down"), "ok"])

    with patch("vestri.utils.retry.asyncio.sleep", new=AsyncMock()) as sleep:
        result = await retry_async(fn, retry_on=(Flaky,), attempts=3, base_delay=1.0)

    assert result == "ok"
    assert fn.await_count == 3
    assert [call.args[0] for call in sleep.await_args_list] == [1.0, 2.0]


async def test_reraises_after_last_attempt():
    fn = AsyncMock(side_effect=Flaky("still down"))

    with patch("vestri.utils.retry.asyncio.sleep", new=AsyncMock()) as sleep:
        with pytest.raises(Flaky, match="still down"):
            await retry_async(fn, retry_on=(Flaky,), attempts=3, base_delay=0.5)

    assert fn.await_count == 3
    assert [call.args[0] for call in sleep.await_args_list] == [0.5, 1.0]


async def test_other_exceptions_not_retried():
    fn = AsyncMock(side_effect=ValueError("bad input"))

    with pytest.raises(ValueError):
        await retry_async(fn, retry_on=(Flaky,), attempts=3, base_delay=0)

    assert fn.await_count == 1


async def test_defaults_come_from_settings(monkeypatch):
    from vestri.config import settings

    monkeypatch.setattr(settings, "retry_attempts", 2)
    fn = AsyncMock(side_effect=Flaky("down"))

    with pytest.raises(Flaky):
        await retry_async(fn, retry_on=(Flaky,))

    assert fn.await_count == 2
