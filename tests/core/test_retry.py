import pytest

from app.core.retry import quadratic, retry_async


def test_quadratic_wait_sequence():
    gen = quadratic(0.25)
    gen.send(None)
    assert [next(gen) for _ in range(3)] == [0.25, 1.0, 2.25]


def _flaky(failures, value="ok"):
    calls = {"n": 0}

    async def op():
        calls["n"] += 1
        if calls["n"] <= failures:
            raise ConnectionError(f"boom {calls['n']}")
        return value

    return op, calls


@pytest.mark.asyncio
async def test_succeeds_on_first_try():
    op, calls = _flaky(0)
    assert await retry_async(op, max_tries=3, base_delay=0) == "ok"
    assert calls["n"] == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("n", [1, 2, 3])
async def test_succeeds_on_attempt_n(n):
    op, calls = _flaky(n - 1, value=[{"a": 1}])
    seen = []
    result = await retry_async(op, max_tries=3, base_delay=0, on_attempt=seen.append)
    assert result == [{"a": 1}]
    assert calls["n"] == n
    assert seen == list(range(1, n + 1))


@pytest.mark.asyncio
async def test_raises_last_error_when_exhausted():
    op, calls = _flaky(10)
    with pytest.raises(ConnectionError, match="boom 3"):
        await retry_async(op, max_tries=3, base_delay=0)
    assert calls["n"] == 3


def _recording_quadratic(waits, base=0.25):
    """Records the quadratic schedule but sleeps 0 so the test stays fast."""

    def gen():
        schedule = quadratic(base)
        next(schedule)
        yield
        while True:
            waits.append(next(schedule))
            yield 0

    return gen


@pytest.mark.asyncio
async def test_waits_follow_wait_generator():
    waits = []
    op, _ = _flaky(10)
    with pytest.raises(ConnectionError):
        await retry_async(op, max_tries=3, wait_gen=_recording_quadratic(waits))
    # no wait after the last attempt
    assert waits == [0.25, 1.0]


@pytest.mark.asyncio
async def test_non_matching_exception_is_not_retried():
    calls = {"n": 0}

    async def op():
        calls["n"] += 1
        raise KeyError("x")

    with pytest.raises(KeyError):
        await retry_async(op, max_tries=3, base_delay=0, exceptions=(ConnectionError,))
    assert calls["n"] == 1


@pytest.mark.asyncio
async def test_rejects_zero_tries():
    op, _ = _flaky(0)
    with pytest.raises(ValueError):
        await retry_async(op, max_tries=0)
