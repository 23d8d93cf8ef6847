"""Tests for outreach.services.circuit_breaker — CircuitBreaker class and registry."""
import time
import pytest
from unittest.mock import MagicMock

from outreach.services.circuit_breaker import (
    CircuitBreaker, CircuitOpenError, CLOSED, OPEN, HALF_OPEN,
    BREAKER_DEFAULTS, get_breaker, get_all_breakers, init_breakers,
)


@pytest.fixture
def cb(fake_redis):
    """Fresh circuit breaker with fake Redis."""
    return CircuitBreaker('test_svc', fake_redis, failure_threshold=3, reset_timeout=10)


def _fail():
    raise ValueError("boom")


def _trip(cb):
    for _ in range(cb.failure_threshold):
        with pytest.raises(ValueError):
            cb.call(_fail)


# ---------------------------------------------------------------------------
# State transitions
# ---------------------------------------------------------------------------

class TestCircuitBreakerStates:
    """Circuit breaker state machine: CLOSED → OPEN → HALF_OPEN → CLOSED."""

    def test_starts_closed(self, cb):
        assert cb.state == CLOSED

    def test_increments_failures(self, cb):
        for _ in range(2):
            with pytest.raises(ValueError):
                cb.call(_fail)
        assert cb.failure_count == 2
        assert cb.state == CLOSED  # still below threshold

    def test_success_resets_consecutive_failures(self, cb):
        with pytest.raises(ValueError):
            cb.call(_fail)
        cb.call(lambda: 'ok')
        assert cb.failure_count == 0

    def test_opens_at_threshold(self, cb):
        _trip(cb)
        assert cb.state == OPEN

    def test_open_rejects_calls(self, cb):
        _trip(cb)
        func = MagicMock()
        with pytest.raises(CircuitOpenError) as exc_info:
            cb.call(func)
        func.assert_not_called()
        assert exc_info.value.name == 'test_svc'
        assert 0 < exc_info.value.retry_after <= 10

    def test_half_open_after_timeout(self, cb, fake_redis):
        _trip(cb)
        fake_redis.hash_store[cb.key]['opened_at'] = str(time.time() - 20)
        assert cb.state == HALF_OPEN

    def test_success_in_half_open_closes(self, cb, fake_redis):
        _trip(cb)
        fake_redis.hash_store[cb.key]['opened_at'] = str(time.time() - 20)
        assert cb.call(lambda: 'recovered') == 'recovered'
        assert cb.state == CLOSED

    def test_failure_in_half_open_reopens(self, cb, fake_redis):
        _trip(cb)
        fake_redis.hash_store[cb.key]['opened_at'] = str(time.time() - 20)
        assert cb.state == HALF_OPEN
        with pytest.raises(ValueError):
            cb.call(_fail)
        assert cb.state == OPEN


class TestRedisUnavailable:

    def test_redis_errors_fail_open(self):
        broken = MagicMock()
        broken.hgetall.side_effect = ConnectionError('redis down')
        broken.hset.side_effect = ConnectionError('redis down')
        cb = CircuitBreaker('flaky', broken)
        assert cb.state == CLOSED
        assert cb.call(lambda: 42) == 42


# ---------------------------------------------------------------------------
# Reset, health, decorator
# ---------------------------------------------------------------------------

class TestCircuitBreakerReset:

    def test_reset_closes_circuit(self, cb):
        _trip(cb)
        cb.reset()
        assert cb.state == CLOSED
        assert cb.failure_count == 0
        assert cb.call(lambda: 'ok') == 'ok'


class TestCircuitBreakerHealth:

    def test_health_after_success(self, cb):
        cb.call(lambda: 'ok')
        health = cb.get_health()
        assert health['name'] == 'test_svc'
        assert health['state'] == CLOSED
        assert health['total_success'] == 1
        assert health['total_failure'] == 0
        assert health['last_success'] is not None

    def test_health_after_failure(self, cb):
        with pytest.raises(ValueError):
            cb.call(_fail)
        health = cb.get_health()
        assert health['total_failure'] == 1
        assert health['last_error'] == 'boom'

    def test_health_includes_thresholds(self, cb):
        health = cb.get_health()
        assert health['failure_threshold'] == 3
        assert health['reset_timeout'] == 10


class TestCircuitBreakerDecorator:

    def test_protect_passes_through(self, cb):
        @cb.protect
        def double(x):
            return x * 2
        assert double(5) == 10

    def test_protect_tracks_failures(self, cb):
        @cb.protect
        def broken():
            raise RuntimeError("fail")
        with pytest.raises(RuntimeError):
            broken()
        assert cb.failure_count == 1


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

class TestCircuitBreakerRegistry:

    def test_init_breakers_registers_every_remote_procedure(self, fake_redis):
        breakers = init_breakers(fake_redis)
        assert set(breakers) == {'analyzer', 'openai', 'ollama', 'page_fetch', 'slack'}
        assert set(get_all_breakers()) == set(BREAKER_DEFAULTS)

    def test_get_breaker_is_singleton(self):
        assert get_breaker('analyzer') is get_breaker('analyzer')

    def test_get_breaker_creates_on_demand(self, fake_redis):
        cb = get_breaker('new_service', fake_redis)
        assert cb.name == 'new_service'
        assert 'new_service' in get_all_breakers()
