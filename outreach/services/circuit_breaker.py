"""
Circuit breakers for the remote procedures this service calls.

State for each breaker lives in one Redis hash, cb:<name>:
  state      closed | open | half_open
  failures   consecutive failures since the last success
  opened_at  epoch seconds when the circuit opened
  success / failure / last_success / last_failure / last_error  health counters

CLOSED lets calls through, OPEN short-circuits with CircuitOpenError until
reset_timeout has passed, then HALF_OPEN lets one probe through. Redis being
unreachable never blocks a call: every Redis error is treated as CLOSED.
"""
import logging
import time
from functools import wraps

logger = logging.getLogger('services.circuit_breaker')

CLOSED = 'closed'
OPEN = 'open'
HALF_OPEN = 'half_open'


class CircuitOpenError(Exception):
    """Raised when calling through an open circuit breaker."""
    def __init__(self, name, retry_after=None):
        self.name = name
        self.retry_after = retry_after
        super().__init__(f"Circuit breaker '{name}' is OPEN — service unavailable")


class CircuitBreaker:
    """
    Usage:
        cb = CircuitBreaker('analyzer', redis_client, failure_threshold=3, reset_timeout=120)
        result = cb.call(requests.post, url, json=payload, timeout=30)
    """

    def __init__(self, name, redis_client, failure_threshold=3, reset_timeout=300):
        self.name = name
        self.redis = redis_client
        self.failure_threshold = failure_threshold
        self.reset_timeout = reset_timeout

    @property
    def key(self):
        return f'cb:{self.name}'

    def _read(self):
        try:
            return self.redis.hgetall(self.key) or {}
        except Exception:
            return {}

    def _write(self, **fields):
        try:
            self.redis.hset(self.key, mapping={k: str(v) for k, v in fields.items()})
        except Exception:
            logger.debug("Circuit '%s' state write skipped (Redis unavailable)", self.name)

    @property
    def state(self):
        data = self._read()
        current = data.get('state', CLOSED)
        if current == OPEN:
            opened_at = float(data.get('opened_at') or 0)
            if time.time() - opened_at > self.reset_timeout:
                self._write(state=HALF_OPEN)
                return HALF_OPEN
        return current

    @property
    def failure_count(self):
        return int(self._read().get('failures') or 0)

    def call(self, func, *args, **kwargs):
        """Execute func through the breaker, recording the outcome."""
        if self.state == OPEN:
            opened_at = float(self._read().get('opened_at') or 0)
            retry_after = max(0, self.reset_timeout - (time.time() - opened_at))
            raise CircuitOpenError(self.name, retry_after=retry_after)

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            self._on_failure(e)
            raise
        self._on_success()
        return result

    def _on_success(self):
        data = self._read()
        self._write(
            state=CLOSED,
            failures=0,
            success=int(data.get('success') or 0) + 1,
            last_success=time.time(),
        )

    def _on_failure(self, error):
        data = self._read()
        failures = int(data.get('failures') or 0) + 1
        fields = {
            'failures': failures,
            'failure': int(data.get('failure') or 0) + 1,
            'last_failure': time.time(),
            'last_error': str(error)[:200],
        }
        if failures >= self.failure_threshold:
            fields['state'] = OPEN
            fields['opened_at'] = time.time()
            logger.warning("Circuit '%s' OPENED after %d failures: %s", self.name, failures, error)
        else:
            logger.info("Circuit '%s' failure %d/%d: %s", self.name, failures, self.failure_threshold, error)
        self._write(**fields)

    def reset(self):
        """Manually close the circuit."""
        self._write(state=CLOSED, failures=0, opened_at=0)
        logger.info("Circuit '%s' manually reset to CLOSED", self.name)

    def get_health(self):
        data = self._read()
        return {
            'name': self.name,
            'state': self.state,
            'failure_count': int(data.get('failures') or 0),
            'failure_threshold': self.failure_threshold,
            'reset_timeout': self.reset_timeout,
            'total_success': int(data.get('success') or 0),
            'total_failure': int(data.get('failure') or 0),
            'last_success': float(data['last_success']) if data.get('last_success') else None,
            'last_failure': float(data['last_failure']) if data.get('last_failure') else None,
            'last_error': data.get('last_error', ''),
        }

    def protect(self, func):
        """Decorator form of call()."""
        @wraps(func)
        def wrapper(*args, **kwargs):
            return self.call(func, *args, **kwargs)
        return wrapper


# ── Registry ──────────────────────────────────────────────────────────────

_registry = {}

BREAKER_DEFAULTS = {
    'analyzer':   dict(failure_threshold=3, reset_timeout=120),
    'openai':     dict(failure_threshold=5, reset_timeout=60),
    'ollama':     dict(failure_threshold=3, reset_timeout=60),
    'page_fetch': dict(failure_threshold=5, reset_timeout=300),
    'slack':      dict(failure_threshold=3, reset_timeout=600),
}


def get_breaker(name, redis_client=None):
    """Get or create a named circuit breaker (singleton per name)."""
    if name not in _registry:
        if redis_client is None:
            from outreach.extensions import redis_client as rc
            redis_client = rc
        _registry[name] = CircuitBreaker(name, redis_client, **BREAKER_DEFAULTS.get(name, {}))
    return _registry[name]


def get_all_breakers():
    return dict(_registry)


def init_breakers(redis_client):
    """Register a breaker for every remote procedure."""
    for name, opts in BREAKER_DEFAULTS.items():
        _registry[name] = CircuitBreaker(name, redis_client, **opts)
    return dict(_registry)
