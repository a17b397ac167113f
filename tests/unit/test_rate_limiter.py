import threading

from itinerary_service.utils.rate_limiter import FixedWindowRateLimiter


class _Clock:
  def __init__(self) -> None:
    self.now = 1000.0

  def __call__(self) -> float:
    return self.now


def test_first_ten_calls_allowed_then_blocked() -> None:
  limiter = FixedWindowRateLimiter(max_requests=10, window_seconds=60, clock=_Clock())
  assert all(limiter.allow("1.2.3.4") for _ in range(10))
  assert limiter.allow("1.2.3.4") is False
  assert limiter.get_remaining("1.2.3.4") == 0


def test_window_elapsed_resets_count() -> None:
  clock = _Clock()
  limiter = FixedWindowRateLimiter(max_requests=10, window_seconds=60, clock=clock)
  for _ in range(11):
    limiter.allow("client")

  clock.now += 61
  assert limiter.allow("client") is True
  assert limiter.get_remaining("client") == 9


def test_call_exactly_at_window_end_still_counts_in_window() -> None:
  clock = _Clock()
  limiter = FixedWindowRateLimiter(max_requests=1, window_seconds=60, clock=clock)
  assert limiter.allow("client") is True
  clock.now += 60
  assert limiter.allow("client") is False


def test_clients_are_tracked_independently() -> None:
  limiter = FixedWindowRateLimiter(max_requests=2, window_seconds=60, clock=_Clock())
  assert limiter.allow("a") and limiter.allow("a")
  assert limiter.allow("a") is False
  assert limiter.allow("b") is True


def test_reset_forgets_clients() -> None:
  limiter = FixedWindowRateLimiter(max_requests=1, window_seconds=60, clock=_Clock())
  limiter.allow("a")
  limiter.reset()
  assert limiter.allow("a") is True


def test_concurrent_calls_never_exceed_limit() -> None:
  limiter = FixedWindowRateLimiter(max_requests=10, window_seconds=60)
  results = []
  lock = threading.Lock()

  def worker() -> None:
    allowed = limiter.allow("shared")
    with lock:
      results.append(allowed)

  threads = [threading.Thread(target=worker) for _ in range(50)]
  for t in threads:
    t.start()
  for t in threads:
    t.join()

  assert results.count(True) == 10
