from receituario.services.rate_limit_service import RateLimiter
from receituario.utils.ip_utils import normalize_ip


def test_blocks_after_limit_with_retry_after():
    limiter = RateLimiter(max_requests=2, window_seconds=60)

    assert limiter.is_allowed("ip:1") == (True, None)
    assert limiter.is_allowed("ip:1") == (True, None)
    allowed, retry_after = limiter.is_allowed("ip:1")

    assert allowed is False
    assert 1 <= retry_after <= 60


def test_keys_are_independent():
    limiter = RateLimiter(max_requests=1, window_seconds=60)

    assert limiter.is_allowed("ip:1")[0]
    assert limiter.is_allowed("ip:2")[0]
    assert not limiter.is_allowed("ip:1")[0]


def test_window_expiry_resets_count(monkeypatch):
    now = [1000.0]
    monkeypatch.setattr(
        "receituario.services.rate_limit_service.time.monotonic", lambda: now[0]
    )
    limiter = RateLimiter(max_requests=1, window_seconds=10)

    assert limiter.is_allowed("ip:1")[0]
    assert not limiter.is_allowed("ip:1")[0]
    now[0] += 10
    assert limiter.is_allowed("ip:1")[0]


def test_equivalent_addresses_share_a_bucket():
    assert normalize_ip("::1") == "127.0.0.1"
    assert normalize_ip("::ffff:10.0.0.5") == "10.0.0.5"
    assert normalize_ip("testclient") == "testclient"
