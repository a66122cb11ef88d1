import time

from clinicapp.config import RATE_LIMIT_MAX_REQUESTS
from clinicapp.rate_limiter import check_rate_limit, memory_cache


def test_requests_within_limit_are_counted():
    assert check_rate_limit("unit:1.2.3.4", limit=2, window_seconds=60)[:2] == (True, 1)
    assert check_rate_limit("unit:1.2.3.4", limit=2, window_seconds=60)[:2] == (True, 2)

    allowed, count, ttl = check_rate_limit("unit:1.2.3.4", limit=2, window_seconds=60)

    assert allowed is False
    assert count == 2
    assert 0 < ttl <= 60


def test_keys_are_counted_separately():
    check_rate_limit("unit:a", limit=1, window_seconds=60)

    assert check_rate_limit("unit:b", limit=1, window_seconds=60)[0] is True


def test_expired_window_starts_over():
    memory_cache["unit:old"] = {"count": 5, "reset_time": int(time.time()) - 1}

    assert check_rate_limit("unit:old", limit=5, window_seconds=60)[:2] == (True, 1)


def test_exceeding_the_limit_returns_429(api):
    # TestClient requests come from host "testclient"
    memory_cache["api:testclient"] = {
        "count": RATE_LIMIT_MAX_REQUESTS,
        "reset_time": int(time.time()) + 120,
    }

    response = api.get("/health")

    assert response.status_code == 429
    assert response.json() == {
        "success": False,
        "error": {"message": "Too many requests, please try again later", "code": "RATE_LIMIT_EXCEEDED"},
    }
    assert 0 < int(response.headers["Retry-After"]) <= 120


def test_limit_is_per_client_ip(api):
    memory_cache["api:testclient"] = {
        "count": RATE_LIMIT_MAX_REQUESTS,
        "reset_time": int(time.time()) + 120,
    }

    response = api.get("/health", headers={"X-Forwarded-For": "203.0.113.7"})

    assert response.status_code == 200
