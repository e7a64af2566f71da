from aibuilder.services.rate_limiter import RateLimiter


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_window_slides():
    clock = FakeClock()
    limiter = RateLimiter(max_requests=2, window_seconds=60, clock=clock)
    assert limiter.hit("1.2.3.4")
    clock.now = 30
    assert limiter.hit("1.2.3.4")
    assert not limiter.hit("1.2.3.4")
    # other clients have their own budget
    assert limiter.hit("5.6.7.8")

    clock.now = 60
    assert limiter.hit("1.2.3.4")
    assert not limiter.hit("1.2.3.4")


def test_zero_disables_limit():
    limiter = RateLimiter(max_requests=0, window_seconds=60)
    assert all(limiter.hit("x") for _ in range(500))


def test_default_budget_matches_fifteen_minute_window():
    limiter = RateLimiter()
    assert (limiter.max_requests, limiter.window_seconds) == (100, 900)


def test_api_routes_are_limited(app, client):
    app.state.rate_limiter = RateLimiter(max_requests=2, window_seconds=60)

    assert client.get("/api/").status_code == 200
    assert client.get("/api/image/styles").status_code == 200

    res = client.get("/api/")
    assert res.status_code == 429
    assert res.json() == {
        "success": False,
        "error": "Too many requests from this IP, please try again later.",
        "code": "RATE_LIMITED",
    }
    # health checks are outside /api
    assert client.get("/health").status_code == 200
