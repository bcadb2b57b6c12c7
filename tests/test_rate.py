from samplerlib.rate import RateLimiter


def make_clock():
    timeline = [0.0]
    sleeps = []

    def now():
        return timeline[0]

    def sleep(s):
        sleeps.append(s)
        timeline[0] += s

    return now, sleep, sleeps


def test_rate_limiter_always_waits():
    now, sleep, sleeps = make_clock()
    rl = RateLimiter(0.5, now=now, sleep=sleep)
    rl.wait_turn("a.com")
    rl.wait_turn("b.com")
    assert sleeps == [0.5, 0.5]


def test_rate_limiter_spaces_same_host():
    now, sleep, sleeps = make_clock()
    rl = RateLimiter(0.5, now=now, sleep=sleep)
    rl.wait_turn("a.com")
    # another thread already holds the next slot for a.com
    rl._host_next_time["a.com"] = now() + 2.0
    rl.wait_turn("a.com")
    assert sleeps[-1] == 2.0


def test_rate_limiter_disabled():
    now, sleep, sleeps = make_clock()
    RateLimiter(0.0, now=now, sleep=sleep).wait_turn("a.com")
    assert sleeps == []
