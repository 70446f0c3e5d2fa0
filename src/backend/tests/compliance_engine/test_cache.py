import pytest

from common.compliance_engine.cache import TTLCache


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_entries_expire_once_older_than_ttl():
    clock = FakeClock()
    cache = TTLCache(300, clock=clock)
    cache.set("k", ("v",))

    clock.now = 299.9
    assert cache.get("k") == ("v",)
    clock.now = 300.0
    assert cache.get("k") == ("v",)
    clock.now = 300.001
    assert cache.get("k") is None
    assert "k" not in cache


def test_max_items_evicts_oldest():
    cache = TTLCache(60, max_items=2, clock=FakeClock())
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("c", 3)
    assert cache.get("a") is None
    assert cache.get("b") == 2
    assert len(cache) == 2


def test_clear_and_invalid_ttl():
    cache = TTLCache(1, clock=FakeClock())
    cache.set("a", 1)
    cache.clear()
    assert len(cache) == 0
    with pytest.raises(ValueError):
        TTLCache(0)
