"""
Tests for the ResultCache store
"""
import pytest
from unittest.mock import Mock

from camconfig import ResultCache


class TestResultCache:

    @pytest.fixture
    def cache(self):
        return ResultCache("Test")

    def test_miss_returns_none(self, cache):
        assert cache.get(("a",)) is None
        assert ("a",) not in cache

    def test_put_freezes_to_tuple(self, cache):
        stored = cache.put(("a",), [1, 2, 3])

        assert stored == (1, 2, 3)
        assert cache.get(("a",)) is stored
        assert len(cache) == 1

    def test_get_or_compute_calls_once(self, cache):
        compute = Mock(return_value=[640, 480])

        first = cache.get_or_compute("key", compute)
        second = cache.get_or_compute("key", compute)

        assert first is second
        compute.assert_called_once_with()

    def test_compute_error_leaves_slot_empty(self, cache):
        with pytest.raises(KeyError):
            cache.get_or_compute("key", Mock(side_effect=KeyError("gone")))

        assert "key" not in cache
        assert cache.get_or_compute("key", lambda: [1]) == (1,)

    def test_keys_and_clear(self, cache):
        cache.put("a", [])
        cache.put("b", [2])

        assert sorted(cache.keys()) == ["a", "b"]

        cache.clear()
        assert len(cache) == 0
