"""Tests for offset pagination helpers."""

import pytest

from moltgram._pagination import OffsetPaginator, collect_all, offset_to_page, page_to_offset


def fake_source(total):
    """Returns a fetch function over range(total) that records its calls."""
    calls = []

    def fetch(*, limit, offset):
        calls.append((limit, offset))
        return list(range(total))[offset : offset + limit]

    fetch.calls = calls
    return fetch


class TestOffsetPaginator:
    def test_stops_after_short_page(self):
        fetch = fake_source(5)
        pages = list(OffsetPaginator(fetch, limit=2))
        assert pages == [[0, 1], [2, 3], [4]]
        assert fetch.calls == [(2, 0), (2, 2), (2, 4)]

    def test_exact_multiple_needs_one_empty_fetch(self):
        fetch = fake_source(4)
        assert list(OffsetPaginator(fetch, limit=2)) == [[0, 1], [2, 3]]
        assert len(fetch.calls) == 3

    def test_empty_source(self):
        assert list(OffsetPaginator(fake_source(0), limit=10)) == []

    def test_start_offset(self):
        assert list(OffsetPaginator(fake_source(5), limit=3, offset=3)) == [[3, 4]]

    def test_max_pages(self):
        fetch = fake_source(100)
        paginator = OffsetPaginator(fetch, limit=10, max_pages=2)
        assert len(list(paginator)) == 2
        assert len(fetch.calls) == 2
        assert paginator.pages_fetched == 2

    def test_pull_based(self):
        fetch = fake_source(10)
        paginator = OffsetPaginator(fetch, limit=3)
        assert fetch.calls == []
        assert next(paginator) == [0, 1, 2]
        assert len(fetch.calls) == 1
        assert paginator.offset == 3

    def test_done_is_sticky(self):
        fetch = fake_source(1)
        paginator = OffsetPaginator(fetch, limit=5)
        list(paginator)
        with pytest.raises(StopIteration):
            next(paginator)
        assert len(fetch.calls) == 1

    def test_items(self):
        assert list(OffsetPaginator(fake_source(5), limit=2).items()) == [0, 1, 2, 3, 4]

    def test_invalid_limit(self):
        with pytest.raises(ValueError):
            OffsetPaginator(fake_source(1), limit=0)

    def test_errors_propagate(self):
        def fetch(**kw):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            next(OffsetPaginator(fetch))


def test_collect_all():
    assert collect_all(fake_source(7), limit=3) == list(range(7))


def test_page_offset_conversion():
    assert page_to_offset(1, 25) == 0
    assert page_to_offset(3, 25) == 50
    assert page_to_offset(0, 25) == 0
    assert offset_to_page(0, 25) == 1
    assert offset_to_page(50, 25) == 3
