import pytest

from raftrack.inflights import Inflight, Inflights


def _flights(indices, sizes):
    return [Inflight(i, b) for i, b in zip(indices, sizes)]


def test_add_keeps_order_and_bytes():
    inf = Inflights(10, 0)
    for i in range(5):
        inf.add(i, 100 + i)
    assert inf.pending() == _flights(range(5), range(100, 105))
    assert len(inf) == 5
    assert sum(f.bytes for f in inf.pending()) == 510

    for i in range(5, 10):
        inf.add(i, 100 + i)
    assert inf.pending() == _flights(range(10), range(100, 110))
    assert len(inf) == 10
    assert sum(f.bytes for f in inf.pending()) == 1045


def test_free_le():
    inf = Inflights(10, 0)
    for i in range(10):
        inf.add(i, 100 + i)

    inf.free_le(0)
    assert inf.pending() == _flights(range(1, 10), range(101, 110))
    assert sum(f.bytes for f in inf.pending()) == 945

    inf.free_le(4)
    assert inf.pending() == _flights(range(5, 10), range(105, 110))
    assert sum(f.bytes for f in inf.pending()) == 535

    inf.free_le(8)
    assert inf.pending() == [Inflight(9, 109)]
    assert len(inf) == 1

    for i in range(10, 15):
        inf.add(i, 100 + i)

    inf.free_le(12)
    assert inf.pending() == [Inflight(13, 113), Inflight(14, 114)]
    assert sum(f.bytes for f in inf.pending()) == 227

    inf.free_le(14)
    assert inf.pending() == []
    assert len(inf) == 0


def test_free_le_below_window_is_noop():
    inf = Inflights(5, 0)
    inf.add(10, 1)
    inf.add(11, 1)
    inf.free_le(9)
    assert len(inf) == 2


def test_free_le_on_empty_is_noop():
    inf = Inflights(5, 0)
    inf.free_le(100)
    assert len(inf) == 0
    assert not inf.is_full()


@pytest.mark.parametrize(
    "size,max_bytes,full_at,free_le,again_at",
    [
        (0, 0, 0, 0, 0),
        (1, 0, 1, 1, 2),
        (1, 10, 1, 1, 2),
        (15, 0, 15, 6, 22),
        (8, 400, 4, 2, 7),
        (8, 406, 4, 3, 8),
        (15, 408, 5, 1, 6),
    ],
    ids=[
        "always-full",
        "single-entry",
        "single-entry-overflow",
        "multi-entry",
        "slight-overflow",
        "exact-max-bytes",
        "larger-overflow",
    ],
)
def test_full(size, max_bytes, full_at, free_le, again_at):
    inf = Inflights(size, max_bytes)

    def add_until_full(begin, end):
        for i in range(begin, end):
            assert not inf.is_full(), f"full at {i}, want {end}"
            inf.add(i, 100 + i)
        assert inf.is_full(), f"not full at {end}"

    add_until_full(0, full_at)
    inf.free_le(free_le)
    add_until_full(full_at, again_at)

    with pytest.raises(RuntimeError):
        inf.add(100, 1024)


def test_reset_does_not_leak_bytes():
    inf = Inflights(10, 1000)
    index = 0
    for _ in range(100):
        inf.reset()
        for _ in range(5):
            assert not inf.is_full()
            index += 1
            inf.add(index, 16)
        inf.free_le(index - 2)
        assert not inf.is_full()
        assert len(inf) == 2
    inf.free_le(index)
    assert len(inf) == 0


def test_clone_is_independent():
    inf = Inflights(4, 0)
    inf.add(1, 10)
    inf.add(2, 20)
    copy = inf.clone()
    inf.add(3, 30)
    inf.free_le(1)
    assert copy.pending() == [Inflight(1, 10), Inflight(2, 20)]
    assert inf.pending() == [Inflight(2, 20), Inflight(3, 30)]
    assert copy.size == 4