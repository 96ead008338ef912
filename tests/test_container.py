from datetime import timedelta, timezone

from nri.api.container import Container


def test_unset_times_are_equal_zero_time():
    ctr = Container()
    zero = ctr.created_at_time()
    assert ctr.started_at_time() == zero
    assert ctr.finished_at_time() == zero
    assert zero.year == 1
    assert zero.tzinfo == timezone.utc


def test_times_are_offsets_from_zero_time():
    ctr = Container(created_at=5_000_000_000, started_at=7_000_000_000, finished_at=9_000)
    zero = Container().created_at_time()
    assert ctr.created_at_time() - zero == timedelta(seconds=5)
    assert ctr.started_at_time() - zero == timedelta(seconds=7)
    assert ctr.finished_at_time() - zero == timedelta(microseconds=9)


def test_times_are_ordered_like_offsets():
    ctr = Container(created_at=1_000, started_at=2_000_000, finished_at=3_000_000_000)
    assert ctr.created_at_time() < ctr.started_at_time() < ctr.finished_at_time()