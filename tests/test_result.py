from datetime import timedelta

from nodeprov.result import Result, min_result


def test_is_zero():
    assert Result().is_zero() is True
    assert Result(requeue=True).is_zero() is False
    assert Result(requeue_after=timedelta(seconds=1)).is_zero() is False


def test_min_of_nothing_is_zero():
    assert min_result() == Result()


def test_min_of_zero_results_is_zero():
    assert min_result(Result(), Result()) == Result()


def test_min_picks_soonest():
    result = min_result(
        Result(),
        Result(requeue_after=timedelta(seconds=5)),
        Result(requeue_after=timedelta(seconds=2)),
        Result(requeue_after=timedelta(seconds=9)),
    )
    assert result == Result(requeue=True, requeue_after=timedelta(seconds=2))


def test_min_immediate_requeue_wins():
    result = min_result(
        Result(requeue_after=timedelta(seconds=5)),
        Result(requeue=True),
    )
    assert result == Result(requeue=True, requeue_after=timedelta(0))


def test_min_is_order_independent():
    a = Result(requeue_after=timedelta(seconds=3))
    b = Result(requeue_after=timedelta(seconds=1))
    assert min_result(a, b) == min_result(b, a)