from datetime import datetime, time

from hamkke_hr.attendance.factory import ClockInStrategyFactory
from hamkke_hr.attendance.strategies.grace_strategy import GraceWindowStrategy
from hamkke_hr.attendance.strategies.literal_strategy import LiteralStrategy


def test_factory_normalizes_early_arrival_to_nine():
    now = datetime(2025, 1, 6, 8, 45, 12)

    factory = ClockInStrategyFactory()
    strategy = factory.for_clock_in(now=now)

    assert isinstance(strategy, GraceWindowStrategy)
    assert strategy.decide_clock_in(now=now).clock_in == datetime(2025, 1, 6, 9, 0)


def test_factory_window_bounds_are_inclusive_to_the_minute():
    factory = ClockInStrategyFactory()

    assert factory.in_grace_window(datetime(2025, 1, 6, 8, 0, 0))
    assert factory.in_grace_window(datetime(2025, 1, 6, 9, 0, 0))
    assert factory.in_grace_window(datetime(2025, 1, 6, 9, 0, 59))
    assert not factory.in_grace_window(datetime(2025, 1, 6, 9, 1, 0))
    assert not factory.in_grace_window(datetime(2025, 1, 6, 7, 59, 59))


def test_factory_keeps_literal_time_outside_window():
    factory = ClockInStrategyFactory()

    early = datetime(2025, 1, 6, 7, 59)
    late = datetime(2025, 1, 6, 9, 30)

    assert isinstance(factory.for_clock_in(now=early), LiteralStrategy)
    assert factory.for_clock_in(now=early).decide_clock_in(now=early).clock_in == early
    assert factory.for_clock_in(now=late).decide_clock_in(now=late).clock_in == late


def test_factory_accepts_custom_window():
    factory = ClockInStrategyFactory(window_start=time(7, 0), window_end=time(8, 0), normalized=time(8, 0))
    now = datetime(2025, 1, 6, 7, 30)

    assert factory.for_clock_in(now=now).decide_clock_in(now=now).clock_in == datetime(2025, 1, 6, 8, 0)
