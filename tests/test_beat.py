import random
import time

import pytest

from minkit.beat import BeatPattern, BeatRandom


class FakeTimer:
    def __init__(self, callback):
        self.callback = callback
        self.delays = []
        self.stops = 0

    def delay(self, milliseconds):
        self.delays.append(milliseconds)

    def stop(self):
        self.stops += 1

    def fire(self):
        self.callback()


def test_pattern_toggle_on_fires_straight_away():
    obj = BeatPattern(timer_factory=FakeTimer)
    obj.toggle(1)
    assert obj.on is True
    assert obj.metro.delays == [0.0]


def test_pattern_toggle_off_stops_timer():
    obj = BeatPattern(timer_factory=FakeTimer)
    obj.toggle(1)
    obj.toggle(0)
    assert obj.on is False
    assert obj.metro.stops == 1


def test_pattern_cycles_through_default_sequence():
    obj = BeatPattern(timer_factory=FakeTimer)
    obj.toggle(1)
    for _ in range(10):
        obj.metro.fire()
    intervals = [message[0] for message in obj.interval_out.messages]
    assert intervals == [250.0, 250.0, 250.0, 250.0, 500.0, 500.0, 500.0, 500.0, 250.0, 250.0]
    assert obj.bang_out.messages == [["bang"]] * 10
    assert obj.metro.delays[1:] == intervals


def test_pattern_from_dictionary():
    obj = BeatPattern(timer_factory=FakeTimer)
    obj.dictionary({"pattern": [100, 200]})
    assert obj.pattern == (100.0, 200.0)
    for _ in range(3):
        obj.metro.fire()
    assert [m[0] for m in obj.interval_out.messages] == [100.0, 200.0, 100.0]


def test_pattern_shorter_sequence_restarts_index():
    obj = BeatPattern(timer_factory=FakeTimer)
    for _ in range(5):
        obj.metro.fire()
    obj.dictionary({"pattern": [40, 60]})
    obj.metro.fire()
    assert obj.interval_out.messages[-1] == [40.0]


def test_pattern_empty_is_rejected():
    obj = BeatPattern(timer_factory=FakeTimer)
    with pytest.raises(ValueError):
        obj.dictionary({"pattern": []})


def test_pattern_missing_key_is_rejected():
    obj = BeatPattern(timer_factory=FakeTimer)
    with pytest.raises(KeyError):
        obj.dictionary({"other": [1]})


def test_random_default_attributes():
    obj = BeatRandom(timer_factory=FakeTimer)
    assert obj.minimum == pytest.approx(250.0)
    assert obj.maximum == pytest.approx(1500.0)


def test_random_arguments_set_bounds():
    obj = BeatRandom(100, 200, timer_factory=FakeTimer)
    assert obj.minimum == pytest.approx(100.0)
    assert obj.maximum == pytest.approx(200.0)


def test_random_bounds_are_clamped_to_one():
    obj = BeatRandom(timer_factory=FakeTimer)
    obj.minimum = 0.5
    obj.maximum = -3
    assert obj.minimum == 1.0
    assert obj.maximum == 1.0


def test_random_intervals_stay_within_bounds():
    obj = BeatRandom(10, 20, rng=random.Random(7), timer_factory=FakeTimer)
    obj.toggle(1)
    for _ in range(50):
        obj.metro.fire()
    intervals = [m[0] for m in obj.interval_out.messages]
    assert len(intervals) == 50
    assert all(10.0 <= value <= 20.0 for value in intervals)
    assert obj.metro.delays == [0.0] + intervals
    assert len(obj.bang_out.messages) == 50


def test_random_produces_output_only_when_on():
    obj = BeatRandom(5, 10)
    time.sleep(0.3)
    assert len(obj.bang_out.messages) == 0

    obj.on = True
    deadline = time.monotonic() + 3.0
    while not obj.bang_out.messages and time.monotonic() < deadline:
        time.sleep(0.01)
    obj.on = False
    assert len(obj.bang_out.messages) > 0