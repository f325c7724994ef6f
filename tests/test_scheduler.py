"""
Tests for slot partitioning and the parallel frame scheduler.
"""

import threading
from collections import Counter

import pytest

from gradient_wash.core.color import RAINBOW
from gradient_wash.core.gradient import generate
from gradient_wash.core.scheduler import FrameScheduler, partition
from gradient_wash.errors import InvalidArgument


class CountingRemapper:
    """Records how often each slot's overlay is processed"""

    def __init__(self, fail_on=None):
        self.counts = Counter()
        self.fail_on = fail_on
        self._lock = threading.Lock()

    def remap(self, source, overlay):
        with self._lock:
            self.counts[overlay] += 1
        if overlay == self.fail_on:
            raise RuntimeError(f"boom at {overlay}")
        return (source, overlay)


class TestPartition:
    """Static split of output slots."""

    @pytest.mark.parametrize("frame_count", [1, 2, 5, 6, 13])
    def test_complete_and_disjoint(self, frame_count):
        for worker_count in range(1, frame_count + 1):
            ranges = partition(frame_count, worker_count)
            slots = [i for r in ranges for i in r]
            assert slots == list(range(frame_count))
            assert len(ranges) == worker_count

    def test_near_equal_sizes(self):
        sizes = [len(r) for r in partition(10, 4)]
        assert sizes == [3, 3, 2, 2]

    def test_more_workers_than_slots(self):
        ranges = partition(3, 8)
        assert [list(r) for r in ranges] == [[0], [1], [2]]

    def test_no_slots(self):
        assert partition(0, 4) == []

    def test_zero_workers_rejected(self):
        with pytest.raises(InvalidArgument):
            partition(5, 0)


class TestFrameScheduler:
    """Parallel run over every slot."""

    @pytest.mark.parametrize("worker_count", [1, 2, 3, 6, 9])
    def test_every_slot_written_once(self, worker_count):
        sources = ["a", "b", "c"]
        overlays = list(range(6))
        remapper = CountingRemapper()

        results = FrameScheduler(worker_count, remapper).run(sources, overlays)

        assert len(results) == 6
        assert all(result is not None for result in results)
        assert all(remapper.counts[i] == 1 for i in overlays)
        assert sum(remapper.counts.values()) == 6

    def test_slot_uses_cycled_source(self):
        sources = ["a", "b", "c"]
        results = FrameScheduler(2, CountingRemapper()).run(sources, list(range(7)))
        assert results == [(sources[i % 3], i) for i in range(7)]

    def test_deterministic(self, animation):
        overlays = generate(RAINBOW, True, 9)
        first = FrameScheduler(3).run(animation.frames, overlays)
        second = FrameScheduler(3).run(animation.frames, overlays)

        assert [f.palette for f in first] == [f.palette for f in second]
        assert all(a.indices is b.indices for a, b in zip(first, second))

    def test_real_frames(self, animation):
        overlays = generate(RAINBOW, True, 6)
        results = FrameScheduler(2).run(animation.frames, overlays)

        for i, frame in enumerate(results):
            source = animation.frames[i % 3]
            assert frame.indices is source.indices
            assert frame.box == source.box
            assert len(frame.palette) == len(source.palette)

    def test_worker_failure_propagates(self):
        with pytest.raises(RuntimeError, match="boom at 4"):
            FrameScheduler(3, CountingRemapper(fail_on=4)).run(["a"], list(range(6)))

    def test_empty_overlays(self):
        assert FrameScheduler(2, CountingRemapper()).run(["a"], []) == []

    def test_invalid_worker_count(self):
        with pytest.raises(InvalidArgument):
            FrameScheduler(0)

    def test_no_sources(self):
        with pytest.raises(InvalidArgument):
            FrameScheduler(2).run([], list(range(3)))
