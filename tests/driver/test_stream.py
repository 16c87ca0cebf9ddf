"""Tests for the stream driver."""

from dataclasses import dataclass
from pathlib import Path

import pytest

from split_bam_by_reads.driver.stream import DriverState, SplitSummary, StreamDriver
from split_bam_by_reads.errors import DecodeError
from split_bam_by_reads.routing import Bucket, BucketRouter


@dataclass(frozen=True)
class FakeRecord:
    query_name: str


class ListWriter:
    def __init__(self) -> None:
        self.records: list[FakeRecord] = []

    def write(self, record: FakeRecord) -> None:
        self.records.append(record)


class UnopenableSource:
    def __iter__(self):
        raise DecodeError("cannot start reading")


def make_router(*name_sets: set[str]) -> BucketRouter:
    return BucketRouter(
        [
            Bucket(set(names), ListWriter(), Path(f"list{i}.txt"), Path(f"list{i}.bam"))
            for i, names in enumerate(name_sets)
        ]
    )


def records(*names: str) -> list[FakeRecord]:
    return [FakeRecord(name) for name in names]


def failing_stream(count: int):
    for i in range(count):
        yield FakeRecord(f"r{i}")
    raise DecodeError("truncated record")


class TestStreamDriver:
    """Test cases for StreamDriver.run."""

    def test_reference_scenario_summary(self) -> None:
        driver = StreamDriver(make_router({"a", "c"}, {"b", "d"}), progress=False)

        summary = driver.run(records("a", "b", "a", "c", "d"))

        assert isinstance(summary, SplitSummary)
        assert summary.records_seen == 5
        assert summary.matched == 4
        assert summary.unmatched == 1
        assert summary.leftover_counts == [0, 0]
        assert driver.state is DriverState.DONE

    def test_empty_list_leaves_everything_unmatched(self) -> None:
        summary = StreamDriver(make_router(set()), progress=False).run(records("a", "b", "c"))

        assert summary.unmatched == summary.records_seen == 3
        assert summary.leftover_counts == [0]

    def test_unseen_name_is_reported_leftover(self) -> None:
        summary = StreamDriver(make_router({"a", "ghost"}), progress=False).run(records("a"))

        assert summary.buckets[0].leftover == frozenset({"ghost"})

    def test_empty_stream(self) -> None:
        summary = StreamDriver(make_router({"a"}), progress=False).run([])

        assert summary.records_seen == 0
        assert summary.leftover_counts == [1]

    def test_seen_is_matched_plus_unmatched(self) -> None:
        summary = StreamDriver(make_router({"a"}, {"b"}), progress=False).run(
            records("a", "b", "c", "a", "b", "c")
        )
        assert summary.records_seen == summary.matched + summary.unmatched

    def test_decode_error_fails_without_summary(self) -> None:
        router = make_router({"r0", "r1"})
        driver = StreamDriver(router, progress=False)

        with pytest.raises(DecodeError):
            driver.run(failing_stream(2))

        assert driver.state is DriverState.FAILED
        assert router.matched == 2

    def test_source_failure_before_streaming(self) -> None:
        driver = StreamDriver(make_router({"a"}), progress=False)

        with pytest.raises(DecodeError):
            driver.run(UnopenableSource())

        assert driver.state is DriverState.FAILED

    def test_driver_runs_once(self) -> None:
        driver = StreamDriver(make_router({"a"}), progress=False)
        driver.run(records("a"))

        with pytest.raises(RuntimeError):
            driver.run(records("a"))

    def test_failed_driver_cannot_rerun(self) -> None:
        driver = StreamDriver(make_router({"a"}), progress=False)
        with pytest.raises(DecodeError):
            driver.run(failing_stream(0))

        with pytest.raises(RuntimeError):
            driver.run(records("a"))
        assert driver.state is DriverState.FAILED

    def test_progress_output_goes_to_stderr(self, capsys) -> None:
        StreamDriver(make_router({"a"}), progress=True).run(records("a", "b"))

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "2" in captured.err
