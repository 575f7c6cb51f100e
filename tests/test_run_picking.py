"""Tests for run-level picking (PeakPickerRapid.pick_run)."""

from __future__ import annotations

import numpy as np
import pytest

from rapidpick.core import MSRun, SpectrumType
from rapidpick.picking import (
    CallbackProgress,
    PeakPickerRapid,
    PickerOptions,
    pick_run,
)
from rapidpick.utils import ParallelMode


class RecordingProgress:
    """Progress reporter that records every call."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def begin(self, total: int, label: str = "") -> None:
        self.calls.append(("begin", total))

    def advance(self) -> None:
        self.calls.append(("advance",))

    def end(self) -> None:
        self.calls.append(("end",))


class TestPickRun:
    """Tests for PeakPickerRapid.pick_run."""

    def test_all_levels_picked_by_default(self, mixed_run: MSRun) -> None:
        picked = PeakPickerRapid().pick_run(mixed_run)
        assert len(picked) == len(mixed_run)
        assert [len(s) for s in picked] == [1, 1, 1]
        assert all(s.is_centroid for s in picked)

    def test_order_and_scan_numbers_preserved(self, mixed_run: MSRun) -> None:
        picked = PeakPickerRapid().pick_run(mixed_run)
        assert [s.scan_number for s in picked] == [1, 2, 3]
        assert [s.ms_level for s in picked] == [1, 2, 1]

    def test_run_metadata_copied(self, mixed_run: MSRun) -> None:
        picked = PeakPickerRapid().pick_run(mixed_run)
        assert picked.metadata == mixed_run.metadata
        assert picked.metadata.instrument_model == "Orbitrap Fusion"
        assert picked.metadata.extras == {"operator": "qc"}

    def test_ms1_only_passes_other_levels_through(self, mixed_run: MSRun) -> None:
        picked = PeakPickerRapid(PickerOptions(ms1_only=True)).pick_run(mixed_run)
        source = mixed_run[1]
        passed = picked[1]
        assert passed is not source
        np.testing.assert_array_equal(passed.mz, source.mz)
        np.testing.assert_array_equal(passed.intensity, source.intensity)
        assert passed.metadata == source.metadata
        assert passed.metadata.spectrum_type is SpectrumType.PROFILE

    def test_ms1_only_still_picks_ms1(self, mixed_run: MSRun) -> None:
        picked = PeakPickerRapid(PickerOptions(ms1_only=True)).pick_run(mixed_run)
        assert len(picked[0]) == 1
        assert len(picked[2]) == 1
        assert picked[0].is_centroid

    def test_passthrough_copy_is_independent(self, mixed_run: MSRun) -> None:
        picked = PeakPickerRapid(PickerOptions(ms1_only=True)).pick_run(mixed_run)
        picked[1].intensity[0] = -1.0
        assert mixed_run[1].intensity[0] == 2.0

    def test_input_run_unchanged(self, mixed_run: MSRun) -> None:
        PeakPickerRapid().pick_run(mixed_run)
        assert [len(s) for s in mixed_run] == [6, 6, 6]
        assert all(s.is_profile for s in mixed_run)

    def test_empty_run(self) -> None:
        progress = RecordingProgress()
        picked = PeakPickerRapid().pick_run(MSRun(), progress=progress)
        assert len(picked) == 0
        assert progress.calls == [("begin", 0), ("end",)]

    def test_progress_calls(self, mixed_run: MSRun) -> None:
        progress = RecordingProgress()
        PeakPickerRapid().pick_run(mixed_run, progress=progress)
        assert progress.calls == [
            ("begin", 3),
            ("advance",),
            ("advance",),
            ("advance",),
            ("end",),
        ]

    def test_progress_counts_passthrough_spectra(self, mixed_run: MSRun) -> None:
        seen: list[tuple[int, int]] = []
        PeakPickerRapid(PickerOptions(ms1_only=True)).pick_run(
            mixed_run, progress=CallbackProgress(lambda done, total: seen.append((done, total)))
        )
        assert seen == [(1, 3), (2, 3), (3, 3)]

    def test_parallel_matches_sequential(self, mixed_run: MSRun) -> None:
        picker = PeakPickerRapid(PickerOptions(intensity_type="peakarea", ms1_only=True))
        sequential = picker.pick_run(mixed_run)
        progress = RecordingProgress()
        parallel = picker.pick_run(
            mixed_run,
            progress=progress,
            parallel_mode=ParallelMode.CUSTOM,
            custom_workers=2,
        )
        assert [s.scan_number for s in parallel] == [s.scan_number for s in sequential]
        for a, b in zip(parallel, sequential):
            np.testing.assert_array_equal(a.mz, b.mz)
            np.testing.assert_array_equal(a.intensity, b.intensity)
            assert a.metadata == b.metadata
        assert progress.calls.count(("advance",)) == 3

    def test_custom_mode_requires_workers(self, mixed_run: MSRun) -> None:
        with pytest.raises(ValueError, match="custom_workers"):
            PeakPickerRapid().pick_run(mixed_run, parallel_mode=ParallelMode.CUSTOM)


class TestPickRunFunction:
    """Tests for the module-level pick_run convenience function."""

    def test_forwards_options(self, mixed_run: MSRun) -> None:
        by_height = pick_run(mixed_run)
        by_area = pick_run(mixed_run, PickerOptions(intensity_type="peakarea"))
        assert by_height[0].intensity[0] == pytest.approx(50.0, rel=1e-9)
        assert by_area[0].intensity[0] != pytest.approx(50.0)

    def test_forwards_progress(self, mixed_run: MSRun) -> None:
        progress = RecordingProgress()
        pick_run(mixed_run, progress=progress)
        assert progress.calls[0] == ("begin", 3)
        assert progress.calls[-1] == ("end",)
