"""
Rapid peak picking for high-resolution profile spectra.

In high resolution data (FT-ICR, Orbitrap) ion signals barely overlap and
have narrow, well-defined shapes. The picker looks for five-point peak
cores with regular m/z spacing and strictly rising flanks, then replaces
each core with a single centroid computed from the exact Gaussian through
its three innermost samples.

Input spectra must be sorted by ascending m/z; this is not re-checked.
"""

import itertools
import logging
from concurrent.futures import ProcessPoolExecutor
from typing import NamedTuple, Optional

import numpy as np
from numpy.typing import NDArray

from ..core import MSRun, Spectrum
from ..utils.parallel import ParallelMode, get_system_resources
from .gaussian import fit_triplet
from .options import PickerOptions
from .progress import NullProgress, ProgressReporter


logger = logging.getLogger(__name__)


# Every sample of a peak core must be above this intensity
INTENSITY_FLOOR = 1.0
# A spacing counts as regular if below this multiple of the narrower centre spacing
SPACING_TOLERANCE = 1.5

# Cursor steps through the profile samples
_STEP_REJECTED = 1
_STEP_ACCEPTED = 2  # skip the right neighbour already used by the fit


class PickedPeak(NamedTuple):
    """A reconstructed centroid."""
    mz: float
    intensity: float


def find_peak_cores(
    mz: NDArray[np.float64],
    intensity: NDArray[np.float64],
) -> NDArray[np.bool_]:
    """
    Flag the samples that pass the five-point peak shape test.

    Sample i is a peak core when samples i-2..i+2 all exceed
    INTENSITY_FLOOR, rise strictly towards i from both sides, and each of
    the four neighbouring spacings is below SPACING_TOLERANCE times the
    smaller of the two spacings adjacent to i.

    Args:
        mz: Ascending m/z values.
        intensity: Intensities matching mz.

    Returns:
        Boolean array of len(mz); the first and last two entries are
        always False. Spectra with fewer than five samples give all False.
    """
    n = len(mz)
    cores = np.zeros(n, dtype=bool)
    if n < 5:
        return cores

    gaps = np.abs(np.diff(mz))
    # Spacings seen from each centre i = 2..n-3
    l2_to_l1 = gaps[0:n - 4]
    l1_to_centre = gaps[1:n - 3]
    centre_to_r1 = gaps[2:n - 2]
    r1_to_r2 = gaps[3:n - 1]

    l2 = intensity[0:n - 4]
    l1 = intensity[1:n - 3]
    centre = intensity[2:n - 2]
    r1 = intensity[3:n - 1]
    r2 = intensity[4:n]

    limit = SPACING_TOLERANCE * np.minimum(l1_to_centre, centre_to_r1)

    above_floor = (
        (l2 > INTENSITY_FLOOR) & (l1 > INTENSITY_FLOOR) & (centre > INTENSITY_FLOOR)
        & (r1 > INTENSITY_FLOOR) & (r2 > INTENSITY_FLOOR)
    )
    regular_left = (l1_to_centre < limit) & (l2_to_l1 < limit)
    regular_right = (centre_to_r1 < limit) & (r1_to_r2 < limit)
    rising_left = (l2 < l1) & (l1 < centre)
    rising_right = (r2 < r1) & (r1 < centre)

    cores[2:n - 2] = above_floor & regular_left & regular_right & rising_left & rising_right
    return cores


class PeakPickerRapid:
    """
    Fast peak picker for high resolution MS profile data.

    Each picked peak's m/z is the mean of the Gaussian fitted through the
    apex sample and its two neighbours; its intensity is the Gaussian's
    area or apex height depending on ``options.intensity_type``.

    Example:
        >>> picker = PeakPickerRapid(PickerOptions(intensity_type="peakarea"))
        >>> centroided = picker.pick(profile_spectrum)       # doctest: +SKIP
        >>> centroided_run = picker.pick_run(profile_run)    # doctest: +SKIP
    """

    def __init__(self, options: Optional[PickerOptions] = None):
        self.options = options or PickerOptions()

    def find_peaks(self, spectrum: Spectrum) -> list[PickedPeak]:
        """
        Detect and reconstruct the peaks of one profile spectrum.

        Returns:
            Picked peaks in scan order. Empty for spectra with fewer than
            five samples.
        """
        mz = spectrum.mz
        intensity = spectrum.intensity
        cores = find_peak_cores(mz, intensity)
        report_area = self.options.report_area

        peaks: list[PickedPeak] = []
        n_rejected = 0
        i = 2
        while i < len(mz) - 2:
            if not cores[i]:
                i += _STEP_REJECTED
                continue

            fit = fit_triplet(
                (mz[i - 1], intensity[i - 1]),
                (mz[i], intensity[i]),
                (mz[i + 1], intensity[i + 1]),
            )
            if fit.valid:
                peaks.append(PickedPeak(fit.mu, fit.area if report_area else fit.apex_height))
            else:
                n_rejected += 1
            i += _STEP_ACCEPTED

        if n_rejected:
            logger.debug(
                f"Scan {spectrum.scan_number}: discarded {n_rejected} degenerate Gaussian fit(s)"
            )
        return peaks

    def pick(self, spectrum: Spectrum) -> Spectrum:
        """
        Pick peaks of a single spectrum.

        Returns:
            A centroided spectrum with the input's metadata (spectrum type
            set to CENTROID) and one data point per picked peak.
        """
        peaks = self.find_peaks(spectrum)
        if peaks:
            mz, intensity = (np.array(column, dtype=np.float64) for column in zip(*peaks))
        else:
            mz = np.array([], dtype=np.float64)
            intensity = np.array([], dtype=np.float64)

        logger.debug(
            f"Scan {spectrum.scan_number}: {spectrum.n_points} profile points -> {len(peaks)} peaks"
        )
        return spectrum.with_peaks(mz, intensity)

    def _pick_or_pass(self, spectrum: Spectrum, ms1_only: bool) -> Spectrum:
        """Pick a spectrum, or copy it unchanged when filtered out by MS level."""
        if ms1_only and not spectrum.metadata.is_ms1:
            return spectrum.copy()
        return self.pick(spectrum)

    def pick_run(
        self,
        run: MSRun,
        progress: Optional[ProgressReporter] = None,
        parallel_mode: ParallelMode = ParallelMode.NONE,
        custom_workers: Optional[int] = None,
    ) -> MSRun:
        """
        Pick peaks of every spectrum in a run.

        With ``ms1_only`` set, spectra of MS level other than 1 are copied
        unchanged (raw samples kept). Output spectra keep input order, also
        when picking in parallel.

        Args:
            run: Profile run.
            progress: Receives begin/advance/end notifications.
            parallel_mode: Worker-count policy for process-based picking.
            custom_workers: Number of workers for CUSTOM mode.

        Returns:
            New MSRun with the same run metadata.
        """
        progress = progress or NullProgress()
        ms1_only = self.options.ms1_only

        n_workers = 1
        if parallel_mode != ParallelMode.NONE:
            n_workers = min(
                get_system_resources().get_workers(parallel_mode, custom_workers),
                max(1, len(run)),
            )

        picked: list[Spectrum] = []
        progress.begin(len(run), "picking peaks")
        if n_workers == 1:
            for spectrum in run:
                picked.append(self._pick_or_pass(spectrum, ms1_only))
                progress.advance()
        else:
            logger.info(f"Picking {len(run)} spectra with {n_workers} workers")
            chunksize = max(1, len(run) // (n_workers * 4))
            with ProcessPoolExecutor(max_workers=n_workers) as executor:
                # map() yields in submission order
                for spectrum in executor.map(
                    self._pick_or_pass, run, itertools.repeat(ms1_only), chunksize=chunksize
                ):
                    picked.append(spectrum)
                    progress.advance()
        progress.end()

        logger.info(
            f"Picked {len(picked)} spectra: {run.n_points} input points -> "
            f"{sum(s.n_points for s in picked)} output points"
        )
        return MSRun(spectra=picked, metadata=run.metadata)


def pick_spectrum(spectrum: Spectrum, options: Optional[PickerOptions] = None) -> Spectrum:
    """Convenience function: pick one spectrum with the given options."""
    return PeakPickerRapid(options).pick(spectrum)


def pick_run(
    run: MSRun,
    options: Optional[PickerOptions] = None,
    progress: Optional[ProgressReporter] = None,
    parallel_mode: ParallelMode = ParallelMode.NONE,
    custom_workers: Optional[int] = None,
) -> MSRun:
    """
    Convenience function: pick every spectrum of a run.

    Example:
        >>> centroided = pick_run(run, PickerOptions(ms1_only=True))  # doctest: +SKIP
    """
    return PeakPickerRapid(options).pick_run(
        run,
        progress=progress,
        parallel_mode=parallel_mode,
        custom_workers=custom_workers,
    )
