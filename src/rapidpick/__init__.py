"""
rapidpick: fast peak picking for high resolution mass spectrometry.

Profile spectra are scanned for five-point peak cores; each core is
replaced by the centroid of the exact Gaussian through its three inner
samples.

Example:
    >>> from rapidpick import PeakPickerRapid, PickerOptions, read_mzml
    >>> run = read_mzml("sample.mzML")                                   # doctest: +SKIP
    >>> picked = PeakPickerRapid(PickerOptions(ms1_only=True)).pick_run(run)  # doctest: +SKIP
"""

from .core import (
    MSRun,
    Polarity,
    RunMetadata,
    ScanMetadata,
    Spectrum,
    SpectrumType,
)
from .io import MzMLReader, read_mzml, write_mgf
from .picking import (
    CallbackProgress,
    IntensityType,
    LoggingProgress,
    NullProgress,
    PeakPickerRapid,
    PickedPeak,
    PickerOptions,
    TripletFit,
    fit_triplet,
    pick_run,
    pick_spectrum,
    scaled_gaussian,
)
from .utils import ParallelMode

__version__ = "0.1.0"

__all__ = [
    # Containers
    "Spectrum",
    "ScanMetadata",
    "MSRun",
    "RunMetadata",
    "Polarity",
    "SpectrumType",
    # Picking
    "PeakPickerRapid",
    "PickedPeak",
    "PickerOptions",
    "IntensityType",
    "TripletFit",
    "fit_triplet",
    "scaled_gaussian",
    "pick_spectrum",
    "pick_run",
    # Progress
    "NullProgress",
    "CallbackProgress",
    "LoggingProgress",
    # Parallel
    "ParallelMode",
    # I/O
    "MzMLReader",
    "read_mzml",
    "write_mgf",
]
