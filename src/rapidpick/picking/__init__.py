"""
Peak picking for high resolution profile spectra.

This module provides:
- PeakPickerRapid: five-point shape test plus exact three-point Gaussian fit
- pick_spectrum() / pick_run(): convenience functions
- fit_triplet() / scaled_gaussian(): the closed-form Gaussian fit
- PickerOptions / IntensityType: picker configuration
- Progress reporters: NullProgress, CallbackProgress, LoggingProgress
"""

from .gaussian import TripletFit, fit_triplet, scaled_gaussian
from .options import IntensityType, PickerOptions
from .picker import (
    PeakPickerRapid,
    PickedPeak,
    find_peak_cores,
    pick_run,
    pick_spectrum,
)
from .progress import CallbackProgress, LoggingProgress, NullProgress, ProgressReporter

__all__ = [
    # Picker
    "PeakPickerRapid",
    "PickedPeak",
    "find_peak_cores",
    "pick_spectrum",
    "pick_run",
    # Gaussian fit
    "TripletFit",
    "fit_triplet",
    "scaled_gaussian",
    # Options
    "PickerOptions",
    "IntensityType",
    # Progress
    "ProgressReporter",
    "NullProgress",
    "CallbackProgress",
    "LoggingProgress",
]
