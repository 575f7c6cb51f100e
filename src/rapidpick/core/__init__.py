"""
Core data structures for rapidpick.

This module provides the containers that peak picking reads and writes:

- Spectrum: A single mass spectrum with m/z-intensity data
- ScanMetadata: Metadata for a scan
- MSRun: A complete LC-MS run (collection of spectra)
- RunMetadata: Run-level metadata

Enums for categorical metadata:
- Polarity: Ion polarity (positive/negative)
- SpectrumType: Data mode (profile/centroid)
"""

from .scan_metadata import (
    Polarity,
    ScanMetadata,
    SpectrumType,
)
from .spectrum import Spectrum
from .run import MSRun, RunMetadata

__all__ = [
    # Main classes
    "Spectrum",
    "ScanMetadata",
    "MSRun",
    "RunMetadata",
    # Enums
    "Polarity",
    "SpectrumType",
]
