"""
Core spectrum representation for rapidpick.

This module defines the Spectrum class: m/z-intensity arrays plus scan
metadata. Profile spectra go into the peak picker, centroided spectra
come out of it; both use this same container.
"""

from dataclasses import dataclass, replace

import numpy as np
from numpy.typing import NDArray

from .scan_metadata import ScanMetadata, SpectrumType


@dataclass(slots=True)
class Spectrum:
    """
    A single mass spectrum with associated metadata.

    The m/z and intensity arrays are stored as float64 NumPy arrays. For
    profile mode data they sample the continuous signal; for centroid data
    each entry is one picked peak.

    Attributes:
        mz: Array of m/z values (sorted in ascending order).
        intensity: Array of intensity values corresponding to mz.
        metadata: Scan metadata.

    Example:
        >>> import numpy as np
        >>> from rapidpick.core.scan_metadata import ScanMetadata
        >>>
        >>> metadata = ScanMetadata(scan_number=1, ms_level=1, retention_time=60.5)
        >>> spectrum = Spectrum(
        ...     mz=np.array([100.0, 150.0, 200.0]),
        ...     intensity=np.array([1000.0, 5000.0, 2500.0]),
        ...     metadata=metadata
        ... )
        >>> spectrum.n_points
        3
        >>> spectrum.mz_range
        (100.0, 200.0)
    """
    mz: NDArray[np.float64]
    intensity: NDArray[np.float64]
    metadata: ScanMetadata

    def __post_init__(self) -> None:
        """Validate spectrum data consistency."""
        self.mz = np.asarray(self.mz)
        self.intensity = np.asarray(self.intensity)
        if self.mz.ndim != 1:
            raise ValueError(f"mz must be 1-dimensional, got shape {self.mz.shape}")
        if self.intensity.ndim != 1:
            raise ValueError(f"intensity must be 1-dimensional, got shape {self.intensity.shape}")
        if len(self.mz) != len(self.intensity):
            raise ValueError(
                f"mz and intensity must have same length, "
                f"got {len(self.mz)} and {len(self.intensity)}"
            )
        # Ensure arrays are the correct dtype
        if self.mz.dtype != np.float64:
            self.mz = self.mz.astype(np.float64)
        if self.intensity.dtype != np.float64:
            self.intensity = self.intensity.astype(np.float64)

    @classmethod
    def from_pairs(
        cls,
        pairs: list[tuple[float, float]],
        metadata: ScanMetadata,
    ) -> 'Spectrum':
        """
        Build a spectrum from (mz, intensity) pairs.

        Args:
            pairs: Samples in ascending m/z order.
            metadata: Scan metadata.
        """
        data = np.asarray(pairs, dtype=np.float64).reshape(-1, 2)
        return cls(mz=data[:, 0].copy(), intensity=data[:, 1].copy(), metadata=metadata)

    @property
    def n_points(self) -> int:
        """Number of data points in the spectrum."""
        return len(self.mz)

    @property
    def is_empty(self) -> bool:
        """Check if spectrum has no data points."""
        return self.n_points == 0

    @property
    def mz_range(self) -> tuple[float, float]:
        """
        Return (min_mz, max_mz) tuple.

        Raises:
            ValueError: If spectrum is empty.
        """
        if self.is_empty:
            raise ValueError("Cannot get mz_range of empty spectrum")
        return float(self.mz[0]), float(self.mz[-1])

    @property
    def is_profile(self) -> bool:
        """Check if this is profile mode data."""
        return self.metadata.spectrum_type == SpectrumType.PROFILE

    @property
    def is_centroid(self) -> bool:
        """Check if this is centroid mode data."""
        return self.metadata.spectrum_type == SpectrumType.CENTROID

    @property
    def ms_level(self) -> int:
        """MS level from metadata."""
        return self.metadata.ms_level

    @property
    def retention_time(self) -> float:
        """Retention time in seconds from metadata."""
        return self.metadata.retention_time

    @property
    def scan_number(self) -> int:
        """Scan number from metadata."""
        return self.metadata.scan_number

    def copy(self) -> 'Spectrum':
        """Create a deep copy of this spectrum."""
        return Spectrum(
            mz=self.mz.copy(),
            intensity=self.intensity.copy(),
            metadata=self.metadata  # ScanMetadata is frozen/immutable
        )

    def with_peaks(
        self,
        mz: NDArray[np.float64],
        intensity: NDArray[np.float64],
    ) -> 'Spectrum':
        """
        Return a centroided spectrum holding the given peaks.

        All metadata is carried over; only the spectrum type is switched
        to CENTROID.
        """
        return Spectrum(
            mz=mz,
            intensity=intensity,
            metadata=replace(self.metadata, spectrum_type=SpectrumType.CENTROID),
        )

    def __len__(self) -> int:
        """Return number of data points."""
        return self.n_points

    def __repr__(self) -> str:
        """String representation."""
        if self.is_empty:
            mz_range_str = "empty"
        else:
            mz_min, mz_max = self.mz_range
            mz_range_str = f"m/z {mz_min:.2f}-{mz_max:.2f}"

        return (
            f"Spectrum(scan={self.scan_number}, "
            f"MS{self.ms_level}, "
            f"RT={self.retention_time:.2f}s, "
            f"{self.n_points} points, "
            f"{mz_range_str})"
        )
