"""
MSRun: A collection of spectra from a single LC-MS acquisition.

This module defines the MSRun class that represents a complete mass
spectrometry run, containing all spectra and run-level metadata such
as instrument information and source file details.
"""

from dataclasses import dataclass, field
from datetime import datetime
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Optional, overload

from .spectrum import Spectrum


@dataclass(frozen=True, slots=True)
class RunMetadata:
    """
    Run-level metadata for an LC-MS acquisition.

    Attributes:
        source_file: Path to the original source file.
        instrument_model: Instrument model name (e.g., "Q Exactive HF").
        instrument_serial: Instrument serial number.
        acquisition_date: Date and time of acquisition.
        software_version: Acquisition software version.
        extras: Additional settings and annotations.
    """
    source_file: Optional[Path] = None
    instrument_model: Optional[str] = None
    instrument_serial: Optional[str] = None
    acquisition_date: Optional[datetime] = None
    software_version: Optional[str] = None
    extras: dict = field(default_factory=dict)

    @property
    def source_filename(self) -> Optional[str]:
        """Return just the filename from source_file."""
        return self.source_file.name if self.source_file else None


class MSRun(Sequence[Spectrum]):
    """
    A complete LC-MS run containing spectra and run metadata.

    The class implements the Sequence protocol, allowing indexing and
    iteration over spectra in acquisition order.

    Attributes:
        metadata: Run-level metadata.

    Example:
        >>> from rapidpick.core import MSRun, Spectrum, ScanMetadata
        >>> import numpy as np
        >>>
        >>> spectra = [
        ...     Spectrum(np.array([100.0]), np.array([1000.0]),
        ...              ScanMetadata(scan_number=1, ms_level=1, retention_time=0.0)),
        ...     Spectrum(np.array([200.0]), np.array([500.0]),
        ...              ScanMetadata(scan_number=2, ms_level=2, retention_time=0.1)),
        ... ]
        >>> run = MSRun(spectra)
        >>> print(f"Run has {len(run)} spectra")
        Run has 2 spectra
    """

    def __init__(
        self,
        spectra: Optional[list[Spectrum]] = None,
        metadata: Optional[RunMetadata] = None,
    ):
        """
        Initialize an MSRun.

        Args:
            spectra: List of Spectrum objects (stable-sorted by scan number).
            metadata: Run-level metadata.
        """
        self._spectra: list[Spectrum] = []
        self.metadata = metadata or RunMetadata()

        if spectra:
            self._add_spectra(spectra)

    def _add_spectra(self, spectra: list[Spectrum]) -> None:
        """Add spectra in scan number order."""
        self._spectra = sorted(spectra, key=lambda s: s.scan_number)

    # -------------------------------------------------------------------------
    # Sequence protocol implementation
    # -------------------------------------------------------------------------

    @overload
    def __getitem__(self, index: int) -> Spectrum: ...

    @overload
    def __getitem__(self, index: slice) -> list[Spectrum]: ...

    def __getitem__(self, index: int | slice) -> Spectrum | list[Spectrum]:
        """Get spectrum by index (acquisition order)."""
        return self._spectra[index]

    def __len__(self) -> int:
        """Total number of spectra in the run."""
        return len(self._spectra)

    def __iter__(self) -> Iterator[Spectrum]:
        """Iterate over all spectra in acquisition order."""
        return iter(self._spectra)

    # -------------------------------------------------------------------------
    # Summaries
    # -------------------------------------------------------------------------

    def get_ms_level_counts(self) -> dict[int, int]:
        """Count spectra per MS level."""
        counts: dict[int, int] = {}
        for spec in self._spectra:
            level = spec.ms_level
            counts[level] = counts.get(level, 0) + 1
        return counts

    @property
    def n_points(self) -> int:
        """Total number of data points over all spectra."""
        return sum(spec.n_points for spec in self._spectra)

    @property
    def rt_range(self) -> tuple[float, float]:
        """
        Return (min_rt, max_rt) tuple in seconds.

        Raises:
            ValueError: If run is empty.
        """
        if not self._spectra:
            raise ValueError("Cannot get rt_range of empty run")
        rts = [spec.retention_time for spec in self._spectra]
        return min(rts), max(rts)

    def __repr__(self) -> str:
        """String representation."""
        ms_counts = self.get_ms_level_counts()
        ms_str = ", ".join(f"MS{k}:{v}" for k, v in sorted(ms_counts.items()))

        if self._spectra:
            rt_min, rt_max = self.rt_range
            rt_str = f"RT {rt_min:.1f}-{rt_max:.1f}s"
        else:
            rt_str = "empty"

        source = ""
        if self.metadata.source_filename:
            source = f", source={self.metadata.source_filename}"

        return f"MSRun({len(self)} spectra, {ms_str}, {rt_str}{source})"
