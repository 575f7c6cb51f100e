"""
Scan metadata for mass spectra.

This module defines the ScanMetadata dataclass that travels with every
spectrum. Peak picking never interprets these fields beyond the MS level;
they are carried from the profile input onto the picked output.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional


class Polarity(Enum):
    """Ion polarity mode."""
    POSITIVE = auto()
    NEGATIVE = auto()
    UNKNOWN = auto()


class SpectrumType(Enum):
    """Spectrum data representation type."""
    PROFILE = auto()
    CENTROID = auto()
    UNKNOWN = auto()


@dataclass(frozen=True, slots=True)
class ScanMetadata:
    """
    Metadata for a single MS scan.

    Attributes:
        scan_number: Unique scan identifier (1-based, vendor-assigned).
        ms_level: MS level (1 for MS1, 2 for MS2, etc.).
        retention_time: Retention time in seconds.
        polarity: Ion polarity mode.
        spectrum_type: Profile or centroid mode.
        name: Free-text spectrum name or title.
        native_id: Native spectrum ID from source file.
        extras: Additional annotations not covered by standard fields.
    """
    # Required fields
    scan_number: int
    ms_level: int
    retention_time: float  # in seconds

    # Polarity and type
    polarity: Polarity = Polarity.UNKNOWN
    spectrum_type: SpectrumType = SpectrumType.UNKNOWN

    # Identification
    name: Optional[str] = None
    native_id: Optional[str] = None
    extras: dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate metadata consistency."""
        if self.scan_number < 1:
            raise ValueError(f"scan_number must be >= 1, got {self.scan_number}")
        if self.ms_level < 1:
            raise ValueError(f"ms_level must be >= 1, got {self.ms_level}")
        if self.retention_time < 0:
            raise ValueError(f"retention_time must be >= 0, got {self.retention_time}")

    @property
    def is_ms1(self) -> bool:
        """Check if this is an MS1 scan."""
        return self.ms_level == 1
