from abc import ABC, abstractmethod
from collections.abc import Iterator
from pathlib import Path
from typing import ClassVar

from ..core import MSRun, Spectrum


class SpectrumReader(ABC):
    """
    Abstract base class for spectrum file readers.

    Readers are context managers; iteration is only valid inside the
    ``with`` block.
    """

    # Class-level attributes
    format_name: ClassVar[str]  # e.g., "mzML"
    supported_extensions: ClassVar[list[str]]  # e.g., [".mzml"]

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._validate_path()

    def _validate_path(self) -> None:
        """Validate file exists and has correct extension."""
        if not self.path.exists():
            raise FileNotFoundError(f"File not found: {self.path}")

        suffix = self.path.suffix.lower()
        if suffix not in self.supported_extensions:
            raise ValueError(
                f"Unsupported extension {suffix} for {self.format_name} reader. "
                f"Expected: {self.supported_extensions}"
            )

    @abstractmethod
    def __enter__(self) -> 'SpectrumReader':
        ...

    @abstractmethod
    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        ...

    @abstractmethod
    def __iter__(self) -> Iterator[Spectrum]:
        """Iterate over all spectra in the file."""
        ...

    @abstractmethod
    def to_run(self) -> MSRun:
        """Load the entire file into an MSRun."""
        ...
