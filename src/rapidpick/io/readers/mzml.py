"""
mzML file reader using pyteomics.

This module provides the MzMLReader class for reading mzML and mzXML files,
the standard open formats for mass spectrometry data interchange. Profile
spectra read here are the usual input to the peak picker.
"""

import logging
import re
from collections.abc import Iterator
from pathlib import Path
from typing import ClassVar, Optional

import numpy as np

from ..base import SpectrumReader
from ...core import (
    Spectrum,
    ScanMetadata,
    MSRun,
    RunMetadata,
    Polarity,
    SpectrumType,
)


logger = logging.getLogger(__name__)


_SCAN_NUMBER_PATTERNS = (
    r'scan=(\d+)',
    r'spectrum=(\d+)',
    r'index=(\d+)',
    r'^(\d+)$',
)

# Keys of a pyteomics instrumentConfiguration dict that are not instrument terms
_INSTRUMENT_STRUCTURE_KEYS = frozenset({
    'id',
    'componentList',
    'softwareRef',
    'scanSettingsRef',
    'referenceableParamGroupRef',
    'instrument serial number',
})


def _instrument_model(config: dict) -> Optional[str]:
    """
    Resolve the instrument model from a pyteomics instrumentConfiguration dict.

    The model is a value-less cvParam (e.g. "Q Exactive"), which pyteomics
    stores as a key mapped to an empty string.
    """
    model = config.get('instrument model')
    if model:
        return str(model)
    for key, value in config.items():
        if key not in _INSTRUMENT_STRUCTURE_KEYS and value == '':
            return str(key)
    return None


def _parse_polarity(spectrum_data: dict) -> Polarity:
    """Parse polarity from a pyteomics spectrum dictionary."""
    if spectrum_data.get('positive scan') is not None:
        return Polarity.POSITIVE
    if spectrum_data.get('negative scan') is not None:
        return Polarity.NEGATIVE
    polarity = spectrum_data.get('polarity')  # mzXML attribute
    if polarity == '+':
        return Polarity.POSITIVE
    if polarity == '-':
        return Polarity.NEGATIVE
    return Polarity.UNKNOWN


def _parse_spectrum_type(spectrum_data: dict) -> SpectrumType:
    """Parse spectrum type (profile/centroid) from a pyteomics spectrum dictionary."""
    if spectrum_data.get('profile spectrum') is not None:
        return SpectrumType.PROFILE
    if spectrum_data.get('centroid spectrum') is not None:
        return SpectrumType.CENTROID
    centroided = spectrum_data.get('centroided')  # mzXML attribute
    if centroided is not None:
        return SpectrumType.CENTROID if bool(int(centroided)) else SpectrumType.PROFILE
    return SpectrumType.UNKNOWN


def _extract_scan_number(native_id: str, index: int) -> int:
    """
    Extract scan number from native ID string.

    Common formats:
    - "controllerType=0 controllerNumber=1 scan=123"
    - "scan=123"
    - "spectrum=123"
    - "index=123"
    - Just a number

    Falls back to index + 1 if parsing fails or yields a number below 1.
    """
    if not native_id:
        return index + 1

    for pattern in _SCAN_NUMBER_PATTERNS:
        match = re.search(pattern, native_id)
        if match:
            scan_number = int(match.group(1))
            return scan_number if scan_number >= 1 else index + 1

    return index + 1


def _to_seconds(value, default_unit: str = 'minute') -> float:
    """Convert a pyteomics (unit)float retention time to seconds."""
    unit = getattr(value, 'unit_info', None) or default_unit
    seconds = float(value)
    if unit in ('minute', 'min', 'UO:0000031'):
        seconds *= 60.0
    return seconds


def _parse_retention_time(spectrum_data: dict) -> float:
    """Parse retention time in seconds from mzML or mzXML spectrum data."""
    scans = spectrum_data.get('scanList', {}).get('scan', [])
    if scans:
        scan_info = scans[0] if isinstance(scans, list) else scans
        rt = scan_info.get('scan start time')
        if rt is not None:
            return _to_seconds(rt)

    # mzXML uses retentionTime, either as ISO 8601 duration or (minutes) number
    rt_value = spectrum_data.get('retentionTime')
    if isinstance(rt_value, str) and rt_value.startswith('PT'):
        match = re.match(r'PT([\d.]+)([SM])', rt_value)
        if match:
            rt = float(match.group(1))
            return rt * 60.0 if match.group(2) == 'M' else rt
    elif isinstance(rt_value, (int, float)):
        return _to_seconds(rt_value)

    return 0.0


class MzMLReader(SpectrumReader):
    """
    Reader for mzML and mzXML files using pyteomics.

    Example:
        >>> with MzMLReader("sample.mzML") as reader:
        ...     for spectrum in reader:
        ...         print(spectrum.scan_number, spectrum.ms_level)
    """

    format_name: ClassVar[str] = "mzML"
    supported_extensions: ClassVar[list[str]] = ['.mzml', '.mzxml']

    def __init__(self, path: Path | str):
        """
        Initialize the mzML reader.

        Args:
            path: Path to mzML or mzXML file.
        """
        super().__init__(path)
        self._reader = None
        self._is_mzxml = self.path.suffix.lower() == '.mzxml'

    def __enter__(self) -> 'MzMLReader':
        """Open the file for reading."""
        if self._is_mzxml:
            from pyteomics import mzxml
            self._reader = mzxml.MzXML(str(self.path))
        else:
            from pyteomics import mzml
            self._reader = mzml.MzML(str(self.path))
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Close the file."""
        if self._reader is not None:
            self._reader.close()
            self._reader = None

    def __iter__(self) -> Iterator[Spectrum]:
        """Iterate over all spectra in the file."""
        if self._reader is None:
            raise RuntimeError("Reader not opened. Use 'with' context manager.")

        self._reader.reset()
        for idx, spectrum_data in enumerate(self._reader):
            yield self._parse_spectrum(spectrum_data, idx)

    def _parse_spectrum(self, spectrum_data: dict, index: int) -> Spectrum:
        """
        Parse a pyteomics spectrum dictionary into a Spectrum object.

        Args:
            spectrum_data: Dictionary from pyteomics.
            index: Position in file (0-based).
        """
        native_id = str(spectrum_data.get('id', ''))
        scan_number = _extract_scan_number(native_id, index)

        ms_level = int(spectrum_data.get('ms level', spectrum_data.get('msLevel', 1)))

        mz = np.asarray(spectrum_data.get('m/z array', []), dtype=np.float64)
        intensity = np.asarray(spectrum_data.get('intensity array', []), dtype=np.float64)

        metadata = ScanMetadata(
            scan_number=scan_number,
            ms_level=ms_level,
            retention_time=_parse_retention_time(spectrum_data),
            polarity=_parse_polarity(spectrum_data),
            spectrum_type=_parse_spectrum_type(spectrum_data),
            name=spectrum_data.get('spectrum title'),
            native_id=native_id or None,
        )
        return Spectrum(mz=mz, intensity=intensity, metadata=metadata)

    def _read_run_metadata(self) -> RunMetadata:
        """Read instrument and software details from the mzML header."""
        model = None
        serial = None
        software_version = None
        if not self._is_mzxml and hasattr(self._reader, 'iterfind'):
            for inst in self._reader.iterfind('instrumentConfigurationList/instrumentConfiguration'):
                model = _instrument_model(inst)
                serial = inst.get('instrument serial number')
                break
            # An interrupted iterfind leaves the stream half-read
            self._reader.reset()
            for soft in self._reader.iterfind('softwareList/software'):
                software_version = soft.get('version')
                break
            self._reader.reset()
        return RunMetadata(
            source_file=self.path,
            instrument_model=model,
            instrument_serial=serial,
            software_version=software_version,
        )

    def to_run(self) -> MSRun:
        """
        Load the entire file into an MSRun object.

        Returns:
            MSRun containing all spectra and run metadata.
        """
        if self._reader is None:
            raise RuntimeError("Reader not opened. Use 'with' context manager.")

        run_metadata = self._read_run_metadata()
        spectra = list(self)
        logger.info(f"Read {len(spectra)} spectra from {self.path.name}")
        return MSRun(spectra=spectra, metadata=run_metadata)


def read_mzml(path: Path | str) -> MSRun:
    """
    Convenience function to read an mzML file into an MSRun.

    Example:
        >>> run = read_mzml("sample.mzML")
        >>> print(f"Loaded {len(run)} spectra")
    """
    with MzMLReader(path) as reader:
        return reader.to_run()
