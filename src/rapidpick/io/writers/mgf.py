"""
MGF export of picked spectra using pyteomics.

MGF stores centroided peak lists only; one ``BEGIN IONS`` block is written
per spectrum with its title, scan number, retention time and MS level.
"""

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from ...core import Spectrum


logger = logging.getLogger(__name__)


def _spectrum_title(spectrum: Spectrum) -> str:
    """Title line for a spectrum; falls back to native ID, then scan number."""
    if spectrum.metadata.name:
        return spectrum.metadata.name
    if spectrum.metadata.native_id:
        return spectrum.metadata.native_id
    return f"scan={spectrum.scan_number}"


def spectrum_to_mgf_dict(spectrum: Spectrum) -> dict:
    """Convert a spectrum into the dictionary layout pyteomics.mgf expects."""
    params = {
        'title': _spectrum_title(spectrum),
        'scans': spectrum.scan_number,
        'rtinseconds': spectrum.retention_time,
        'mslevel': spectrum.ms_level,
    }
    return {
        'm/z array': spectrum.mz,
        'intensity array': spectrum.intensity,
        'params': params,
    }


def write_mgf(
    spectra: Iterable[Spectrum],
    path: Path | str,
    skip_empty: bool = False,
) -> int:
    """
    Write spectra to an MGF file.

    Args:
        spectra: Spectra to write (an MSRun works).
        path: Output file path; parent directories are created.
        skip_empty: Leave out spectra without peaks.

    Returns:
        Number of spectra written.
    """
    from pyteomics import mgf

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    written = 0

    def _entries() -> Iterator[dict]:
        nonlocal written
        for spectrum in spectra:
            if skip_empty and spectrum.is_empty:
                continue
            written += 1
            yield spectrum_to_mgf_dict(spectrum)

    mgf.write(_entries(), output=str(path))
    logger.info(f"Wrote {written} spectra to {path}")
    return written
