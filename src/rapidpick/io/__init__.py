"""
I/O module for reading profile data and writing picked peaks.

Readers:
- MzMLReader: Read mzML/mzXML files
- read_mzml(): Load mzML to MSRun

Writers:
- write_mgf(): Write centroided spectra to MGF

Base classes:
- SpectrumReader: Abstract base class for all readers
"""

from .base import SpectrumReader
from .readers import MzMLReader, read_mzml
from .writers import spectrum_to_mgf_dict, write_mgf

__all__ = [
    # Base
    "SpectrumReader",
    # Readers
    "MzMLReader",
    "read_mzml",
    # Writers
    "write_mgf",
    "spectrum_to_mgf_dict",
]
