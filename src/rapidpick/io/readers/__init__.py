"""
Spectrum file readers.

- MzMLReader: mzML and mzXML files (pyteomics)
- read_mzml(): Load mzML file into MSRun
"""

from .mzml import MzMLReader, read_mzml

__all__ = [
    "MzMLReader",
    "read_mzml",
]
