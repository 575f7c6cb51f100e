"""
Spectrum file writers.

- write_mgf(): Write centroided spectra to MGF (pyteomics)
"""

from .mgf import spectrum_to_mgf_dict, write_mgf

__all__ = [
    "write_mgf",
    "spectrum_to_mgf_dict",
]
