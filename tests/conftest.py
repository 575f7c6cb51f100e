"""Shared test fixtures and configuration."""

from __future__ import annotations

import base64
from collections.abc import Callable, Sequence
from pathlib import Path

import numpy as np
import pytest

from rapidpick.core import MSRun, Polarity, RunMetadata, ScanMetadata, Spectrum, SpectrumType
from rapidpick.picking import scaled_gaussian

# Six-sample trace with a single peak core at index 2
SINGLE_PEAK_PAIRS = [
    (100.0, 2.0),
    (100.1, 5.0),
    (100.2, 50.0),
    (100.3, 5.0),
    (100.4, 2.0),
    (100.5, 0.9),
]

# Gaussians (mu, sigma, area) sampled by the profile fixture
PROFILE_PEAKS = [
    (400.3004, 0.004, 1.0e4),
    (400.7102, 0.005, 2.5e4),
]


def _make_spectrum(
    pairs: Sequence[tuple[float, float]],
    scan_number: int = 1,
    ms_level: int = 1,
    retention_time: float = 12.5,
    **metadata_fields,
) -> Spectrum:
    """Build a profile spectrum from (mz, intensity) pairs."""
    metadata_fields.setdefault("spectrum_type", SpectrumType.PROFILE)
    metadata = ScanMetadata(
        scan_number=scan_number,
        ms_level=ms_level,
        retention_time=retention_time,
        **metadata_fields,
    )
    return Spectrum.from_pairs(list(pairs), metadata)


def _gaussian_profile() -> tuple[np.ndarray, np.ndarray]:
    """Regular 0.001 m/z grid with the PROFILE_PEAKS summed on top of zero baseline."""
    mz = np.linspace(400.0, 401.0, 1001)
    intensity = np.zeros_like(mz)
    for mu, sigma, area in PROFILE_PEAKS:
        intensity += scaled_gaussian(mz, mu, sigma, area)
    return mz, intensity


@pytest.fixture
def make_spectrum() -> Callable[..., Spectrum]:
    return _make_spectrum


@pytest.fixture
def single_peak_spectrum() -> Spectrum:
    return _make_spectrum(
        SINGLE_PEAK_PAIRS,
        scan_number=7,
        retention_time=61.25,
        polarity=Polarity.POSITIVE,
        name="single peak",
        native_id="controllerType=0 controllerNumber=1 scan=7",
        extras={"filter string": "FTMS + p ESI Full ms"},
    )


@pytest.fixture
def profile_spectrum() -> Spectrum:
    mz, intensity = _gaussian_profile()
    metadata = ScanMetadata(
        scan_number=1,
        ms_level=1,
        retention_time=30.0,
        spectrum_type=SpectrumType.PROFILE,
    )
    return Spectrum(mz=mz, intensity=intensity, metadata=metadata)


@pytest.fixture
def mixed_run() -> MSRun:
    """MS1, MS2, MS1 run, all containing the single peak trace."""
    spectra = [
        _make_spectrum(SINGLE_PEAK_PAIRS, scan_number=1, ms_level=1, retention_time=1.0),
        _make_spectrum(SINGLE_PEAK_PAIRS, scan_number=2, ms_level=2, retention_time=1.1),
        _make_spectrum(SINGLE_PEAK_PAIRS, scan_number=3, ms_level=1, retention_time=2.0),
    ]
    metadata = RunMetadata(instrument_model="Orbitrap Fusion", extras={"operator": "qc"})
    return MSRun(spectra=spectra, metadata=metadata)


_MZML_HEADER = """<?xml version="1.0" encoding="utf-8"?>
<mzML xmlns="http://psi.hupo.org/ms/mzml" id="sample" version="1.1.0">
  <cvList count="2">
    <cv id="MS" fullName="Proteomics Standards Initiative Mass Spectrometry Ontology" URI="https://raw.githubusercontent.com/HUPO-PSI/psi-ms-CV/master/psi-ms.obo"/>
    <cv id="UO" fullName="Unit Ontology" URI="https://raw.githubusercontent.com/bio-ontology-research-group/unit-ontology/master/unit.obo"/>
  </cvList>
  <fileDescription>
    <fileContent>
      <cvParam cvRef="MS" accession="MS:1000579" name="MS1 spectrum" value=""/>
      <cvParam cvRef="MS" accession="MS:1000580" name="MSn spectrum" value=""/>
    </fileContent>
  </fileDescription>
  <softwareList count="1">
    <software id="Xcalibur" version="2.9">
      <cvParam cvRef="MS" accession="MS:1000532" name="Xcalibur" value=""/>
    </software>
  </softwareList>
  <instrumentConfigurationList count="1">
    <instrumentConfiguration id="IC1">
      <cvParam cvRef="MS" accession="MS:1001911" name="Q Exactive" value=""/>
      <cvParam cvRef="MS" accession="MS:1000529" name="instrument serial number" value="SN-0451"/>
    </instrumentConfiguration>
  </instrumentConfigurationList>
  <dataProcessingList count="1">
    <dataProcessing id="conversion">
      <processingMethod order="0" softwareRef="Xcalibur">
        <cvParam cvRef="MS" accession="MS:1000544" name="Conversion to mzML" value=""/>
      </processingMethod>
    </dataProcessing>
  </dataProcessingList>
  <run id="sample" defaultInstrumentConfigurationRef="IC1">
    <spectrumList count="{count}" defaultDataProcessingRef="conversion">
"""

_MZML_SPECTRUM = """      <spectrum index="{index}" id="controllerType=0 controllerNumber=1 scan={scan}" defaultArrayLength="{length}">
        <cvParam cvRef="MS" accession="MS:1000511" name="ms level" value="{ms_level}"/>
        <cvParam cvRef="MS" accession="MS:1000130" name="positive scan" value=""/>
        <cvParam cvRef="MS" accession="MS:1000128" name="profile spectrum" value=""/>
        <scanList count="1">
          <cvParam cvRef="MS" accession="MS:1000795" name="no combination" value=""/>
          <scan>
            <cvParam cvRef="MS" accession="MS:1000016" name="scan start time" value="{minutes}" unitCvRef="UO" unitAccession="UO:0000031" unitName="minute"/>
          </scan>
        </scanList>
        <binaryDataArrayList count="2">
          <binaryDataArray encodedLength="{mz_length}">
            <cvParam cvRef="MS" accession="MS:1000523" name="64-bit float" value=""/>
            <cvParam cvRef="MS" accession="MS:1000576" name="no compression" value=""/>
            <cvParam cvRef="MS" accession="MS:1000514" name="m/z array" value="" unitCvRef="MS" unitAccession="MS:1000040" unitName="m/z"/>
            <binary>{mz}</binary>
          </binaryDataArray>
          <binaryDataArray encodedLength="{intensity_length}">
            <cvParam cvRef="MS" accession="MS:1000523" name="64-bit float" value=""/>
            <cvParam cvRef="MS" accession="MS:1000576" name="no compression" value=""/>
            <cvParam cvRef="MS" accession="MS:1000515" name="intensity array" value="" unitCvRef="MS" unitAccession="MS:1000131" unitName="number of detector counts"/>
            <binary>{intensity}</binary>
          </binaryDataArray>
        </binaryDataArrayList>
      </spectrum>
"""

_MZML_FOOTER = """    </spectrumList>
  </run>
</mzML>
"""


def _encode_array(values: Sequence[float]) -> str:
    return base64.b64encode(np.asarray(values, dtype="<f8").tobytes()).decode("ascii")


@pytest.fixture
def mzml_file(tmp_path: Path) -> Path:
    """Uncompressed mzML with an MS1 (scan 1, 0.5 min) and MS2 (scan 2, 0.6 min) spectrum."""
    mz = _encode_array([p[0] for p in SINGLE_PEAK_PAIRS])
    intensity = _encode_array([p[1] for p in SINGLE_PEAK_PAIRS])
    spectra = [
        _MZML_SPECTRUM.format(
            index=index,
            scan=index + 1,
            length=len(SINGLE_PEAK_PAIRS),
            ms_level=ms_level,
            minutes=minutes,
            mz=mz,
            mz_length=len(mz),
            intensity=intensity,
            intensity_length=len(intensity),
        )
        for index, (ms_level, minutes) in enumerate([(1, 0.5), (2, 0.6)])
    ]
    path = tmp_path / "sample.mzML"
    path.write_text(_MZML_HEADER.format(count=len(spectra)) + "".join(spectra) + _MZML_FOOTER)
    return path
