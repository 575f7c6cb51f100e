"""Configuration for the rapid peak picker."""

from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import Enum


class IntensityType(str, Enum):
    """What a picked peak reports as its intensity."""
    PEAK_AREA = 'peakarea'      # integral of the fitted Gaussian
    PEAK_HEIGHT = 'peakheight'  # fitted Gaussian at its mean

    @classmethod
    def parse(cls, value: 'str | IntensityType') -> 'IntensityType':
        """
        Resolve a configured value.

        Only ``peakarea`` selects area output; every other value means
        apex height.
        """
        if isinstance(value, IntensityType):
            return value
        if str(value).strip().lower() == cls.PEAK_AREA.value:
            return cls.PEAK_AREA
        return cls.PEAK_HEIGHT


_TRUE_STRINGS = {'true', '1', 'yes', 'on'}
_FALSE_STRINGS = {'false', '0', 'no', 'off'}


def _parse_bool(name: str, value: object) -> bool:
    """Read a boolean from a bool, int or string parameter value."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


@dataclass(frozen=True)
class PickerOptions:
    """
    Resolved picker parameters.

    Attributes:
        intensity_type: Area or apex height as output intensity.
        ms1_only: If True, spectra with MS level != 1 pass through unpicked.
    """
    intensity_type: IntensityType = IntensityType.PEAK_HEIGHT
    ms1_only: bool = False

    def __post_init__(self) -> None:
        # Accept plain strings/ints from callers and normalise them
        object.__setattr__(self, 'intensity_type', IntensityType.parse(self.intensity_type))
        object.__setattr__(self, 'ms1_only', _parse_bool('ms1_only', self.ms1_only))

    @property
    def report_area(self) -> bool:
        """True if picked peaks carry the fitted area."""
        return self.intensity_type is IntensityType.PEAK_AREA

    @classmethod
    def from_mapping(cls, params: Mapping[str, object]) -> 'PickerOptions':
        """
        Build options from a key-value parameter mapping.

        Missing keys keep their defaults.

        Raises:
            ValueError: On unknown keys or unreadable values.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(params) - known)
        if unknown:
            raise ValueError(
                f"Unknown picker parameter(s) {unknown}. Expected: {sorted(known)}"
            )
        return cls(**{key: params[key] for key in known if key in params})

    def to_dict(self) -> dict[str, object]:
        """Key-value form, inverse of from_mapping."""
        return {'intensity_type': self.intensity_type.value, 'ms1_only': self.ms1_only}
