# saleae_export/core/analog.py
from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from .exceptions import InvalidTrace
from .floats import same_float


@dataclass(frozen=True, slots=True, eq=False)
class AnalogTrace:
    """
    Decoded analog channel.

    `samples` holds the raw float32 values exactly as stored (read-only,
    owned by the trace). Sample `i` was taken at
    begin_time + i * downsample_factor / sample_rate.
    """

    begin_time: float
    sample_rate: int
    downsample_factor: int = 1
    samples: np.ndarray = field(default_factory=lambda: np.empty(0, dtype=np.float32), repr=False)

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "begin_time", float(self.begin_time))
        except (TypeError, ValueError) as e:
            raise InvalidTrace("AnalogTrace.begin_time must be a number.") from e

        for name in ("sample_rate", "downsample_factor"):
            value = getattr(self, name)
            if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
                raise InvalidTrace(f"AnalogTrace.{name} must be an int, got {value!r}.")
            if value <= 0:
                raise InvalidTrace(f"AnalogTrace.{name} must be strictly positive, got {value}.")
            object.__setattr__(self, name, int(value))

        s = np.array(self.samples, dtype=np.float32)
        if s.ndim != 1:
            raise InvalidTrace(f"`samples` must be 1D, got shape {s.shape}")
        s.setflags(write=False)
        object.__setattr__(self, "samples", s)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AnalogTrace):
            return NotImplemented
        return (
            same_float(self.begin_time, other.begin_time)
            and self.sample_rate == other.sample_rate
            and self.downsample_factor == other.downsample_factor
            and np.array_equal(self.samples, other.samples, equal_nan=True)
        )

    def __repr__(self) -> str:
        return (
            f"AnalogTrace(begin_time={self.begin_time}, sample_rate={self.sample_rate}, "
            f"downsample_factor={self.downsample_factor}, num_samples={self.num_samples})"
        )

    def __len__(self) -> int:
        return int(self.samples.size)

    @property
    def num_samples(self) -> int:
        return int(self.samples.size)

    @property
    def effective_sample_rate(self) -> float:
        return self.sample_rate / self.downsample_factor

    @property
    def sample_period(self) -> float:
        return self.downsample_factor / self.sample_rate

    @property
    def end_time(self) -> float:
        """Time of the last sample (begin_time for an empty trace)."""
        if self.num_samples == 0:
            return self.begin_time
        return self.sample_time(self.num_samples - 1)

    @property
    def duration(self) -> float:
        return self.end_time - self.begin_time

    def sample_time(self, index: int) -> float:
        if not 0 <= index < self.num_samples:
            raise IndexError(f"Sample index {index} out of range [0, {self.num_samples}).")
        return self.begin_time + index * self.downsample_factor / self.sample_rate

    def times(self) -> np.ndarray:
        """Time of every sample, computed on demand."""
        i = np.arange(self.num_samples, dtype=np.float64)
        return self.begin_time + i * self.downsample_factor / self.sample_rate

