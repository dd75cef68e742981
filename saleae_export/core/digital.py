# saleae_export/core/digital.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, NamedTuple

import numpy as np

from .exceptions import InvalidTrace
from .floats import same_float


class Edge(NamedTuple):
    """One constant-level segment of a digital trace."""

    is_high: bool
    duration: float


@dataclass(frozen=True, slots=True, eq=False)
class DigitalTrace:
    """
    Decoded digital channel: run-length encoded logic levels.

    The file stores the level before the first edge plus the time of every
    edge, never a per-tick sample. `transitions` is a read-only float64 array
    owned by the trace.
    """

    initial_state: bool
    begin_time: float
    end_time: float
    transitions: np.ndarray = field(default_factory=lambda: np.empty(0), repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.initial_state, (bool, np.bool_, int, np.integer)):
            raise InvalidTrace("DigitalTrace.initial_state must be a bool.")
        object.__setattr__(self, "initial_state", bool(self.initial_state))

        try:
            object.__setattr__(self, "begin_time", float(self.begin_time))
            object.__setattr__(self, "end_time", float(self.end_time))
        except (TypeError, ValueError) as e:
            raise InvalidTrace("DigitalTrace begin/end times must be numbers.") from e

        t = np.array(self.transitions, dtype=np.float64)
        if t.ndim != 1:
            raise InvalidTrace(f"`transitions` must be 1D, got shape {t.shape}")
        t.setflags(write=False)
        object.__setattr__(self, "transitions", t)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DigitalTrace):
            return NotImplemented
        return (
            self.initial_state == other.initial_state
            and same_float(self.begin_time, other.begin_time)
            and same_float(self.end_time, other.end_time)
            and np.array_equal(self.transitions, other.transitions, equal_nan=True)
        )

    def __repr__(self) -> str:
        return (
            f"DigitalTrace(initial_state={self.initial_state}, begin_time={self.begin_time}, "
            f"end_time={self.end_time}, num_transitions={self.num_transitions})"
        )

    @property
    def num_transitions(self) -> int:
        return int(self.transitions.size)

    @property
    def duration(self) -> float:
        return self.end_time - self.begin_time

    @property
    def final_state(self) -> bool:
        return self.initial_state ^ bool(self.num_transitions % 2)

    def iter_samples(self) -> Iterator[Edge]:
        """Yield (is_high, duration) for every segment, ending with the tail after the last edge.

        Each call returns a fresh generator starting from `begin_time`.
        """
        current = self.initial_state
        previous = self.begin_time
        for t in self.transitions:
            t = float(t)
            yield Edge(current, t - previous)
            current = not current
            previous = t
        yield Edge(current, self.end_time - previous)

    def __iter__(self) -> Iterator[Edge]:
        return self.iter_samples()

    def durations(self) -> tuple[np.ndarray, np.ndarray]:
        """Vectorised counterpart of iter_samples: (states, durations), both of length N + 1."""
        bounds = np.concatenate(([self.begin_time], self.transitions, [self.end_time]))
        durations = np.diff(bounds)
        states = (np.arange(durations.size) % 2).astype(bool) ^ self.initial_state
        return states, durations

    def state_at(self, t: float) -> bool:
        """
        Logic level at time `t`.

        At an exact transition time the new level is returned. Requires
        ordered transitions.
        """
        if not (self.begin_time <= t <= self.end_time):
            raise ValueError(
                f"t={t} is outside the capture [{self.begin_time}, {self.end_time}]."
            )
        flips = int(np.searchsorted(self.transitions, t, side="right"))
        return self.initial_state ^ bool(flips % 2)

    def check_ordering(self) -> list[str]:
        """
        Check begin_time <= transitions[0] <= ... <= transitions[-1] <= end_time.

        Returns:
            List of problems (empty if ordered).
        """
        errors = []
        t = self.transitions

        if self.begin_time > self.end_time:
            errors.append(f"begin_time {self.begin_time} is after end_time {self.end_time}")

        if t.size > 0:
            if not np.isfinite(t).all():
                errors.append("transitions contain non-finite values")
            backwards = np.flatnonzero(np.diff(t) < 0)
            if backwards.size > 0:
                i = int(backwards[0])
                errors.append(
                    f"transition {i + 1} ({t[i + 1]}) precedes transition {i} ({t[i]}); "
                    f"{backwards.size} decreasing step(s) in total"
                )
            if t[0] < self.begin_time:
                errors.append(f"first transition {t[0]} precedes begin_time {self.begin_time}")
            if t[-1] > self.end_time:
                errors.append(f"last transition {t[-1]} follows end_time {self.end_time}")

        return errors

