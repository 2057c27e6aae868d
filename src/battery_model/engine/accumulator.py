from __future__ import annotations

from typing import Union


class DeltaAccumulator:
    """Turn a cumulative meter counter into per-sample deltas.

    A baseline of 0 means "not yet baselined": the next reading only sets the
    baseline and yields a delta of 0. A reading lower than the baseline is a
    counter reset and re-bases the same way, so the delta is never negative.
    """

    __slots__ = ("last_reading", "_value")

    def __init__(self) -> None:
        self.last_reading = 0.0
        self._value = 0.0

    @property
    def value(self) -> float:
        return self._value

    def update(self, raw: Union[str, float, None]) -> None:
        """Update from a raw field. Blank, unparseable or zero fields are ignored
        and the previous delta is kept."""
        try:
            v = float(raw)
        except (TypeError, ValueError):
            return
        if v != v or v == 0:  # NaN or zero
            return
        self.update_explicit(v)

    def update_explicit(self, v: float) -> None:
        if self.last_reading == 0 or v < self.last_reading:
            self.last_reading = v
        self._value = v - self.last_reading
        self.last_reading = v

    def reset(self) -> None:
        """Drop the baseline and the last delta; the next reading re-bases."""
        self.last_reading = 0.0
        self._value = 0.0

    def __repr__(self) -> str:
        return f"DeltaAccumulator(last_reading={self.last_reading!r}, value={self._value!r})"
