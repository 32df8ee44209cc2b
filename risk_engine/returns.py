"""Return series containers: single series and the ordered asset universe."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Mapping

import numpy as np
import pandas as pd

from risk_engine.exceptions import ContractViolationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ReturnSeries:
    """Daily fractional returns for one asset or benchmark.

    ``values`` is copied on construction and marked read-only. ``label`` and
    ``color`` are display metadata only and never enter a computation.
    """

    identifier: str
    values: np.ndarray
    label: str | None = None
    color: str | None = None

    def __post_init__(self) -> None:
        arr = np.array(self.values, dtype=float)
        if arr.ndim != 1:
            raise ContractViolationError(
                f"Return series '{self.identifier}' must be 1-D, got shape {arr.shape}",
                field="values",
            )
        arr.setflags(write=False)
        object.__setattr__(self, "values", arr)

    def __len__(self) -> int:
        return self.values.size

    def to_series(self) -> pd.Series:
        return pd.Series(self.values, name=self.identifier)


class AssetUniverse:
    """Ordered, immutable set of asset return series with unique identifiers.

    Order is significant: it fixes the row/column order of the covariance and
    correlation matrices and the alignment of weight vectors. Series of
    unequal length are accepted; analytics read only the first ``length``
    observations of each.
    """

    def __init__(self, series: list[ReturnSeries] | tuple[ReturnSeries, ...]) -> None:
        self._series: tuple[ReturnSeries, ...] = tuple(series)
        self._validate(self._series)
        self._index: dict[str, int] = {
            s.identifier: i for i, s in enumerate(self._series)
        }
        if self.is_ragged:
            logger.warning(
                "Asset universe is ragged (lengths %s); truncating to %d observations",
                [len(s) for s in self._series],
                self.length,
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> AssetUniverse:
        """Build a universe from an ordered ``{identifier: returns}`` mapping."""
        return cls([ReturnSeries(str(k), v) for k, v in data.items()])

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @staticmethod
    def _validate(series: tuple[ReturnSeries, ...]) -> None:
        if not series:
            raise ContractViolationError("Asset universe is empty", field="universe")
        for s in series:
            if not isinstance(s, ReturnSeries):
                raise ContractViolationError(
                    f"Expected ReturnSeries, got {type(s).__name__}",
                    field="universe",
                )
        ids = [s.identifier for s in series]
        dupes = sorted({i for i in ids if ids.count(i) > 1})
        if dupes:
            raise ContractViolationError(
                f"Duplicate asset identifiers: {dupes}", field="universe"
            )

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    @property
    def identifiers(self) -> list[str]:
        return [s.identifier for s in self._series]

    @property
    def length(self) -> int:
        """Number of observations usable across every asset."""
        return min(len(s) for s in self._series)

    @property
    def is_ragged(self) -> bool:
        return len({len(s) for s in self._series}) > 1

    def __len__(self) -> int:
        return len(self._series)

    def __iter__(self) -> Iterator[ReturnSeries]:
        return iter(self._series)

    def __getitem__(self, key: int | str) -> ReturnSeries:
        if isinstance(key, str):
            return self._series[self._index[key]]
        return self._series[key]

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._index

    def to_frame(self) -> pd.DataFrame:
        """Returns as a DataFrame, one column per asset, truncated to ``length``."""
        n = self.length
        return pd.DataFrame(
            {s.identifier: s.values[:n] for s in self._series},
            columns=self.identifiers,
        )
