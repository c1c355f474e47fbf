# formula.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import pandas as pd


@dataclass(frozen=True)
class Formula:
    """``label ~ text`` or ``label ~ title + body``."""

    label: str
    features: Tuple[str, ...]

    @classmethod
    def parse(cls, spec: str) -> "Formula":
        if spec.count("~") != 1:
            raise ValueError(f"Malformed formula (expected one '~'): {spec!r}")
        lhs, rhs = (side.strip() for side in spec.split("~"))
        features = tuple(t.strip() for t in rhs.split("+"))
        if not lhs or not rhs or any(not t for t in features):
            raise ValueError(f"Malformed formula (empty term): {spec!r}")
        if len(set(features)) != len(features) or lhs in features:
            raise ValueError(f"Malformed formula (repeated column): {spec!r}")
        return cls(label=lhs, features=features)

    def check(self, df: pd.DataFrame) -> None:
        missing = [c for c in (self.label, *self.features) if c not in df.columns]
        if missing:
            raise KeyError(f"Columns not in data: {missing}")

    def text(self, df: pd.DataFrame) -> pd.Series:
        """Feature columns joined into a single text column."""
        if len(self.features) == 1:
            return df[self.features[0]].astype(str)
        return df[list(self.features)].astype(str).agg(" ".join, axis=1)

    def __str__(self) -> str:
        return f"{self.label} ~ {' + '.join(self.features)}"
