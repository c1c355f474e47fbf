#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Dataset references for the IMDb train/test splits.

A reference is only a handle: nothing is read until ``read()`` is called.
Supported layouts for a split:
- a single ``.csv`` or ``.parquet`` file
- a directory of part files (``part-*.csv`` / ``*.parquet``), read in name order
- an ``aclImdb``-style directory with ``pos/`` and ``neg/`` folders of ``.txt`` reviews
"""
from __future__ import annotations

import html
import re
import unicodedata
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

import numpy as np
import pandas as pd

TAG_RE = re.compile(r"<[^>]+>")
TABULAR_SUFFIXES = (".csv", ".parquet")

LABEL_MAP = {
    "positive": 1, "negative": 0, "pos": 1, "neg": 0,
    "1": 1, "0": 0, "1.0": 1, "0.0": 0, "true": 1, "false": 0,
}


def normalize_text(text: str) -> str:
    s = str(text)
    s = html.unescape(s).replace("<br />", " ")
    s = TAG_RE.sub(" ", s)
    s = unicodedata.normalize("NFKC", s)
    s = re.sub(r"\s+", " ", s).strip()
    return s


def normalize_labels(values: pd.Series) -> pd.Series:
    """Map pos/neg style labels to {0, 1}; anything else is an error."""
    mapped = values.map(lambda x: LABEL_MAP.get(str(x).strip().lower(), np.nan))
    bad = values[mapped.isna()]
    if len(bad):
        raise ValueError(
            f"Unrecognised label values: {sorted(set(map(str, bad.unique())))[:5]}"
        )
    return mapped.astype(int)


def _read_table(path: Path) -> pd.DataFrame:
    if path.suffix == ".parquet":
        return pd.read_parquet(path)
    return pd.read_csv(path)


def _read_review_folders(path: Path, text_col: str, label_col: str) -> pd.DataFrame:
    rows = []
    for label in ("pos", "neg"):
        for fname in sorted((path / label).glob("*.txt")):
            rows.append((fname.read_text(encoding="utf-8").strip(), label))
    return pd.DataFrame(rows, columns=[text_col, label_col])


@dataclass(frozen=True)
class DatasetRef:
    """Handle to one split of the review data."""

    path: Path
    text_col: str = "review"
    label_col: str = "sentiment"

    def __post_init__(self):
        object.__setattr__(self, "path", Path(self.path))

    @property
    def is_review_folders(self) -> bool:
        return (self.path / "pos").is_dir() and (self.path / "neg").is_dir()

    def part_files(self) -> List[Path]:
        if self.path.is_file():
            return [self.path]
        return sorted(p for p in self.path.iterdir() if p.suffix in TABULAR_SUFFIXES)

    def check(self) -> "DatasetRef":
        if not self.path.exists():
            raise FileNotFoundError(f"Dataset not found: {self.path}")
        if self.path.is_file() and self.path.suffix not in TABULAR_SUFFIXES:
            raise ValueError(f"Unsupported dataset file type: {self.path.suffix}")
        if self.path.is_dir() and not self.is_review_folders and not self.part_files():
            raise FileNotFoundError(f"No .csv/.parquet part files under {self.path}")
        return self

    def read(self, clean: bool = True) -> pd.DataFrame:
        self.check()
        if self.is_review_folders:
            df = _read_review_folders(self.path, self.text_col, self.label_col)
        else:
            df = pd.concat(
                [_read_table(p) for p in self.part_files()], ignore_index=True
            )

        missing = [c for c in (self.text_col, self.label_col) if c not in df.columns]
        if missing:
            raise ValueError(
                f"{self.path}: missing columns {missing}; available: {list(df.columns)}"
            )

        df = df.dropna(subset=[self.text_col, self.label_col]).reset_index(drop=True)
        df[self.label_col] = normalize_labels(df[self.label_col])
        df[self.text_col] = df[self.text_col].astype(str)
        if clean:
            df[self.text_col] = df[self.text_col].map(normalize_text)
        return df

    def __str__(self) -> str:
        return str(self.path)


def resolve_datasets(
    train_path: str | Path,
    test_path: str | Path,
    text_col: str = "review",
    label_col: str = "sentiment",
) -> Tuple[DatasetRef, DatasetRef]:
    train = DatasetRef(train_path, text_col, label_col).check()
    test = DatasetRef(test_path, text_col, label_col).check()
    print(f"[data] train={train}  test={test}")
    return train, test
