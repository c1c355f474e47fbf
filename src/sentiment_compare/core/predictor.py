# predictor.py
"""
Scoring and assembly of prediction tables.

A prediction table holds the label column plus one score column per model.
Each ``predict`` call produces a two-column table; ``merge_predictions``
joins several of them side by side.
"""
from __future__ import annotations

from typing import Iterable, List, Optional

import pandas as pd

from .compute_context import ComputeContext


def _score_columns(table: pd.DataFrame, label_col: str) -> List[str]:
    return [c for c in table.columns if c != label_col]


def rename_score_column(table: pd.DataFrame, new_name: str, label_col: str) -> pd.DataFrame:
    """Rename the single score column of ``table`` to ``new_name``."""
    if label_col not in table.columns:
        raise KeyError(f"Label column '{label_col}' not in table")
    scores = _score_columns(table, label_col)
    if len(scores) != 1:
        raise ValueError(f"Expected exactly one score column, found {scores}")
    if new_name == label_col:
        raise ValueError(f"Score column cannot take the label name '{label_col}'")
    if scores[0] == new_name:
        return table
    return table.rename(columns={scores[0]: new_name})


def predict(
    model,
    data,
    score_name: str,
    context: Optional[ComputeContext] = None,
) -> pd.DataFrame:
    """Score ``data`` with ``model``: label column plus one column named ``score_name``.

    The score is the probability of the positive class. The label column and
    the row order are those of ``data``.
    """
    df = data.read() if hasattr(data, "read") else data
    label_col = model.formula.label
    if label_col not in df.columns:
        raise KeyError(f"Label column '{label_col}' not in data")

    context = context or ComputeContext.local()
    with context.activate():
        proba = model.predict_proba(df)[:, 1]

    out = df[[label_col]].copy()
    out["Probability" if label_col != "Probability" else "Scored Probability"] = proba
    print(f"[predict] {score_name}: rows={len(out)}")
    return rename_score_column(out, score_name, label_col)


def merge_predictions(tables: Iterable[pd.DataFrame], label_col: str) -> pd.DataFrame:
    """Join prediction tables column-wise, keeping rows and order of the first."""
    tables = list(tables)
    if not tables:
        raise ValueError("No prediction tables to merge")

    merged = tables[0].copy()
    n_rows = len(merged)
    for t in tables[1:]:
        if len(t) != n_rows:
            raise ValueError(f"Row count mismatch: {len(t)} != {n_rows}")
        if not t[label_col].reset_index(drop=True).equals(
            merged[label_col].reset_index(drop=True)
        ):
            raise ValueError("Label columns differ between prediction tables")
        for col in _score_columns(t, label_col):
            if col in merged.columns:
                raise ValueError(f"Duplicate score column: {col}")
            merged[col] = t[col].to_numpy()
    return merged
