#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Evaluation of merged prediction tables.

Every function takes a table with one label column and one score column
per model (probability of the positive class), as built by
``predictor.merge_predictions``:
- ROC curves (long format, one block of rows per model)
- ROC AUC per model
- Thresholded accuracy / precision / recall / F1 summary
- Confusion matrices
"""

from typing import Dict, List, Optional

import numpy as np
import pandas as pd
from sklearn.metrics import (
    accuracy_score,
    confusion_matrix,
    f1_score,
    precision_score,
    recall_score,
    roc_auc_score,
    roc_curve,
)


def _resolve_scores(
    table: pd.DataFrame, label_col: str, score_cols: Optional[List[str]]
) -> List[str]:
    if label_col not in table.columns:
        raise KeyError(f"Label column '{label_col}' not in table")
    if score_cols is None:
        score_cols = [c for c in table.columns if c != label_col]
    missing = [c for c in score_cols if c not in table.columns]
    if missing:
        raise KeyError(f"Score columns not in table: {missing}")
    if not score_cols:
        raise ValueError("No score columns to evaluate")
    if table[label_col].nunique() < 2:
        raise ValueError("ROC needs both classes in the label column")
    return list(score_cols)


def roc_curves(
    table: pd.DataFrame, label_col: str, score_cols: Optional[List[str]] = None
) -> pd.DataFrame:
    """
    Compute ROC curves for all score columns.

    Args:
        table: Prediction table
        label_col: Name of the 0/1 label column
        score_cols: Models to include (default: every non-label column)

    Returns:
        DataFrame with columns model, threshold, fpr, tpr
    """
    score_cols = _resolve_scores(table, label_col, score_cols)
    y = table[label_col].to_numpy()
    parts = []
    for col in score_cols:
        fpr, tpr, thr = roc_curve(y, table[col].to_numpy())
        parts.append(
            pd.DataFrame({"model": col, "threshold": thr, "fpr": fpr, "tpr": tpr})
        )
    return pd.concat(parts, ignore_index=True)


def auc_scores(
    table: pd.DataFrame, label_col: str, score_cols: Optional[List[str]] = None
) -> pd.Series:
    score_cols = _resolve_scores(table, label_col, score_cols)
    y = table[label_col].to_numpy()
    return pd.Series(
        {col: float(roc_auc_score(y, table[col].to_numpy())) for col in score_cols},
        name="auc",
    )


def summarize_models(
    table: pd.DataFrame,
    label_col: str,
    threshold: float = 0.5,
    score_cols: Optional[List[str]] = None,
) -> pd.DataFrame:
    """Per-model accuracy, precision, recall, F1 and AUC (one row per model)."""
    score_cols = _resolve_scores(table, label_col, score_cols)
    y = table[label_col].to_numpy()
    auc = auc_scores(table, label_col, score_cols)
    rows = []
    for col in score_cols:
        pred = (table[col].to_numpy() >= threshold).astype(int)
        rows.append(
            {
                "model": col,
                "accuracy": accuracy_score(y, pred),
                "precision": precision_score(y, pred, zero_division=0),
                "recall": recall_score(y, pred, zero_division=0),
                "f1": f1_score(y, pred, zero_division=0),
                "auc": auc[col],
            }
        )
    return pd.DataFrame(rows).set_index("model")


def confusion_matrices(
    table: pd.DataFrame,
    label_col: str,
    threshold: float = 0.5,
    score_cols: Optional[List[str]] = None,
) -> Dict[str, np.ndarray]:
    score_cols = _resolve_scores(table, label_col, score_cols)
    y = table[label_col].to_numpy()
    return {
        col: confusion_matrix(y, (table[col].to_numpy() >= threshold).astype(int), labels=[0, 1])
        for col in score_cols
    }
