# base.py
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from ..core.featurizer import FeaturizerSpec
from ..core.formula import Formula


class FeaturizedModel:
    """Formula + featurizer + classifier, fitted on a labelled review table.

    Subclasses implement ``_validate``, ``_fit_features`` and
    ``_positive_proba`` on the vectorized (sparse) matrix.
    """

    name = "model"

    def __init__(self, formula, featurizer: Optional[FeaturizerSpec] = None, **params: Dict[str, Any]):
        self.formula = formula if isinstance(formula, Formula) else Formula.parse(formula)
        self.featurizer = featurizer or FeaturizerSpec()
        self.p = params
        self._validate()
        self.vectorizer = None
        self.n_train = 0

    # ---------- hooks ----------
    def _validate(self):
        pass

    def _fit_features(self, X, y: np.ndarray):
        raise NotImplementedError

    def _positive_proba(self, X) -> np.ndarray:
        raise NotImplementedError

    # ---------- api ----------
    @property
    def is_fitted(self) -> bool:
        return self.vectorizer is not None

    def feature_names(self) -> List[str]:
        self._require_fitted()
        return list(self.vectorizer.get_feature_names_out())

    def fit(self, df: pd.DataFrame):
        self.formula.check(df)
        y = df[self.formula.label].astype(int).to_numpy()
        if len(np.unique(y)) < 2:
            raise ValueError(f"{self.name}: training labels contain a single class")

        self.vectorizer = self.featurizer.build()
        X = self.vectorizer.fit_transform(self.formula.text(df))
        print(f"[train] {self.name}: rows={X.shape[0]} features={X.shape[1]}")
        self._fit_features(X, y)
        self.n_train = X.shape[0]
        return self

    def transform(self, df: pd.DataFrame):
        self._require_fitted()
        missing = [c for c in self.formula.features if c not in df.columns]
        if missing:
            raise KeyError(f"Columns not in data: {missing}")
        return self.vectorizer.transform(self.formula.text(df))

    def predict_proba(self, df: pd.DataFrame) -> np.ndarray:
        p1 = self._positive_proba(self.transform(df))
        return np.vstack([1 - p1, p1]).T

    def predict(self, df: pd.DataFrame, threshold: float = 0.5) -> np.ndarray:
        return (self.predict_proba(df)[:, 1] >= threshold).astype(int)

    def _require_fitted(self):
        if not self.is_fitted:
            raise RuntimeError(f"{self.name} has not been trained")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.formula}, params={self.p})"
