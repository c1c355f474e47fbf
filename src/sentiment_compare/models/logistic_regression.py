# logistic_regression.py
from typing import Any, Dict

import numpy as np
import pandas as pd
from sklearn.linear_model import LogisticRegression

from ..core.coefficients import BIAS_NAME
from .base import FeaturizedModel


class PenalizedLogisticRegression(FeaturizedModel):
    """Binary logistic regression with L1 + L2 penalties on n-gram features.

    params:
      - l1_weight, l2_weight: penalty strengths; mapped to sklearn's
        elastic-net as C = 1 / (l1 + l2), l1_ratio = l1 / (l1 + l2).
        Both zero means an unpenalized fit (C = inf).
      - random_state: seed for the saga sample order
      - max_iter: solver iterations (saga)
    """

    name = "logistic"

    def _validate(self):
        l1 = self.p.get("l1_weight", 1.0)
        l2 = self.p.get("l2_weight", 1.0)
        if l1 < 0 or l2 < 0:
            raise ValueError(f"l1_weight/l2_weight must be >= 0, got {l1}/{l2}")
        if self.p.get("max_iter", 1000) < 1:
            raise ValueError("max_iter must be positive")

    def _make_classifier(self) -> LogisticRegression:
        l1 = float(self.p.get("l1_weight", 1.0))
        l2 = float(self.p.get("l2_weight", 1.0))
        common = dict(
            solver="saga",
            max_iter=self.p.get("max_iter", 1000),
            random_state=self.p.get("random_state", 42),
        )
        if l1 + l2 == 0:
            return LogisticRegression(C=np.inf, **common)
        return LogisticRegression(C=1.0 / (l1 + l2), l1_ratio=l1 / (l1 + l2), **common)

    def _fit_features(self, X, y):
        self.cls = self._make_classifier()
        self.cls.fit(X, y)

    def _positive_proba(self, X) -> np.ndarray:
        return self.cls.predict_proba(X)[:, 1]

    def coefficients(self) -> pd.Series:
        """Learned weight per feature name; the intercept is under ``(Bias)``."""
        self._require_fitted()
        coefs = pd.Series(self.cls.coef_[0], index=self.feature_names(), name="coefficient")
        bias = pd.Series([self.cls.intercept_[0]], index=[BIAS_NAME], name="coefficient")
        return pd.concat([bias, coefs])


def create_logistic_factory():
    def factory(formula, featurizer, params: Dict[str, Any]):
        return PenalizedLogisticRegression(formula, featurizer, **params)

    return factory
