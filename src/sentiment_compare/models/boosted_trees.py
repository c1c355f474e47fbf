# boosted_trees.py
from typing import Any, Dict

import numpy as np
from sklearn.ensemble import GradientBoostingClassifier

from .base import FeaturizedModel


class BoostedTrees(FeaturizedModel):
    """Gradient-boosted decision trees over the sparse n-gram matrix."""

    name = "fast_trees"

    def _validate(self):
        if int(self.p.get("num_trees", 100)) < 1:
            raise ValueError("num_trees must be positive")
        if int(self.p.get("num_leaves", 20)) < 2:
            raise ValueError("num_leaves must be >= 2")
        if int(self.p.get("min_split", 10)) < 2:
            raise ValueError("min_split must be >= 2")
        if not 0 < float(self.p.get("learning_rate", 0.2)):
            raise ValueError("learning_rate must be positive")

    def _fit_features(self, X, y):
        self.cls = GradientBoostingClassifier(
            n_estimators=int(self.p.get("num_trees", 100)),
            max_leaf_nodes=int(self.p.get("num_leaves", 20)),
            learning_rate=float(self.p.get("learning_rate", 0.2)),
            min_samples_split=int(self.p.get("min_split", 10)),
            random_state=self.p.get("random_state", 42),
        )
        self.cls.fit(X, y)

    def _positive_proba(self, X) -> np.ndarray:
        return self.cls.predict_proba(X)[:, 1]


def create_fast_trees_factory():
    def factory(formula, featurizer, params: Dict[str, Any]):
        return BoostedTrees(formula, featurizer, **params)

    return factory
