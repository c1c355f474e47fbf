# models_registry.py
from dataclasses import asdict, is_dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from ..config import FastTreesParams, LogisticParams, NeuralNetParams
from ..core.compute_context import ComputeContext
from ..core.featurizer import FeaturizerSpec
from .boosted_trees import create_fast_trees_factory
from .logistic_regression import create_logistic_factory
from .neural_network import create_neural_net_factory


def get_trainer(model: str) -> Tuple[str, Callable, Any]:
    """
    Returns (canonical name, factory, default params).
    factory: (formula, featurizer, params dict) -> unfitted model
    """
    model = model.lower()

    if model in {"logistic", "lr", "logreg", "logistic_regression"}:
        return "logistic", create_logistic_factory(), LogisticParams()

    if model in {"fast_trees", "trees", "boosted_trees", "gbt"}:
        return "fast_trees", create_fast_trees_factory(), FastTreesParams()

    if model in {"neural_net", "nn", "neural_network", "mlp"}:
        return "neural_net", create_neural_net_factory(), NeuralNetParams()

    raise ValueError(f"Unknown model: {model}")


def train_model(
    model: str,
    formula,
    data,
    featurizer: Optional[FeaturizerSpec] = None,
    params: Any = None,
    context: Optional[ComputeContext] = None,
):
    """Train one model on a dataset reference (or an already loaded table)."""
    name, factory, defaults = get_trainer(model)
    if params is None:
        params = defaults
    if is_dataclass(params):
        params = asdict(params)
    params: Dict[str, Any] = dict(params)

    est = factory(formula, featurizer or FeaturizerSpec(), params)
    df = data.read() if hasattr(data, "read") else data
    context = context or ComputeContext.local()

    print(f"[train] {name}: formula='{est.formula}' params={params}")
    with context.activate():
        est.fit(df)
    return est
