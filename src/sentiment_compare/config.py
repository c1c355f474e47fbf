# config.py
"""
Run configuration for the sentiment model comparison.

Defaults are the literal parameters the experiment was tuned with; the
runner script overrides them from the command line or from a JSON file.
"""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class LogisticParams:
    l1_weight: float = 1.0
    l2_weight: float = 1.0
    max_iter: int = 1000


@dataclass(frozen=True)
class FastTreesParams:
    num_trees: int = 100
    num_leaves: int = 20
    learning_rate: float = 0.2
    min_split: int = 10


@dataclass(frozen=True)
class NeuralNetParams:
    num_hidden_nodes: int = 100
    num_iterations: int = 10
    mini_batch_size: int = 16
    learning_rate: float = 0.01


MODEL_NAMES: Tuple[str, ...] = ("logistic", "fast_trees", "neural_net")

_PARAM_TYPES = {
    "logistic": LogisticParams,
    "fast_trees": FastTreesParams,
    "neural_net": NeuralNetParams,
}


@dataclass
class PipelineConfig:
    train_path: str = "data/imdb_train"
    test_path: str = "data/imdb_test"
    text_col: str = "review"
    label_col: str = "sentiment"
    results_dir: str = "results"
    compute_context: str = "local"
    ngram_length: int = 2
    top_n: int = 100
    random_state: int = 42
    models: Tuple[str, ...] = MODEL_NAMES
    logistic: LogisticParams = field(default_factory=LogisticParams)
    fast_trees: FastTreesParams = field(default_factory=FastTreesParams)
    neural_net: NeuralNetParams = field(default_factory=NeuralNetParams)

    def __post_init__(self):
        self.models = tuple(self.models)
        unknown = [m for m in self.models if m not in MODEL_NAMES]
        if unknown:
            raise ValueError(f"Unknown models {unknown}; choose from {list(MODEL_NAMES)}")
        if not self.models:
            raise ValueError("At least one model must be selected")

    @property
    def formula(self) -> str:
        return f"{self.label_col} ~ {self.text_col}"

    def params_for(self, model: str):
        return getattr(self, model)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["models"] = list(self.models)
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PipelineConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {unknown}")

        kwargs = dict(data)
        for name, ptype in _PARAM_TYPES.items():
            if name in kwargs and isinstance(kwargs[name], dict):
                block = kwargs[name]
                pknown = {f.name for f in fields(ptype)}
                bad = sorted(set(block) - pknown)
                if bad:
                    raise ValueError(f"Unknown keys for {name}: {bad}")
                kwargs[name] = ptype(**block)
        return cls(**kwargs)

    @classmethod
    def from_json(cls, path: str | Path) -> "PipelineConfig":
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))

    def with_overrides(self, **changes: Optional[Any]) -> "PipelineConfig":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **changes)
