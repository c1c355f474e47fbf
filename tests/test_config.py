import json

import pytest
import torch

from sentiment_compare.cli import build_parser, config_from_args
from sentiment_compare.config import LogisticParams, PipelineConfig
from sentiment_compare.core.compute_context import ComputeContext, get_compute_context


def test_defaults():
    config = PipelineConfig()
    assert config.formula == "sentiment ~ review"
    assert config.models == ("logistic", "fast_trees", "neural_net")
    assert config.logistic == LogisticParams(l1_weight=1.0, l2_weight=1.0)
    assert config.top_n == 100


def test_from_json_roundtrip(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"ngram_length": 3, "models": ["logistic"], "logistic": {"l1_weight": 0.5}})
    )
    config = PipelineConfig.from_json(path)
    assert config.ngram_length == 3
    assert config.models == ("logistic",)
    assert config.logistic.l1_weight == 0.5
    assert config.logistic.l2_weight == 1.0
    assert PipelineConfig.from_dict(config.to_dict()) == config


@pytest.mark.parametrize(
    "data",
    [{"colour": "blue"}, {"logistic": {"alpha": 1}}, {"models": ["svm"]}, {"models": []}],
)
def test_invalid_config(data):
    with pytest.raises(ValueError):
        PipelineConfig.from_dict(data)


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        PipelineConfig.from_json(tmp_path / "missing.json")


def test_cli_overrides(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"ngram_length": 3, "top_n": 50}))
    args = build_parser().parse_args(
        ["--config", str(path), "--top-n", "10", "--models", "logistic", "neural_net",
         "--compute-context", "distributed"]
    )
    config = config_from_args(args)
    assert config.ngram_length == 3
    assert config.top_n == 10
    assert config.models == ("logistic", "neural_net")
    assert config.compute_context == "distributed"


def test_compute_context_lookup():
    assert get_compute_context("local") == ComputeContext.local()
    assert get_compute_context("Distributed").backend == "loky"
    with pytest.raises(ValueError):
        get_compute_context("spark-cluster")


def test_activate_restores_torch_threads():
    before = torch.get_num_threads()
    with ComputeContext.distributed(n_jobs=1).activate() as ctx:
        assert ctx.name == "distributed"
        assert torch.get_num_threads() == 1
    assert torch.get_num_threads() == before
