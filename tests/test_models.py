import numpy as np
import pytest

from sentiment_compare.config import FastTreesParams, LogisticParams, NeuralNetParams
from sentiment_compare.core.coefficients import select_top_coefficients
from sentiment_compare.core.compute_context import ComputeContext
from sentiment_compare.core.featurizer import FeaturizerSpec
from sentiment_compare.data_loader import DatasetRef
from sentiment_compare.models import (
    BoostedTrees,
    NeuralNetwork,
    PenalizedLogisticRegression,
    get_trainer,
    train_model,
)

FORMULA = "sentiment ~ review"


@pytest.mark.parametrize(
    "alias,name",
    [("lr", "logistic"), ("Logistic", "logistic"), ("gbt", "fast_trees"), ("nn", "neural_net")],
)
def test_registry_aliases(alias, name):
    canonical, factory, defaults = get_trainer(alias)
    assert canonical == name
    assert callable(factory)


def test_registry_unknown_model():
    with pytest.raises(ValueError, match="Unknown model"):
        get_trainer("svm")


def test_logistic_learns_sentiment_terms(labelled_reviews):
    model = train_model(
        "logistic",
        FORMULA,
        labelled_reviews,
        FeaturizerSpec(ngram_length=1),
        params=LogisticParams(l1_weight=0.01, l2_weight=0.01),
    )
    assert isinstance(model, PenalizedLogisticRegression)

    coefs = model.coefficients()
    assert coefs.index[0] == "(Bias)"
    assert len(coefs) == len(model.feature_names()) + 1
    assert coefs["great"] > 0
    assert coefs["awful"] < 0

    proba = model.predict_proba(labelled_reviews)
    assert proba.shape == (len(labelled_reviews), 2)
    np.testing.assert_allclose(proba.sum(axis=1), 1.0)
    assert (model.predict(labelled_reviews) == labelled_reviews["sentiment"]).mean() > 0.9


def test_top_coefficients_skip_zeroed_terms(labelled_reviews):
    model = train_model("logistic", FORMULA, labelled_reviews, FeaturizerSpec(ngram_length=1))
    coefs = model.coefficients().drop("(Bias)")
    nonzero = coefs[coefs != 0]
    # cue words that survive the l1 part keep their sign
    assert all(nonzero.get(w, 1.0) > 0 for w in ("great", "wonderful", "excellent"))
    assert all(nonzero.get(w, -1.0) < 0 for w in ("awful", "terrible", "boring"))

    top = select_top_coefficients(model.coefficients(), n=100)
    assert len(top) == len(nonzero)
    assert (top["coefficient"] != 0).all()


def test_logistic_without_penalty(labelled_reviews):
    model = train_model(
        "logistic", FORMULA, labelled_reviews, params=LogisticParams(l1_weight=0, l2_weight=0)
    )
    assert np.isinf(model.cls.C)


def test_logistic_penalty_mapping_and_seed(labelled_reviews):
    params = {"l1_weight": 3.0, "l2_weight": 1.0, "random_state": 7}
    model = train_model("logistic", FORMULA, labelled_reviews, params=params)
    assert model.cls.C == pytest.approx(0.25)
    assert model.cls.l1_ratio == pytest.approx(0.75)
    assert model.cls.random_state == 7


def test_boosted_trees_from_dataset_ref(split_files):
    ref = DatasetRef(split_files[0])
    params = FastTreesParams(num_trees=10, num_leaves=4, min_split=4)
    model = train_model("fast_trees", FORMULA, ref, params=params)
    assert isinstance(model, BoostedTrees)
    assert model.cls.n_estimators == 10
    assert model.n_train == 80

    proba = model.predict_proba(ref.read())[:, 1]
    assert ((proba >= 0) & (proba <= 1)).all()


def test_neural_net_scores_are_probabilities(labelled_reviews):
    params = NeuralNetParams(num_hidden_nodes=8, num_iterations=2, mini_batch_size=8)
    model = train_model("neural_net", FORMULA, labelled_reviews, params=params)
    assert isinstance(model, NeuralNetwork)

    proba = model.predict_proba(labelled_reviews)[:, 1]
    assert proba.shape == (len(labelled_reviews),)
    assert ((proba >= 0) & (proba <= 1)).all()


def test_training_under_distributed_context(labelled_reviews):
    params = FastTreesParams(num_trees=5, num_leaves=4, min_split=4)
    model = train_model(
        "fast_trees", FORMULA, labelled_reviews, params=params, context=ComputeContext.distributed(n_jobs=2)
    )
    assert model.is_fitted


@pytest.mark.parametrize(
    "model,params",
    [
        ("logistic", {"l1_weight": -1.0}),
        ("fast_trees", {"num_trees": 0}),
        ("fast_trees", {"num_leaves": 1}),
        ("neural_net", {"mini_batch_size": 0}),
        ("neural_net", {"learning_rate": 0.0}),
    ],
)
def test_unsupported_parameters_rejected_before_fit(labelled_reviews, model, params):
    with pytest.raises(ValueError):
        train_model(model, FORMULA, labelled_reviews, params=params)


def test_malformed_formula_is_fatal(labelled_reviews):
    with pytest.raises(ValueError, match="Malformed"):
        train_model("logistic", "sentiment review", labelled_reviews)


def test_single_class_training_data(labelled_reviews):
    one_class = labelled_reviews[labelled_reviews["sentiment"] == 1]
    with pytest.raises(ValueError, match="single class"):
        train_model("logistic", FORMULA, one_class)


def test_predict_before_fit():
    model = PenalizedLogisticRegression(FORMULA)
    with pytest.raises(RuntimeError):
        model.coefficients()
