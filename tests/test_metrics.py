import numpy as np
import pandas as pd
import pytest

from sentiment_compare.core.coefficients import select_top_coefficients, split_by_sentiment
from sentiment_compare.core.metrics import (
    auc_scores,
    confusion_matrices,
    roc_curves,
    summarize_models,
)


@pytest.fixture
def table():
    return pd.DataFrame(
        {
            "sentiment": [0, 0, 1, 1, 0, 1],
            "perfect": [0.1, 0.2, 0.9, 0.8, 0.3, 0.7],
            "inverted": [0.9, 0.8, 0.1, 0.2, 0.7, 0.3],
        }
    )


def test_roc_curves_long_format(table):
    roc = roc_curves(table, "sentiment")
    assert list(roc.columns) == ["model", "threshold", "fpr", "tpr"]
    assert list(roc["model"].unique()) == ["perfect", "inverted"]
    for _, g in roc.groupby("model"):
        assert g["fpr"].is_monotonic_increasing
        assert g["tpr"].is_monotonic_increasing
        assert g["fpr"].iloc[-1] == 1.0 and g["tpr"].iloc[-1] == 1.0


def test_auc_scores(table):
    auc = auc_scores(table, "sentiment")
    assert auc["perfect"] == 1.0
    assert auc["inverted"] == 0.0
    assert auc_scores(table, "sentiment", ["perfect"]).index.tolist() == ["perfect"]


def test_summary_and_confusion(table):
    summary = summarize_models(table, "sentiment")
    assert summary.loc["perfect", "accuracy"] == 1.0
    assert summary.loc["inverted", "f1"] == 0.0
    cms = confusion_matrices(table, "sentiment")
    np.testing.assert_array_equal(cms["perfect"], [[3, 0], [0, 3]])


def test_single_class_labels_rejected(table):
    with pytest.raises(ValueError, match="both classes"):
        roc_curves(table.assign(sentiment=1), "sentiment")


def test_unknown_score_column(table):
    with pytest.raises(KeyError):
        auc_scores(table, "sentiment", ["missing"])


@pytest.fixture
def coefs():
    rng = np.random.default_rng(7)
    values = rng.normal(size=300)
    values[:4] = [2.5, -2.5, 0.0, 3.0]
    index = ["(Bias)"] + [f"term{i:03d}" for i in range(1, 300)]
    return pd.Series(values, index=index)


def test_top_coefficients_deterministic(coefs):
    a = select_top_coefficients(coefs, n=100)
    b = select_top_coefficients(coefs.sample(frac=1.0, random_state=3), n=100)
    pd.testing.assert_frame_equal(a, b)
    assert len(a) == 100
    assert "(Bias)" not in set(a["term"])
    assert a["magnitude"].is_monotonic_decreasing


def test_top_coefficients_sign_and_ties():
    s = pd.Series({"(Bias)": 9.0, "bad": -1.0, "good": 1.0, "meh": 0.0, "fine": 0.5})
    top = select_top_coefficients(s, n=3)
    assert top["term"].tolist() == ["bad", "good", "fine"]
    assert top["sentiment"].tolist() == ["negative", "positive", "positive"]

    with_bias = select_top_coefficients(s, n=1, drop_bias=False)
    assert with_bias["term"].tolist() == ["(Bias)"]


def test_top_coefficients_n_larger_than_vector():
    s = pd.Series({"a": 1.0, "b": -2.0})
    assert len(select_top_coefficients(s, n=100)) == 2


def test_split_by_sentiment():
    s = pd.Series({"bad": -1.0, "good": 2.0})
    freqs = split_by_sentiment(select_top_coefficients(s))
    assert freqs == {"positive": {"good": 2.0}, "negative": {"bad": 1.0}}


def test_zero_coefficients_have_no_sentiment():
    s = pd.Series({"(Bias)": 0.4, "great": 1.0, "plot": 0.0, "movie": 0.0, "dull": -0.5})
    top = select_top_coefficients(s, n=100)
    assert top["term"].tolist() == ["great", "dull"]
    assert top["sentiment"].tolist() == ["positive", "negative"]
    assert split_by_sentiment(top) == {"positive": {"great": 1.0}, "negative": {"dull": 0.5}}


def test_all_zero_coefficients_give_empty_selection():
    top = select_top_coefficients(pd.Series({"plot": 0.0, "movie": -0.0}))
    assert top.empty
    assert list(top.columns) == ["term", "coefficient", "magnitude", "sentiment"]
