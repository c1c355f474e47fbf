import random

import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest

from sentiment_compare.config import FastTreesParams, NeuralNetParams, PipelineConfig

POSITIVE = ["great", "wonderful", "excellent", "loved", "brilliant", "moving"]
NEGATIVE = ["terrible", "awful", "boring", "hated", "dull", "waste"]
FILLER = ["movie", "film", "plot", "acting", "story", "ending", "cast", "scene"]


def make_reviews(n: int, seed: int = 0) -> pd.DataFrame:
    rng = random.Random(seed)
    rows = []
    for i in range(n):
        positive = i % 2 == 0
        cue = POSITIVE if positive else NEGATIVE
        words = rng.sample(cue, 2) + rng.sample(FILLER, 4)
        rng.shuffle(words)
        ending = "! Rated 10/10<br />" if positive else "... 1/10"
        text = "The " + " ".join(words) + ending
        rows.append((text, "positive" if positive else "negative"))
    return pd.DataFrame(rows, columns=["review", "sentiment"])


@pytest.fixture
def reviews():
    return make_reviews(60, seed=1)


@pytest.fixture
def labelled_reviews(reviews):
    df = reviews.copy()
    df["sentiment"] = (df["sentiment"] == "positive").astype(int)
    return df


@pytest.fixture
def split_files(tmp_path):
    train = tmp_path / "train.csv"
    test = tmp_path / "test.csv"
    make_reviews(80, seed=2).to_csv(train, index=False)
    make_reviews(30, seed=3).to_csv(test, index=False)
    return train, test


@pytest.fixture
def small_config(split_files, tmp_path):
    train, test = split_files
    return PipelineConfig(
        train_path=str(train),
        test_path=str(test),
        results_dir=str(tmp_path / "results"),
        top_n=20,
        fast_trees=FastTreesParams(num_trees=10, num_leaves=4, min_split=4),
        neural_net=NeuralNetParams(num_hidden_nodes=8, num_iterations=3, mini_batch_size=8),
    )
