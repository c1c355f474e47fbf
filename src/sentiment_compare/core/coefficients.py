# coefficients.py
from typing import Dict

import pandas as pd

BIAS_NAME = "(Bias)"


def select_top_coefficients(coefs: pd.Series, n: int = 100, drop_bias: bool = True) -> pd.DataFrame:
    """Top ``n`` terms by absolute weight, tagged positive/negative.

    Ordered by magnitude (largest first), ties by term name, so a given
    coefficient vector always yields the same rows in the same order.
    Terms with a weight of exactly 0 carry no sign and are left out, so
    fewer than ``n`` rows may come back.
    """
    if n < 1:
        raise ValueError("n must be positive")
    s = coefs.drop(BIAS_NAME, errors="ignore") if drop_bias else coefs
    df = pd.DataFrame(
        {
            "term": s.index.astype(str),
            "coefficient": s.to_numpy(dtype=float),
        }
    )
    df["magnitude"] = df["coefficient"].abs()
    df = df[df["magnitude"] > 0]
    df = df.sort_values(
        ["magnitude", "term"], ascending=[False, True], kind="mergesort"
    ).head(n)
    df = df.reset_index(drop=True)
    df["sentiment"] = pd.Series(
        ["positive" if c > 0 else "negative" for c in df["coefficient"]], dtype=object
    )
    return df


def split_by_sentiment(top: pd.DataFrame) -> Dict[str, Dict[str, float]]:
    """Word -> magnitude maps for the positive and negative word clouds."""
    out = {"positive": {}, "negative": {}}
    for term, mag, sent in top[["term", "magnitude", "sentiment"]].itertuples(index=False):
        out[sent][term] = float(mag)
    return out
