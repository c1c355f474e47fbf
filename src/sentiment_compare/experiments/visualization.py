# visualization.py
from pathlib import Path
from typing import Dict

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from wordcloud import WordCloud

from ..core.coefficients import split_by_sentiment

SENTIMENT_COLORS = {"positive": "#2a9d4b", "negative": "#c0392b"}


def plot_coefficients(top: pd.DataFrame, save_dir: Path, max_labels: int = 30) -> Path:
    """Scatter of coefficient vs. rank, the largest terms written next to their point."""
    save_dir = Path(save_dir)
    save_dir.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(10, 7))
    if len(top):
        colors = top["sentiment"].map(SENTIMENT_COLORS).tolist()
        ax.scatter(np.arange(len(top)), top["coefficient"], c=colors, s=18)
    for i, row in top.head(max_labels).iterrows():
        ax.text(i, row["coefficient"], f" {row['term']}", fontsize=8, color=SENTIMENT_COLORS[row["sentiment"]])
    ax.axhline(0, color="gray", linewidth=0.8)
    ax.set_xlabel("Rank by |coefficient|")
    ax.set_ylabel("Coefficient")
    ax.set_title(f"Top {len(top)} logistic regression coefficients")

    out = save_dir / "coefficients.png"
    plt.tight_layout()
    plt.savefig(out, dpi=200)
    plt.close(fig)
    print(f"[plot] coefficients -> {out}")
    return out


def plot_word_clouds(top: pd.DataFrame, save_dir: Path) -> Path:
    """Positive terms in greens, negative in reds, sized by |coefficient|."""
    save_dir = Path(save_dir)
    save_dir.mkdir(parents=True, exist_ok=True)
    freqs = split_by_sentiment(top)

    fig, axes = plt.subplots(1, 2, figsize=(14, 6))
    for ax, (sentiment, cmap) in zip(axes, (("positive", "Greens"), ("negative", "Reds"))):
        words = {w: f for w, f in freqs[sentiment].items() if f > 0}
        if words:
            wc = WordCloud(
                width=600, height=500, background_color="white", colormap=cmap
            ).generate_from_frequencies(words)
            ax.imshow(wc, interpolation="bilinear")
        else:
            ax.text(0.5, 0.5, "no terms", ha="center", va="center")
        ax.set_title(f"{sentiment.capitalize()} sentiment ({len(words)} terms)")
        ax.axis("off")

    out = save_dir / "word_clouds.png"
    plt.tight_layout()
    plt.savefig(out, dpi=150)
    plt.close(fig)
    print(f"[plot] word clouds -> {out}")
    return out


def plot_roc_curves(roc: pd.DataFrame, auc: pd.Series, save_dir: Path) -> Path:
    save_dir = Path(save_dir)
    save_dir.mkdir(parents=True, exist_ok=True)
    sns.set_theme(style="whitegrid")

    fig, ax = plt.subplots(figsize=(7, 6))
    for model, g in roc.groupby("model", sort=False):
        ax.plot(g["fpr"], g["tpr"], linewidth=2, label=f"{model} (AUC={auc[model]:.3f})")
    ax.plot([0, 1], [0, 1], linestyle="--", color="gray", label="chance")
    ax.set_xlabel("False Positive Rate")
    ax.set_ylabel("True Positive Rate")
    ax.set_title("ROC curves")
    ax.legend(loc="lower right")

    out = save_dir / "roc_curves.png"
    plt.tight_layout()
    plt.savefig(out, dpi=200)
    plt.close(fig)
    print(f"[plot] ROC curves -> {out}")
    return out


def plot_confusion_matrices(cms: Dict[str, np.ndarray], save_dir: Path) -> Path:
    """Plot confusion matrices for all models"""
    save_dir = Path(save_dir)
    save_dir.mkdir(parents=True, exist_ok=True)
    n_models = len(cms)
    if n_models == 0:
        raise ValueError("No confusion matrices to plot")

    fig, axes = plt.subplots(1, n_models, figsize=(5 * n_models, 4))
    if n_models == 1:
        axes = [axes]

    for ax, (model_name, cm) in zip(axes, cms.items()):
        sns.heatmap(
            np.asarray(cm).astype(int),
            annot=True,
            fmt="d",
            cmap="Blues",
            ax=ax,
            cbar=True,
            square=True,
        )
        ax.set_title(f"{model_name}\nConfusion Matrix")
        ax.set_xlabel("Predicted")
        ax.set_ylabel("Actual")
        ax.set_xticklabels(["Negative", "Positive"])
        ax.set_yticklabels(["Negative", "Positive"])

    out = save_dir / "confusion_matrices.png"
    plt.tight_layout()
    plt.savefig(out, dpi=200, bbox_inches="tight")
    plt.close(fig)
    print(f"[plot] confusion matrices -> {out}")
    return out


def export_summary_table(summary: pd.DataFrame, save_dir: Path) -> Path:
    save_dir = Path(save_dir)
    save_dir.mkdir(parents=True, exist_ok=True)
    out = save_dir / "model_summary.csv"
    summary.to_csv(out)
    (save_dir / "model_summary.md").write_text(
        summary.reset_index().to_markdown(index=False, floatfmt=".4f"), encoding="utf-8"
    )
    return out
