# Core components for sentiment model comparison

from .compute_context import ComputeContext, get_compute_context
from .featurizer import FeaturizerSpec
from .formula import Formula
from .predictor import predict, rename_score_column, merge_predictions
from .metrics import roc_curves, auc_scores, summarize_models, confusion_matrices
from .coefficients import select_top_coefficients, split_by_sentiment

__all__ = [
    "ComputeContext",
    "get_compute_context",
    "FeaturizerSpec",
    "Formula",
    "predict",
    "rename_score_column",
    "merge_predictions",
    "roc_curves",
    "auc_scores",
    "summarize_models",
    "confusion_matrices",
    "select_top_coefficients",
    "split_by_sentiment",
]
