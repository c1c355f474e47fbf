#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Main Experimental Pipeline for IMDb Sentiment Model Comparison

Trains penalized logistic regression, boosted trees and a small neural
network on the same n-gram features, scores the held-out split with each,
and compares them.

The pipeline coordinates:
1. Dataset resolution (train/test references)
2. Featurizer configuration
3. Model training
4. Prediction and assembly of the prediction table
5. ROC / metric evaluation
6. Visualization (coefficients, word clouds, ROC curves)
7. Results saving
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd

from ..config import PipelineConfig
from ..core.coefficients import select_top_coefficients
from ..core.compute_context import get_compute_context
from ..core.featurizer import FeaturizerSpec
from ..core.formula import Formula
from ..core.metrics import auc_scores, confusion_matrices, roc_curves, summarize_models
from ..core.predictor import merge_predictions, predict
from ..data_loader import resolve_datasets
from ..models.models_registry import train_model
from .visualization import (
    export_summary_table,
    plot_coefficients,
    plot_confusion_matrices,
    plot_roc_curves,
    plot_word_clouds,
)


def _banner(title: str):
    print("\n" + "=" * 60)
    print(title)
    print("=" * 60)


class ExperimentalPipeline:
    """
    Sequential train / predict / evaluate pipeline.

    Each step stores its output on the instance for the next step to use;
    calling a step before its prerequisite raises ``RuntimeError``.
    """

    def __init__(self, config: Optional[PipelineConfig] = None):
        self.config = config or PipelineConfig()
        self.formula = Formula.parse(self.config.formula)
        self.context = get_compute_context(self.config.compute_context)
        self.results_dir = Path(self.config.results_dir)

        self.train_ref = None
        self.test_ref = None
        self.featurizer: Optional[FeaturizerSpec] = None
        self.models: Dict[str, Any] = {}
        self.predictions: Optional[pd.DataFrame] = None
        self.roc: Optional[pd.DataFrame] = None
        self.auc: Optional[pd.Series] = None
        self.summary: Optional[pd.DataFrame] = None
        self.top_coefficients: Optional[pd.DataFrame] = None
        self.figures: Dict[str, str] = {}

    def _require(self, attr: str, step: str):
        value = getattr(self, attr)
        if value is None or (isinstance(value, dict) and not value):
            raise RuntimeError(f"Run {step}() first")
        return value

    def load_data(self):
        _banner("STEP 1: Resolving Datasets")
        self.train_ref, self.test_ref = resolve_datasets(
            self.config.train_path,
            self.config.test_path,
            text_col=self.config.text_col,
            label_col=self.config.label_col,
        )
        return self.train_ref, self.test_ref

    def build_featurizer(self) -> FeaturizerSpec:
        _banner("STEP 2: Featurizer Configuration")
        self.featurizer = FeaturizerSpec(ngram_length=self.config.ngram_length)
        print(f"[featurizer] {self.featurizer}")
        return self.featurizer

    def train_models(self) -> Dict[str, Any]:
        _banner("STEP 3: Training Models")
        train_ref = self._require("train_ref", "load_data")
        featurizer = self._require("featurizer", "build_featurizer")

        # read once, every trainer gets the same table
        train_df = train_ref.read()
        print(
            f"[data] train rows={len(train_df)}, "
            f"balance={train_df[self.config.label_col].value_counts().to_dict()}"
        )
        for name in self.config.models:
            params = dict(vars(self.config.params_for(name)))
            params["random_state"] = self.config.random_state
            self.models[name] = train_model(
                name, self.formula, train_df, featurizer, params, context=self.context
            )
        return self.models

    def predict(self) -> pd.DataFrame:
        _banner("STEP 4: Scoring Test Data")
        test_ref = self._require("test_ref", "load_data")
        models = self._require("models", "train_models")

        test_df = test_ref.read()
        tables = [
            predict(model, test_df, f"{name}_probability", context=self.context)
            for name, model in models.items()
        ]
        self.predictions = merge_predictions(tables, self.config.label_col)
        print(f"[predict] merged table: {self.predictions.shape}")
        return self.predictions

    def evaluate(self) -> pd.DataFrame:
        _banner("STEP 5: Evaluating Models")
        predictions = self._require("predictions", "predict")
        label = self.config.label_col

        self.roc = roc_curves(predictions, label)
        self.auc = auc_scores(predictions, label)
        self.summary = summarize_models(predictions, label)
        if "logistic" in self.models:
            self.top_coefficients = select_top_coefficients(
                self.models["logistic"].coefficients(), n=self.config.top_n
            )

        print("\nModel summary:")
        print(self.summary.round(4))
        return self.summary

    def create_visualizations(self) -> Dict[str, str]:
        _banner("STEP 6: Creating Visualizations")
        self._require("summary", "evaluate")
        label = self.config.label_col
        figures = {
            "roc_curves": plot_roc_curves(self.roc, self.auc, self.results_dir),
            "confusion_matrices": plot_confusion_matrices(
                confusion_matrices(self.predictions, label), self.results_dir
            ),
        }
        if self.top_coefficients is not None:
            figures["coefficients"] = plot_coefficients(self.top_coefficients, self.results_dir)
            figures["word_clouds"] = plot_word_clouds(self.top_coefficients, self.results_dir)
        self.figures = {k: str(v) for k, v in figures.items()}
        return self.figures

    def save_results(self) -> Path:
        _banner("STEP 7: Saving Results")
        summary = self._require("summary", "evaluate")
        self.results_dir.mkdir(parents=True, exist_ok=True)

        export_summary_table(summary, self.results_dir)
        self.predictions.to_csv(self.results_dir / "predictions.csv", index=False)
        if self.top_coefficients is not None:
            self.top_coefficients.to_csv(self.results_dir / "top_coefficients.csv", index=False)

        results = {
            "config": self.config.to_dict(),
            "featurizer": vars(self.featurizer) if self.featurizer else None,
            "auc": self.auc.to_dict(),
            "summary": summary.to_dict(orient="index"),
            "figures": self.figures,
        }
        results_path = (
            self.results_dir
            / f"experiment_results_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"
        )
        with open(results_path, "w", encoding="utf-8") as f:
            json.dump(results, f, indent=2, sort_keys=True, ensure_ascii=False)
        print(f"Results saved to: {results_path}")
        return results_path

    def run(self) -> Dict[str, Any]:
        self.load_data()
        self.build_featurizer()
        self.train_models()
        self.predict()
        self.evaluate()
        self.create_visualizations()
        results_path = self.save_results()
        return {"summary": self.summary, "auc": self.auc, "results_path": results_path}
