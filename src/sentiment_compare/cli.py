#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Command line entry point for the sentiment model comparison.

Defaults come from ``PipelineConfig``; ``--config`` loads a JSON file and the
remaining flags override individual fields. Failures are not caught: the
run aborts with the original exception.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from .config import MODEL_NAMES, PipelineConfig
from .experiments.experimental_pipeline import ExperimentalPipeline


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Train and compare IMDb sentiment models")
    ap.add_argument("--config", type=Path, default=None, help="JSON file with PipelineConfig fields")
    ap.add_argument("--train", default=None, help="Training split (file or directory)")
    ap.add_argument("--test", default=None, help="Test split (file or directory)")
    ap.add_argument("--text-col", default=None)
    ap.add_argument("--label-col", default=None)
    ap.add_argument("--results-dir", default=None)
    ap.add_argument("--compute-context", choices=["local", "distributed"], default=None)
    ap.add_argument("--ngram", type=int, default=None, help="Largest n-gram length")
    ap.add_argument("--top-n", type=int, default=None, help="Coefficients shown in the word clouds")
    ap.add_argument("--models", nargs="+", choices=list(MODEL_NAMES), default=None)
    ap.add_argument("--seed", type=int, default=None)
    return ap


def config_from_args(args: argparse.Namespace) -> PipelineConfig:
    config = PipelineConfig.from_json(args.config) if args.config else PipelineConfig()
    return config.with_overrides(
        train_path=args.train,
        test_path=args.test,
        text_col=args.text_col,
        label_col=args.label_col,
        results_dir=args.results_dir,
        compute_context=args.compute_context,
        ngram_length=args.ngram,
        top_n=args.top_n,
        models=tuple(args.models) if args.models else None,
        random_state=args.seed,
    )


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    config = config_from_args(args)
    print(f"[config] {config.to_dict()}")
    out = ExperimentalPipeline(config).run()
    print(f"Saved summary: {out['results_path']}")


if __name__ == "__main__":
    main()
