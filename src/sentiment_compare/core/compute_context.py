# compute_context.py
"""
Execution context for training and scoring calls.

``local`` runs everything in-process on one worker. ``distributed`` hands
scikit-learn's joblib-parallel work to a pool of worker processes and lets
torch use every core.

Only code that goes through joblib sees the worker pool. The three models
here do not: ``GradientBoostingClassifier`` and the binary saga
``LogisticRegression`` never call joblib, so for them the joblib setting is
a no-op. In practice ``distributed`` changes only torch's thread count,
which the neural network uses.
"""
from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass

import torch
from joblib import parallel_config


@dataclass(frozen=True)
class ComputeContext:
    name: str
    n_jobs: int
    backend: str

    @classmethod
    def local(cls) -> "ComputeContext":
        return cls(name="local", n_jobs=1, backend="sequential")

    @classmethod
    def distributed(cls, n_jobs: int = -1) -> "ComputeContext":
        return cls(name="distributed", n_jobs=n_jobs, backend="loky")

    @property
    def torch_threads(self) -> int:
        if self.n_jobs > 0:
            return self.n_jobs
        return os.cpu_count() or 1

    @contextmanager
    def activate(self):
        prev_threads = torch.get_num_threads()
        print(f"[context] {self.name} (backend={self.backend}, n_jobs={self.n_jobs})")
        torch.set_num_threads(self.torch_threads)
        try:
            with parallel_config(backend=self.backend, n_jobs=self.n_jobs):
                yield self
        finally:
            torch.set_num_threads(prev_threads)


def get_compute_context(name: str) -> ComputeContext:
    name = name.lower()
    if name in {"local", "localseq", "sequential"}:
        return ComputeContext.local()
    if name in {"distributed", "cluster", "parallel"}:
        return ComputeContext.distributed()
    raise ValueError(f"Unknown compute context: {name}")
