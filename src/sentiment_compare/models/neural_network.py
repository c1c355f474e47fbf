# neural_network.py
from typing import Any, Dict

import numpy as np
import torch
import torch.nn as nn
from torch.utils.data import DataLoader, Dataset

from .base import FeaturizedModel


class _SparseRowsDS(Dataset):
    """Rows of a CSR matrix, densified one mini-batch at a time."""

    def __init__(self, X, y=None):
        self.X, self.y = X.tocsr(), y
    def __len__(self): return self.X.shape[0]
    def __getitem__(self, i): return i


def _make_collate(ds: _SparseRowsDS):
    def collate(idx):
        xb = torch.as_tensor(ds.X[idx].toarray(), dtype=torch.float32)
        if ds.y is None:
            return xb, None
        return xb, torch.as_tensor(ds.y[idx], dtype=torch.float32)

    return collate


class FeedForwardNet(nn.Module):
    def __init__(self, n_features, hid_dim):
        super().__init__()
        self.hidden = nn.Linear(n_features, hid_dim)
        self.act = nn.Sigmoid()
        self.out = nn.Linear(hid_dim, 1)

    def forward(self, x):
        return self.out(self.act(self.hidden(x))).squeeze(-1)


class NeuralNetwork(FeaturizedModel):
    """One hidden layer, SGD on mini-batches of n-gram vectors."""

    name = "neural_net"

    def _validate(self):
        if int(self.p.get("num_hidden_nodes", 100)) < 1:
            raise ValueError("num_hidden_nodes must be positive")
        if int(self.p.get("num_iterations", 10)) < 1:
            raise ValueError("num_iterations must be positive")
        if int(self.p.get("mini_batch_size", 16)) < 1:
            raise ValueError("mini_batch_size must be positive")
        if not float(self.p.get("learning_rate", 0.01)) > 0:
            raise ValueError("learning_rate must be positive")

    def _fit_features(self, X, y):
        torch.manual_seed(self.p.get("random_state", 42))
        self.device = torch.device("cuda" if torch.cuda.is_available() else "cpu")

        ds = _SparseRowsDS(X, y)
        dl = DataLoader(
            ds,
            batch_size=int(self.p.get("mini_batch_size", 16)),
            shuffle=True,
            collate_fn=_make_collate(ds),
        )
        self.model = FeedForwardNet(X.shape[1], int(self.p.get("num_hidden_nodes", 100))).to(self.device)
        optim = torch.optim.SGD(self.model.parameters(), lr=float(self.p.get("learning_rate", 0.01)))
        lossf = nn.BCEWithLogitsLoss()

        epochs = int(self.p.get("num_iterations", 10))
        for ep in range(1, epochs + 1):
            self.model.train()
            total = 0.0
            for xb, yb in dl:
                xb, yb = xb.to(self.device), yb.to(self.device)
                optim.zero_grad()
                loss = lossf(self.model(xb), yb)
                loss.backward()
                optim.step()
                total += loss.item()
            print(f"[NeuralNet] epoch {ep}/{epochs} loss={total / max(1, len(dl)):.4f}")

    def _positive_proba(self, X) -> np.ndarray:
        self.model.eval()
        ds = _SparseRowsDS(X)
        dl = DataLoader(
            ds,
            batch_size=max(256, int(self.p.get("mini_batch_size", 16))),
            shuffle=False,
            collate_fn=_make_collate(ds),
        )
        outs = []
        with torch.no_grad():
            for xb, _ in dl:
                outs.append(torch.sigmoid(self.model(xb.to(self.device))).cpu().numpy())
        if not outs:
            return np.zeros(0, dtype=np.float32)
        return np.concatenate(outs)


def create_neural_net_factory():
    def factory(formula, featurizer, params: Dict[str, Any]):
        return NeuralNetwork(formula, featurizer, **params)

    return factory
