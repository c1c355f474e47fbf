"""
IMDb review sentiment: penalized logistic regression, boosted trees and a
small neural network trained on shared n-gram features, compared with ROC
curves; the linear model's coefficients are shown as word clouds.

Key modules:
- config: run parameters (dataclass defaults, JSON overrides)
- data_loader: train/test dataset references
- core: featurizer spec, formula, compute context, prediction tables, metrics
- models: the three trainers and their registry
- experiments: pipeline orchestration and plots
"""

__version__ = "0.1.0"
