# Model trainers for sentiment classification

from .logistic_regression import PenalizedLogisticRegression, create_logistic_factory
from .boosted_trees import BoostedTrees, create_fast_trees_factory
from .neural_network import NeuralNetwork, create_neural_net_factory
from .models_registry import get_trainer, train_model

__all__ = [
    "PenalizedLogisticRegression",
    "create_logistic_factory",
    "BoostedTrees",
    "create_fast_trees_factory",
    "NeuralNetwork",
    "create_neural_net_factory",
    "get_trainer",
    "train_model",
]
