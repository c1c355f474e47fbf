# Experimental components for sentiment model comparison

from .experimental_pipeline import ExperimentalPipeline

__all__ = [
    "ExperimentalPipeline",
]
