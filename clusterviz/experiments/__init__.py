"""
Experiment driver scripts for the clustering playground.
"""

from .run_clustering import run_experiment

__all__ = [
    "run_experiment",
]
