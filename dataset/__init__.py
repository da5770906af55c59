"""
dataset/
--------
Core data layer.  Public API:

    from dataset import Dataset
"""

from dataset.dataset import Dataset

__all__ = [
    "Dataset",
]
