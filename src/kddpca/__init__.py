"""
kddpca package entry point.
Exposes subpackages:
- data: KDD Cup loaders, mock data and categorical/continuous feature assembly
- novelty: standardization, PCA basis, reconstruction scoring, normalization
- metrics: ROC-AUC / PR-AUC evaluation
- visualization: ROC and score distribution plots
- utils: shared paths and array validation
"""
from kddpca.config import PipelineConfig
from kddpca.errors import (DegenerateRange, DimensionMismatch,
                           InsufficientClassDiversity, InvalidParameter)

__all__ = [
    "PipelineConfig",
    "DegenerateRange",
    "DimensionMismatch",
    "InsufficientClassDiversity",
    "InvalidParameter",
]
