from dataclasses import dataclass
from typing import Tuple

CATEGORICAL_FEATURES: Tuple[str, ...] = ("protocol_type", "service", "flag")
NON_FEATURE_COLUMNS: Tuple[str, ...] = ("id", "label", "original_label", "label_name")


@dataclass(frozen=True)
class PipelineConfig:
    """
    Parameters of the scoring pipeline.

    k            : number of principal components kept
    test_size    : fraction of rows held out for evaluation
    seed         : random seed of the train/test split
    eps          : stddev floor for zero-variance columns
    n_jobs       : threads used for row-parallel scoring (1 = serial)
    batch_size   : rows per scoring batch
    metric       : 'areaUnderROC' or 'areaUnderPR'
    normal_label : raw label value of normal connections
    """
    k: int = 3
    test_size: float = 0.2
    seed: int = 123
    categorical_features: Tuple[str, ...] = CATEGORICAL_FEATURES
    drop_columns: Tuple[str, ...] = NON_FEATURE_COLUMNS
    eps: float = 1e-8
    n_jobs: int = 1
    batch_size: int = 10_000
    metric: str = "areaUnderROC"
    normal_label: str = "normal."
