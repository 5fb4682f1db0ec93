import json
import os
import time
from typing import Optional

import joblib
import numpy as np

from kddpca.errors import DimensionMismatch
from kddpca.novelty.pca_basis import PCABasis

METADATA_FILE = "metadata.json"
BASIS_FILE = "basis.joblib"
PIPELINE_FILE = "pipeline.joblib"


def save_basis(basis: PCABasis, path, metadata: Optional[dict] = None) -> str:
    """
    Save a PCA basis as a directory:
    - metadata.json : class, k, n_features, feature names, explained variance
    - basis.joblib  : component matrix, mean vector, explained variance
    Returns the directory path.
    """
    path = str(path)
    os.makedirs(path, exist_ok=True)

    meta = {
        "class": type(basis).__name__,
        "k": basis.k,
        "n_features": basis.n_features,
        "feature_names": basis.feature_names,
        "explained_variance_ratio": [float(v) for v in basis.explained_variance_ratio],
        "saved_at": time.strftime("%Y-%m-%d %H:%M:%S"),
    }
    if metadata:
        meta["extra"] = metadata
    with open(os.path.join(path, METADATA_FILE), "w") as f:
        json.dump(meta, f, indent=4)

    joblib.dump(
        {
            "components": np.asarray(basis.components),
            "mean": np.asarray(basis.mean),
            "explained_variance": np.asarray(basis.explained_variance),
            "explained_variance_ratio": np.asarray(basis.explained_variance_ratio),
        },
        os.path.join(path, BASIS_FILE),
    )
    print(f"Saved PCA basis (k={basis.k}, d={basis.n_features}) to {path}")
    return path


def load_metadata(path) -> dict:
    with open(os.path.join(str(path), METADATA_FILE)) as f:
        return json.load(f)


def load_basis(path, n_features: Optional[int] = None) -> PCABasis:
    """
    Load a basis written by save_basis.

    Rejects a stored basis whose width disagrees with its own metadata or
    with `n_features`, the width of the feature matrix it will score.
    """
    meta = load_metadata(path)
    arrays = joblib.load(os.path.join(str(path), BASIS_FILE))

    basis = PCABasis(
        arrays["components"],
        arrays["mean"],
        explained_variance=arrays.get("explained_variance"),
        explained_variance_ratio=arrays.get("explained_variance_ratio"),
        feature_names=meta.get("feature_names"),
    )
    if basis.n_features != meta["n_features"]:
        raise DimensionMismatch(meta["n_features"], basis.n_features, "stored features")
    if basis.k != meta["k"]:
        raise DimensionMismatch(meta["k"], basis.k, "stored components")
    if n_features is not None and basis.n_features != n_features:
        raise DimensionMismatch(n_features, basis.n_features, "features in stored basis")
    return basis


def save_pipeline(pipeline, path) -> str:
    """Dump a fitted scikit-learn pipeline with joblib."""
    path = str(path)
    os.makedirs(path, exist_ok=True)
    model_path = os.path.join(path, PIPELINE_FILE)
    joblib.dump(pipeline, model_path)
    print(f"Artifacts saved: {model_path}")
    return model_path


def load_pipeline(path):
    return joblib.load(os.path.join(str(path), PIPELINE_FILE))
