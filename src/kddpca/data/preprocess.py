import pandas as pd
from sklearn.base import BaseEstimator, TransformerMixin

from kddpca.config import CATEGORICAL_FEATURES, NON_FEATURE_COLUMNS


class KDDPreprocessor(TransformerMixin, BaseEstimator):
    """
    Turns a raw KDD frame into the fixed-width numeric feature matrix.

    This transformer will:
    1. Take every column except id/label columns as a feature.
    2. Index each categorical column by descending frequency on the training
       data.
    3. One-hot encode the categorical columns into fixed-width blocks. Values
       unseen in training encode as an all-zero block, so no column is
       constant on the training rows only to blow up after standardization.
    4. Assemble continuous + encoded columns in one fixed order.
    """
    def __init__(self, categorical_features=CATEGORICAL_FEATURES,
                 drop_columns=NON_FEATURE_COLUMNS):
        self.categorical_features = categorical_features
        self.drop_columns = drop_columns
        self.continuous_features_ = None
        self.categorical_features_ = None
        self.categories_ = None
        self.feature_names_ = None

    def fit(self, X: pd.DataFrame, y=None):
        """Learns feature columns and per-column category levels."""
        drop = set(self.drop_columns)
        features = [c for c in X.columns if c not in drop]
        categorical = set(self.categorical_features)
        self.categorical_features_ = [c for c in features if c in categorical]
        self.continuous_features_ = [c for c in features if c not in categorical]

        self.categories_ = {}
        for col in self.categorical_features_:
            counts = X[col].astype(str).value_counts()
            # frequency first, then name, so equal counts index the same way every run
            ordered = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
            self.categories_[col] = [level for level, _ in ordered]

        self.feature_names_ = list(self.continuous_features_)
        for col in self.categorical_features_:
            self.feature_names_ += [f"{col}_{level}" for level in self.categories_[col]]

        print(
            f"Preprocessing Summary: {len(self.continuous_features_)} continuous, "
            f"{len(self.categorical_features_)} categorical -> {len(self.feature_names_)} features."
        )
        return self

    def transform(self, X: pd.DataFrame, y=None) -> pd.DataFrame:
        """Encodes X with the levels learned in fit; unseen levels encode as all zeros."""
        if self.feature_names_ is None:
            raise RuntimeError("KDDPreprocessor must be fitted before transforming.")
        missing = [c for c in self.continuous_features_ + self.categorical_features_
                   if c not in X.columns]
        if missing:
            raise KeyError(f"Feature columns not found in X: {missing}")

        continuous = X[self.continuous_features_].apply(pd.to_numeric, errors="coerce")
        na_cols = continuous.columns[continuous.isna().any()].tolist()
        if na_cols:
            raise ValueError(f"Continuous features contain missing or non-numeric values: {na_cols}")

        blocks = [continuous.astype(float)]
        for col in self.categorical_features_:
            levels = self.categories_[col]
            values = X[col].astype(str)
            encoded = pd.get_dummies(
                pd.Categorical(values, categories=levels), prefix=col, prefix_sep="_", dtype=float
            )
            encoded.index = X.index
            blocks.append(encoded)

        out = pd.concat(blocks, axis=1)
        return out[self.feature_names_]
