import os
from typing import Tuple

import numpy as np
import pandas as pd
from sklearn.model_selection import train_test_split

# KDD Cup 99 column layout (41 features + label), as in kddcup.names
KDD_COLUMNS = [
    "duration", "protocol_type", "service", "flag", "src_bytes", "dst_bytes",
    "land", "wrong_fragment", "urgent", "hot", "num_failed_logins", "logged_in",
    "num_compromised", "root_shell", "su_attempted", "num_root",
    "num_file_creations", "num_shells", "num_access_files", "num_outbound_cmds",
    "is_host_login", "is_guest_login", "count", "srv_count", "serror_rate",
    "srv_serror_rate", "rerror_rate", "srv_rerror_rate", "same_srv_rate",
    "diff_srv_rate", "srv_diff_host_rate", "dst_host_count", "dst_host_srv_count",
    "dst_host_same_srv_rate", "dst_host_diff_srv_rate",
    "dst_host_same_src_port_rate", "dst_host_srv_diff_host_rate",
    "dst_host_serror_rate", "dst_host_srv_serror_rate", "dst_host_rerror_rate",
    "dst_host_srv_rerror_rate", "label",
]


def load_kdd(data_path: str, file_name: str, header: bool = False) -> pd.DataFrame:
    """
    Loads a KDD Cup file (e.g. kddcup.data_10_percent) into a DataFrame.

    - Files without a header row get the standard KDD_COLUMNS names.
    - An `id` column (row number) is added when the file has none.
    """
    full_path = os.path.join(data_path, file_name)
    if header:
        df = pd.read_csv(full_path)
    else:
        df = pd.read_csv(full_path, header=None, names=KDD_COLUMNS)

    if "label" not in df.columns:
        raise KeyError(f"Column 'label' not found in {file_name}; available: {df.columns.tolist()}")
    if "id" not in df.columns:
        df.insert(0, "id", np.arange(len(df)))

    print(f"Successfully loaded {file_name}. Shape: {df.shape}")
    return df


def add_label_columns(df: pd.DataFrame, normal_label: str = "normal.") -> pd.DataFrame:
    """
    Keep the raw attack name and derive the binary target.
    - original_label : raw label ('normal.', 'smurf.', ...)
    - label_name     : 'normal' or 'anomaly'
    - label          : 0 for normal, 1 for anomaly
    """
    if "label" not in df.columns:
        raise KeyError("Column 'label' not found; did you load a KDD file?")
    out = df.rename(columns={"label": "original_label"})
    is_normal = out["original_label"].astype(str).str.strip() == normal_label
    out["label_name"] = np.where(is_normal, "normal", "anomaly")
    out["label"] = (~is_normal).astype(int)
    return out


def split_train_test(
    df: pd.DataFrame, test_size: float = 0.2, seed: int = 123
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Random (unstratified) train/test split of the labelled frame."""
    train, test = train_test_split(df, test_size=test_size, random_state=seed, shuffle=True)
    print(f"Train rows: {len(train)} | Test rows: {len(test)}")
    return train, test
