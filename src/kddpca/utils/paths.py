from pathlib import Path
import os

def project_root() -> Path:
    """Return repository root based on this file location."""
    return Path(__file__).resolve().parents[3]

def data_root() -> Path:
    """Return the /data root (override with KDD_DATA_ROOT env var)."""
    return Path(os.getenv("KDD_DATA_ROOT", project_root() / "data"))

def raw_dir() -> Path:
    """Path to the raw KDD Cup files."""
    return data_root() / "raw"

def results_dir() -> Path:
    """Path for metrics and plots of pipeline runs."""
    return Path(os.getenv("KDD_RESULTS_DIR", project_root() / "results"))
