import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns
from sklearn.metrics import roc_curve

from kddpca.metrics.roc import roc_auc


# ROC curve of an anomaly score (label 1 = anomaly)
def plot_roc_curve(y_true, scores, ax=None, label=None):
    """
    Plot the ROC curve of a continuous anomaly score.
    Can plot on an existing axes (ax) for comparison.
    """
    y_true = np.asarray(y_true).ravel()
    scores = np.asarray(scores, dtype=float).ravel()
    auc_value = roc_auc(y_true, scores)
    fpr, tpr, _ = roc_curve(y_true, scores)

    if ax is None:
        fig, ax = plt.subplots(figsize=(5, 5))
        ax.set_title("ROC Curve")

    ax.plot(fpr, tpr, label=f"{label or 'score'} (AUC = {auc_value:.3f})")
    ax.plot([0, 1], [0, 1], color="k", linestyle="--", linewidth=0.8)
    ax.set_xlabel("False Positive Rate")
    ax.set_ylabel("True Positive Rate")
    ax.legend(loc="lower right")
    ax.grid(True, alpha=0.3)
    return ax


# Score histogram split by class
def plot_score_distribution(scores, y_true, ax=None, bins=50):
    """Overlayed histograms of the normalized anomaly score for normal vs anomaly rows."""
    df = pd.DataFrame({
        "score": np.asarray(scores, dtype=float).ravel(),
        "class": np.where(np.asarray(y_true).ravel() == 1, "anomaly", "normal"),
    })
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 4))
        ax.set_title("Anomaly Score Distribution")

    sns.histplot(data=df, x="score", hue="class", bins=bins, stat="density",
                 common_norm=False, element="step", ax=ax)
    ax.set_xlabel("Normalized anomaly score")
    return ax
