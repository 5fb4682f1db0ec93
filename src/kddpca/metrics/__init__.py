from kddpca.metrics.roc import METRICS, evaluate, pr_auc, roc_auc
