from kddpca.novelty.normalize import MinMaxNormalizer, fit_min_max, min_max_scale
from kddpca.novelty.pca_basis import PCABasis
from kddpca.novelty.pcaindex import PCAAnomaly
from kddpca.novelty.scoring import reconstruction_error, score_samples
from kddpca.novelty.standardize import Standardizer, fit_standardizer, standardize
