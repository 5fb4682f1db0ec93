import argparse

from kddpca.config import PipelineConfig
from kddpca.data.ingest import load_kdd
from kddpca.data.mock import make_mock_kdd
from kddpca.pipeline import run_pipeline
from kddpca.utils.paths import raw_dir, results_dir


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="PCA reconstruction anomaly scoring on KDD Cup data")
    p.add_argument("--data", default=None, help=f"Directory of the KDD file (default: {raw_dir()})")
    p.add_argument("--file", default=None, help="KDD file name; omit to run on mock data")
    p.add_argument("--header", action="store_true", help="File has a header row")
    p.add_argument("--k", type=int, default=3, help="Number of principal components")
    p.add_argument("--test-size", type=float, default=0.2)
    p.add_argument("--seed", type=int, default=123)
    p.add_argument("--n-jobs", type=int, default=1, help="Threads for row-parallel scoring")
    p.add_argument("--metric", default="areaUnderROC", choices=["areaUnderROC", "areaUnderPR"])
    p.add_argument("--output", default=None, help=f"Artifact directory (e.g. {results_dir()})")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    config = PipelineConfig(
        k=args.k, test_size=args.test_size, seed=args.seed,
        n_jobs=args.n_jobs, metric=args.metric,
    )

    if args.file:
        df = load_kdd(args.data or str(raw_dir()), args.file, header=args.header)
    else:
        # No data file: verify pipeline mechanics on mock data
        print("Generating mock data...")
        df = make_mock_kdd(seed=args.seed)

    result = run_pipeline(df, config, output_dir=args.output)
    return result.metrics


if __name__ == "__main__":
    main()
