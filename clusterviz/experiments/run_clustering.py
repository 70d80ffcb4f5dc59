"""
Generate a synthetic (or uploaded) dataset and cluster it.

This script:
    - seeds a random source and generates the requested dataset
      (or loads a validated JSON upload instead)
    - shuffles and splits it into train/test chunks
    - optionally saves standardized train/test tensors for model training
    - runs k-means, DBSCAN or expectation-maximization on the points
    - logs agreement metrics and writes a JSON summary

Usage (example):
    python -m clusterviz.experiments.run_clustering --dataset circle --noise 10 --seed 12345
    python -m clusterviz.experiments.run_clustering --all-datasets --method dbscan --eps 0.8
"""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Optional

from tqdm.auto import tqdm

from clusterviz.clustering import clustering_metrics, run_clustering
from clusterviz.data import (
    CLASSIFICATION_DATASETS,
    CLUSTERING_DATASETS,
    REGRESSION_DATASETS,
    InvalidDatasetError,
    export_splits,
    generate_data,
    load_uploaded_dataset,
    shuffle,
    split_train_test,
)
from clusterviz.utils.configs import ClusteringConfig, DatasetConfig, ExperimentConfig
from clusterviz.utils.seed import RandomSource

logger = logging.getLogger(__name__)


def run_experiment(
    config: ExperimentConfig,
    upload: Optional[Path] = None,
    export_path: Optional[Path] = None,
) -> Dict[str, Any]:
    """
    Run one generate-and-cluster pass.

    Args:
        config (ExperimentConfig): Dataset and clustering configuration.
        upload (Optional[Path]): Uploaded JSON dataset replacing the
            synthetic data. A rejected upload is logged and the synthetic
            data is kept.
        export_path (Optional[Path]): When set, standardized train/test
            tensors are saved there with ``torch.save``.

    Returns:
        Dict[str, Any]: JSON-serializable summary of the run.
    """
    rng = RandomSource(config.dataset.seed)
    generated = generate_data(config.dataset, rng)
    examples = generated.examples
    source = config.dataset.name

    if upload is not None:
        try:
            uploaded = load_uploaded_dataset(upload)
        except InvalidDatasetError as exc:
            logger.error("%s; keeping the generated %s data.", exc, config.dataset.name)
        else:
            shuffle(uploaded, rng)
            examples = uploaded
            source = str(upload)

    train, test = split_train_test(examples, config.dataset.perc_train)
    if export_path is not None:
        export_splits(train, test, export_path)
        logger.info("Saved train/test tensors to %s", export_path)
    result = run_clustering(examples, config.clustering, rng)
    metrics = clustering_metrics(result.examples)
    logger.info("%s / %s metrics: %s", source, config.clustering.method, metrics)

    return {
        "dataset": asdict(config.dataset),
        "clustering": asdict(config.clustering),
        "source": source,
        "seed": generated.seed,
        "n_train": len(train),
        "n_test": len(test),
        "cluster_sizes": {str(k): v for k, v in result.cluster_sizes.items()},
        "centroids": [{"x": c.x, "y": c.y, "cluster": c.cluster} for c in result.centroids],
        "metrics": metrics,
    }


def _dataset_names(problem: str) -> List[str]:
    if problem == "regression":
        return list(REGRESSION_DATASETS)
    return list(CLASSIFICATION_DATASETS) + list(CLUSTERING_DATASETS)


def _parse_args() -> argparse.Namespace:
    """
    Parse command-line arguments for the clustering script.

    Returns:
        argparse.Namespace: Parsed arguments.
    """
    parser = argparse.ArgumentParser(description="Generate a synthetic 2D dataset and cluster it.")
    parser.add_argument(
        "--dataset",
        type=str,
        default="circle",
        help="Registered dataset name (e.g. circle, xor, gauss, spiral, moon, aniso, reg-plane).",
    )
    parser.add_argument(
        "--problem",
        type=str,
        choices=["classification", "regression"],
        default="classification",
        help="Problem type; selects the dataset registry and default sample count.",
    )
    parser.add_argument(
        "--all-datasets",
        action="store_true",
        help="Run every dataset registered for the selected problem.",
    )
    parser.add_argument(
        "--noise",
        type=float,
        default=0.0,
        help="Noise level in percent (0-100).",
    )
    parser.add_argument(
        "--seed",
        type=str,
        default=None,
        help="Seed string; a fresh one is drawn when omitted.",
    )
    parser.add_argument(
        "--n-samples",
        type=int,
        default=None,
        help="Number of examples (default 400 for classification, 800 for regression).",
    )
    parser.add_argument(
        "--perc-train",
        type=float,
        default=70.0,
        help="Percentage of examples used for training.",
    )
    parser.add_argument(
        "--method",
        type=str,
        choices=["kmeans", "dbscan", "em"],
        default="kmeans",
        help="Clustering algorithm.",
    )
    parser.add_argument(
        "--clusters",
        type=int,
        default=2,
        help="Number of clusters for k-means / mixture components for EM.",
    )
    parser.add_argument(
        "--eps",
        type=float,
        default=0.5,
        help="DBSCAN neighbourhood radius.",
    )
    parser.add_argument(
        "--min-samples",
        type=int,
        default=5,
        help="DBSCAN core point threshold.",
    )
    parser.add_argument(
        "--upload",
        type=str,
        default=None,
        help="JSON dataset to cluster instead of the generated data.",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Path of the JSON summary to write.",
    )
    parser.add_argument(
        "--export-dir",
        type=str,
        default=None,
        help="Directory for standardized train/test tensors, one <dataset>.pt file per run.",
    )
    return parser.parse_args()


def main() -> None:
    """
    Entry point for CLI execution.

    Returns:
        None
    """
    logging.basicConfig(level=logging.INFO)
    args = _parse_args()

    names = _dataset_names(args.problem) if args.all_datasets else [args.dataset]
    clustering_cfg = ClusteringConfig(
        method=args.method,
        n_clusters=args.clusters,
        eps=args.eps,
        min_samples=args.min_samples,
    )
    upload = Path(args.upload) if args.upload else None

    summaries = []
    for name in tqdm(names, desc="Datasets", disable=len(names) == 1):
        dataset_cfg = DatasetConfig(
            name=name,
            problem=args.problem,
            noise=args.noise,
            seed=args.seed,
            n_samples=args.n_samples,
            perc_train=args.perc_train,
        )
        export_path = Path(args.export_dir) / f"{name}.pt" if args.export_dir else None
        experiment_cfg = ExperimentConfig(dataset=dataset_cfg, clustering=clustering_cfg)
        summaries.append(run_experiment(experiment_cfg, upload, export_path))

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with output_path.open("w", encoding="utf-8") as f:
            json.dump(summaries, f, indent=2)
        logger.info("Wrote %d run summaries to %s", len(summaries), output_path)


if __name__ == "__main__":
    main()
