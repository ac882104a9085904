"""detect_clusters CLI (thin wrapper)

Reads "x|y|z" point lines, clusters them with DBSCAN and writes one label per
point to the result file. Clustering is delegated to pcdtools.pipeline; this
script parses the command line, builds the run configuration and maps failures
to a diagnostic and exit code.

Usage:
    python detect_clusters.py points.txt labels.txt 0.5 10 \
        --config config.yaml \
        --log-level INFO
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from common.cli import RaisingArgumentParser, add_config_arg, add_log_level_arg, parse_args_with_config, setup_logging
from common.parse import parse_double, parse_long
from exceptions.exceptions import DIAGNOSTICS, ClusterDetectionError
from pcdtools.cluster import BACKENDS
from pcdtools.model import ClusterLabels, ClusterParameters
from pcdtools.pipeline import PipelineConfig, cluster_file, run_cluster_pipeline

EXIT_SUCCESS = 0
EXIT_FAILURE = -1

logger = logging.getLogger("detect_clusters")


def build_parser() -> argparse.ArgumentParser:
    parser = RaisingArgumentParser(
        description="Cluster a point cloud with DBSCAN and write one label per point"
    )
    add_config_arg(parser)
    add_log_level_arg(parser)
    parser.add_argument("input_path", help="Path to the input point file (one x|y|z point per line)")
    parser.add_argument("output_path", help="Path to the result file (overwritten if it exists)")
    # Numbers stay strings here so the numeric parser reports the offending token
    parser.add_argument("radius", help="DBSCAN neighborhood radius")
    parser.add_argument("min_points", help="Minimum number of points to form a cluster")
    parser.add_argument(
        "--delimiter",
        default="|",
        help="Field delimiter of the input lines",
    )
    parser.add_argument(
        "--strict-lines",
        action="store_true",
        help="Fail on lines with fewer than three fields instead of skipping them",
    )
    parser.add_argument(
        "--backend",
        choices=sorted(BACKENDS),
        default="open3d",
        help="Clustering backend",
    )
    parser.add_argument(
        "--print-progress",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Let the clustering library print its progress bar",
    )
    return parser


def _defaults_from_cfg(cfg):
    return dict(
        log_level=cfg.logging.level,
        delimiter=cfg.extraction.delimiter,
        strict_lines=cfg.extraction.strict_lines,
        backend=cfg.clustering.backend,
        print_progress=cfg.clustering.print_progress,
    )


def build_pipeline_config(argv: Optional[Sequence[str]] = None) -> PipelineConfig:
    """Parse the command line into a PipelineConfig.

    Raises ArgumentError for missing or unknown arguments and ParseError for
    non-numeric parameters.
    """
    args, cfg = parse_args_with_config(build_parser, _defaults_from_cfg, list(argv) if argv is not None else None)
    setup_logging(args.log_level)

    parameters = ClusterParameters(
        radius=parse_double(args.radius, context="radius"),
        min_points=parse_long(args.min_points, context="min_points"),
    )
    return PipelineConfig(
        input_path=args.input_path,
        output_path=args.output_path,
        parameters=parameters,
        delimiter=args.delimiter,
        strict_lines=args.strict_lines,
        backend=args.backend,
        print_progress=args.print_progress,
        separator=cfg.output.separator,
    )


def report_failure(error: ClusterDetectionError) -> int:
    """Single exit point for every failure: log the diagnostic, return the exit code."""
    setup_logging("INFO")
    logger.error("%s: %s", DIAGNOSTICS[error.kind], error)
    logger.debug("kind=%s code=%s context=%s", error.kind.value, error.code, error.context)
    return EXIT_FAILURE


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        config = build_pipeline_config(argv)
    except ClusterDetectionError as e:
        return report_failure(e)

    outcome = run_cluster_pipeline(config)
    if not outcome.ok:
        return report_failure(outcome.error)
    return EXIT_SUCCESS


def cluster_point_file(
    input_path: str,
    output_path: str,
    *,
    radius: float,
    min_points: int,
    delimiter: str = "|",
    strict_lines: bool = False,
    backend: str = "open3d",
    print_progress: bool = False,
) -> ClusterLabels:
    """Convenient function API for callers.

    Returns the labels written to `output_path`; raises the typed
    ClusterDetectionError of the failing step.
    """
    config = PipelineConfig(
        input_path=input_path,
        output_path=output_path,
        parameters=ClusterParameters(radius=float(radius), min_points=int(min_points)),
        delimiter=delimiter,
        strict_lines=strict_lines,
        backend=backend,
        print_progress=print_progress,
    )
    return cluster_file(config)


if __name__ == "__main__":
    sys.exit(main())
