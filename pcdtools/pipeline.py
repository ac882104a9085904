from __future__ import annotations

import logging
from contextlib import ExitStack
from dataclasses import dataclass, replace
from typing import Optional

from common.logging import counting_logs
from exceptions.exceptions import ArgumentError, ClusterDetectionError
from validation.validate_config import validate_pipeline_config
from validation.validation_helpers import log_issues
from .cluster import dbscan_labels
from .io import DEFAULT_DELIMITER, DEFAULT_SEPARATOR, extract_points, open_input, open_output, write_labels
from .model import ClusterLabels, ClusterParameters, PipelineOutcome, RunStatus
from .presenters import log_run_summary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineConfig:
    """Everything one run needs, parsed and validated before any file is opened."""

    input_path: str
    output_path: str
    parameters: ClusterParameters
    delimiter: str = DEFAULT_DELIMITER
    strict_lines: bool = False
    backend: str = "open3d"
    print_progress: bool = True
    separator: str = DEFAULT_SEPARATOR


def check_pipeline_config(config: PipelineConfig) -> None:
    """Raise ArgumentError on the first error-severity validation issue."""
    issues = validate_pipeline_config(config)
    if log_issues(issues, "error"):
        first = next(i for i in issues if i.severity == "error")
        raise ArgumentError(first.code, first.message, context=first.path)


def cluster_file(config: PipelineConfig) -> ClusterLabels:
    """Validate, open files, extract points, cluster and write the labels.

    Raises the typed ClusterDetectionError of the first failing step. Both
    files are closed on every exit path.
    """
    check_pipeline_config(config)

    with ExitStack() as stack:
        source = stack.enter_context(open_input(config.input_path))
        sink = stack.enter_context(open_output(config.output_path))

        points = extract_points(source, delimiter=config.delimiter, strict_lines=config.strict_lines)
        labels = dbscan_labels(
            points,
            config.parameters,
            print_progress=config.print_progress,
            backend=config.backend,
        )
        write_labels(labels, sink, separator=config.separator)

    return labels


def run_cluster_pipeline(config: PipelineConfig) -> PipelineOutcome:
    """Run the pipeline and report the result as an outcome instead of raising.

    Warnings are counted on the root logger, so only those enabled by the
    configured log level are counted and reported in the outcome.
    """
    with counting_logs() as counter:
        try:
            labels = cluster_file(config)
        except ClusterDetectionError as e:
            return PipelineOutcome(status=RunStatus.FAILED, error=e, warnings=counter.warnings,
                                   warning_messages=tuple(counter.messages))

    if counter.warnings:
        logger.info("%d warning(s) during the run", counter.warnings)
    log_run_summary(labels, config.output_path)
    return PipelineOutcome(status=RunStatus.OK, labels=labels, warnings=counter.warnings,
                           warning_messages=tuple(counter.messages))


class ClusterPipelineBuilder:
    """Fluent API builder for configuring and running the clustering pipeline.

    Example:
        outcome = (ClusterPipelineBuilder("points.txt")
            .with_output("labels.txt")
            .with_clustering(radius=0.5, min_points=10)
            .with_strict_lines()
            .run())
    """

    def __init__(self, input_path: str):
        self.input_path = input_path
        self.output_path: Optional[str] = None
        self.parameters: Optional[ClusterParameters] = None
        self._config_overrides: dict = {}

    def with_output(self, path: str) -> "ClusterPipelineBuilder":
        self.output_path = path
        return self

    def with_clustering(self, radius: float, min_points: int) -> "ClusterPipelineBuilder":
        """Configure DBSCAN radius and minimum cluster size."""
        self.parameters = ClusterParameters(radius=radius, min_points=min_points)
        return self

    def with_delimiter(self, delimiter: str) -> "ClusterPipelineBuilder":
        self._config_overrides["delimiter"] = delimiter
        return self

    def with_strict_lines(self, enable: bool = True) -> "ClusterPipelineBuilder":
        """Fail on lines with fewer than three fields instead of skipping them."""
        self._config_overrides["strict_lines"] = enable
        return self

    def with_backend(self, backend: str) -> "ClusterPipelineBuilder":
        self._config_overrides["backend"] = backend
        return self

    def with_progress(self, enable: bool = True) -> "ClusterPipelineBuilder":
        self._config_overrides["print_progress"] = enable
        return self

    def with_separator(self, separator: str) -> "ClusterPipelineBuilder":
        self._config_overrides["separator"] = separator
        return self

    def build(self) -> PipelineConfig:
        if self.output_path is None:
            raise ArgumentError("MISSING_OUTPUT", "No output path configured", context="ClusterPipelineBuilder")
        if self.parameters is None:
            raise ArgumentError("MISSING_PARAMETERS", "No clustering parameters configured",
                                context="ClusterPipelineBuilder")
        config = PipelineConfig(self.input_path, self.output_path, self.parameters)
        return replace(config, **self._config_overrides)

    def run(self) -> PipelineOutcome:
        """Execute the configured pipeline."""
        return run_cluster_pipeline(self.build())
