from __future__ import annotations

import math
import os
from typing import List, TYPE_CHECKING

from validation.validation_helpers import ValidationIssue

if TYPE_CHECKING:
    from pcdtools.pipeline import PipelineConfig


def validate_parameters(config: "PipelineConfig") -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    radius = config.parameters.radius
    min_points = config.parameters.min_points

    if not math.isfinite(radius) or radius <= 0:
        issues.append(ValidationIssue("radius", "INVALID_RADIUS", "error",
                                      f"Radius must be a positive number, got {radius}"))
    if min_points < 1:
        issues.append(ValidationIssue("min_points", "INVALID_MIN_POINTS", "error",
                                      f"Minimum points must be at least 1, got {min_points}"))
    return issues


def validate_options(config: "PipelineConfig") -> List[ValidationIssue]:
    from pcdtools.cluster import BACKENDS

    issues: List[ValidationIssue] = []
    if not config.delimiter:
        issues.append(ValidationIssue("delimiter", "INVALID_DELIMITER", "error", "Delimiter must not be empty"))
    elif config.delimiter in ("\n", "\r"):
        issues.append(ValidationIssue("delimiter", "INVALID_DELIMITER", "error",
                                      "Delimiter must not be a line break"))
    if config.backend not in BACKENDS:
        issues.append(ValidationIssue("backend", "UNKNOWN_BACKEND", "error",
                                      f"Unknown clustering backend {config.backend!r}, "
                                      f"expected one of: {', '.join(sorted(BACKENDS))}"))
    return issues


def _same_file(a: str, b: str) -> bool:
    if os.path.realpath(a) == os.path.realpath(b):
        return True
    # hard links resolve to different paths but share an inode
    try:
        return os.path.samefile(a, b)
    except OSError:
        return False


def validate_paths(config: "PipelineConfig") -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    if _same_file(config.input_path, config.output_path):
        # the output is truncated on open, which would destroy the input
        issues.append(ValidationIssue(config.output_path, "SAME_INPUT_OUTPUT", "error",
                                      f"Output path is the input path: {config.output_path}"))
    return issues


def validate_pipeline_config(config: "PipelineConfig") -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    issues.extend(validate_parameters(config))
    issues.extend(validate_options(config))
    issues.extend(validate_paths(config))
    return issues
