"""Running properties: tossing, shrink walking, reporting and sampling."""

from propcheck.runner.details import ExecutionStatus, ExecutionTree, FailureKind, RunDetails
from propcheck.runner.execution import RunExecution, RunState
from propcheck.runner.path import decode_path, encode_path, merge_paths, path_walk
from propcheck.runner.report import format_run_details, throw_if_failed
from propcheck.runner.runner import assert_property, assert_property_async, check, check_async
from propcheck.runner.sampler import sample, statistics, stream_sample
from propcheck.runner.tosser import bias_for_run, toss
from propcheck.runner.walker import ShrinkWalker, SourceValues

__all__ = [
    # Entry points
    "check",
    "check_async",
    "assert_property",
    "assert_property_async",
    "sample",
    "stream_sample",
    "statistics",
    # Results
    "RunDetails",
    "FailureKind",
    "ExecutionStatus",
    "ExecutionTree",
    "format_run_details",
    "throw_if_failed",
    # Internals
    "RunExecution",
    "RunState",
    "ShrinkWalker",
    "SourceValues",
    "toss",
    "bias_for_run",
    "encode_path",
    "decode_path",
    "merge_paths",
    "path_walk",
]
