"""Human readable reports of RunDetails."""

from __future__ import annotations

from typing import Any

from propcheck.config import VerbosityLevel
from propcheck.errors import PropertyFailedError, TooManySkipsError
from propcheck.runner.details import ExecutionStatus, ExecutionTree, FailureKind, RunDetails

_STATUS_MARKS = {
    ExecutionStatus.SUCCESS: "√",
    ExecutionStatus.SKIPPED: "!",
    ExecutionStatus.FAILURE: "×",
}


def _format_hints(hints: list[str]) -> str:
    return "\n".join(f"Hint ({i}): {hint}" for i, hint in enumerate(hints, start=1))


def _format_execution_summary(trees: tuple[ExecutionTree[Any], ...]) -> str:
    lines: list[str] = []

    def visit(nodes: list[ExecutionTree[Any]] | tuple[ExecutionTree[Any], ...], depth: int) -> None:
        for node in nodes:
            lines.append(f"{'. ' * depth}{_STATUS_MARKS[node.status]} {node.value!r}")
            visit(node.children, depth + 1)

    visit(trees, 0)
    return "\n".join(lines)


def _seed_line(details: RunDetails[Any]) -> str:
    parts = [f"seed: {details.seed}"]
    if details.counterexample_path is not None:
        parts.append(f'path: "{details.counterexample_path}"')
    config = details.run_configuration
    if config is not None and config.end_on_failure:
        parts.append("end_on_failure: true")
    return "{ " + ", ".join(parts) + " }"


def format_run_details(details: RunDetails[Any]) -> str | None:
    """Describe a failed run; None for a successful one."""
    if not details.failed:
        return None

    if details.failure_kind is FailureKind.TOO_MANY_SKIPS:
        return "\n".join(
            [
                "Failed to run property, too many pre-condition failures encountered",
                _seed_line(details),
                "",
                f"Ran {details.num_runs} time(s)",
                f"Skipped {details.num_skips} time(s)",
                "",
                _format_hints(
                    [
                        "Try to reduce the number of rejected values by combining map, chain and built-in generators",
                        "Increase failure tolerance by setting max_skips_per_run to a higher value",
                    ]
                ),
            ]
        )

    if details.failure_kind is FailureKind.INTERRUPTED:
        return "\n".join(
            [
                f"Property interrupted after {details.num_runs} tests",
                _seed_line(details),
            ]
        )

    lines = [
        f"Property failed after {details.num_runs} tests",
        _seed_line(details),
        f"Counterexample: {details.counterexample!r}",
        f"Shrunk {details.num_shrinks} time(s)",
        f"Got error: {details.error}",
    ]
    if details.interrupted:
        lines.append("")
        lines.append("Run was interrupted before the end of the shrink walk")
    if details.verbose >= VerbosityLevel.VERBOSE:
        lines.append("")
        lines.append("Encountered failures were:")
        lines.extend(f"- {failure!r}" for failure in details.failures)
        lines.append("")
        lines.append("Execution summary:")
        lines.append(_format_execution_summary(details.execution_summary))
    else:
        lines.append("")
        lines.append(_format_hints(["Enable verbose mode in order to have the list of all failing values encountered during the run"]))
    return "\n".join(lines)


def throw_if_failed(details: RunDetails[Any]) -> None:
    """Raise the error matching a failed run; do nothing otherwise."""
    message = format_run_details(details)
    if message is None:
        return
    if details.too_many_skips:
        raise TooManySkipsError(message, details=details)
    raise PropertyFailedError(message, details=details, cause=details.error_instance)
