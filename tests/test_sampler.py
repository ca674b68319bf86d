"""Tests for sampling, statistics and reports."""

from __future__ import annotations

import pytest

from propcheck import check, for_all, format_run_details, integer, nat, sample, statistics, stream_sample
from propcheck.errors import ConfigurationError
from propcheck.runner.report import throw_if_failed


class TestSample:
    """Tests for sample and stream_sample."""

    def test_count(self) -> None:
        assert len(sample(nat(), {"seed": 1, "num_runs": 15})) == 15
        assert len(sample(nat(), 7)) == 7

    def test_matches_values_seen_by_check(self, counting) -> None:
        predicate = counting(lambda n: True)
        check(for_all(nat(), predicate), {"seed": 5, "num_runs": 10})

        assert sample(for_all(nat(), lambda n: True), {"seed": 5, "num_runs": 10}) == predicate.calls

    def test_examples_first(self) -> None:
        prop = for_all(nat(), lambda n: True)
        assert sample(prop, {"seed": 1, "num_runs": 3, "examples": [(99,)]})[0] == (99,)

    def test_path(self) -> None:
        values = sample(nat(), {"seed": 1, "num_runs": 5})
        assert sample(nat(), {"seed": 1, "num_runs": 2, "path": "3"}) == values[3:5]

    def test_stream_is_lazy(self) -> None:
        stream = stream_sample(integer(0, 10), {"seed": 2, "num_runs": 1000})
        assert 0 <= next(stream) <= 10

    def test_rejects_other_sources(self) -> None:
        with pytest.raises(ConfigurationError, match="generator or a property"):
            sample(42)


class TestStatistics:
    """Tests for statistics."""

    def test_shares(self) -> None:
        lines: list[str] = []

        shares = statistics(
            integer(0, 9),
            lambda n: "even" if n % 2 == 0 else "odd",
            {"seed": 1, "num_runs": 200, "logger": lines.append},
        )

        assert set(shares) == {"even", "odd"}
        assert sum(shares.values()) == pytest.approx(100.0)
        assert len(lines) == 2
        assert lines[0].endswith("%")

    def test_multiple_categories(self) -> None:
        shares = statistics(
            nat(10),
            lambda n: ["any"] + (["zero"] if n == 0 else []),
            {"seed": 1, "num_runs": 50, "logger": lambda line: None},
        )

        assert shares["any"] == pytest.approx(100.0)


class TestReport:
    """Tests for the human readable report."""

    def test_success_has_no_report(self) -> None:
        details = check(for_all(nat(), lambda n: True), {"seed": 1})

        assert format_run_details(details) is None
        throw_if_failed(details)

    def test_failure_report(self, below_fifty) -> None:
        details = check(below_fifty, {"seed": 42})
        report = format_run_details(details)

        assert report.startswith(f"Property failed after {details.num_runs} tests")
        assert f'path: "{details.counterexample_path}"' in report
        assert "Counterexample: (50,)" in report
        assert f"Shrunk {details.num_shrinks} time(s)" in report
        assert "Got error: Property failed by returning false" in report
        assert "Hint (1)" in report

    def test_verbose_report_lists_failures(self, below_fifty) -> None:
        details = check(below_fifty, {"seed": 42, "verbose": 1})
        report = format_run_details(details)

        assert "Encountered failures were:" in report
        assert "- (50,)" in report
        assert "Execution summary:" in report
        assert "× (50,)" in report

    def test_too_many_skips_report(self) -> None:
        prop = for_all(nat(), lambda n: True, precondition=lambda n: False)
        report = format_run_details(check(prop, {"seed": 1, "num_runs": 2, "max_skips_per_run": 1}))

        assert report.startswith("Failed to run property, too many pre-condition failures encountered")
        assert "Skipped 3 time(s)" in report
