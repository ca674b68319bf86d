"""Tests for run parameters and settings loading.

Tests cover:
- Parameters validation and the accepted shapes
- Seed qualification
- YAML loading and PROPCHECK_* environment overrides
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from propcheck.config import Parameters, RunnerSettings, VerbosityLevel, load_settings
from propcheck.errors import ConfigurationError

# =========================================================================
# Parameters
# =========================================================================


class TestParameters:
    """Tests for the Parameters model."""

    def test_defaults(self) -> None:
        params = Parameters()

        assert params.num_runs == 100
        assert params.seed is None
        assert params.path is None
        assert params.max_skips_per_run == 100
        assert params.verbose is VerbosityLevel.NONE
        assert params.examples == ()

    def test_read_shapes(self) -> None:
        assert Parameters.read(None) == Parameters()
        assert Parameters.read(12).num_runs == 12
        assert Parameters.read({"seed": 3}).seed == 3
        params = Parameters(seed=1)
        assert Parameters.read(params) is params

    def test_read_rejects_other_types(self) -> None:
        with pytest.raises(ConfigurationError):
            Parameters.read(True)
        with pytest.raises(ConfigurationError):
            Parameters.read("100")

    def test_verbose_accepts_bool(self) -> None:
        assert Parameters(verbose=True).verbose is VerbosityLevel.VERBOSE
        assert Parameters(verbose=False).verbose is VerbosityLevel.NONE

    def test_empty_path_means_no_replay(self) -> None:
        assert Parameters(path="").path is None

    def test_examples_must_be_tuples(self) -> None:
        with pytest.raises(ConfigurationError, match="tuple of arguments"):
            Parameters.create(examples=[1, 2])

    @pytest.mark.parametrize(
        "options",
        [{"num_runs": 0}, {"max_skips_per_run": -1}, {"timeout": 0}, {"bogus": 1}],
    )
    def test_invalid_options(self, options: dict) -> None:
        with pytest.raises(ConfigurationError, match="Invalid run parameters"):
            Parameters.create(**options)

    def test_frozen(self) -> None:
        with pytest.raises(ValueError):
            Parameters().num_runs = 3

    def test_qualified_resolves_seed(self) -> None:
        qualified = Parameters().qualified()

        assert isinstance(qualified.seed, int)
        assert qualified.qualified() is qualified

    def test_with_overrides(self) -> None:
        params = Parameters(seed=1).with_overrides(num_runs=5)

        assert params.seed == 1
        assert params.num_runs == 5


# =========================================================================
# Settings
# =========================================================================


class TestLoadSettings:
    """Tests for load_settings and RunnerSettings."""

    def test_defaults(self) -> None:
        settings = load_settings()

        assert settings.num_runs == 100
        assert settings.log_level == "INFO"

    def test_yaml_file(self, tmp_path: Path) -> None:
        config = tmp_path / "propcheck.yaml"
        config.write_text(
            textwrap.dedent(
                """\
                num_runs: 25
                seed: 1234
                verbose: 2
                log_level: debug
                """
            )
        )

        settings = load_settings(config)

        assert settings.num_runs == 25
        assert settings.seed == 1234
        assert settings.verbose == 2
        assert settings.log_level == "DEBUG"

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config = tmp_path / "propcheck.yaml"
        config.write_text("num_runs: 25\n")
        monkeypatch.setenv("PROPCHECK_NUM_RUNS", "7")
        monkeypatch.setenv("PROPCHECK_END_ON_FAILURE", "true")

        settings = load_settings(config)

        assert settings.num_runs == 7
        assert settings.end_on_failure is True

    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        assert load_settings(tmp_path / "missing.yaml").num_runs == 100

    def test_file_must_hold_a_mapping(self, tmp_path: Path) -> None:
        config = tmp_path / "propcheck.yaml"
        config.write_text("- 1\n- 2\n")

        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            load_settings(config)

    def test_invalid_values(self, tmp_path: Path) -> None:
        config = tmp_path / "propcheck.yaml"
        config.write_text("log_level: LOUD\n")

        with pytest.raises(ConfigurationError, match="Invalid settings"):
            load_settings(config)

    def test_verbose_range(self) -> None:
        with pytest.raises(ValueError):
            RunnerSettings(verbose=3)

    def test_into_parameters(self) -> None:
        settings = RunnerSettings(num_runs=10, seed=5)

        params = Parameters.from_settings(settings, num_runs=3, path=None)

        assert params.num_runs == 3
        assert params.seed == 5
        assert params.path is None
