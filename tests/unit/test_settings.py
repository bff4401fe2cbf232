"""Unit tests for pngstrip.toml settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from pngstrip.infrastructure.config.environment import ENVIRONMENT_VARIABLES
from pngstrip.infrastructure.config.settings import PipelineSettings, Settings


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch):
    """Run from an empty directory with no PNGSTRIP_* variables set."""
    monkeypatch.chdir(tmp_path)
    for key in ENVIRONMENT_VARIABLES:
        monkeypatch.delenv(key, raising=False)


def test_defaults_without_config_file():
    settings = Settings.from_toml()

    assert settings.paths.input_dir == "images"
    assert settings.paths.output_dir == "processed"
    assert settings.pipeline.workers == 16
    assert settings.pipeline.queue_capacity == 64
    assert settings.strip.verify_checksums is False
    assert settings.strip.validate_signature is True
    assert settings.strip.strict_signature is False
    assert settings.encoder.enabled is False
    assert settings.encoder.executable == "cwebp"


def test_values_read_from_toml(tmp_path: Path):
    config = tmp_path / "custom.toml"
    config.write_text(
        """
[paths]
input_dir = "raw"
output_dir = "clean"

[pipeline]
workers = 4
suffix = "PNG"

[strip]
verify_checksums = true
strict_signature = true

[encoder]
enabled = true
executable = "/usr/local/bin/cwebp"
"""
    )

    settings = Settings.from_toml(config)

    assert settings.paths.input_dir == "raw"
    assert settings.pipeline.workers == 4
    assert settings.pipeline.suffix == ".PNG"
    assert settings.strip.verify_checksums is True
    assert settings.strip.strict_signature is True
    assert settings.encoder.enabled is True
    assert settings.encoder.executable == "/usr/local/bin/cwebp"


def test_default_file_in_working_directory(tmp_path: Path):
    (tmp_path / "pngstrip.toml").write_text("[pipeline]\nworkers = 3\n")
    assert Settings.from_toml().pipeline.workers == 3


def test_config_path_from_environment(tmp_path: Path, monkeypatch):
    config = tmp_path / "elsewhere.toml"
    config.write_text("[pipeline]\nqueue_capacity = 8\n")
    monkeypatch.setenv("PNGSTRIP_CONFIG", str(config))

    assert Settings.from_toml().pipeline.queue_capacity == 8


def test_environment_overrides_toml(tmp_path: Path, monkeypatch):
    (tmp_path / "pngstrip.toml").write_text("[pipeline]\nworkers = 3\n\n[strip]\nverify_checksums = false\n")
    monkeypatch.setenv("PNGSTRIP_WORKERS", "9")
    monkeypatch.setenv("PNGSTRIP_VERIFY_CHECKSUMS", "true")

    settings = Settings.from_toml()

    assert settings.pipeline.workers == 9
    assert settings.strip.verify_checksums is True


def test_zero_workers_rejected(tmp_path: Path):
    (tmp_path / "pngstrip.toml").write_text("[pipeline]\nworkers = 0\n")
    with pytest.raises(ValidationError):
        Settings.from_toml()


def test_empty_suffix_rejected():
    with pytest.raises(ValidationError):
        PipelineSettings(suffix="  ")


def test_policy_and_options_derived_from_settings(tmp_path: Path):
    (tmp_path / "pngstrip.toml").write_text(
        "[pipeline]\nworkers = 2\nqueue_capacity = 4\n\n[strip]\nverify_checksums = true\n"
    )
    settings = Settings.from_toml()

    policy = settings.strip_policy()
    options = settings.batch_options()

    assert policy.verify_checksums is True
    assert policy.validate_signature is True
    assert options.workers == 2
    assert options.queue_capacity == 4
