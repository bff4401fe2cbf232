"""Pydantic settings for pngstrip.toml configuration."""

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...application.dto.batch import BatchOptions
from ...domain.policy.strip_policy import StripPolicy
from .environment import get_env, get_environment_overrides, load_environment_variables

DEFAULT_CONFIG_PATH = "pngstrip.toml"


class PathsSettings(BaseModel):
    """Input and output directories."""

    model_config = ConfigDict(frozen=True)

    input_dir: str = "images"
    output_dir: str = "processed"


class PipelineSettings(BaseModel):
    """Worker pool configuration settings."""

    model_config = ConfigDict(frozen=True)

    workers: int = Field(default=16, ge=1)
    queue_capacity: int = Field(default=64, ge=1)
    suffix: str = ".png"

    @field_validator("suffix")
    @classmethod
    def validate_suffix(cls, v: str) -> str:
        """Suffixes are matched with a leading dot."""
        v = v.strip()
        if not v:
            raise ValueError("suffix must not be empty")
        return v if v.startswith(".") else f".{v}"


class StripSettings(BaseModel):
    """Integrity checks applied to every file."""

    model_config = ConfigDict(frozen=True)

    verify_checksums: bool = False
    validate_signature: bool = True
    strict_signature: bool = False


class EncoderSettings(BaseModel):
    """External lossless encoder (cwebp) configuration."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    executable: str = "cwebp"
    lossless_flag: str = "-lossless"
    output_flag: str = "-o"
    extension: str = ".webp"


class Settings(BaseModel):
    """Main settings loaded from pngstrip.toml."""

    model_config = ConfigDict(frozen=True)

    paths: PathsSettings = Field(default_factory=PathsSettings)
    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)
    strip: StripSettings = Field(default_factory=StripSettings)
    encoder: EncoderSettings = Field(default_factory=EncoderSettings)

    @classmethod
    def from_toml(cls, toml_path: Path | str | None = None) -> "Settings":
        """
        Load settings from pngstrip.toml with environment variable precedence.

        Environment variables (system env > .env file) override TOML values.

        Args:
            toml_path: Path to the TOML file (default: $PNGSTRIP_CONFIG or pngstrip.toml)

        Returns:
            Settings instance with loaded configuration

        Raises:
            tomllib.TOMLDecodeError: If the file is not valid TOML
            pydantic.ValidationError: If a value is out of range
            ValueError: If an integer environment variable cannot be parsed
        """
        load_environment_variables()

        toml_path = Path(toml_path or get_env("PNGSTRIP_CONFIG") or DEFAULT_CONFIG_PATH)

        data: dict[str, Any] = {}
        if toml_path.exists():
            with toml_path.open("rb") as f:
                data = tomllib.load(f)

        for section, values in get_environment_overrides().items():
            data.setdefault(section, {}).update(values)

        return cls(
            paths=PathsSettings(**data.get("paths", {})),
            pipeline=PipelineSettings(**data.get("pipeline", {})),
            strip=StripSettings(**data.get("strip", {})),
            encoder=EncoderSettings(**data.get("encoder", {})),
        )

    def strip_policy(self) -> StripPolicy:
        return StripPolicy(
            verify_checksums=self.strip.verify_checksums,
            validate_signature=self.strip.validate_signature,
            strict_signature=self.strip.strict_signature,
        )

    def batch_options(self) -> BatchOptions:
        return BatchOptions(
            workers=self.pipeline.workers,
            queue_capacity=self.pipeline.queue_capacity,
        )
