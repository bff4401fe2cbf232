import dataclasses
import logging
import uuid
from functools import partial
from typing import Any

import typer
from pydantic import ValidationError

from pngstrip.application.dto.batch import BatchOptions
from pngstrip.application.ports.image_sink import ImageSinkPort
from pngstrip.application.use_cases.batch_pipeline import BatchPipeline
from pngstrip.application.use_cases.strip_image import strip_image
from pngstrip.domain.policy.strip_policy import StripPolicy
from pngstrip.infrastructure.adapters.cwebp_encoder import CwebpEncoderAdapter
from pngstrip.infrastructure.adapters.directory_source import DirectoryImageSource
from pngstrip.infrastructure.adapters.image_sinks import EncodedImageSink, FileImageSink
from pngstrip.infrastructure.adapters.rich_progress_reporter import RichProgressReporterAdapter
from pngstrip.infrastructure.config.settings import Settings
from pngstrip.infrastructure.logging import configure_logging, set_correlation_id

app = typer.Typer(help="Strip ancillary chunks from PNG files")
logger = logging.getLogger(__name__)

STRICT_SIGNATURE_HELP = (
    "Reject a signature when either the 0x89 marker or the PNG name is wrong. "
    "By default a file is rejected only when both are wrong (legacy behaviour)"
)


def load_settings(config_path: str | None) -> Settings:
    """Load settings or exit with status 1."""
    try:
        return Settings.from_toml(config_path)
    except Exception as e:
        typer.echo(f"Error loading configuration: {e}", err=True)
        raise typer.Exit(1)


def build_batch_options(settings: Settings, workers: int | None, queue_capacity: int | None) -> BatchOptions:
    """Apply CLI overrides to the configured pool options or exit with status 1."""
    overrides: dict[str, Any] = {}
    if workers is not None:
        overrides["workers"] = workers
    if queue_capacity is not None:
        overrides["queue_capacity"] = queue_capacity

    try:
        return BatchOptions.model_validate({**settings.batch_options().model_dump(), **overrides})
    except ValidationError as e:
        typer.echo(f"Error: invalid worker pool options: {e}", err=True)
        raise typer.Exit(1)


def build_strip_policy(settings: Settings, **overrides: bool | None) -> StripPolicy:
    """Apply the CLI flags that were given to the configured policy."""
    given = {key: value for key, value in overrides.items() if value is not None}
    return dataclasses.replace(settings.strip_policy(), **given)


def run_pipeline(pipeline: BatchPipeline, reporter: RichProgressReporterAdapter, source: DirectoryImageSource) -> None:
    """Run a pipeline, display the summary, and map fatal enumeration errors to exit 1."""
    try:
        report = pipeline.run()
    except OSError as e:
        reporter.cleanup()
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    reporter.display_summary(report, skipped=source.skipped)


@app.command()
def run(
    input_dir: str | None = typer.Option(None, "--input", "-i", help="Directory of PNGs to strip (default from config: images)"),
    output_dir: str | None = typer.Option(None, "--output", "-o", help="Output directory (default from config: processed)"),
    check: bool | None = typer.Option(None, "--check/--no-check", help="Re-verify checksums of retained chunks before writing"),
    compress: bool | None = typer.Option(None, "--compress/--no-compress", help="Re-encode the stripped image with cwebp -lossless"),
    strict_signature: bool | None = typer.Option(None, "--strict-signature/--legacy-signature", help=STRICT_SIGNATURE_HELP),
    workers: int | None = typer.Option(None, "--workers", "-w", help="Number of parallel workers (default 16)"),
    queue_capacity: int | None = typer.Option(None, "--queue-capacity", help="Bounded work queue capacity (default 64)"),
    config_path: str | None = typer.Option(None, "--config", help="Path to pngstrip.toml configuration file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log per-file details and tracebacks"),
) -> None:
    """
    Strip every PNG under the input directory down to IHDR, PLTE, IDAT and IEND.

    Output mirrors the input tree under the output directory. An output
    directory inside the input tree is not enumerated. Files that fail to
    decode or verify are logged and skipped; the command still exits 0.

    Examples:
        pngstrip strip run --input images --output processed
        pngstrip strip run -i images -o processed --check --workers 4
        pngstrip strip run -i images -o processed --compress
    """
    configure_logging(logging.INFO, verbose=verbose)
    set_correlation_id(str(uuid.uuid4()))

    settings = load_settings(config_path)
    options = build_batch_options(settings, workers, queue_capacity)
    policy = build_strip_policy(settings, verify_checksums=check, strict_signature=strict_signature)

    use_encoder = compress if compress is not None else settings.encoder.enabled
    sink: ImageSinkPort
    if use_encoder:
        sink = EncodedImageSink(
            CwebpEncoderAdapter(
                executable=settings.encoder.executable,
                lossless_flag=settings.encoder.lossless_flag,
                output_flag=settings.encoder.output_flag,
                extension=settings.encoder.extension,
            )
        )
    else:
        sink = FileImageSink()

    source_dir = input_dir or settings.paths.input_dir
    target_dir = output_dir or settings.paths.output_dir

    logger.info(
        f"input directory: {source_dir}, output directory: {target_dir}, workers: {options.workers}, "
        f"compress: {use_encoder}, integrity check: {policy.verify_checksums}"
    )

    source = DirectoryImageSource(source_dir, suffix=settings.pipeline.suffix, exclude=[target_dir])
    reporter = RichProgressReporterAdapter()
    pipeline = BatchPipeline(
        source=source,
        processor=partial(strip_image, policy=policy, sink=sink),
        output_dir=target_dir,
        options=options,
        progress_reporter=reporter,
        description="Stripping images",
    )
    run_pipeline(pipeline, reporter, source)
