import logging
import uuid
from functools import partial

import typer

from pngstrip.application.use_cases.batch_pipeline import BatchPipeline
from pngstrip.application.use_cases.strip_image import check_image
from pngstrip.infrastructure.adapters.directory_source import DirectoryImageSource
from pngstrip.infrastructure.adapters.rich_progress_reporter import RichProgressReporterAdapter
from pngstrip.infrastructure.logging import configure_logging, set_correlation_id

from .strip import STRICT_SIGNATURE_HELP, build_batch_options, build_strip_policy, load_settings, run_pipeline

app = typer.Typer(help="Check PNG files for broken chunks without writing output")


@app.command()
def run(
    input_dir: str | None = typer.Option(None, "--input", "-i", help="Directory of PNGs to check (default from config: images)"),
    strict_signature: bool | None = typer.Option(None, "--strict-signature/--legacy-signature", help=STRICT_SIGNATURE_HELP),
    workers: int | None = typer.Option(None, "--workers", "-w", help="Number of parallel workers (default 16)"),
    config_path: str | None = typer.Option(None, "--config", help="Path to pngstrip.toml configuration file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log per-file details and tracebacks"),
) -> None:
    """
    Decode every PNG under the input directory and report broken files.

    Every chunk's length and CRC is verified and the file must contain IHDR
    and IEND. Nothing is written.

    Examples:
        pngstrip check run --input images
    """
    configure_logging(logging.INFO, verbose=verbose)
    set_correlation_id(str(uuid.uuid4()))

    settings = load_settings(config_path)
    options = build_batch_options(settings, workers, None)
    policy = build_strip_policy(settings, verify_checksums=True, strict_signature=strict_signature)

    source_dir = input_dir or settings.paths.input_dir
    source = DirectoryImageSource(source_dir, suffix=settings.pipeline.suffix)
    reporter = RichProgressReporterAdapter()
    pipeline = BatchPipeline(
        source=source,
        processor=partial(check_image, policy=policy),
        output_dir=source_dir,
        options=options,
        progress_reporter=reporter,
        description="Checking images",
    )
    run_pipeline(pipeline, reporter, source)
