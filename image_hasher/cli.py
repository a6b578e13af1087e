"""Command line interface: ``image-hasher hash`` and ``image-hasher compare``."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from .core.batch import hash_paths
from .core.config import HasherConfig, Settings
from .core.errors import ContractViolation, ImageSourceError
from .core.hashes import ImageHash
from .core.logger import configure_logging
from .core.phash import PerceptualHasher
from .core.scan import expand_sources


def _hasher(settings: Settings, width: Optional[int], height: Optional[int],
            factor: Optional[int]) -> PerceptualHasher:
    overrides = {k: v for k, v in (("width", width), ("height", height), ("factor", factor))
                 if v is not None}
    try:
        config = HasherConfig.model_validate({**settings.hasher_config().model_dump(), **overrides})
    except ValidationError as exc:
        raise click.BadParameter(str(exc)) from exc
    return PerceptualHasher(config)


def _size_options(f):
    f = click.option("--factor", type=int, default=None, help="Oversampling ratio (default 4)")(f)
    f = click.option("--height", type=int, default=None, help="Hash rows (default 8)")(f)
    f = click.option("--width", type=int, default=None, help="Hash columns (default 8)")(f)
    return f


@click.group()
@click.option("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR or CRITICAL")
@click.pass_context
def cli(ctx: click.Context, log_level: Optional[str]) -> None:
    """Perceptual (DCT) image hashes."""
    try:
        settings = Settings() if log_level is None else Settings(log_level=log_level)
    except ValidationError as exc:
        raise click.ClickException(str(exc)) from exc
    configure_logging(settings.log_level)
    ctx.obj = settings


@cli.command("hash")
@click.argument("sources", nargs=-1, required=True, type=click.Path(path_type=Path))
@_size_options
@click.option("--threads", type=click.IntRange(min=1), default=None, help="Worker threads")
@click.option("--json", "as_json", is_flag=True, help="Print a JSON object instead of lines")
@click.pass_obj
def hash_command(settings: Settings, sources, width, height, factor, threads, as_json) -> None:
    """Hash image files; directories are searched recursively."""
    hasher = _hasher(settings, width, height, factor)
    paths = expand_sources(sources)
    result = hash_paths(paths, hasher=hasher, threads=threads if threads is not None else settings.threads)

    if as_json:
        click.echo(json.dumps({
            "hashes": {p: result.hashes[p].to_hex() for p in sorted(result.hashes)},
            "errors": {p: result.errors[p] for p in sorted(result.errors)},
        }, indent=2))
    else:
        for p in sorted(result.hashes):
            click.echo(f"{result.hashes[p].to_hex()}  {p}")
        for p in sorted(result.errors):
            click.echo(f"error: {result.errors[p]}", err=True)

    if result.errors:
        raise SystemExit(1)


def _load(arg: str, hasher: PerceptualHasher) -> ImageHash:
    p = Path(arg)
    if p.exists():
        try:
            return hasher.hash_from_source(p)
        except ImageSourceError as exc:
            raise click.ClickException(str(exc)) from exc
    cfg = hasher.config
    try:
        return ImageHash.from_hex(arg, cfg.width, cfg.height)
    except ContractViolation as exc:
        raise click.BadParameter(
            f"{arg!r} is neither an existing file nor a {cfg.height}x{cfg.width} hex hash"
        ) from exc


@cli.command("compare")
@click.argument("first")
@click.argument("second")
@_size_options
@click.pass_obj
def compare_command(settings: Settings, first, second, width, height, factor) -> None:
    """Print the Hamming distance between two images or hex hashes."""
    hasher = _hasher(settings, width, height, factor)
    click.echo(_load(first, hasher) - _load(second, hasher))


def main() -> None:
    cli(prog_name="image-hasher")
