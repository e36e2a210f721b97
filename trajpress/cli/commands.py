"""
CLI commands for trajpress.
"""

import sys
from pathlib import Path

import click
from rich.console import Console

from trajpress.context.io.plt_reader import load_plt_directory
from trajpress.errors import TrajPressError
from trajpress.models import Variant
from trajpress.services import DEFAULT_EPSILON, DEFAULT_ZSTD_LEVEL, TrajectoryCompressor, build_report_table


@click.command()
@click.option('--input', '-i', required=True, help='Geolife .plt file or directory of .plt files')
@click.option('--output', '-o', required=True, help='Output archive path')
@click.option('--epsilon', '-e', type=float, default=DEFAULT_EPSILON, envvar='TRAJPRESS_EPSILON',
              show_default=True, help='Simplification tolerance in degrees')
@click.option('--variant', type=click.Choice(['delta', 'absolute']), default='delta',
              show_default=True, help='Encoding stored in the archive')
@click.option('--zstd-level', default=DEFAULT_ZSTD_LEVEL, show_default=True, help='Zstandard level for the archive')
@click.option('--measure', '-m', is_flag=True, help='Measure and display compression metrics')
def compress(input, output, epsilon, variant, zstd_level, measure):
    """
    Simplify a GPS trajectory and write it as a compact archive.

    Example:
        trajpress compress -i geolife/ -o out/153.tpz -m
    """
    input_path = Path(input)
    output_path = Path(output)

    if not input_path.exists():
        click.echo(f"Error: Input not found: {input}", err=True)
        sys.exit(1)

    console = Console()
    try:
        points, source_size = load_plt_directory(input_path)
        click.echo(f"Read {len(points):,} points from {input_path.name}")

        compressor = TrajectoryCompressor(epsilon=epsilon, zstd_level=zstd_level, console=console)
        _, stats = compressor.compress(points, source_size=source_size, verbose=measure)
        stats.archive_size = compressor.save(output_path, variant=Variant[variant.upper()])
    except TrajPressError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if measure:
        console.print(build_report_table(stats))

    click.echo(f"✓ Compressed to {output_path}")


@click.command()
@click.option('--compressed', '-c', required=True, help='Archive written by `compress`')
@click.option('--limit', type=int, default=None, help='Max points to print (default: all)')
def dump(compressed, limit):
    """
    Decode an archive and print its points as CSV.

    Example:
        trajpress dump -c out/153.tpz --limit 20
    """
    compressed_path = Path(compressed)
    if not compressed_path.exists():
        click.echo(f"Error: Compressed file not found: {compressed}", err=True)
        sys.exit(1)

    try:
        archive = TrajectoryCompressor.load(compressed_path)
        points = TrajectoryCompressor(epsilon=archive.epsilon).decompress(archive)
    except (TrajPressError, ValueError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    click.echo("timestamp,latitude,longitude,altitude")
    for point in points[:limit]:
        click.echo(f"{point.timestamp},{point.latitude},{point.longitude},{point.altitude}")
