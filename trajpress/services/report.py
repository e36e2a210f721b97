"""
Statistics report for a compression run.
"""

from rich.table import Table

from trajpress.models import CompressionStats


def build_report_table(stats: CompressionStats, title: str = "Compression Results") -> Table:
    """Render sizes, point counts and ratios as a two-column rich table."""
    table = Table(title=title, show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    if stats.source_size:
        table.add_row("Original size", f"{stats.source_size:,} bytes")
    table.add_row("Size after simplification", f"{stats.absolute_size:,} bytes")
    table.add_row("Serialized delta size", f"{stats.delta_size:,} bytes")
    if stats.archive_size:
        table.add_row("Archive size (zstd)", f"{stats.archive_size:,} bytes")

    table.add_row("Total points", f"{stats.original_points:,} points")
    table.add_row("Simplified points", f"{stats.simplified_points:,} points")
    table.add_row("Ratio points", f"{stats.point_ratio:.2f} %")
    table.add_row("Ratio bytes delta vs non-delta", f"{stats.delta_vs_absolute:.2f} %")
    if stats.source_size:
        table.add_row("Ratio bytes delta vs original", f"{stats.delta_vs_source:.2f} %")
    table.add_row("Processing time", f"{stats.compression_time:.3f}s")

    return table
