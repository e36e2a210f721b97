"""
Services layer - application orchestration.
"""

from trajpress.services.compressor import TrajectoryCompressor, DEFAULT_EPSILON, DEFAULT_ZSTD_LEVEL
from trajpress.services.report import build_report_table

# Provide consistent naming
Compressor = TrajectoryCompressor

__all__ = [
    'TrajectoryCompressor',
    'DEFAULT_EPSILON',
    'DEFAULT_ZSTD_LEVEL',
    'build_report_table',
    # Aliases
    'Compressor',
]
