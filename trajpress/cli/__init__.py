"""
Command line interface for trajpress.
"""

from trajpress.cli.commands import compress, dump

__all__ = ['compress', 'dump']
