"""
Entry point for python -m trajpress
"""

import click
from trajpress import __version__
from trajpress.cli import compress, dump

@click.group()
@click.version_option(version=__version__)
def cli():
    """trajpress - GPS Trajectory Simplification and Compression"""
    pass

cli.add_command(compress)
cli.add_command(dump)

if __name__ == '__main__':
    cli()
