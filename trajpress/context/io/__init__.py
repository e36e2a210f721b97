"""
Input context: readers for raw trajectory files.
"""

from trajpress.context.io.plt_reader import load_plt_directory, parse_plt, read_plt_file

__all__ = ['load_plt_directory', 'parse_plt', 'read_plt_file']
