"""
Report output package.
"""

from .writer import SUMMARY_FILENAME, save_results

__all__ = ["SUMMARY_FILENAME", "save_results"]
