"""
Input ingestion pipeline for news analyzer.

This module turns a submitted URL, PDF, DOCX or block of pasted text into a
single canonical plain-text representation with a best-guess language tag.
"""

__version__ = "0.1.0"
