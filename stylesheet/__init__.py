"""Stylesheet scanning for the resource locator.

Example:
    >>> from stylesheet import extract_references
    >>> extract_references("src: url('../fonts/Helvetica.ttf');")
    ['../fonts/Helvetica.ttf']
"""

from stylesheet.parser import extract_references, is_data_uri

__all__ = ["extract_references", "is_data_uri"]
