"""Utility modules for the resource locator.

This package contains the path resolver and the string helpers it is
built from: extension checks, path merging and backwards segment
collapsing.
"""

from .path_utils import (
    InvalidReferenceError,
    PathResolver,
    collapse_backwards_segments,
    is_external_reference,
    merge_paths,
    parent_directory,
    reference_extension,
    reference_root,
)

__all__ = [
    "InvalidReferenceError",
    "PathResolver",
    "collapse_backwards_segments",
    "is_external_reference",
    "merge_paths",
    "parent_directory",
    "reference_extension",
    "reference_root",
]
