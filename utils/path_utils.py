"""Path utility functions for resolving web resource references.

This module provides the PathResolver, which resolves stylesheet, image
and font references the way a browser resolves relative URLs while
navigating, plus the string helpers it is built from.
"""

import copy
import logging
import posixpath
import re
from typing import FrozenSet, Iterable, List, Optional
from urllib.parse import urlsplit

from locator_config import EXTERNAL_REFERENCE_PREFIX, ResourceTypeOverrides, merge_resource_types

logger = logging.getLogger(__name__)

# One segment followed by a backwards marker, e.g. "tools/../"
_BACKWARDS_SEGMENT_RE = re.compile(r"\w+/\.\./", re.ASCII)


class InvalidReferenceError(ValueError):
    """Raised when a reference has no extension or a non-whitelisted one."""

    def __init__(self, reference: str, extension: str):
        super().__init__(f'The resource file "{reference}" is not valid.')
        self.reference = reference
        self.extension = extension


def reference_extension(reference: str) -> str:
    """Return the substring after the last "." of the reference, or ""."""
    _, dot, extension = reference.rpartition(".")
    return extension if dot else ""


def is_external_reference(reference: str) -> bool:
    return reference.startswith(EXTERNAL_REFERENCE_PREFIX)


def collapse_backwards_segments(path: str) -> str:
    """Remove every "segment/../" pair from the path in a single pass.

    The substitution is not re-applied, so "a/b/../../c" becomes "a/../c".

    Args:
        path: Path possibly containing backwards segments

    Returns:
        Path with each matched segment and its following "../" removed
    """
    return _BACKWARDS_SEGMENT_RE.sub("", path)


def merge_paths(base: str, reference: str) -> str:
    """Merge a reference onto a base path.

    Example:
        >>> merge_paths("http://example.com", "css/foo/../style.css")
        'http://example.com/css/style.css'

    Args:
        base: Base path, with or without trailing slash
        reference: Path appended to the base; one leading slash is dropped

    Returns:
        Combined path with backwards segments collapsed
    """
    if not base.endswith("/"):
        base += "/"

    if reference.startswith("/"):
        reference = reference[1:]

    combined = base + reference

    if ".." in combined:
        combined = collapse_backwards_segments(combined)

    return combined


def parent_directory(path: str) -> str:
    """Return the path with its final "/"-delimited segment removed."""
    directory = posixpath.dirname(path)
    if not directory:
        return "."
    if not directory.strip("/"):
        return "/"
    return directory


def reference_root(reference: str) -> str:
    """Return the "scheme://host/" root of a full reference.

    Example:
        >>> reference_root("http://cdn.example.com/css/a.css")
        'http://cdn.example.com/'
    """
    parts = urlsplit(reference)
    return f"{parts.scheme}://{parts.netloc}/"


class PathResolver:
    """Resolver for web resource references with browser-like navigation.

    References starting with "/" resolve against the base path, references
    starting with "http" are used verbatim, and anything else resolves
    against the current path. Resolving with ``plunge=True`` moves the
    current path to the directory of the resolved resource, so a chain of
    relative references can be followed the way a stylesheet refers to
    its own fonts and images.

    Example:
        >>> resolver = PathResolver()
        >>> resolver.initialize("http://example.com/")
        >>> resolver.resolve("/css/style.css", plunge=True)
        'http://example.com/css/style.css'
        >>> resolver.resolve("../fonts/Helvetica.ttf")
        'http://example.com/fonts/Helvetica.ttf'
        >>> resolver.resolve("font.woff")
        InvalidReferenceError: The resource file "font.woff" is not valid.
    """

    def __init__(self, resource_types: Optional[ResourceTypeOverrides] = None):
        """Initialize the path resolver.

        Args:
            resource_types: Extensions merged into the default whitelist
                (see locator_config.merge_resource_types)
        """
        self.resource_types: FrozenSet[str] = merge_resource_types(resource_types)
        self._base_path: Optional[str] = None
        self._current_path: Optional[str] = None

    @property
    def base_path(self) -> Optional[str]:
        return self._base_path

    @property
    def current_path(self) -> Optional[str]:
        return self._current_path

    def initialize(self, base_path: str) -> None:
        """Set the base path and move the current path to the same location.

        Args:
            base_path: Root location, e.g. "http://example.com/"
        """
        self._base_path = base_path
        self._current_path = base_path
        logger.debug("Resolver initialized at %s", base_path)

    def is_valid_reference(self, reference: str) -> bool:
        return reference_extension(reference) in self.resource_types

    def resolve(self, reference: str, plunge: bool = False) -> str:
        """Resolve a reference to its full path.

        Args:
            reference: Resource reference (absolute, relative or full URL)
            plunge: Whether the current path becomes the directory of the
                resolved resource

        Returns:
            Resolved path

        Raises:
            InvalidReferenceError: If the extension is missing or not allowed
            RuntimeError: If the resolver was never initialized
        """
        if not self.is_valid_reference(reference):
            raise InvalidReferenceError(reference, reference_extension(reference))

        if is_external_reference(reference):
            path = reference
        else:
            if self._base_path is None:
                raise RuntimeError("PathResolver.initialize() must be called before resolve()")

            if reference.startswith("/"):
                base = self._base_path
            else:
                base = self._current_path
            path = merge_paths(base, reference)

        if plunge:
            self._current_path = parent_directory(path)
            logger.debug("Plunged into %s", self._current_path)

        logger.debug("Resolved %s -> %s", reference, path)
        return path

    def resolve_all(self, references: Iterable[str], plunge: bool = False) -> List[str]:
        """Resolve references in order, plunging after each one if requested."""
        return [self.resolve(reference, plunge=plunge) for reference in references]

    def clone(self) -> "PathResolver":
        """Return an independent resolver positioned at the same paths."""
        return copy.copy(self)
