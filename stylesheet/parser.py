"""Extraction of resource references from stylesheet text.

Finds the targets of ``url(...)`` functions and ``@import "..."`` rules
so that the fonts, images and nested stylesheets a CSS file points to can
be resolved relative to that file.
"""

import logging
import re
from typing import List

logger = logging.getLogger(__name__)

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)

# Alternation keeps matches in document order; exactly one group is set per match
_REFERENCE_RE = re.compile(
    r"""url\(\s*(?:"([^"]*)"|'([^']*)'|([^)\s]*))\s*\)"""
    r"""|@import\s+(?:"([^"]*)"|'([^']*)')""",
    re.IGNORECASE,
)


def is_data_uri(reference: str) -> bool:
    return reference[:5].lower() == "data:"


def extract_references(css_text: str) -> List[str]:
    """Extract every referenced resource from stylesheet text.

    Comments are removed first. Quoted and bare ``url()`` targets are
    supported, as is the string form of ``@import``; ``@import url(...)``
    is picked up through its ``url()``. Duplicates are kept and empty
    targets are dropped.

    Args:
        css_text: Stylesheet source

    Returns:
        List of references in document order

    Example:
        >>> extract_references('@import "base.css"; a { background: url(img/bg.png) }')
        ['base.css', 'img/bg.png']
    """
    text = _COMMENT_RE.sub("", css_text)
    references: List[str] = []

    for match in _REFERENCE_RE.finditer(text):
        reference = next((group for group in match.groups() if group is not None), "")
        reference = reference.strip()
        if reference:
            references.append(reference)

    logger.debug("Extracted %d references from stylesheet", len(references))
    return references
