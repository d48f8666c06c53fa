import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from locator_config import LOCATOR_CONFIG_DEFAULT, LocatorConfig
from stylesheet import extract_references, is_data_uri
from utils import InvalidReferenceError, PathResolver, is_external_reference, reference_root

logger = logging.getLogger(__name__)


@dataclass
class StylesheetResources:
    """Resources referenced by one stylesheet.

    Attributes:
        stylesheet: Resolved path of the stylesheet itself
        resources: Resolved paths of the references it contains, in order
        skipped: References that were not resolved (unknown types, data URIs)
    """
    stylesheet: str
    resources: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "stylesheet": self.stylesheet,
            "resources": list(self.resources),
            "skipped": list(self.skipped),
        }


class ResourceLocator:
    """Locator for web resources referenced from pages and stylesheets.

    Wraps a PathResolver positioned at the configured base path. Lookups
    either resolve against the current location or plunge into the
    directory of the found resource, the way a browser follows links.

    Features:
        - Absolute ("/css/a.css"), relative ("img/a.png") and full
          ("http://...") references
        - Backwards navigation ("../fonts/a.ttf")
        - Extension whitelist, configurable per locator
        - Stylesheet scanning: url() and @import targets resolved relative
          to the stylesheet without moving the locator

    Example:
        >>> locator = ResourceLocator(LocatorConfig(base_path="http://example.com/"))
        >>> locator.find("css/style.css")
        'http://example.com/css/style.css'
        >>> locator.find("css/fonts.css", plunge=True)
        'http://example.com/css/fonts.css'
        >>> locator.find("../fonts/Helvetica.ttf")
        'http://example.com/fonts/Helvetica.ttf'
    """

    def __init__(self, config: Optional[LocatorConfig] = None):
        """Initialize the resource locator.

        Args:
            config: Locator configuration (uses default if not provided)
        """
        self.config = config or LOCATOR_CONFIG_DEFAULT
        self._resolver = PathResolver(self.config.resource_types)
        self._resolver.initialize(self.config.base_path)

        logger.info(
            "Resource locator ready at %s (types: %s)",
            self.config.base_path,
            ", ".join(sorted(self.config.allowed_extensions)),
        )

    @property
    def base_path(self) -> str:
        return self._resolver.base_path

    @property
    def current_path(self) -> str:
        return self._resolver.current_path

    def reset(self) -> None:
        """Move back to the configured base path."""
        self._resolver.initialize(self.config.base_path)

    def find(self, reference: str, plunge: bool = False) -> str:
        """Find the full path of a resource.

        Raises:
            InvalidReferenceError: If the reference type is not allowed
        """
        return self._resolver.resolve(reference, plunge=plunge)

    def find_all(self, references: Iterable[str], plunge: bool = False) -> List[str]:
        return self._resolver.resolve_all(references, plunge=plunge)

    def scan_stylesheet(
        self,
        stylesheet_reference: str,
        css_text: str,
        plunge: bool = False,
    ) -> StylesheetResources:
        """Resolve a stylesheet and every resource it references.

        References inside the stylesheet resolve relative to the stylesheet's
        directory. The locator's own current path only moves when ``plunge``
        is set, and then to the stylesheet's directory.

        Args:
            stylesheet_reference: Reference to the stylesheet itself
            css_text: Stylesheet source
            plunge: Whether the locator moves into the stylesheet's directory

        Returns:
            StylesheetResources with resolved and skipped references

        Raises:
            InvalidReferenceError: If the stylesheet reference is invalid, or a
                contained reference is invalid and skip_invalid_references is off
        """
        sheet_resolver = self._resolver.clone()
        if is_external_reference(stylesheet_reference):
            # Root-relative references inside belong to the stylesheet's host
            sheet_resolver.initialize(reference_root(stylesheet_reference))
        stylesheet_path = sheet_resolver.resolve(stylesheet_reference, plunge=True)
        result = StylesheetResources(stylesheet=stylesheet_path)

        for reference in extract_references(css_text):
            if self.config.skip_data_uris and is_data_uri(reference):
                logger.debug("Skipping data URI in %s", stylesheet_path)
                result.skipped.append(reference)
                continue
            try:
                result.resources.append(sheet_resolver.resolve(reference))
            except InvalidReferenceError:
                if not self.config.skip_invalid_references:
                    raise
                logger.debug("Skipping invalid reference %s in %s", reference, stylesheet_path)
                result.skipped.append(reference)

        if plunge:
            self._resolver.resolve(stylesheet_reference, plunge=True)

        logger.info(
            "Scanned %s: %d resources, %d skipped",
            stylesheet_path,
            len(result.resources),
            len(result.skipped),
        )
        return result
