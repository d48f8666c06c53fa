from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Mapping, Optional, Union

# References starting with this prefix are used verbatim
EXTERNAL_REFERENCE_PREFIX = "http"

DEFAULT_RESOURCE_TYPES = (
    "png",   # Images
    "jpg",
    "gif",
    "css",   # Stylesheets
    "ttf",   # Fonts
)

WEB_FONT_TYPES = (
    "woff",
    "woff2",
    "otf",
    "eot",
    "svg",
)

# Either extra extensions to allow, or {extension: enabled} overrides
ResourceTypeOverrides = Union[Mapping[str, bool], Iterable[str]]


def _normalize_extension(extension: str) -> str:
    return extension.lstrip(".")


def merge_resource_types(overrides: Optional[ResourceTypeOverrides] = None) -> FrozenSet[str]:
    """Merge caller-supplied resource types into the defaults.

    A plain iterable extends the defaults. A mapping is applied by extension
    key, so ``{"gif": False}`` removes a default and ``{"svg": True}`` adds one.

    Args:
        overrides: Extensions to add, or a mapping of extension to enabled flag

    Returns:
        Frozen set of allowed extensions (without leading dots)

    Example:
        >>> sorted(merge_resource_types({"gif": False, "svg": True}))
        ['css', 'jpg', 'png', 'svg', 'ttf']
    """
    types = set(DEFAULT_RESOURCE_TYPES)
    if overrides is None:
        return frozenset(types)

    if isinstance(overrides, str):
        raise TypeError("resource type overrides must be an iterable of extensions, not a string")

    if isinstance(overrides, Mapping):
        for extension, enabled in overrides.items():
            extension = _normalize_extension(extension)
            if enabled:
                types.add(extension)
            else:
                types.discard(extension)
    else:
        types.update(_normalize_extension(extension) for extension in overrides)

    return frozenset(types)


@dataclass
class LocatorConfig:
    """Resource locator configuration model.

    Attributes:
        base_path: Root location references are resolved against
            (e.g. "http://example.com/")
        resource_types: Overrides merged into DEFAULT_RESOURCE_TYPES.
            None keeps the defaults, an iterable adds extensions, a mapping
            of {extension: bool} enables or disables them by key.
        skip_invalid_references: When scanning a stylesheet, collect
            references with a non-whitelisted extension instead of raising
        skip_data_uris: When scanning a stylesheet, ignore inline
            ``data:`` URIs entirely

    Example:
        >>> config = LocatorConfig(
        ...     base_path="http://example.com/",
        ...     resource_types={"woff": True, "gif": False},
        ...     skip_invalid_references=True,
        ...     skip_data_uris=True,
        ... )
    """
    base_path: str
    resource_types: Optional[ResourceTypeOverrides] = field(default=None)
    skip_invalid_references: bool = field(default=True)
    skip_data_uris: bool = field(default=True)

    def __post_init__(self):
        if not self.base_path:
            raise ValueError("base_path must be a non-empty string")

    @property
    def allowed_extensions(self) -> FrozenSet[str]:
        """Resource types after merging overrides into the defaults."""
        return merge_resource_types(self.resource_types)


LOCATOR_CONFIG_DEFAULT = LocatorConfig(
    base_path="http://localhost/",
    resource_types=None,             # png, jpg, gif, css, ttf
    skip_invalid_references=True,    # Collect unknown types while scanning
    skip_data_uris=True,             # Inline images are not resources
)


# Presets for different use cases
LOCATOR_CONFIG_WEB_FONTS = LocatorConfig(
    base_path="http://localhost/",
    resource_types=WEB_FONT_TYPES,   # Accept modern @font-face formats
    skip_invalid_references=True,
    skip_data_uris=True,
)

LOCATOR_CONFIG_STRICT = LocatorConfig(
    base_path="http://localhost/",
    resource_types=None,
    skip_invalid_references=False,   # Fail on the first unknown reference
    skip_data_uris=True,
)
