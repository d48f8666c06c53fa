"""Tests for the ResourceLocator facade."""

import logging

import pytest

from locator_config import LocatorConfig, LOCATOR_CONFIG_DEFAULT
from resource_locator import ResourceLocator, StylesheetResources
from utils import InvalidReferenceError


FONTS_CSS = """
@import "reset.css";
@font-face {
    font-family: Helvetica;
    src: url('../fonts/Helvetica.woff') format('woff'),
         url('../fonts/Helvetica.ttf') format('truetype');
}
.logo { background: url(data:image/png;base64,AAAA) }
.hero { background: url(/img/hero.jpg) }
.cdn { background: url(http://cdn.example.com/bg.gif) }
"""


@pytest.fixture
def locator():
    return ResourceLocator(LocatorConfig(base_path="http://example.com/"))


class TestResourceLocator:
    """Test cases for ResourceLocator lookups."""

    def test_default_config(self):
        """Locator without config uses the default preset."""
        locator = ResourceLocator()
        assert locator.config is LOCATOR_CONFIG_DEFAULT
        assert locator.base_path == "http://localhost/"
        assert locator.current_path == "http://localhost/"

    def test_find(self, locator):
        """Lookups resolve like the underlying resolver."""
        assert locator.find("/css/style.css") == "http://example.com/css/style.css"
        assert locator.find("css/tools/../base.css") == "http://example.com/css/base.css"
        assert locator.current_path == "http://example.com/"

    def test_find_with_plunge(self, locator):
        """Plunging moves the locator."""
        locator.find("/css/style.css", plunge=True)
        assert locator.find("fonts.css") == "http://example.com/css/fonts.css"
        assert locator.find("../fonts/Helvetica.ttf", plunge=True) == "http://example.com/fonts/Helvetica.ttf"

    def test_find_all(self, locator):
        """Several lookups in one call."""
        assert locator.find_all(["a.css", "b.png"]) == [
            "http://example.com/a.css",
            "http://example.com/b.png",
        ]

    def test_find_invalid(self, locator):
        """Unknown types raise InvalidReferenceError."""
        with pytest.raises(InvalidReferenceError):
            locator.find("script.js")

    def test_custom_resource_types(self):
        """Configured types are merged into the defaults."""
        locator = ResourceLocator(LocatorConfig(
            base_path="http://example.com/",
            resource_types={"woff": True, "gif": False},
        ))
        assert locator.find("a.woff") == "http://example.com/a.woff"
        with pytest.raises(InvalidReferenceError):
            locator.find("a.gif")

    def test_ready_log_lists_merged_types(self, caplog):
        """Construction logs the configured types after merging."""
        with caplog.at_level(logging.INFO, logger="resource_locator"):
            ResourceLocator(LocatorConfig(
                base_path="http://example.com/",
                resource_types={"gif": False, "svg": True},
            ))
        assert "types: css, jpg, png, svg, ttf" in caplog.text

    def test_reset(self, locator):
        """reset() returns to the configured base path."""
        locator.find("css/a.css", plunge=True)
        assert locator.current_path == "http://example.com/css"
        locator.reset()
        assert locator.current_path == "http://example.com/"


class TestScanStylesheet:
    """Test cases for stylesheet scanning."""

    def test_scan_resolves_relative_to_stylesheet(self, locator):
        """References resolve against the stylesheet's directory."""
        result = locator.scan_stylesheet("/css/fonts.css", FONTS_CSS)

        assert isinstance(result, StylesheetResources)
        assert result.stylesheet == "http://example.com/css/fonts.css"
        assert result.resources == [
            "http://example.com/css/reset.css",
            "http://example.com/fonts/Helvetica.ttf",
            "http://example.com/img/hero.jpg",
            "http://cdn.example.com/bg.gif",
        ]
        assert result.skipped == [
            "../fonts/Helvetica.woff",
            "data:image/png;base64,AAAA",
        ]

    def test_scan_does_not_move_locator(self, locator):
        """Without plunge the locator stays where it was."""
        locator.scan_stylesheet("/css/fonts.css", FONTS_CSS)
        assert locator.current_path == "http://example.com/"

    def test_scan_with_plunge(self, locator):
        """With plunge the locator moves into the stylesheet's directory."""
        locator.scan_stylesheet("/css/fonts.css", FONTS_CSS, plunge=True)
        assert locator.current_path == "http://example.com/css"
        assert locator.find("print.css") == "http://example.com/css/print.css"

    def test_scan_strict_raises(self):
        """Strict configs raise on the first invalid reference."""
        locator = ResourceLocator(LocatorConfig(
            base_path="http://example.com/",
            skip_invalid_references=False,
        ))
        with pytest.raises(InvalidReferenceError) as exc_info:
            locator.scan_stylesheet("/css/fonts.css", FONTS_CSS)
        assert exc_info.value.reference == "../fonts/Helvetica.woff"

    def test_scan_data_uris_not_skipped(self):
        """Data URIs go through validation when skipping is off."""
        locator = ResourceLocator(LocatorConfig(
            base_path="http://example.com/",
            skip_data_uris=False,
        ))
        result = locator.scan_stylesheet("a.css", "b { background: url(data:image/png;base64,AAAA) }")
        assert result.resources == []
        assert result.skipped == ["data:image/png;base64,AAAA"]

    def test_scan_invalid_stylesheet_reference(self, locator):
        """The stylesheet reference itself is validated."""
        with pytest.raises(InvalidReferenceError):
            locator.scan_stylesheet("/css/fonts.less", FONTS_CSS)
        assert locator.current_path == "http://example.com/"

    def test_to_dict(self, locator):
        """Results serialize to plain dictionaries."""
        result = locator.scan_stylesheet("a.css", "b { background: url(b.png) }")
        assert result.to_dict() == {
            "stylesheet": "http://example.com/a.css",
            "resources": ["http://example.com/b.png"],
            "skipped": [],
        }

    def test_scan_stylesheet_on_other_host(self, locator):
        """References inside a remote stylesheet resolve against its own host."""
        css = """
        .a { background: url(/img/x.png) }
        .b { src: url(../fonts/a.ttf) }
        .c { background: url(bg.gif) }
        """
        result = locator.scan_stylesheet("http://cdn.example.com/css/a.css", css)

        assert result.stylesheet == "http://cdn.example.com/css/a.css"
        assert result.resources == [
            "http://cdn.example.com/img/x.png",
            "http://cdn.example.com/fonts/a.ttf",
            "http://cdn.example.com/css/bg.gif",
        ]
        assert locator.base_path == "http://example.com/"
        assert locator.current_path == "http://example.com/"
        assert locator.find("/img/x.png") == "http://example.com/img/x.png"

    def test_scan_stylesheet_on_other_host_with_plunge(self, locator):
        """Plunging into a remote stylesheet keeps the locator's base path."""
        locator.scan_stylesheet("http://cdn.example.com/css/a.css", "", plunge=True)

        assert locator.current_path == "http://cdn.example.com/css"
        assert locator.find("b.css") == "http://cdn.example.com/css/b.css"
        assert locator.find("/b.css") == "http://example.com/b.css"

    def test_scan_after_plunge(self, locator):
        """Relative stylesheets are found from where the locator has plunged."""
        locator.find("/themes/dark/page.css", plunge=True)
        css = "a { background: url(img/bg.png) } @import url(../shared.css); b { background: url(/img/logo.png) }"

        result = locator.scan_stylesheet("css/a.css", css)

        assert result.stylesheet == "http://example.com/themes/dark/css/a.css"
        assert result.resources == [
            "http://example.com/themes/dark/css/img/bg.png",
            "http://example.com/themes/dark/shared.css",
            "http://example.com/img/logo.png",
        ]
        assert locator.current_path == "http://example.com/themes/dark"
