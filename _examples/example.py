"""Example usage of ResourceLocator with JSON input file.

This script reads a base path and a sequence of lookups from a JSON file
and prints what each lookup resolves to.

JSON format:
    {
        "base_path": "http://example.com/",
        "resource_types": ["woff"],
        "lookups": [
            {"reference": "/css/style.css", "plunge": true},
            {"reference": "../fonts/Helvetica.ttf"}
        ],
        "stylesheets": [
            {"reference": "/css/fonts.css", "css": "src: url(../fonts/a.ttf);"}
        ]
    }

Usage:
    cd ..
    python _examples/example.py [path_to_input.json]

Example:
    python example.py                 # Uses default example_in.json
    python example.py myinput.json    # Uses custom JSON file
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from locator_config import LocatorConfig
from resource_locator import ResourceLocator
from utils import InvalidReferenceError

class Colors:
    YELLOW = "\033[33m"
    CYAN = "\033[36m"
    RED = "\033[31m"
    BRIGHT_CYAN = "\033[96m"
    DIM = "\033[2m"
    RESET = "\033[0m"

logging.basicConfig(
    level=logging.INFO,
    format= Colors.DIM + '%(asctime)s [%(levelname)s] ◦ %(name)s ◦ %(message)s' + Colors.RESET,
    handlers=[
        logging.StreamHandler()
    ]
)


class LocatorParams:
    """Data class for locator parameters."""
    def __init__(
        self,
        base_path: str,
        lookups: List[Dict[str, Any]],
        stylesheets: List[Dict[str, Any]],
        resource_types: Optional[List[str]] = None
    ):
        self.base_path = base_path
        self.lookups = lookups
        self.stylesheets = stylesheets
        self.resource_types = resource_types


def parse_input_file(filepath: str) -> LocatorParams:
    """Parse JSON input file and extract locator parameters.

    Args:
        filepath: Path to the JSON input file

    Returns:
        LocatorParams object with all lookups
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError("JSON input must be an object")

    base_path = data.get("base_path")
    if not base_path:
        raise ValueError("base_path is required")

    return LocatorParams(
        base_path=base_path,
        lookups=data.get("lookups", []),
        stylesheets=data.get("stylesheets", []),
        resource_types=data.get("resource_types")
    )


def print_lookup(reference: str, plunge: bool, result: str, current_path: str) -> None:
    marker = "⤵" if plunge else "→"
    print(f"{Colors.YELLOW}{reference}{Colors.RESET} {marker} {Colors.BRIGHT_CYAN}{result}{Colors.RESET}"
          f" {Colors.DIM}(current: {current_path}){Colors.RESET}")


def main():
    if len(sys.argv) > 1:
        input_file = sys.argv[1]
    else:
        input_file = "example_in.json"

    input_path = Path(input_file)
    if not input_path.exists():
        print(f"Error: Input file not found: {input_path}")
        sys.exit(1)

    params = parse_input_file(str(input_path))
    locator = ResourceLocator(LocatorConfig(
        base_path=params.base_path,
        resource_types=params.resource_types
    ))

    for lookup in params.lookups:
        reference = lookup["reference"]
        plunge = bool(lookup.get("plunge", False))
        try:
            result = locator.find(reference, plunge=plunge)
        except InvalidReferenceError as e:
            print(f"{Colors.RED}{e}{Colors.RESET}")
            continue
        print_lookup(reference, plunge, result, locator.current_path)

    for sheet in params.stylesheets:
        resources = locator.scan_stylesheet(
            sheet["reference"],
            sheet.get("css", ""),
            plunge=bool(sheet.get("plunge", False))
        )
        print(f"{Colors.CYAN}{json.dumps(resources.to_dict(), indent=2, ensure_ascii=False)}{Colors.RESET}")


if __name__ == "__main__":
    main()
