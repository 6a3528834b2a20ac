"""Dump the dashboard's OpenAPI document."""

import sys

from cli._runner import run

DEFAULT_OUTPUT = "docs/openapi.json"


def main() -> None:
    """Write the OpenAPI document; ``openapi [OUTPUT]`` picks the path."""
    output = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_OUTPUT
    sys.exit(run(["uv", "run", "python", "scripts/generate_openapi.py", output]))
