from cli._runner import run


def main() -> None:
    """Lint the dashboard package, tests and scripts."""
    import sys

    sys.exit(run(["uv", "run", "ruff", "check", "dashboard", "tests", "scripts", "cli"]))


def format() -> None:
    """Format the codebase."""
    import sys

    sys.exit(run(["uv", "run", "ruff", "format", "."]))


def fix() -> None:
    """Apply safe lint autofixes."""
    import sys

    sys.exit(run(["uv", "run", "ruff", "check", "--fix", "."]))
