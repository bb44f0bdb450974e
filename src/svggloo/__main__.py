"""Entry point for running svggloo as a module.

Usage:
    python -m svggloo [command] [options]

Example:
    python -m svggloo render examples/brochure/brochure.svg output --field co --field st --field ci
    python -m svggloo check
"""

from svggloo.cli import app

if __name__ == "__main__":
    app()
