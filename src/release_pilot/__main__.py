"""Allow ``python -m release_pilot``."""

from release_pilot.cli import app

if __name__ == "__main__":
    app()
