"""Allow running fixguard as ``python -m fixguard``."""

from fixguard.cli.main import app

if __name__ == "__main__":
    app()
