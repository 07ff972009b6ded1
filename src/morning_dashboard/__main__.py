"""Allow running as ``python -m morning_dashboard``."""

from morning_dashboard.cli.main import app

if __name__ == "__main__":
    app()
