"""Entry point for ``python -m convo_highlights``."""

from convo_highlights.cli import app

if __name__ == "__main__":
    app()
