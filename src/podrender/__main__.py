"""Allow ``python -m podrender``."""

from podrender.cli import app

app(prog_name="podrender")
