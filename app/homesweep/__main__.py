"""Allow running homesweep as ``python -m homesweep``."""

from homesweep.cli.main import app

app()
