"""careerecon command line interface."""

from careerecon.cli.economic import economic_app
from careerecon.infrastructure.config import get_settings
from careerecon.infrastructure.logging import configure_logging

app = economic_app


@app.callback()
def main() -> None:
    """BLS economic data for career exploration."""
    configure_logging(get_settings().log_level)
