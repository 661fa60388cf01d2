"""Allow sentry-sender to be executable through `python -m sentry_sender`."""
from sentry_sender.cli import cli


if __name__ == "__main__":  # pragma: no cover
    cli(prog_name="sentry-sender")
