"""
Command line interface for the Guest Registration service.
"""
import click
from typing import Optional

from .firebase_sync.firestore_client import FirestoreClient
from .registration_token.token_generator import TokenIssuer
from .utils.errors import RegistrationError
from .utils.formatters import format_date_ddmmyyyy
from .utils.logger import setup_logger
from .utils.models import BookingStatus
from config.settings import app_config


class RegistrationAdmin:
    """Operator tasks that talk to Firestore directly."""

    def __init__(self, log_level: str = "INFO", log_file: Optional[str] = None):
        self.logger = setup_logger("guest_registration", log_level, log_file)
        self.firestore_client = FirestoreClient()
        self.token_issuer = TokenIssuer(self.firestore_client, logger=self.logger)

    def issue_token(self, length: int, max_retries: int) -> str:
        return self.token_issuer.generate_unique_token(length, max_retries)

    def list_bookings(self, status: Optional[str] = None):
        return self.firestore_client.list_bookings(status)

    def get_stats(self):
        return self.firestore_client.get_booking_stats()


@click.group()
@click.option('--log-level', default=app_config.log_level,
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              help='Logging level')
@click.option('--log-file', default=app_config.log_file, help='Write JSON logs to this file')
@click.pass_context
def main(ctx, log_level, log_file):
    """
    Guest Registration service.

    Booking management and guest self-registration backed by Firebase.
    """
    ctx.ensure_object(dict)
    ctx.obj['log_level'] = log_level.upper()
    ctx.obj['log_file'] = log_file


def _admin(ctx) -> RegistrationAdmin:
    return RegistrationAdmin(ctx.obj['log_level'], ctx.obj['log_file'])


@main.command()
@click.option('--host', default=None, help='Bind address (defaults to settings)')
@click.option('--port', default=None, type=int, help='Port (defaults to settings)')
@click.option('--reload/--no-reload', default=None, help='Auto-reload on code changes')
def serve(host, port, reload):
    """Run the HTTP API with uvicorn."""
    import uvicorn
    from .api.config import settings

    uvicorn.run(
        "src.api.app:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=settings.environment == "development" if reload is None else reload,
        log_level=settings.log_level.lower(),
        access_log=True
    )


@main.command('issue-token')
@click.option('--length', default=app_config.token_length, type=click.IntRange(min=1),
              show_default=True, help='Token length in characters')
@click.option('--max-retries', default=app_config.token_max_retries, type=click.IntRange(min=1),
              show_default=True, help='Attempts before giving up')
@click.pass_context
def issue_token(ctx, length, max_retries):
    """Print a registration token no booking uses yet."""
    try:
        token = _admin(ctx).issue_token(length, max_retries)
    except RegistrationError as e:
        click.echo(f"Error: {e.message}", err=True)
        ctx.exit(1)
    click.echo(token)


@main.command()
@click.option('--status', type=click.Choice([s.value for s in BookingStatus]), default=None,
              help='Only bookings with this status')
@click.pass_context
def bookings(ctx, status):
    """List bookings, newest first."""
    try:
        rows = _admin(ctx).list_bookings(status)
    except RegistrationError as e:
        click.echo(f"Error: {e.message}", err=True)
        ctx.exit(1)

    if not rows:
        click.echo("No bookings found.")
        return
    for booking in rows:
        click.echo(
            f"{booking.id}  {booking.property_name:<24} "
            f"{format_date_ddmmyyyy(booking.check_in_date)} -> {format_date_ddmmyyyy(booking.check_out_date)}  "
            f"{booking.confirmation_code:<12} {booking.status.value:<9} {booking.registration_token}"
        )


@main.command()
@click.pass_context
def stats(ctx):
    """Show booking counts per status."""
    try:
        booking_stats = _admin(ctx).get_stats()
    except RegistrationError as e:
        click.echo(f"Error: {e.message}", err=True)
        ctx.exit(1)

    click.echo("Booking Statistics:")
    click.echo(f"Total bookings: {booking_stats.total}")
    for status in BookingStatus:
        click.echo(f"  {status.value}: {booking_stats.by_status.get(status.value, 0)}")


if __name__ == "__main__":
    main()
