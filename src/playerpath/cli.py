"""`playerpath` command: run the server and operate on invitations."""

import asyncio
from typing import NoReturn

import click

from playerpath import __version__
from playerpath.core.config import get_settings
from playerpath.core.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="playerpath")
def cli() -> None:
    """PlayerPath coach invitation notifier.

    Configuration comes from PLAYERPATH_* environment variables or a .env file.
    """


@cli.command()
@click.option("--host", default=None, help="Bind address. Defaults to PLAYERPATH_HOST.")
@click.option("--port", type=int, default=None, help="Bind port. Defaults to PLAYERPATH_PORT.")
@click.option("--workers", type=int, default=None, help="Worker processes. Defaults to PLAYERPATH_WORKERS.")
@click.option("--reload/--no-reload", default=None, help="Auto-reload; on by default in development.")
def serve(host: str | None, port: int | None, workers: int | None, reload: bool | None) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings)

    if reload is None:
        reload = settings.is_development
    options = {
        "host": host or settings.host,
        "port": port or settings.port,
        # uvicorn ignores workers when reloading
        "workers": 1 if reload else (workers or settings.workers),
        "reload": reload,
    }
    logger.info("Launching server", environment=settings.environment, **options)

    uvicorn.run(
        "playerpath.infrastructure.api.app:app",
        log_level=settings.log_level.lower(),
        **options,
    )


@cli.command(name="init-db")
@click.option("--force", is_flag=True, help="Do not ask for confirmation.")
def init_db(force: bool) -> None:
    """Create the invitation tables directly from the models.

    Meant for development; production schemas are managed with alembic.
    """
    from playerpath.infrastructure.persistence.database import close_database, init_database

    settings = get_settings()
    configure_logging(settings)

    if settings.is_production and not force:
        click.echo("Refusing to run init-db in production; use `alembic upgrade head`.", err=True)
        raise SystemExit(1)
    if not force:
        click.confirm("Create all tables now?", abort=True)

    async def create() -> None:
        try:
            await init_database(create_tables=True)
        finally:
            await close_database()

    asyncio.run(create())
    click.echo("Tables created.")


@cli.command()
@click.argument("invitation_id")
@click.option("--as", "caller_uid", required=True, help="UID of the athlete who created the invitation.")
def resend(invitation_id: str, caller_uid: str) -> None:
    """Resend INVITATION_ID's email as if its creator had asked."""
    from playerpath.domain.services import CallableError
    from playerpath.infrastructure.hooks import build_notifier
    from playerpath.infrastructure.persistence.database import close_database

    settings = get_settings()
    configure_logging(settings)
    notifier = build_notifier(settings)

    async def run() -> str:
        try:
            result = await notifier.resend_invitation_email(caller_uid, invitation_id)
        finally:
            await close_database()
        return result.message

    try:
        click.echo(asyncio.run(run()))
    except CallableError as e:
        click.echo(f"Error ({e.category.value}): {e.message}", err=True)
        raise SystemExit(1)


@cli.command()
def info() -> None:
    """Print the effective configuration."""
    settings = get_settings()
    sections = {
        "Service": {
            "Environment": settings.environment,
            "Debug": settings.debug,
            "API prefix": settings.api_prefix,
            "Bind": f"{settings.host}:{settings.port} ({settings.workers} workers)",
        },
        "Database": {"URL": settings.database_url},
        "Email": {
            "Configured": settings.email_configured,
            "From": f"{settings.email_from_name} <{settings.email_from_address}>",
            "Links": f"{settings.invitation_link_scheme}:// and https://{settings.invitation_web_domain}",
        },
        "Logging": {"Level": settings.log_level, "Format": settings.log_format},
    }

    click.echo(f"PlayerPath notifier v{settings.app_version}")
    for title, values in sections.items():
        click.echo(f"\n{title}:")
        for label, value in values.items():
            click.echo(f"  {label + ':':<13} {value}")


def main() -> NoReturn:
    cli()


if __name__ == "__main__":
    main()
