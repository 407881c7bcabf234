import click


@click.group()
def main() -> None:
    """Chathub - shared chat state and message history runtime."""


@main.command()
@click.option("--host", default=None, help="Bind host (default: from CHATHUB_HOST or 0.0.0.0).")
@click.option("--port", default=None, type=int, help="Bind port (default: from CHATHUB_PORT or 8000).")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development.")
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Start the chat runtime server."""
    import uvicorn

    from chathub.chat_runtime.settings import ChatSettings

    settings = ChatSettings()

    uvicorn.run(
        "chathub.chat_runtime.app:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level="warning",  # uvicorn's own logging is intercepted by loguru
    )


# ---------------------------------------------------------------------------
# Database management
# ---------------------------------------------------------------------------


def _run_schema(action: str) -> None:
    import asyncio

    from chathub.chat_runtime.db.engine import create_engine, create_schema, drop_schema
    from chathub.chat_runtime.settings import ChatSettings

    settings = ChatSettings()
    if not settings.database_url:
        raise click.ClickException("CHATHUB_DATABASE_URL is not set.")

    async def _go() -> None:
        engine = create_engine(settings.database_url)
        try:
            await (create_schema(engine) if action == "create" else drop_schema(engine))
        finally:
            await engine.dispose()

    asyncio.run(_go())


@main.group()
def db() -> None:
    """Message store schema commands."""


@db.command()
def create() -> None:
    """Create missing tables."""
    _run_schema("create")
    click.echo("Schema created.")


@db.command()
@click.confirmation_option(prompt="Drop all chathub tables?")
def drop() -> None:
    """Drop all tables."""
    _run_schema("drop")
    click.echo("Schema dropped.")


if __name__ == "__main__":
    main()
