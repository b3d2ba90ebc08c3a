#!filepath: refresh_cache/cli.py
from typing import Optional

import typer
from rich import print

from refresh_cache import AppConfig, CancelContext, init_logging, logs, __version__

app = typer.Typer(help="Refresh cache demo CLI")


@app.command()
def version():
    print(f"v{__version__}")


@app.command()
def serve(
        interval: Optional[float] = typer.Option(None, help="Refresh interval in seconds (default: config file)"),
        host: Optional[str] = typer.Option(None, help="Bind host"),
        port: Optional[int] = typer.Option(None, help="Bind port"),
        config: Optional[str] = typer.Option(None, help="Path to YAML config"),
):
    """
    Serve the topic cache over HTTP, refreshing it in the background.
    """
    from refresh_cache.api.app import create_app
    from refresh_cache.examples.topics import build_topic_cache

    cfg = AppConfig.load(config)
    init_logging(cfg.log)

    update_interval = interval if interval is not None else cfg.cache.update_interval
    topic_cache = build_topic_cache(update_interval=update_interval)

    ctx = CancelContext()
    topic_cache.start_and_manage_updates(ctx)

    host = host or cfg.server.host
    port = port or cfg.server.port
    print(f"[green]Serving topic cache on http://{host}:{port}/topic[/green]")

    try:
        create_app(topic_cache).run(host=host, port=port)
    finally:
        ctx.cancel()
        topic_cache.close()
        logs.info("[cli] server stopped")


@app.command()
def show():
    """
    Load the topic cache once and print it.
    """
    from refresh_cache.examples.topics import MAIN_TOPIC_KEY, build_topic_cache

    topic_cache = build_topic_cache(update_interval=None)
    topic_cache.start_updates()
    print(topic_cache.get_data(MAIN_TOPIC_KEY).model_dump())


if __name__ == "__main__":
    app()

# python -m refresh_cache.cli serve --interval 5
