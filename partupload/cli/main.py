"""partupload CLI - Main commands."""
import asyncio
import logging
from pathlib import Path
from typing import Optional

import aiohttp
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn

from partupload import setup_logging
from partupload.core.api.config import DEFAULT_APP_NAME, RetryConfig, UploaderConfig
from partupload.core.exceptions import UploadError
from partupload.core.upload import ChunkedUploader, UploadProgress

app = typer.Typer(
    name="partupload",
    help="Chunked multipart upload client",
    add_completion=False
)
console = Console()


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


@app.callback()
def callback():
    """Chunked multipart upload client."""


@app.command()
def upload(
    file_path: Path = typer.Argument(..., help="Local file to upload", exists=True, dir_okay=False),
    endpoint: str = typer.Option(..., "--endpoint", "-e", envvar="PARTUPLOAD_ENDPOINT", help="Endpoint root URL"),
    username: str = typer.Option(..., "--username", "-u", envvar="PARTUPLOAD_USERNAME", help="Basic auth user"),
    password: str = typer.Option(..., "--password", "-p", envvar="PARTUPLOAD_PASSWORD", help="Basic auth password"),
    app_name: str = typer.Option(DEFAULT_APP_NAME, "--app-name", "-a", envvar="PARTUPLOAD_APP_NAME", help="Bucket name on the server"),
    concurrency: int = typer.Option(1, "--concurrency", "-c", min=1, help="Parts in flight at once"),
    max_retries: int = typer.Option(4, "--max-retries", min=0, help="Retries per part"),
    transient_only: bool = typer.Option(
        False, "--transient-only", help="Retry only network errors, timeouts, 408, 429 and 5xx"
    ),
    insecure: bool = typer.Option(False, "--insecure", help="Disable TLS verification"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
):
    """Upload a file in 10 MiB parts."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)]
        )
        setup_logging(logging.DEBUG)

    kwargs = dict(
        base_url=endpoint,
        app_name=app_name,
        max_concurrent_parts=concurrency,
        retry=RetryConfig(max_retries=max_retries, transient_only=transient_only),
    )
    config = UploaderConfig.insecure(**kwargs) if insecure else UploaderConfig(**kwargs)

    async def do_upload():
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console
        ) as progress:
            task = progress.add_task(f"Uploading {file_path.name}", total=100)

            def on_progress(p: UploadProgress):
                progress.update(task, completed=p.percentage)

            uploader = ChunkedUploader(config=config, progress_callback=on_progress)
            return await uploader.upload(file_path, endpoint, username, password, app_name)

    try:
        result = run_async(do_upload())
    except (UploadError, aiohttp.ClientError, OSError, ValueError) as e:
        console.print(f"[red]Upload failed: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Uploaded:[/green] {file_path.name}")
    if isinstance(result, (dict, list)):
        console.print_json(data=result)
    elif result is not None:
        console.print(str(result))


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
