import subprocess
import sys
from typing import List, Optional

import typer
from rich.console import Console

from config import settings

APP_NAME = "Book Store CLI"

console = Console()

app = typer.Typer(help=APP_NAME, add_completion=False)


def build_uvicorn_args(host: str, port: int, reload: bool = False) -> List[str]:
    args = [
        sys.executable,
        "-m", "uvicorn",
        "api:app",
        "--host", host,
        "--port", str(port),
        "--log-level", settings.log_level.lower(),
    ]
    if reload:
        args.append("--reload")
    return args


def serve(host: Optional[str] = None, port: Optional[int] = None, reload: bool = False) -> int:
    """Run the API under uvicorn and return its exit code."""
    host = host or settings.api_host
    port = int(port or settings.api_port)
    url = f"http://{host}:{port}"
    console.print(f"[green]Server is running on [link={url}]{url}[/link][/]")

    try:
        result = subprocess.run(build_uvicorn_args(host, port, reload))
    except FileNotFoundError:
        console.print("[bold red]Error:[/] could not start the Python interpreter for uvicorn.")
        return 1
    except KeyboardInterrupt:
        console.print("[yellow]Server stopped.[/]")
        return 0

    if result.returncode != 0:
        console.print(f"[bold red]uvicorn exited with code {result.returncode}.[/] Is it installed?")
    return result.returncode


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context):
    """Start the server when no command is given."""
    if ctx.invoked_subcommand is None:
        raise typer.Exit(code=serve())


@app.command("serve")
def cli_serve(
    host: Optional[str] = typer.Option(None, "--host", help="Interface to bind (default: API_HOST)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to listen on (default: PORT)"),
    reload: bool = typer.Option(False, "--reload", help="Restart the server when source files change"),
):
    """Start the HTTP API with uvicorn."""
    raise typer.Exit(code=serve(host, port, reload))


if __name__ == "__main__":
    app()
