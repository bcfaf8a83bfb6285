import base64
from pathlib import Path

import typer

from vtop_api.config import configure_logging, settings
from vtop_api.domain.errors import VtopError
from vtop_api.presentation.api.dependencies import build_session

app = typer.Typer(help="VTOP Session API")


@app.command()
def serve(
    host: str = typer.Option(settings.api_host, "--host", "-h"),
    port: int = typer.Option(settings.api_port, "--port", "-p"),
) -> None:
    """Runs the HTTP API."""
    import uvicorn

    uvicorn.run("vtop_api.presentation.api.main:app", host=host, port=port, log_level=settings.log_level.lower())


@app.command()
def attendance(
    semester_id: str = typer.Argument(..., help="Semester identifier, e.g. CH20242505"),
    username: str = typer.Option(..., "--username", "-u", prompt=True),
    password: str = typer.Option(..., "--password", prompt=True, hide_input=True),
    captcha_file: Path = typer.Option(Path("captcha.jpg"), "--captcha-file", "-c"),
) -> None:
    """Logs in from the terminal and prints the attendance table."""
    configure_logging()
    session = build_session(settings)
    try:
        captcha_file.write_bytes(base64.b64decode(session.get_captcha()))
        typer.echo(f"CAPTCHA saved to {captcha_file}")
        captcha = typer.prompt("CAPTCHA")

        result = session.login(username, password, captcha)
        if not result.authorised:
            typer.echo(f"Login failed: {result.error_message}", err=True)
            raise typer.Exit(code=1)

        records = session.get_attendance(semester_id)
        typer.echo(f"{'SLOT':<8} {'ATTENDED':>8} {'TOTAL':>6} {'%':>4}")
        for rec in records:
            typer.echo(f"{rec.slot:<8} {rec.attended:>8} {rec.total:>6} {rec.percentage:>4}")
    except VtopError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    finally:
        session.close()


if __name__ == "__main__":
    app()
