import typer

from .commands import (
    check as check_cmd,
    inspect as inspect_cmd,
    strip as strip_cmd,
)

app = typer.Typer(help="pngstrip CLI")

app.add_typer(strip_cmd.app, name="strip")
app.add_typer(check_cmd.app, name="check")
app.add_typer(inspect_cmd.app, name="inspect")


if __name__ == "__main__":
    app()
