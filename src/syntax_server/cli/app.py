import typer

from syntax_server.cli.features import features
from syntax_server.cli.highlight import highlight
from syntax_server.cli.serve import serve

app = typer.Typer(
    name="syntax-server",
    help="Syntax Server CLI — highlight code snippets as HTML or scope exports.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("serve")(serve)
app.command("features")(features)
app.command("highlight")(highlight)


def main() -> None:
    app()
