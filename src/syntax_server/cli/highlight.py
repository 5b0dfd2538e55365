from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from syntax_server.core.highlight import Catalogs, Query, handle_query

console = Console()


def highlight(
    path: Annotated[Path, typer.Argument(exists=True, dir_okay=False, readable=True, help="File to highlight.")],
    theme: Annotated[str, typer.Option(help="Theme name (see `features`).")] = "default",
    scopify: Annotated[bool, typer.Option("--scopify", help="Export scopes instead of HTML.")] = False,
    extension: Annotated[
        str | None, typer.Option(help="Resolve the language by this extension instead of the file path.")
    ] = None,
) -> None:
    """Highlight a local file and print the JSON response the server would send."""
    code = path.read_text(encoding="utf-8")
    if extension is not None:
        query = Query(theme=theme, code=code, extension=extension, scopify=scopify)
    else:
        query = Query(theme=theme, code=code, filepath=str(path), scopify=scopify)

    payload = handle_query(query, Catalogs.load_defaults())
    console.print_json(data=payload)
    if "error" in payload:
        raise typer.Exit(code=1)
