from rich.console import Console

from syntax_server.core.features import render_features
from syntax_server.core.grammars import GrammarCatalog
from syntax_server.core.themes import ThemeCatalog

console = Console()


def features() -> None:
    """List the embedded themes and the supported file extensions."""
    console.print(
        render_features(GrammarCatalog.load_defaults(), ThemeCatalog.load_defaults()),
        markup=False,
        emoji=False,
        highlight=False,
        soft_wrap=True,
    )
