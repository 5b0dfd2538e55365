from syntax_server.core.grammars import GrammarCatalog
from syntax_server.core.themes import ThemeCatalog


def render_features(grammars: GrammarCatalog, themes: ThemeCatalog) -> str:
    """Markdown listing of the embedded themes and the supported file extensions."""
    lines = ["## Embedded themes:", ""]
    lines += [f"- `{theme.name}`" for theme in themes]
    lines += ["", "## Supported file extensions:", ""]
    for grammar in grammars:
        lines.append(f"- {grammar.name} (`{'`, `'.join(grammar.filenames)}`)")
    lines.append("")
    return "\n".join(lines)
