from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import PurePosixPath

from syntax_server.core.errors import InvalidExtensionError
from syntax_server.core.grammars import Grammar, GrammarCatalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedLanguage:
    grammar: Grammar
    plaintext: bool = False


def split_filepath(filepath: str) -> tuple[str, str]:
    """Split ``"foo/myfile.go"`` into ``("myfile.go", "go")``."""
    path = PurePosixPath(filepath)
    return path.name, path.suffix.removeprefix(".")


def resolve_language(grammars: GrammarCatalog, extension: str, filepath: str, code: str) -> ResolvedLanguage:
    """Pick the grammar for a snippet.

    Without a file path (the legacy form of the request) the extension is tried,
    then the first line of the code, and failing both the request is rejected.
    With a file path the whole file name is tried before its extension, since
    some grammars register names such as ``Dockerfile`` or ``CMakeLists.txt``
    that a plain extension lookup would shadow. Then the first line is tried,
    and finally the snippet is treated as plain text.
    """
    if not filepath:
        grammar = grammars.find_by_extension(extension, code)
        if grammar is not None:
            logger.debug("Resolved extension %r to %s", extension, grammar.name)
            return ResolvedLanguage(grammar)
        grammar = grammars.find_by_first_line(code)
        if grammar is not None:
            logger.debug("Resolved first line to %s", grammar.name)
            return ResolvedLanguage(grammar)
        raise InvalidExtensionError()

    file_name, file_extension = split_filepath(filepath)
    for step, grammar in (
        ("file name", grammars.find_by_extension(file_name, code)),
        ("extension", grammars.find_by_extension(file_extension, code)),
    ):
        if grammar is not None:
            logger.debug("Resolved %s of %r to %s", step, filepath, grammar.name)
            return ResolvedLanguage(grammar)

    grammar = grammars.find_by_first_line(code)
    if grammar is not None:
        logger.debug("Resolved first line of %r to %s", filepath, grammar.name)
        return ResolvedLanguage(grammar)

    logger.debug("No grammar for %r, rendering plain text", filepath)
    return ResolvedLanguage(grammars.plain_text(), plaintext=True)
