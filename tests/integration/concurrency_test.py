"""Concurrent requests share the catalogs but never tokenizer state."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from syntax_server.core.highlight import Catalogs, Query, handle_query

_SNIPPETS = [
    ("main.go", 'package main\n\nimport "fmt"\n\nfunc main() {\n\tfmt.Println("hi")\n}\n'),
    ("app.py", "import os\n\n\ndef main():\n    return os.getcwd()\n"),
    ("index.js", "const x = () => `template ${1 + 2}`;\n"),
    ("Dockerfile", "FROM alpine\nRUN echo hi\n"),
    ("notes.nonexistent_ext", "just text\n"),
]


def _queries() -> list[Query]:
    return [
        Query(theme="monokai", code=code, filepath=path, scopify=scopify)
        for path, code in _SNIPPETS
        for scopify in (False, True)
    ]


def test_parallel_results_match_sequential(default_catalogs: Catalogs) -> None:
    queries = _queries() * 8
    expected = [handle_query(q, default_catalogs) for q in queries]

    with ThreadPoolExecutor(max_workers=8) as pool:
        actual = list(pool.map(lambda q: handle_query(q, default_catalogs), queries))

    assert actual == expected
    assert not any("error" in payload for payload in actual)


def test_scopified_regions_cover_each_snippet(default_catalogs: Catalogs) -> None:
    for path, code in _SNIPPETS:
        payload = handle_query(Query(theme="monokai", code=code, filepath=path, scopify=True), default_catalogs)
        assert sum(r["length"] for r in payload["scopified_regions"]) == len(code.encode("utf-8")), path
