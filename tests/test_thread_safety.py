"""Thread safety tests for the text core and the client.

Rule chains are shared module-level objects; these tests verify that
concurrent use gives the same results as sequential use.
"""

import threading
from concurrent.futures import ThreadPoolExecutor, as_completed

from notesbridge import NotesClient, NotesConfig, escape, extract, render, sanitize

DOCUMENTS = [
    f"# Note {i}\n\n**bold {i}** and *italic*\n\n- a{i}\n- b{i}\n\n1. x\n2. y\n\n`code` tell {i}"
    for i in range(40)
]


class _SlowRunner:
    """Records scripts from many threads."""

    def __init__(self) -> None:
        self.scripts: list[str] = []
        self._lock = threading.Lock()

    def run(self, script: str) -> str:
        with self._lock:
            self.scripts.append(script)
        return "Note created"


class TestConcurrentConversion:
    """Shared rule chains under a thread pool."""

    def test_render_matches_sequential(self) -> None:
        """Parallel rendering matches sequential rendering."""
        expected = [render(doc) for doc in DOCUMENTS]
        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(render, DOCUMENTS))
        assert results == expected

    def test_extract_matches_sequential(self) -> None:
        """Parallel extraction matches sequential extraction."""
        html = [render(doc) for doc in DOCUMENTS]
        expected = [extract(h) for h in html]
        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(extract, html))
        assert results == expected

    def test_ordered_list_numbering_isolated(self) -> None:
        """Each list numbers from 1 even when many threads extract at once."""
        html = "<ol>" + "<li>x</li>" * 5 + "</ol>"
        expected = "\n".join(f"{i}. x" for i in range(1, 6))
        with ThreadPoolExecutor(max_workers=10) as executor:
            futures = [executor.submit(extract, html) for _ in range(100)]
            for future in as_completed(futures):
                assert future.result() == expected

    def test_escape_and_sanitize(self) -> None:
        """Escaping and sanitizing are safe to share."""
        payloads = [f'<script>{i}</script>"{i}" end tell' for i in range(50)]
        expected = [escape(sanitize(p)) for p in payloads]
        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lambda p: escape(sanitize(p)), payloads))
        assert results == expected


class TestConcurrentClient:
    def test_shared_client(self) -> None:
        """One client serves many threads, one script per call."""
        runner = _SlowRunner()
        client = NotesClient(NotesConfig(), runner=runner)  # type: ignore[arg-type]

        with ThreadPoolExecutor(max_workers=8) as executor:
            futures = [
                executor.submit(client.create, f"Note {i}", DOCUMENTS[i]) for i in range(len(DOCUMENTS))
            ]
            for future in as_completed(futures):
                assert future.result() == "Note created"

        assert len(runner.scripts) == len(DOCUMENTS)
        assert all(script.count("end tell") == 1 for script in runner.scripts)
