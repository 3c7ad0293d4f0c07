"""Shared fixtures: a small on-disk vault."""
from __future__ import annotations

from pathlib import Path

import pytest

from auto_linker import AutoLinker, FileVault, LinkerSettings


def write_note(vault: Path, rel: str, text: str) -> Path:
    path = vault / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(text.encode("utf-8"))
    return path


def read_note(vault: Path, rel: str) -> str:
    return (vault / rel).read_bytes().decode("utf-8")


@pytest.fixture
def vault(tmp_path: Path) -> Path:
    root = tmp_path / "vault"
    root.mkdir()
    write_note(root, "Paris.md", "")
    write_note(root, "Index.md", "Places: [[Paris]], [[Ghost]] and [[photo.png]]\n")
    write_note(root, "Journal/Trip.md", "I visited Paris and Rome.\n")
    write_note(root, "Journal/Later.md", "Back to paris, then London.\n")
    return root


@pytest.fixture
def notices() -> list[str]:
    return []


@pytest.fixture
def make_linker(vault: Path, notices: list[str]):
    def _make(confirm=None, dry_run: bool = False, **options) -> AutoLinker:
        return AutoLinker(
            FileVault(vault),
            LinkerSettings(**options),
            notify=notices.append,
            confirm=confirm,
            dry_run=dry_run,
        )
    return _make
