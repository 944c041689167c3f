from pathlib import Path
from typing import Any

from flipbook.config import load_config


def test_env_document(monkeypatch: Any) -> None:
    monkeypatch.setenv("FLIPBOOK_DOCUMENT", "/tmp/story.pdf")
    cfg = load_config()
    assert cfg.source.document == "/tmp/story.pdf"


def test_custom_env_override(monkeypatch: Any, tmp_path: Path) -> None:
    cfg_file = tmp_path / "cfg.yml"
    cfg_file.write_text('source:\n  document_env: "CUSTOM_DOC"\n')
    monkeypatch.setenv("CUSTOM_DOC", "custom.pdf")
    cfg = load_config(cfg_file)
    assert cfg.source.document_env == "CUSTOM_DOC"
    assert cfg.source.document == "custom.pdf"


def test_explicit_env_mapping_wins(monkeypatch: Any) -> None:
    monkeypatch.setenv("FLIPBOOK_DOCUMENT", "/tmp/ignored.pdf")
    cfg = load_config(env={"FLIPBOOK_DOCUMENT": "mapped.pdf"})
    assert cfg.source.document == "mapped.pdf"


def test_empty_env_value_ignored() -> None:
    cfg = load_config(env={"FLIPBOOK_DOCUMENT": ""})
    assert cfg.source.document == "/books/smallstory2.pdf"
