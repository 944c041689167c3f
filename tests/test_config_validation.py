from pathlib import Path

import pytest
from pydantic import ValidationError

from flipbook.config import load_config


@pytest.mark.parametrize(
    "body",
    [
        "render:\n  scale: 0\n",
        "render:\n  default_aspect_ratio: -1.4\n",
        "animation:\n  duration_ms: -1\n",
        "assets:\n  cover: ''\n",
    ],
)
def test_invalid_values(tmp_path: Path, body: str) -> None:
    cfg_file = tmp_path / "bad.yml"
    cfg_file.write_text(body)
    with pytest.raises(ValidationError):
        load_config(cfg_file)


def test_unknown_key(tmp_path: Path) -> None:
    cfg_file = tmp_path / "bad.yml"
    cfg_file.write_text("unknown:\n  foo: 1\n")
    with pytest.raises(ValidationError):
        load_config(cfg_file)


def test_partial_override_keeps_defaults(tmp_path: Path) -> None:
    cfg_file = tmp_path / "cfg.yml"
    cfg_file.write_text("render:\n  scale: 1.5\n")
    cfg = load_config(cfg_file, env={})
    assert cfg.render.scale == 1.5
    assert cfg.render.default_aspect_ratio == 1.4
    assert cfg.animation.duration_ms == 260


def test_empty_override_file(tmp_path: Path) -> None:
    cfg_file = tmp_path / "empty.yml"
    cfg_file.write_text("")
    assert load_config(cfg_file, env={}).render.scale == 2.0
