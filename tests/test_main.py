from pathlib import Path

import pytest

import main

ICON_SVG = (
    '<svg width="64" height="64" viewBox="0 0 64 64" xmlns="http://www.w3.org/2000/svg">'
    '<rect width="64" height="64" fill="#0f1729"/></svg>'
)
LOGO_SVG = (
    '<svg width="128" height="128" xmlns="http://www.w3.org/2000/svg">'
    '<g transform="translate(64,64)"><circle r="9" fill="#d97757"/></g></svg>'
)


@pytest.fixture
def asset_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    src = tmp_path / "src"
    src.mkdir()
    (src / "logo.svg").write_text(LOGO_SVG, encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ASSETS_SOURCE_DIR", str(src))
    monkeypatch.setenv("ASSETS_OUTPUT_DIR", str(tmp_path / "out"))
    monkeypatch.delenv("ASSETS_STRIP_TRANSFORM", raising=False)
    monkeypatch.delenv("LOG_FILE", raising=False)
    return src


def test_run_success_exits_zero(asset_env: Path, tmp_path: Path):
    (asset_env / "favicon.svg").write_text(ICON_SVG, encoding="utf-8")
    assert main.run() == 0
    assert len(list((tmp_path / "out").iterdir())) == 4


def test_run_missing_source_exits_nonzero(
    asset_env: Path, tmp_path: Path, caplog: pytest.LogCaptureFixture
):
    assert main.run() == 1
    assert not (tmp_path / "out").exists()
    assert "favicon.svg" in caplog.text
