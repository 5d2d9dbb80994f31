"""Tests for the command-line entrypoint."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from config import JsonConfigStore
from errors import FetchError
from main import run
from models import ModelVariant


@pytest.fixture
def config(tmp_path: Path) -> JsonConfigStore:
    return JsonConfigStore(path=tmp_path / "config.json")


def test_list_models(capsys: pytest.CaptureFixture[str]) -> None:
    assert run(["--list-models"]) == 0
    out = capsys.readouterr().out
    for model in ModelVariant.list():
        assert model.file_name in out


def test_unknown_model_exits_2(config: JsonConfigStore, capsys: pytest.CaptureFixture[str]) -> None:
    assert run(["--model", "huge.xx"], config_store=config) == 2
    err = capsys.readouterr().err
    assert "huge.xx" in err
    assert "base.en" in err


@patch("main.ArtifactStore")
def test_ensure_prints_path(
    mock_store_cls: MagicMock,
    config: JsonConfigStore,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    mock_store_cls.return_value.ensure.return_value = tmp_path / "ggml-tiny.en.bin"

    assert run(["--model", "tiny.en", "--cache-dir", str(tmp_path)], config_store=config) == 0

    mock_store_cls.assert_called_once_with(cache_root=tmp_path, coreml_enabled=False)
    mock_store_cls.return_value.ensure.assert_called_once_with(ModelVariant.TINY_EN)
    assert "ggml-tiny.en.bin" in capsys.readouterr().out


@patch("main.ArtifactStore")
def test_config_defaults_are_used(mock_store_cls: MagicMock, config: JsonConfigStore, tmp_path: Path) -> None:
    config.set_default_model("small.en")
    config.set_cache_dir(tmp_path / "models")
    config.set_coreml_enabled(True)
    mock_store_cls.return_value.ensure.return_value = tmp_path / "x"

    assert run([], config_store=config) == 0

    mock_store_cls.assert_called_once_with(cache_root=tmp_path / "models", coreml_enabled=True)
    mock_store_cls.return_value.ensure.assert_called_once_with(ModelVariant.SMALL_EN)


@patch("main.ArtifactStore")
def test_fetch_failure_exits_1(
    mock_store_cls: MagicMock,
    config: JsonConfigStore,
    capsys: pytest.CaptureFixture[str],
) -> None:
    url = ModelVariant.BASE_EN.url
    mock_store_cls.return_value.ensure.side_effect = FetchError(url, status=503)

    assert run(["--model", "base.en"], config_store=config) == 1
    err = capsys.readouterr().err
    assert url in err
    assert "503" in err
