from pathlib import Path

import pytest
from pydantic import ValidationError

from settings import Settings


def test_settings_defaults():
    s = Settings()
    assert s.assets_dir == Path("./assets")
    assert s.output_dir == Path("./output")
    assert s.default_watermark == "PC"
    assert s.max_image_edge == 2400
    assert s.log_level == "INFO"


def test_settings_derived_paths():
    s = Settings(assets_dir=Path("/tmp/project/assets"))
    assert s.design_yaml_path == Path("/tmp/project/assets/design.yaml")
    assert s.default_logo_path == Path("/tmp/project/assets/logo.jpeg")
    assert s.default_background_path == Path("/tmp/project/assets/parchment.jpg")


def test_max_image_edge_must_be_usable():
    with pytest.raises(ValidationError):
        Settings(max_image_edge=100)


def test_log_level_is_normalised():
    assert Settings(log_level="debug").log_level == "DEBUG"


def test_unknown_log_level_rejected():
    with pytest.raises(ValidationError):
        Settings(log_level="chatty")


def test_settings_env_prefix(monkeypatch):
    monkeypatch.setenv("SC_DEFAULT_WATERMARK", "JD")
    monkeypatch.setenv("SC_MAX_IMAGE_EDGE", "1024")
    s = Settings()
    assert s.default_watermark == "JD"
    assert s.max_image_edge == 1024
