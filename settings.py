import logging
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    assets_dir: Path = Path("./assets")
    output_dir: Path = Path("./output")
    default_watermark: str = "PC"
    max_image_edge: int = 2400
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SC_",
        env_file_encoding="utf-8",
    )

    @field_validator("max_image_edge")
    @classmethod
    def image_edge_must_be_usable(cls, v: int) -> int:
        if v < 256:
            raise ValueError("max_image_edge must be at least 256")
        return v

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {v}")
        return level

    @property
    def design_yaml_path(self) -> Path:
        return self.assets_dir / "design.yaml"

    @property
    def default_logo_path(self) -> Path:
        return self.assets_dir / "logo.jpeg"

    @property
    def default_background_path(self) -> Path:
        return self.assets_dir / "parchment.jpg"
