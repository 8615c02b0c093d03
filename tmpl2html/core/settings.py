from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TMPL2HTML_", case_sensitive=False)

    template_extension: str = ".tmpl"
    output_extension: str = ".html"
    allow_computed_data: bool = True
    file_mode: str = "0644"
