"""Site configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "MDPOST_"


class Settings(BaseModel):
    base_dir:           str  = Field(default=".",         description="Site root; other directories resolve against it")
    source_dir:         str  = Field(default="source",    description="Content directory holding _posts/ and _drafts/")
    scaffold_dir:       str  = Field(default="scaffolds", description="Directory of per-layout scaffold templates")
    filename_case:      int  = Field(default=0, ge=0, le=2, description="Slug case: 0 keep, 1 lower, 2 upper")
    default_layout:     str  = "post"
    new_post_name:      str  = Field(default=":title.md", description="Filename pattern for new posts")
    post_asset_folder:  bool = Field(default=False, description="Keep a same-named asset directory per post")
    syntax_highlighter: bool = Field(default=True,  description="Wrap fenced code blocks before rendering")
    markdown_preset:    str  = Field(default="gfm-like", description="MarkdownIt parser preset name")
    log_level:          str  = "INFO"

    @property
    def source_path(self) -> Path:
        return Path(self.base_dir) / self.source_dir

    @property
    def scaffold_path(self) -> Path:
        return Path(self.base_dir) / self.scaffold_dir


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDPOST_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
