"""Configuration loading.

Two layers live here:

``MarkdownConfig``
    The options of a single ``MarkdownMiddleware`` instance. Validated once by
    ``build_config`` at construction time and immutable afterwards.

``Settings``
    The standalone server (``mdpages`` console script). Loaded in priority
    order (highest first):
      1. Environment variables  (MDPAGES__SERVER__PORT=9090)
      2. mdpages.yaml           (searched in cwd, then platform config dir)
      3. Hardcoded defaults
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from mdpages.errors import ConfigurationError, ErrorCode

DEFAULT_LAYOUT_NAME = "layout.html"
DEFAULT_TITLE_HOLDER = "{TITLE}"
DEFAULT_BODY_HOLDER = "{BODY}"
DEFAULT_INDEX_NAME = "index"


def _find_config_file() -> str | None:
    """Return the path of the first mdpages.yaml found, or None."""
    candidates = [
        Path("mdpages.yaml"),
        Path(platformdirs.user_config_dir("mdpages")) / "mdpages.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


# ---------------------------------------------------------------------------
# Middleware options
# ---------------------------------------------------------------------------


class MarkdownConfig(BaseModel):
    """Options for one MarkdownMiddleware instance."""

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    root: Path
    layout: Path  # Defaults to root / "layout.html"
    base_url: str = "/"
    index_name: str = Field(default=DEFAULT_INDEX_NAME, min_length=1)
    title_holder: str = Field(default=DEFAULT_TITLE_HOLDER, min_length=1)
    body_holder: str = Field(default=DEFAULT_BODY_HOLDER, min_length=1)
    cache: bool = False

    # RendererProtocol, a plain callable, or None for the default renderer
    render: Any = None
    # Forwarded verbatim to markdown.Markdown() when render is None
    md_options: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _default_layout(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("layout") is None and data.get("root"):
            data = {**data, "layout": Path(data["root"]) / DEFAULT_LAYOUT_NAME}
        return data

    @field_validator("root", "layout")
    @classmethod
    def _normalise_path(cls, v: Path) -> Path:
        return Path(os.path.normpath(v.expanduser().absolute()))

    @field_validator("base_url")
    @classmethod
    def _normalise_base_url(cls, v: str) -> str:
        # "/docs", "docs/", "/docs//" all become "/docs/"; "" and "/" become "/"
        stripped = v.strip("/")
        return f"/{stripped}/" if stripped else "/"

    @field_validator("render")
    @classmethod
    def _check_render(cls, v: Any) -> Any:
        if v is None or callable(getattr(v, "render", None)) or callable(v):
            return v
        raise ValueError("render must be callable or expose a callable render() method")


def build_config(**options: Any) -> MarkdownConfig:
    """Validate middleware options and return an immutable MarkdownConfig.

    Raises ConfigurationError for a missing ``root``, for the legacy
    ``remarkable_options`` option without a custom ``render``, and for any
    other invalid option.
    """
    if not options.get("root"):
        raise ConfigurationError(
            code=ErrorCode.MISSING_ROOT,
            message="root is required",
            suggestion="Pass root=<directory containing the Markdown documents>.",
        )

    legacy_options = options.pop("remarkable_options", None)
    if legacy_options is not None and options.get("render") is None:
        raise ConfigurationError(
            code=ErrorCode.LEGACY_RENDER_OPTIONS,
            message=(
                "remarkable_options is no longer supported: the default renderer "
                "is Python-Markdown"
            ),
            suggestion="Pass md_options=... instead, or supply a custom render function.",
        )

    try:
        return MarkdownConfig(**options)
    except ValidationError as exc:
        raise ConfigurationError(
            code=ErrorCode.INVALID_CONFIG,
            message=str(exc),
            suggestion="Check the middleware options against MarkdownConfig.",
        ) from exc


# ---------------------------------------------------------------------------
# Standalone server settings
# ---------------------------------------------------------------------------


class ServerSettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8080


class PagesSettings(BaseModel):
    root: str = "docs"
    layout: str | None = None
    base_url: str = "/"
    index_name: str = DEFAULT_INDEX_NAME
    title_holder: str = DEFAULT_TITLE_HOLDER
    body_holder: str = DEFAULT_BODY_HOLDER
    cache: bool = True
    md_extensions: list[str] = []

    def to_config(self) -> MarkdownConfig:
        return build_config(
            root=self.root,
            layout=self.layout,
            base_url=self.base_url,
            index_name=self.index_name,
            title_holder=self.title_holder,
            body_holder=self.body_holder,
            cache=self.cache,
            md_options={"extensions": list(self.md_extensions)},
        )


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "text"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: MDPAGES__PAGES__ROOT=./docs
        env_prefix="MDPAGES__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    server: ServerSettings = ServerSettings()
    pages: PagesSettings = PagesSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
