from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Type

from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from .models import Preset, ThreadingOptions

# Platform presets, keyed by lower-case name
PRESETS: Dict[str, Preset] = {
    "threads": Preset(name="threads", length=500, label="Threads/Mastodon (500)"),
    "bluesky": Preset(name="bluesky", length=300, label="Bluesky (300)"),
    "twitter": Preset(name="twitter", length=280, label="Twitter/X (280)"),
}

CUSTOM_DEFAULT_LENGTH = 128

DEFAULT_ENUMERATION_TEMPLATE = "{text} ({current}/{total})"
DEFAULT_STATS_TEMPLATE = (
    "Characters: {characters} | Words: {words} | Sentences: {sentences}"
)


def resolve_preset(name: str) -> Preset:
    """Look up a platform preset by name (case-insensitive)."""
    key = name.strip().lower()
    if key not in PRESETS:
        known = ", ".join(sorted(PRESETS))
        raise KeyError(f"Unknown preset '{name}' (known: {known})")
    return PRESETS[key]


class Settings(BaseSettings):
    # Chunking defaults
    THREADER_MAX_LENGTH: int = 280
    THREADER_PRESET: Optional[str] = None  # overrides THREADER_MAX_LENGTH
    BREAK_ON_SENTENCES: bool = True
    BREAK_ON_PARAGRAPHS: bool = True
    ENUMERATE: bool = False

    # Output templates
    ENUMERATION_TEMPLATE: str = DEFAULT_ENUMERATION_TEMPLATE
    STATS_TEMPLATE: str = DEFAULT_STATS_TEMPLATE

    # Observability
    LOG_FORMAT: str = "auto"  # json|plain|auto
    LOG_LEVEL: str = "WARNING"

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        return env_settings, dotenv_settings, init_settings, file_secret_settings

    @classmethod
    def load_config(cls, config_file: Optional[str] = None) -> "Settings":
        """Load settings with config file -> env -> CLI precedence."""
        config_data: Dict[str, Any] = {}

        if config_file:
            config_path: Optional[Path] = Path(config_file)
        else:
            # Auto-discover .threader.{yaml,yml,toml}
            for ext in ["yaml", "yml", "toml"]:
                config_path = Path(f".threader.{ext}")
                if config_path.exists():
                    break
            else:
                config_path = None

        if config_path and config_path.exists():
            if config_path.suffix in [".yaml", ".yml"]:
                import yaml  # type: ignore[import-untyped]

                with open(config_path) as f:
                    config_data = yaml.safe_load(f) or {}
            elif config_path.suffix == ".toml":
                import tomllib

                with open(config_path, "rb") as f:
                    config_data = tomllib.load(f)

        # Config file values arrive as init kwargs, which rank below the environment
        return cls(**{key.upper(): value for key, value in config_data.items()})

    @property
    def maximum_length(self) -> int:
        if self.THREADER_PRESET:
            return resolve_preset(self.THREADER_PRESET).length
        return self.THREADER_MAX_LENGTH

    def threading_options(self, **overrides: Any) -> ThreadingOptions:
        """Build ThreadingOptions from settings, with per-call overrides."""
        overrides = {k: v for k, v in overrides.items() if v is not None}
        values: Dict[str, Any] = {
            "break_on_sentences": self.BREAK_ON_SENTENCES,
            "break_on_paragraphs": self.BREAK_ON_PARAGRAPHS,
            "enumerate": self.ENUMERATE,
        }
        if "maximum_length" not in overrides:
            values["maximum_length"] = self.maximum_length
        values.update(overrides)
        return ThreadingOptions(**values)


# Default settings - will be replaced by load_config() during CLI startup
SETTINGS = Settings()
