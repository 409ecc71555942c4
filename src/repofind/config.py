"""Configuration management using Pydantic Settings.

Settings come from, in order of precedence:

1. Keyword arguments passed to :class:`FinderSettings`
2. Environment variables (``REPOFIND_*`` prefix)
3. A YAML file at ``$REPOFIND_CONFIG`` or ``~/.config/repofind/config.yml``

The VCS table is ordered: markers are checked in list order inside each
directory, with ``extra_repository_types`` ahead of the built-in table.
"""

import logging
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

logger = logging.getLogger(__name__)

NUL = "\0"
NEWLINE = "\n"

# Names accepted in place of raw control characters in YAML or env values.
SEPARATOR_ALIASES = {"nul": NUL, "null": NUL, "newline": NEWLINE, "lf": NEWLINE}

DEFAULT_PROMPT = "Find file in repository: "


def config_file_path() -> Path:
    """Return the YAML config file location, honouring ``$REPOFIND_CONFIG``."""
    override = os.getenv("REPOFIND_CONFIG")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "repofind" / "config.yml"


class VcsDescriptor(BaseModel):
    """How to recognise one VCS and list the files it tracks."""

    model_config = ConfigDict(frozen=True)

    marker: str = Field(min_length=1, description="File or directory marking a checkout root")
    list_command: str = Field(min_length=1, description="Shell command printing tracked files")
    separator: str = Field(default=NEWLINE, description="Separator between command output entries")

    @field_validator("marker", "list_command")
    @classmethod
    def strip_and_require_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("separator", mode="before")
    @classmethod
    def resolve_separator_alias(cls, v):
        """Map names like ``nul`` or ``newline`` to the character they stand for."""
        if isinstance(v, str) and v.lower() in SEPARATOR_ALIASES:
            return SEPARATOR_ALIASES[v.lower()]
        return v

    @field_validator("separator")
    @classmethod
    def separator_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("separator must not be empty")
        return v


DEFAULT_REPOSITORY_TYPES: tuple[VcsDescriptor, ...] = (
    VcsDescriptor(marker=".git", list_command="git ls-files -z", separator=NUL),
    VcsDescriptor(marker=".hg", list_command="hg locate -0", separator=NUL),
    VcsDescriptor(marker="_darcs", list_command="darcs show files -0", separator=NUL),
    VcsDescriptor(marker=".bzr", list_command="bzr ls --versioned -0", separator=NUL),
    VcsDescriptor(marker="_MTN", list_command="mtn list known", separator=NEWLINE),
    VcsDescriptor(marker=".svn", list_command="svn list", separator=NEWLINE),
)


class FinderSettings(BaseSettings):
    """Process-wide repofind settings.

    Built fresh for each invocation; edits to the environment or the YAML
    file take effect on the next run.
    """

    model_config = SettingsConfigDict(
        env_prefix="REPOFIND_",
        case_sensitive=False,
        extra="ignore",
    )

    repository_types: list[VcsDescriptor] = Field(
        default_factory=lambda: list(DEFAULT_REPOSITORY_TYPES)
    )
    """Built-in marker/command table, checked in order."""

    extra_repository_types: list[VcsDescriptor] = Field(default_factory=list)
    """User additions, checked before ``repository_types``."""

    avoid_home_repository: bool = True
    """Treat a checkout rooted at the home directory as no checkout at all."""

    home_directory: Path = Field(default_factory=Path.home)
    """Directory the home guard compares against."""

    prompt: str = DEFAULT_PROMPT
    """Label shown by the chooser."""

    command_timeout_seconds: float = Field(default=30.0, gt=0)
    """Seconds a listing command may run before it is killed."""

    use_enhanced_chooser: bool = True
    """Use the full-screen chooser when the terminal supports it."""

    editor: str = ""
    """Editor command; falls back to ``$VISUAL`` then ``$EDITOR``."""

    log_level: str = "WARNING"
    """Python logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        yaml_file = config_file_path()
        if yaml_file.exists():
            logger.debug(f"Loading settings from {yaml_file}")
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls, yaml_file=yaml_file),
        )

    @property
    def descriptors(self) -> list[VcsDescriptor]:
        """Effective VCS table: user additions first, then the built-ins."""
        return [*self.extra_repository_types, *self.repository_types]

    def resolve_editor(self) -> str:
        """Return the editor command to open files with, or ``""`` if none is set."""
        return self.editor or os.getenv("VISUAL", "") or os.getenv("EDITOR", "")
