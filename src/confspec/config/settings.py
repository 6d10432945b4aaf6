"""ConfspecSettings: what the CLI does when a flag is not given.

Sources, highest priority first:

1. CLI flags (init kwargs; flags left unset are not passed)
2. ``CONFSPEC_*`` environment variables
3. ``confspec.toml``, found by :func:`~confspec.config.discovery.find_config`
4. Defaults declared on the model

A project can therefore pin its schema once::

    # confspec.toml
    specification = "myapp.settings:NODE_SETTINGS"
    strict = true

and run ``confspec check node.conf.yaml`` without repeating it.
"""

from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from confspec.config.discovery import find_config
from confspec.config.loader import parse_document
from confspec.domain.exceptions import ConfigLoadError

# Settings file chosen by from_cli() for the model under construction.
_settings_file: ContextVar[Path | None] = ContextVar("confspec_settings_file", default=None)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Values read from a ``confspec.toml`` file; absent file means no values."""

    def __init__(self, settings_cls: type[BaseSettings], path: Path | None) -> None:
        super().__init__(settings_cls)
        self._values: dict[str, Any] = {}
        if path is not None and path.is_file():
            try:
                self._values = parse_document(path.read_text(encoding="utf-8"), "toml").to_dict()
            except ConfigLoadError as exc:
                raise ConfigLoadError(f"{exc} (in settings file {path})") from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._values.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        fields = self.settings_cls.model_fields
        return {name: value for name, value in self._values.items() if name in fields}


class ConfspecSettings(BaseSettings):
    """Resolved CLI settings.

    Attributes:
        config_path: The ``confspec.toml`` in use, or None.
        json_output: Print results as JSON.
        quiet: One line per issue, nothing else.
        verbose: Extra table columns and DEBUG logging.
        log_json: Log as JSON lines.
        specification: Default schema reference (``package.module:attribute``).
        strict: Report undeclared keys unless ``--lenient`` is passed.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "CONFSPEC_",
        "extra": "ignore",
    }

    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    specification: str | None = None
    strict: bool = False

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, _settings_file.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> ConfspecSettings:
        """Build settings for one CLI invocation.

        *config_path* (``--config``) overrides discovery; otherwise the
        settings file is searched from *start*.  Flags whose value is None
        were not given and do not shadow lower-priority sources.
        """
        path = Path(config_path) if config_path else find_config(start)
        if path is not None and not path.is_file():
            path = None
        flags = {name: value for name, value in cli_flags.items() if value is not None}

        token = _settings_file.set(path)
        try:
            return cls(config_path=path, **flags)
        finally:
            _settings_file.reset(token)
