"""Configuration loading and management."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
import tomllib

from .exceptions import TinymarkError

# Files searched in each directory, with the table holding tinymark settings.
# The dedicated file wins over pyproject.toml in the same directory.
CONFIG_SOURCES: tuple[tuple[str, tuple[str, ...]], ...] = (
    (".tinymark.toml", ("tinymark",)),
    ("pyproject.toml", ("tool", "tinymark")),
)


@dataclass
class TinymarkConfig:
    """Configuration for converting markup files to HTML.

    Attributes:
        input_extensions: File extensions recognised as convertible sources.
        output_extension: Extension that replaces the source extension when
            deriving the output path.
        max_file_size: Maximum file size in bytes that will be converted.
        overwrite: Whether an existing output file may be replaced.

    Examples:
        TinymarkConfig(output_extension=".htm", overwrite=False)
    """

    # Paths
    input_extensions: list[str] = field(default_factory=lambda: [".md", ".markdown"])
    output_extension: str = ".html"

    # Behaviour
    overwrite: bool = True

    # Limits
    max_file_size: int = 10 * 1024 * 1024


class ConfigError(TinymarkError, ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`output_extension` must not be empty")
    """


def _setting_names() -> list[str]:
    return [item.name for item in fields(TinymarkConfig)]


def _reject_unknown(names: Iterable[str], origin: str) -> None:
    unknown = sorted(set(names) - set(_setting_names()))
    if unknown:
        raise ConfigError(
            f"Unknown setting(s) in {origin}: {', '.join(unknown)} "
            f"(expected one of: {', '.join(_setting_names())})"
        )


def _read_toml(config_file: Path, warn: Callable[[str], None] | None) -> dict | None:
    try:
        return tomllib.loads(config_file.read_text(encoding="UTF-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as error:
        if warn is not None:
            warn(f"Ignoring unreadable config file {config_file}: {error}")
        return None


def _table_at(document: dict, table_path: tuple[str, ...]) -> object:
    table: object = document
    for key in table_path:
        if not isinstance(table, dict):
            return None
        table = table.get(key)
    return table


def find_settings(
    start: Path, warn: Callable[[str], None] | None = None
) -> tuple[Path, dict[str, object]] | None:
    """Find the tinymark settings table closest to `start`.

    Each directory from `start` up to the filesystem root is checked for
    `.tinymark.toml` (``[tinymark]`` table) and then `pyproject.toml`
    (``[tool.tinymark]`` table). A file without the table is passed over, so
    an unrelated `pyproject.toml` does not hide settings further up.

    Args:
        start: Directory the search begins in, usually the input file's parent.
        warn: Optional callback told about config files that cannot be read or
            decoded; such files are skipped.

    Returns:
        tuple[Path, dict[str, object]] | None: The config file and its table,
        or None when no directory up to the root has one.

    Raises:
        ConfigError: If the tinymark entry exists but is not a table.

    Examples:
        find_settings(Path("docs"))  # (Path("/repo/pyproject.toml"), {...})
    """
    start = start.resolve()
    for directory in (start, *start.parents):
        for filename, table_path in CONFIG_SOURCES:
            config_file = directory / filename
            if not config_file.is_file():
                continue
            document = _read_toml(config_file, warn)
            if document is None:
                continue
            table = _table_at(document, table_path)
            if table is None:
                continue
            if not isinstance(table, dict):
                raise ConfigError(f"`{'.'.join(table_path)}` in {config_file} must be a table")
            return config_file, table
    return None


def config_from_settings(settings: Mapping[str, object], origin: str = "settings") -> TinymarkConfig:
    """Build a normalised `TinymarkConfig` from a settings table.

    Keys left out keep their defaults, so an empty table yields the defaults.

    Raises:
        ConfigError: If `settings` names a field `TinymarkConfig` does not have.
    """
    _reject_unknown(settings, origin)
    return normalize_config(TinymarkConfig(**settings))


def load_config(search_path: Path, warn: Callable[[str], None] | None = None) -> TinymarkConfig:
    """Load the configuration that applies to files in `search_path`.

    Args:
        search_path: Directory used as the starting point for configuration lookup.
        warn: Optional callback for config files that are skipped.

    Returns:
        TinymarkConfig: Settings from the nearest config file, or the defaults
        when there is none.

    Raises:
        ConfigError: If the nearest table is malformed or has unknown keys.

    Examples:
        load_config(Path("docs"))
    """
    found = find_settings(search_path, warn)
    if found is None:
        return TinymarkConfig()
    config_file, settings = found
    return config_from_settings(settings, origin=str(config_file))


def _normalize_extension(extension: object) -> object:
    if not isinstance(extension, str) or not extension:
        return extension
    extension = extension.lower()
    return extension if extension.startswith(".") else f".{extension}"


def normalize_config(config: TinymarkConfig) -> TinymarkConfig:
    input_extensions = config.input_extensions
    if isinstance(input_extensions, str):
        input_extensions = [input_extensions]
    if isinstance(input_extensions, (list, tuple)):
        input_extensions = [_normalize_extension(ext) for ext in input_extensions]

    return replace(
        config,
        input_extensions=input_extensions,
        output_extension=_normalize_extension(config.output_extension),
    )


def validate_config(config: TinymarkConfig) -> None:
    """Validate a `TinymarkConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If extensions are missing or malformed, the output
            extension is also an input extension, or the size limit is not a
            positive integer.

    Examples:
        validate_config(TinymarkConfig(output_extension=".htm"))
    """
    config = normalize_config(config)

    extensions = config.input_extensions
    if not isinstance(extensions, list) or not extensions:
        raise ConfigError("`input_extensions` must be a non-empty list of extensions")
    if not all(isinstance(extension, str) and extension for extension in extensions):
        raise ConfigError("`input_extensions` entries must be non-empty strings")

    if not isinstance(config.output_extension, str) or not config.output_extension:
        raise ConfigError("`output_extension` must not be empty")
    if config.output_extension in extensions:
        raise ConfigError("`output_extension` must differ from every input extension")

    if not isinstance(config.overwrite, bool):
        raise ConfigError("`overwrite` must be true or false")

    size = config.max_file_size
    # bool is an int subclass; `max_file_size = true` is a mistake, not 1 byte
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise ConfigError(f"`max_file_size` must be a positive number of bytes, got {size!r}")


def apply_overrides(config: TinymarkConfig, overrides: Mapping[str, object]) -> TinymarkConfig:
    """Return `config` with every non-None override applied and normalised.

    Raises:
        ConfigError: If an override names an unknown setting.

    Examples:
        apply_overrides(config, {"output_extension": "htm", "overwrite": None})
    """
    changes = {name: value for name, value in overrides.items() if value is not None}
    _reject_unknown(changes, "overrides")
    return normalize_config(replace(config, **changes))


def build_config(
    search_path: Path,
    overrides: Mapping[str, object] | None = None,
    warn: Callable[[str], None] | None = None,
) -> TinymarkConfig:
    """Load the configuration for `search_path`, apply overrides and validate it.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Values that win over the config file; None values are ignored.
        warn: Optional callback for config files that are skipped.

    Returns:
        TinymarkConfig: Validated configuration ready for conversion.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path("docs"), {"output_extension": ".htm"})
    """
    config = apply_overrides(load_config(search_path, warn), overrides or {})
    validate_config(config)
    return config


class ConfigResolver:
    """Resolve the configuration for each input file of a batch.

    Every file gets the settings found from its own directory upwards, with
    the same overrides on top. Results are cached per directory.

    Examples:
        resolver = ConfigResolver({"overwrite": False})
        resolver.for_file(Path("docs/guide.md")).output_extension
    """

    def __init__(
        self,
        overrides: Mapping[str, object] | None = None,
        warn: Callable[[str], None] | None = None,
    ):
        self.overrides = dict(overrides or {})
        self.warn = warn
        self._cache: dict[Path, TinymarkConfig] = {}

    def check_overrides(self) -> None:
        """Validate the overrides against the default configuration.

        Raises:
            ConfigError: If an override is invalid on its own.
        """
        validate_config(apply_overrides(TinymarkConfig(), self.overrides))

    def for_file(self, filepath: Path) -> TinymarkConfig:
        directory = Path(filepath).parent.resolve()
        if directory not in self._cache:
            self._cache[directory] = build_config(directory, self.overrides, self.warn)
        return self._cache[directory]
