"""Data models for scoped-config."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class _Missing:
    """Marker for a value that is absent, as opposed to JSON null."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (_Missing, ())


MISSING = _Missing()


class Scope(Enum):
    """Configuration scope enumeration.

    Members are declared lowest precedence first; project overrides global.
    """

    GLOBAL = "global"
    PROJECT = "project"

    @classmethod
    def ordered(cls) -> tuple["Scope", ...]:
        """Scopes from lowest to highest precedence."""
        return (cls.GLOBAL, cls.PROJECT)


@dataclass(frozen=True)
class ConfigPaths:
    """Paths to the two configuration scopes.

    Immutable configuration for where settings files are located.
    Applications inject these paths to define their configuration policy.

    Attributes:
        global_path: Path to the global (per-user) config file (required)
        project_path: Path to the project config file (optional - None when cwd is home)

    Note:
        When running from the home directory (~), the project scope is
        disabled, because its file would be the global file.
    """

    global_path: Path
    project_path: Path | None = None

    @classmethod
    def for_app(
        cls,
        app_dir_name: str,
        cwd: Path | None = None,
        home: Path | None = None,
        filename: str = "config.json",
    ) -> "ConfigPaths":
        """Build the standard locations for an application.

        Args:
            app_dir_name: Directory holding the config file, e.g. ".mytool"
            cwd: Project root (default: current working directory)
            home: Home directory (default: Path.home())
            filename: Config file name inside app_dir_name

        Returns:
            ConfigPaths with project_path None when cwd is the home directory
        """
        home = Path(home) if home is not None else Path.home()
        cwd = Path(cwd) if cwd is not None else Path.cwd()

        global_path = home / app_dir_name / filename
        if cwd.resolve() == home.resolve():
            return cls(global_path=global_path)
        return cls(global_path=global_path, project_path=cwd / app_dir_name / filename)
