"""Reading and atomically writing scope files."""

import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Any

from .exceptions import ConfigFileError
from .exceptions import ConfigParseError
from .exceptions import ConfigValidationError

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def read_json_object(path: Path, scope: str | None = None) -> dict[str, Any]:
    """Read a scope file.

    Args:
        path: Path to JSON file
        scope: Scope name for error messages

    Returns:
        Parsed object; empty dict if the file doesn't exist or is blank

    Raises:
        ConfigParseError: If the file is not valid JSON or not a JSON object
        ConfigFileError: If the file exists but cannot be read
    """
    label = f"{scope} config" if scope else "config"
    try:
        # utf-8-sig accepts a leading byte-order mark
        text = path.read_text(encoding="utf-8-sig")
    except FileNotFoundError:
        logger.debug(f"No {label} file at {path}")
        return {}
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigFileError(f"Failed to read {label} from {path}: {e}", scope=scope) from e

    if not text.strip():
        return {}

    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        raise ConfigParseError(f"Invalid JSON in {label} {path}: {e}", scope=scope, path=path) from e

    if not isinstance(data, dict):
        raise ConfigParseError(
            f"Expected a JSON object at the top of {label} {path}, got {type(data).__name__}",
            scope=scope,
            path=path,
        )
    return data


def dumps(data: dict[str, Any]) -> str:
    """Serialize a raw config the way it is stored on disk.

    Raises:
        ConfigValidationError: If data holds values JSON cannot represent
    """
    try:
        return json.dumps(data, indent=2, ensure_ascii=False, allow_nan=False) + "\n"
    except (TypeError, ValueError) as e:
        raise ConfigValidationError(f"Configuration value is not JSON-serializable: {e}") from e


def _target_mode(path: Path) -> int:
    """Mode the written file should have: the existing file's, else the umask default."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def atomic_write_json(path: Path, data: dict[str, Any], scope: str | None = None) -> None:
    """Write JSON to path via temp file + fsync + rename.

    The target is either fully replaced or left untouched.

    Raises:
        ConfigValidationError: If data cannot be serialized (nothing is written)
        ConfigFileError: If write fails
    """
    content = dumps(data)
    tmp_path: Path | None = None

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=str(path.parent),
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_path, _target_mode(path))
        os.replace(tmp_path, path)
        tmp_path = None
    except OSError as e:
        label = f"{scope} config" if scope else "config"
        raise ConfigFileError(f"Failed to write {label} to {path}: {e}", scope=scope) from e
    finally:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
