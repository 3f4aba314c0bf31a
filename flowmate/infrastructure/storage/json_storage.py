"""JSON file storage with Result-based error handling.

A thin wrapper around file I/O for JSON documents. Returns Result types
instead of raising, so callers decide how a failed read or write is
reported.
"""

import json
import os
from pathlib import Path
from typing import Any

from flowmate.domain.shared.result import Err, Ok, Result


class JsonStorage:
    """Low-level JSON file I/O.

    Writes go to a sibling temp file that is then renamed over the
    target, so a crash mid-write leaves the previous document intact.

    Example:
        storage = JsonStorage()
        result = storage.load_json(Path("board.json"))
        if isinstance(result, Ok):
            data = result.value
        else:
            print(f"Error: {result.error}")
    """

    def load_json(self, path: Path) -> Result[Any, str]:
        """Load and decode a JSON file.

        Args:
            path: File to read.

        Returns:
            Ok(decoded document), or Err(str) describing the failure.
        """
        try:
            if not path.exists():
                return Err(f"File not found: {path}")
            return Ok(json.loads(path.read_text(encoding="utf-8")))

        except json.JSONDecodeError as e:
            return Err(f"Invalid JSON in {path}: {e}")
        except PermissionError:
            return Err(f"Permission denied reading {path}")
        except OSError as e:
            return Err(f"Error reading {path}: {e}")

    def save_json(self, path: Path, data: Any, indent: int = 2) -> Result[None, str]:
        """Encode ``data`` and replace the file atomically.

        Args:
            path: File to write; parent directories are created.
            data: JSON-serializable document.
            indent: Indentation level (default 2).

        Returns:
            Ok(None), or Err(str) describing the failure.
        """
        tmp = path.with_name(f".{path.name}.tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(data, indent=indent), encoding="utf-8")
            os.replace(tmp, path)
            return Ok(None)

        except TypeError as e:
            return Err(f"Data not JSON serializable: {e}")
        except PermissionError:
            return Err(f"Permission denied writing {path}")
        except OSError as e:
            return Err(f"Error writing {path}: {e}")
