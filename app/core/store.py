import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union
from app.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

class SharedStore:
    """
    Directory shared by the app and the widget.
    Holds one cache file per location plus the preferences file.
    """

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigurationError(f"Shared storage unavailable at {self.root}: {e}") from e

    def path(self, name: str) -> Path:
        return self.root / name

    def read_text(self, name: str) -> Optional[str]:
        """File contents, or None when the file does not exist"""
        try:
            return self.path(name).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def write_atomic(self, name: str, content: str):
        """
        Write via a temp file in the same directory and os.replace it over the target,
        so readers see either the old or the new file, never a partial one.
        """
        fd, tmp_path = tempfile.mkstemp(dir=self.root, prefix=f".{name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path(name))
        except BaseException:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise

    def glob(self, pattern: str):
        return sorted(self.root.glob(pattern))
