# src/rift/core/sink.py
from pathlib import Path

from rift.errors import SinkWriteError


class OutputSink:
    """Writes resolved files under an explicit output root, mirroring relative paths."""

    def __init__(self, output_root: Path):
        self.output_root = Path(output_root)

    def target(self, rel_path: str) -> Path:
        return self.output_root / rel_path

    def ensure_parent_dirs(self, rel_path: str) -> Path:
        target = self.target(rel_path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise SinkWriteError(rel_path, e.strerror or str(e)) from e
        return target

    def write(self, rel_path: str, text: str) -> Path:
        target = self.ensure_parent_dirs(rel_path)
        try:
            # newline="" keeps line endings exactly as resolved
            with open(target, "w", encoding="utf-8", newline="") as f:
                f.write(text)
        except OSError as e:
            raise SinkWriteError(rel_path, e.strerror or str(e)) from e
        return target
