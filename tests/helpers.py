"""
Helpers shared by the test modules.
"""

import json
import os
from pathlib import Path

TEST_TEMPLATE = (
    "This is a test template. Test json data: '{{ testVar }}'. "
    "Test build data: '{{ buildProperties.buildVar }}'.\n"
)


def set_mtime(path: Path, mtime: float) -> None:
    """Set both atime and mtime of a file."""
    os.utime(path, (mtime, mtime))


def write_descriptor(path: Path, content: dict) -> Path:
    """Write a JSON descriptor, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(content), encoding="utf-8")
    return path
