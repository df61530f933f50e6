from pathlib import Path
from typing import Union


# Files directly inside directory with the given suffix; subdirectories and
# hidden files (such as macOS "._" AppleDouble files) are skipped
def discover_files(directory: Union[str, Path], extension: str) -> list[str]:
    if not extension.startswith("."):
        extension = "." + extension
    root = Path(directory).resolve()
    if not root.is_dir():
        return []
    return sorted(
        src.as_posix()
        for src in root.glob(f"*{extension}")
        if src.is_file() and not src.name.startswith(".")
    )
