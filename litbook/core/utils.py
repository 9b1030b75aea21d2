from pathlib import Path
from typing import Iterable

def has_extension(path: str | Path, extensions: Iterable[str]) -> bool:
    suffix = Path(path).suffix.lower()
    return any(suffix == ext.lower() for ext in extensions)

def module_candidates(module_dir: Path, name: str):
    yield module_dir / f"{name}.rs"
    yield module_dir / name / "mod.rs"

def owned_dir(path: Path) -> Path:
    """Directory holding the child modules declared in `path`."""
    if path.name in {"lib.rs", "main.rs", "mod.rs"}:
        return path.parent
    return path.with_suffix("")
