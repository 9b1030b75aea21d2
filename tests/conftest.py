import sys
from pathlib import Path
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def crate(tmp_path):
    src = tmp_path / "crate" / "src"
    write(
        src / "lib.rs",
        "pub mod chapter;\n"
        "mod private;\n"
        "\n"
        "pub mod inline {\n"
        "    pub fn body() {\n"
        "        // Inline module\n"
        "    }\n"
        "}\n"
        "\n"
        "pub fn body() {\n"
        "    // # Intro\n"
        "    let answer = 42;\n"
        "}\n",
    )
    write(
        src / "chapter.rs",
        "pub mod section;\n"
        "\n"
        "pub fn body() {\n"
        "    // Chapter text\n"
        "}\n",
    )
    write(src / "chapter" / "section.rs", "pub fn body() {\n    // Section text\n}\n")
    write(src / "private.rs", "pub fn body() {\n    // Never rendered\n}\n")
    return src
