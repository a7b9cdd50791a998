from __future__ import annotations

import zipfile
from collections.abc import Callable, Mapping
from pathlib import Path

import pytest

WHEEL_TEXT = (
    "Wheel-Version: 1.0\n"
    "Generator: bdist_wheel (0.40.0)\n"
    "Root-Is-Purelib: true\n"
    "Tag: py3-none-any\n"
)

METADATA_TEXT = (
    "Metadata-Version: 2.1\n"
    "Name: demo_pkg\n"
    "Version: 1.0\n"
)


def record_text(dist_info: str) -> str:
    return (
        "demo_pkg/__init__.py,sha256=47DEQpj8HBSa-_TImW-5JCeuQeRkm5NMpJWZG3hSuFU,0\n"
        f"{dist_info}/METADATA,sha256=AAA,{len(METADATA_TEXT)}\n"
        f"{dist_info}/WHEEL,sha256=BBB,{len(WHEEL_TEXT)}\n"
        f"{dist_info}/RECORD,,\n"
    )


@pytest.fixture
def make_wheel(tmp_path: Path) -> Callable[..., Path]:
    """
    Returns a factory that writes a small wheel archive into `tmp_path`.

    The dist-info directory defaults to the escaped name derived from the
    filename; `members` replaces the default member set entirely.
    """

    def _make(filename: str = "demo_pkg-1.0-py3-none-any.whl",
              dist_info: str = "demo_pkg-1.0.dist-info",
              members: Mapping[str, str | bytes] | None = None) -> Path:
        if members is None:
            members = {
                "demo_pkg/__init__.py": "",
                f"{dist_info}/METADATA": METADATA_TEXT,
                f"{dist_info}/WHEEL": WHEEL_TEXT,
                f"{dist_info}/RECORD": record_text(dist_info),
            }
        path = tmp_path / filename
        with zipfile.ZipFile(path, "w") as zf:
            for name, data in members.items():
                zf.writestr(name, data)
        return path

    return _make
