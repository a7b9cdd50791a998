from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from wheelparse.archive.wheel_reader import WheelReader
from wheelparse.config.parser_config_model import ParserConfig
from wheelparse.helper.multiformat_serializable_mixin import MultiformatSerializableMixin
from wheelparse.model.wheel.record_file_model import RecordFile
from wheelparse.model.wheel.wheel_file_model import WheelFile
from wheelparse.model.wheel.wheel_name_model import WheelName


@dataclass(slots=True, frozen=True)
class WheelInfo(MultiformatSerializableMixin):
    """
    Everything this library reads from a wheel: its filename and the WHEEL and
    RECORD manifests, together with the size and SHA-256 of the archive file.

    Attributes:
        filename (str): The archive filename.
        name (WheelName): The parsed filename.
        wheel (WheelFile): The parsed WHEEL manifest.
        record (RecordFile): The parsed RECORD manifest.
        size (int): Size of the archive file in bytes.
        sha256 (str): Hex SHA-256 of the archive file.
    """
    filename: str
    name: WheelName
    wheel: WheelFile
    record: RecordFile
    size: int
    sha256: str

    @staticmethod
    def build_from_wheel(path: str | Path, *, config: ParserConfig | None = None) -> WheelInfo:
        """
        Reads a wheel file from disk and parses its filename and manifests.

        Args:
            path (str | Path): The wheel file.
            config (ParserConfig | None): Settings; defaults are used when None.

        Returns:
            WheelInfo: The parsed wheel.

        Raises:
            WheelParseError: If the filename or a manifest is malformed.
            WheelArchiveError: If the archive cannot be read or lacks a manifest.
        """
        p = Path(path)
        with WheelReader.from_path(p, config=config) as reader:
            wheel = reader.wheel_file()
            record = reader.record_file()
            name = reader.name

        return WheelInfo(
            filename=p.name,
            name=name,
            wheel=wheel,
            record=record,
            size=p.stat().st_size,
            sha256=_sha256_file(p))

    def to_mapping(self) -> dict[str, Any]:
        return {
            "filename": self.filename,
            "name": self.name.to_mapping(),
            "wheel": self.wheel.to_mapping(),
            "record": self.record.to_mapping(),
            "size": self.size,
            "sha256": self.sha256,
        }


def _sha256_file(path: Path, *, chunk: int = 1_048_576) -> str:
    """
    Computes the SHA-256 of a file, reading it in chunks.

    Args:
        path (Path): The file to hash.
        chunk (int, optional): Read size in bytes. Defaults to 1 MiB.

    Returns:
        str: The hex digest.
    """
    h = hashlib.sha256()
    with path.open("rb") as f:
        for block in iter(lambda: f.read(chunk), b""):
            h.update(block)
    return h.hexdigest()
