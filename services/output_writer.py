from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

from services.errors import OutputWriteError


logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("json", "legacy")


class HarvestOutputWriter:
    """Append-only JSON array writer, one record per line, flushed per record.

    ``json`` writes separators between records so a closed file is valid JSON.
    ``legacy`` follows every record with ``,`` and closes with a bare ``]``.
    In both formats a file cut short by a crash keeps every record written
    so far; see :func:`read_harvest_output`.
    """

    def __init__(self, path: Path | str, output_format: str = "json") -> None:
        if output_format not in OUTPUT_FORMATS:
            raise ValueError(f"Unknown output format: {output_format}")
        self.path = Path(path)
        self.output_format = output_format
        self.records_written = 0
        self._fh: Optional[TextIO] = None

    def __enter__(self) -> "HarvestOutputWriter":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _emit(self, text: str) -> None:
        if self._fh is None:
            raise OutputWriteError(f"Output file {self.path} is not open")
        try:
            self._fh.write(text)
            self._fh.flush()
        except OSError as e:
            raise OutputWriteError(f"Failed writing {self.path}: {e}") from e

    def open(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._fh = self.path.open("w", encoding="utf-8")
        except OSError as e:
            raise OutputWriteError(f"Cannot open output file {self.path}: {e}") from e
        self._emit("[\n")

    def write(self, record: Dict[str, Any]) -> None:
        line = json.dumps(record, ensure_ascii=False, separators=(",", ":"))
        if self.output_format == "legacy":
            self._emit(line + ",\n")
        elif self.records_written:
            self._emit(",\n" + line)
        else:
            self._emit(line)
        self.records_written += 1

    def close(self) -> None:
        if self._fh is None:
            return
        try:
            if self.output_format == "json" and self.records_written:
                self._emit("\n]")
            else:
                self._emit("]")
        finally:
            self._fh.close()
            self._fh = None


def read_harvest_output(path: Path | str) -> List[Dict[str, Any]]:
    """Load records from a finished or partially written output file."""
    lines = Path(path).read_text(encoding="utf-8").split("\n")
    records: List[Dict[str, Any]] = []
    for idx, raw in enumerate(lines):
        text = raw.strip()
        if text in ("", "[", "]"):
            continue
        if text.endswith("]"):
            text = text[:-1].rstrip()
        text = text.rstrip(",")
        try:
            records.append(json.loads(text))
        except json.JSONDecodeError:
            # Only the last line can be torn by an interrupted write
            if idx == len(lines) - 1:
                logger.warning(f"Ignoring truncated trailing record in {path}")
                continue
            raise
    return records
