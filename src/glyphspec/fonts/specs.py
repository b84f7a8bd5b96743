"""Content-addressed glyph specification records and their emission.

Each (font, code point) pair yields one record::

    <codepoint>\\t<path>\\t<size>\\t<width>\\t<height>\\t<x>\\t<y>\\n

stored in a file named after the MD5 hex digest of the encoded record. A file
that already exists under that name is by construction identical, so emission
never reads, compares, or rewrites it. Running again against the same
directory only adds the missing files.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
import errno
import hashlib
import logging
import os
from pathlib import Path
import tempfile

from glyphspec.core.diagnostics import DiagnosticEmitter, ensure_emitter
from glyphspec.core.exceptions import EmissionError, RecordFormatError

from .characters import CodePointSets
from .logging import PipelineLogger
from .metadata import RECORD_SEPARATORS, FontMetadata


logger = logging.getLogger(__name__)

TEMP_PREFIX = ".spec-"
SPEC_FILE_MODE = 0o644
# Filesystems that refuse hard links fall back to a rename.
LINK_UNSUPPORTED = frozenset(
    code
    for code in (errno.EPERM, errno.ENOTSUP, getattr(errno, "EOPNOTSUPP", None), errno.EXDEV)
    if code is not None
)


@dataclass(frozen=True, slots=True)
class SpecRecord:
    """Rasterisation parameters for one code point in one font."""

    code_point: int
    path: str
    size: int
    width: int
    height: int
    x: int
    y: int

    @classmethod
    def from_metadata(cls, code_point: int, metadata: FontMetadata) -> SpecRecord:
        return cls(
            code_point=code_point,
            path=metadata.path,
            size=metadata.size,
            width=metadata.width,
            height=metadata.height,
            x=metadata.x,
            y=metadata.y,
        )

    def serialize(self) -> str:
        """Return the canonical tab-separated line, newline included."""
        fields = (
            str(self.code_point),
            self.path,
            str(self.size),
            str(self.width),
            str(self.height),
            str(self.x),
            str(self.y),
        )
        return "\t".join(fields) + "\n"

    def encode(self) -> bytes:
        return self.serialize().encode("utf-8")

    def digest(self) -> str:
        """Return the lowercase MD5 hex digest naming this record on disk."""
        return hashlib.md5(self.encode()).hexdigest()


@dataclass(slots=True)
class EmissionReport:
    """Digests handled by an emission run."""

    written: list[str] = field(default_factory=list)
    existing: list[str] = field(default_factory=list)
    planned: list[str] = field(default_factory=list)
    per_font: dict[int, dict[str, int]] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.written) + len(self.existing) + len(self.planned)

    def count(self, font: int, key: str) -> None:
        counts = self.per_font.setdefault(font, {"written": 0, "existing": 0, "planned": 0})
        counts[key] += 1


def format_record(
    code_point: int, metadata: FontMetadata, *, max_record_length: int
) -> tuple[SpecRecord, bytes]:
    """Build a record and its encoded form, rejecting oversized records."""
    if any(separator in metadata.path for separator in RECORD_SEPARATORS):
        raise RecordFormatError(
            f"Font path for FONT{metadata.index} contains a tab or line break: {metadata.path!r}"
        )
    record = SpecRecord.from_metadata(code_point, metadata)
    payload = record.encode()
    if len(payload) > max_record_length:
        raise RecordFormatError(
            f"Spec record for U+{code_point:04X} in FONT{metadata.index} is "
            f"{len(payload)} bytes long (limit {max_record_length})."
        )
    return record, payload


def write_spec(target_dir: Path, digest: str, payload: bytes) -> bool:
    """Store ``payload`` under ``target_dir/digest`` unless it already exists.

    Returns ``True`` when a new file was created. The payload is written to a
    temporary file first and hard-linked into place, so the final name only
    ever refers to complete content. Where the filesystem refuses hard links
    the temporary file is renamed over the destination instead.
    """
    destination = target_dir / digest
    if destination.exists():
        return False
    try:
        fd, temp_name = tempfile.mkstemp(prefix=TEMP_PREFIX, dir=target_dir)
    except OSError as exc:
        raise EmissionError(f"Unable to create a temporary file in '{target_dir}'.") from exc
    temp_path = Path(temp_name)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(payload)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(temp_path, SPEC_FILE_MODE)
        try:
            os.link(temp_path, destination)
        except FileExistsError:
            return False
        except OSError as exc:
            if exc.errno not in LINK_UNSUPPORTED:
                raise
            logger.debug("Hard link refused in %s (%s), renaming instead", target_dir, exc)
            if destination.exists():
                return False
            os.replace(temp_path, destination)
    except OSError as exc:
        raise EmissionError(f"Unable to write spec file '{destination}'.") from exc
    finally:
        temp_path.unlink(missing_ok=True)
    return True


def emit_specs(
    code_points: CodePointSets,
    metadata: Sequence[FontMetadata],
    target_dir: Path,
    *,
    max_record_length: int,
    dry_run: bool = False,
    emitter: DiagnosticEmitter | None = None,
    progress_logger: PipelineLogger | None = None,
) -> EmissionReport:
    """Write one content-addressed spec file per required (font, code point).

    Emission is not transactional: files written before a failure stay on disk.
    """
    emitter = ensure_emitter(emitter)
    progress_logger = progress_logger or PipelineLogger()
    if len(metadata) != len(code_points):
        raise ValueError(
            f"Metadata describes {len(metadata)} fonts but code points cover {len(code_points)}."
        )

    target_dir = Path(target_dir)
    if not dry_run:
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise EmissionError(f"Unable to create output directory '{target_dir}'.") from exc

    report = EmissionReport()
    with progress_logger.progress("Emitting glyph specs", total=code_points.total()) as advance:
        for font, font_metadata in enumerate(metadata):
            for code_point in code_points.sorted(font):
                record, payload = format_record(
                    code_point, font_metadata, max_record_length=max_record_length
                )
                digest = record.digest()
                if dry_run and (target_dir / digest).exists():
                    report.existing.append(digest)
                    report.count(font, "existing")
                elif dry_run:
                    report.planned.append(digest)
                    report.count(font, "planned")
                elif write_spec(target_dir, digest, payload):
                    report.written.append(digest)
                    report.count(font, "written")
                    emitter.event(
                        "spec_written",
                        {"digest": digest, "font": font, "code_point": code_point},
                    )
                else:
                    report.existing.append(digest)
                    report.count(font, "existing")
                    emitter.event("spec_exists", {"digest": digest, "font": font})
                advance(1)

    logger.debug(
        "Emission finished: %d written, %d existing, %d planned",
        len(report.written),
        len(report.existing),
        len(report.planned),
    )
    return report


__all__ = [
    "EmissionReport",
    "SpecRecord",
    "emit_specs",
    "format_record",
    "write_spec",
]
