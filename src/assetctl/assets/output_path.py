from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Literal, Mapping

from ..core.errors import ScriptError
from ..core.exit_codes import ERR_ARTIFACT, ERR_CONFIG, ERR_PREREQ
from ..core.runtime.clock import Clock, from_timestamp, utc_now
from ..core.runtime.logging import log_event
from .classify import FingerprintKind, classify
from .filesystem import Filesystem, LocalFilesystem

if TYPE_CHECKING:
    from ..core.context import RunContext

COMPONENT = "output-path"

Reason = Literal["live", "recent-count", "age-window", "expired"]


@dataclass(frozen=True)
class AssetRecord:
    digested_path: str
    logical_path: str
    digest: str
    family_key: str
    kind: FingerprintKind
    mtime: datetime
    is_live: bool

    def as_dict(self) -> dict[str, object]:
        return {
            "logical_path": self.logical_path,
            "digest": self.digest,
            "family_key": self.family_key,
            "kind": self.kind,
            "mtime": self.mtime.isoformat(),
            "is_live": self.is_live,
        }


@dataclass(frozen=True)
class Decision:
    record: AssetRecord
    reason: Reason

    @property
    def keep(self) -> bool:
        return self.reason != "expired"


@dataclass(frozen=True)
class CleanPlan:
    keep_count: int
    max_age_seconds: float
    decisions: tuple[Decision, ...]

    @property
    def removals(self) -> list[AssetRecord]:
        return [d.record for d in self.decisions if not d.keep]

    @property
    def kept(self) -> dict[str, Reason]:
        return {d.record.digested_path: d.reason for d in self.decisions if d.keep}


@dataclass
class CleanReport:
    keep_count: int
    max_age_seconds: float
    dry_run: bool
    removed: list[str] = field(default_factory=list)
    kept: dict[str, Reason] = field(default_factory=dict)
    failed: list[dict[str, str]] = field(default_factory=list)

    @property
    def status(self) -> str:
        return "ok" if not self.failed else "partial"


def _check_retention(keep_count: int, max_age_seconds: float) -> None:
    if isinstance(keep_count, bool) or not isinstance(keep_count, int) or keep_count < 0:
        raise ScriptError(f"keep count must be a non-negative integer, got {keep_count!r}", ERR_CONFIG, kind="invalid_retention")
    if isinstance(max_age_seconds, bool) or not isinstance(max_age_seconds, (int, float)) or max_age_seconds < 0:
        raise ScriptError(f"max age must be a non-negative number of seconds, got {max_age_seconds!r}", ERR_CONFIG, kind="invalid_retention")


class OutputPath:
    """Fingerprinted asset output directory with version retention.

    ``manifest`` maps logical paths to the output filenames of the active
    build. Anything named by it is never removed by ``clean``.
    """

    def __init__(
        self,
        path: Path,
        manifest: Mapping[str, str],
        *,
        filesystem: Filesystem | None = None,
        clock: Clock | None = None,
        ctx: RunContext | None = None,
    ) -> None:
        self.path = Path(path)
        self.manifest = dict(manifest)
        self.filesystem = filesystem or LocalFilesystem()
        self.clock = clock or utc_now
        self.ctx = ctx

    def _require_dir(self) -> None:
        if not self.filesystem.is_dir(self.path):
            raise ScriptError(f"output directory not found: {self.path}", ERR_PREREQ, kind="output_missing")

    def files(self) -> dict[str, AssetRecord]:
        self._require_dir()
        live = set(self.manifest.values())
        records: dict[str, AssetRecord] = {}
        for name in self.filesystem.list_files(self.path):
            try:
                mtime = from_timestamp(self.filesystem.mtime(self.path / name))
            except FileNotFoundError:
                log_event(self.ctx, "debug", COMPONENT, "vanished", path=name)
                continue
            parsed = classify(name)
            records[name] = AssetRecord(
                digested_path=name,
                logical_path=parsed.logical_path,
                digest=parsed.digest,
                family_key=parsed.family_key,
                kind=parsed.kind,
                mtime=mtime,
                is_live=name in live,
            )
        log_event(self.ctx, "debug", COMPONENT, "scan", root=str(self.path), files=len(records))
        return records

    def families(self) -> dict[str, list[AssetRecord]]:
        grouped: dict[str, list[AssetRecord]] = {}
        for record in self.files().values():
            grouped.setdefault(record.family_key, []).append(record)
        for members in grouped.values():
            members.sort(key=lambda r: (r.mtime, r.digested_path), reverse=True)
        return grouped

    def exists(self, digested_path: str) -> bool:
        return self.filesystem.is_dir(self.path) and digested_path in self.files()

    def plan(self, keep_count: int, max_age_seconds: float) -> CleanPlan:
        _check_retention(keep_count, max_age_seconds)
        now = self.clock()
        families = self.families()
        decisions: list[Decision] = []
        for key in sorted(families):
            counted = 0
            for record in families[key]:
                reason: Reason
                if record.is_live:
                    reason = "live"
                elif counted < keep_count:
                    counted += 1
                    reason = "recent-count"
                elif max(0.0, (now - record.mtime).total_seconds()) < max_age_seconds:
                    reason = "age-window"
                else:
                    reason = "expired"
                decisions.append(Decision(record, reason))
        return CleanPlan(keep_count=keep_count, max_age_seconds=max_age_seconds, decisions=tuple(decisions))

    def prune(self, keep_count: int, max_age_seconds: float, dry_run: bool = False) -> CleanReport:
        plan = self.plan(keep_count, max_age_seconds)
        report = CleanReport(keep_count=keep_count, max_age_seconds=max_age_seconds, dry_run=dry_run, kept=plan.kept)
        for record in plan.removals:
            name = record.digested_path
            if dry_run:
                log_event(self.ctx, "info", COMPONENT, "would-remove", path=name, family=record.family_key)
                report.removed.append(name)
                continue
            try:
                self.filesystem.remove(self.path / name)
            except FileNotFoundError:
                log_event(self.ctx, "info", COMPONENT, "already-removed", path=name)
            except OSError as exc:
                log_event(self.ctx, "warn", COMPONENT, "remove-failed", path=name, error=str(exc))
                report.failed.append({"path": name, "error": str(exc)})
                continue
            else:
                log_event(self.ctx, "info", COMPONENT, "remove", path=name, family=record.family_key)
            report.removed.append(name)
        log_event(
            self.ctx,
            "info",
            COMPONENT,
            "clean-summary",
            removed=len(report.removed),
            kept=len(report.kept),
            failed=len(report.failed),
            dry_run=dry_run,
        )
        return report

    def clean(self, keep_count: int, max_age_seconds: float) -> None:
        self.prune(keep_count, max_age_seconds)

    def clobber(self) -> bool:
        if not self.filesystem.is_dir(self.path):
            log_event(self.ctx, "info", COMPONENT, "clobber-skip", root=str(self.path))
            return False
        try:
            self.filesystem.remove_tree(self.path)
        except OSError as exc:
            raise ScriptError(f"unable to remove output directory {self.path}: {exc}", ERR_ARTIFACT, kind="clobber_failed") from exc
        log_event(self.ctx, "info", COMPONENT, "clobber", root=str(self.path))
        return True
