"""In-memory run manifest -- which files this run created, and stage states.

Cleanup deletes only what the manifest attributes to this run instead of
re-deriving "ours" from the track naming pattern alone.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from .models import ResolvedPaths, Stage, StageStatus, is_track_file

log = logger.bind(stage="manifest")


def list_track_files(directory: Path) -> list[Path]:
    """Numbered FLAC files directly inside ``directory``."""
    if not directory.is_dir():
        return []
    return [p for p in directory.iterdir() if p.is_file() and is_track_file(p.name)]


class RunManifest:
    """Track transient files, split outputs, and stage statuses for one run."""

    def __init__(self, paths: ResolvedPaths) -> None:
        self.paths = paths
        self.stages: dict[Stage, StageStatus] = {
            stage: StageStatus.PENDING for stage in Stage
        }
        self.created: list[Path] = []
        self.preexisting_tracks: frozenset[str] | None = None
        # Set once the normalizer moves the cue sheet aside; a backup left by
        # an earlier run is never ours to restore
        self.owns_backup = False

    # -- Stage state --

    def set_stage(self, stage: Stage, status: StageStatus) -> None:
        log.debug(f"Stage {stage.value} -> {status}")
        self.stages[stage] = status

    def status(self, stage: Stage) -> StageStatus:
        return self.stages[stage]

    # -- Created files --

    def record(self, path: Path) -> None:
        """Attribute ``path`` to this run (called before the tool writes it)."""
        if path not in self.created:
            log.debug(f"Recorded {path.name}")
            self.created.append(path)

    def forget(self, path: Path) -> None:
        """Drop ``path`` once this run has removed or handed it over."""
        if path in self.created:
            self.created.remove(path)

    def snapshot_tracks(self) -> None:
        """Remember which numbered FLACs existed before splitting."""
        self.preexisting_tracks = frozenset(
            p.name for p in list_track_files(self.paths.root_dir)
        )
        log.debug(f"Snapshot: {len(self.preexisting_tracks)} pre-existing track files")

    def new_tracks(self) -> list[Path]:
        """Numbered FLACs that appeared since the snapshot.

        Without a snapshot the split never started, so nothing is ours.
        """
        if self.preexisting_tracks is None:
            return []
        return sorted(
            p
            for p in list_track_files(self.paths.root_dir)
            if p.name not in self.preexisting_tracks
        )

    def record_new_tracks(self) -> list[Path]:
        tracks = self.new_tracks()
        for track in tracks:
            self.record(track)
        return tracks

    def owned_files(self) -> list[Path]:
        """Every file this run created that still exists.

        A file named like the original audio image is never claimed.
        """
        candidates = list(self.created)
        for track in self.new_tracks():
            if track not in candidates:
                candidates.append(track)
        audio_name = self.paths.audio_file.name
        return [p for p in candidates if p.exists() and p.name != audio_name]
