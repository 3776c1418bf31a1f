"""Shared helpers to keep artifact filenames consistent across pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable


# Canonical prefixes for each stage. Aliases map to the same prefix so callers
# can use whichever term reads best while the stored filenames stay identical.
STAGE_PREFIXES: dict[str, str] = {
    "grid": "grid_",
    "input": "grid_",
    "graph": "graph_",
    "render": "render_",
    "overlay": "render_",
}


@dataclass(frozen=True, slots=True)
class StageSpec:
    """Metadata describing a stage's on-disk representation."""

    name: str
    prefix: str
    default_suffix: str
    glob: str


STAGE_ALIASES: dict[str, str] = {
    "input": "grid",
    "overlay": "render",
}

STAGE_SPECS: dict[str, StageSpec] = {
    "grid": StageSpec("grid", STAGE_PREFIXES["grid"], ".txt", "*.txt"),
    "graph": StageSpec("graph", STAGE_PREFIXES["graph"], ".json", "graph_*.json"),
    "render": StageSpec("render", STAGE_PREFIXES["render"], ".png", "render_*.png"),
}


def canonical_stage_name(stage: str) -> str:
    """Return the canonical stage name (resolving aliases)."""

    key = stage.strip().lower()
    return STAGE_ALIASES.get(key, key)


def stage_spec(stage: str) -> StageSpec:
    name = canonical_stage_name(stage)
    spec = STAGE_SPECS.get(name)
    if spec is None:  # pragma: no cover - developer errors
        raise KeyError(f"Unknown stage '{stage}'")
    return spec


def known_prefixes() -> tuple[str, ...]:
    return tuple(dict.fromkeys(STAGE_PREFIXES.values()))


def strip_prefix(value: str, *, extra: Iterable[str] | None = None) -> str:
    """Remove and return ``value`` without any known prefix."""

    prefixes = list(known_prefixes())
    if extra:
        prefixes.extend(extra)
    for prefix in prefixes:
        if value.startswith(prefix) and len(value) > len(prefix):
            return value[len(prefix) :]
    return value


def apply_stage_prefix(stage: str, base: str) -> str:
    """Return ``base`` prefixed for ``stage`` (ensuring no duplicate prefixes)."""

    try:
        prefix = STAGE_PREFIXES[canonical_stage_name(stage)]
    except KeyError as exc:  # pragma: no cover - developer errors
        raise KeyError(f"Unknown stage '{stage}'") from exc
    return prefix + strip_prefix(base)


def prefixed_name(stage: str, base: str, suffix: str) -> str:
    return f"{apply_stage_prefix(stage, base)}{suffix}"


def canonical_sample_name(path: Path | str) -> str:
    """Best-effort attempt at deriving the logical sample name from a path."""

    stem = Path(path).stem
    cleaned = strip_prefix(stem)
    return cleaned or stem


__all__ = [
    "STAGE_PREFIXES",
    "StageSpec",
    "stage_spec",
    "canonical_stage_name",
    "known_prefixes",
    "strip_prefix",
    "apply_stage_prefix",
    "prefixed_name",
    "canonical_sample_name",
]
