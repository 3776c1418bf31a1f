"""Lightweight shared helpers for the models layer."""

from .image_io import encode_png, save_png
from .naming import (
    STAGE_PREFIXES,
    apply_stage_prefix,
    canonical_sample_name,
    known_prefixes,
    prefixed_name,
    stage_spec,
    strip_prefix,
)

__all__ = [
    "STAGE_PREFIXES",
    "apply_stage_prefix",
    "canonical_sample_name",
    "known_prefixes",
    "prefixed_name",
    "stage_spec",
    "strip_prefix",
    "encode_png",
    "save_png",
]
