"""Curation pipeline orchestration."""

from .archive import CuratedArchive
from .candidates import load_candidates
from .orchestrator import (
    CurationError,
    CurationPipeline,
    NoArticlesAvailable,
    NoArticlesSelected,
    PipelineStage,
)

__all__ = [
    "CuratedArchive",
    "CurationError",
    "CurationPipeline",
    "NoArticlesAvailable",
    "NoArticlesSelected",
    "PipelineStage",
    "load_candidates",
]
