"""Fingerprinted asset output directory: classification and retention."""

from .classify import Classification, PreFingerprinted, StandardFingerprint, Unfingerprinted, classify
from .filesystem import Filesystem, LocalFilesystem
from .manifest import load_manifest
from .output_path import AssetRecord, CleanPlan, CleanReport, Decision, OutputPath

__all__ = [
    "AssetRecord",
    "Classification",
    "CleanPlan",
    "CleanReport",
    "Decision",
    "Filesystem",
    "LocalFilesystem",
    "OutputPath",
    "PreFingerprinted",
    "StandardFingerprint",
    "Unfingerprinted",
    "classify",
    "load_manifest",
]
