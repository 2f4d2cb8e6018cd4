from pathlib import Path
from typing import Any, Callable, Dict, Sequence
import plistlib

from shipwright.src.project.manifest import AppManifest

Plist = Dict[str, Any]
PlistStep = Callable[[AppManifest, Plist], Plist]


def upsert_or_delete(
    plist: Plist, key: str, value: Any = None, present: bool = True
) -> Plist:
    """Return a copy of plist with key set to value, or without key.

    An existing key keeps its position, a new key is appended. Every other
    entry is carried over untouched and the input mapping is never modified.
    """
    result = dict(plist)
    if present:
        result[key] = value
    else:
        result.pop(key, None)
    return result


def apply_pipeline(
    manifest: AppManifest, plist: Plist, pipeline: Sequence[PlistStep]
) -> Plist:
    """Fold plist through every step in order; each step returns a new document"""
    for step in pipeline:
        plist = step(manifest, plist)
    return plist


def read_plist(path: Path) -> Plist:
    with open(path, "rb") as f:
        return dict(plistlib.load(f))


def write_plist(path: Path, plist: Plist) -> None:
    # Keep the on-disk key order so diffs stay minimal
    with open(path, "wb") as f:
        plistlib.dump(plist, f, fmt=plistlib.FMT_XML, sort_keys=False)
