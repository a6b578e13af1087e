from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional

import structlog

from .errors import ImageSourceError
from .hashes import ImageHash
from .phash import ImageHasher, PerceptualHasher

logger = structlog.get_logger(__name__)

ProgressCallback = Callable[[int, int], None]


@dataclass
class BatchResult:
    hashes: Dict[str, ImageHash] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)
    cancelled: bool = False

    @property
    def ok(self) -> bool:
        return not self.errors and not self.cancelled


def hash_paths(paths: Iterable, hasher: Optional[ImageHasher] = None, threads: int = 8,
               cancel_event=None, progress: Optional[ProgressCallback] = None) -> BatchResult:
    """Hash many files concurrently.

    Keys are resolved path strings. Files the image layer cannot read or decode
    land in ``errors``; any other exception propagates.
    """
    hasher = hasher or PerceptualHasher.default()
    paths = [Path(p) for p in paths]
    total = len(paths)
    result = BatchResult()
    done = 0

    def work(p: Path):
        if cancel_event is not None and cancel_event.is_set():
            return None
        return hasher.hash_from_source(p)

    with ThreadPoolExecutor(max_workers=max(1, int(threads))) as ex:
        futs = {ex.submit(work, p): p for p in paths}
        for fut in as_completed(futs):
            p = futs[fut]
            key = str(p.resolve())
            try:
                h = fut.result()
            except ImageSourceError as exc:
                logger.warning("hash_failed", path=key, error=str(exc))
                result.errors[key] = str(exc)
                h = None
            done += 1
            if progress is not None:
                progress(done, total)
            if h is not None:
                result.hashes[key] = h
            if cancel_event is not None and cancel_event.is_set():
                result.cancelled = True
                for other in futs:
                    other.cancel()
                break

    logger.info("batch_hashed", total=total, hashed=len(result.hashes),
                failed=len(result.errors), cancelled=result.cancelled)
    return result
