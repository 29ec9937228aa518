import logging
import os
from typing import List, Tuple

from .errors import FilesystemFailureError, InvalidInputPathError
from .models import ResizeJob, SizeSpec

logger = logging.getLogger(__name__)

SUPPORTED_EXTS = {".jpg", ".jpeg", ".png", ".bmp"}

def is_supported(path: str) -> bool:
    return os.path.splitext(path)[1].lower() in SUPPORTED_EXTS

def _ensure_dir(path: str) -> None:
    if not path:
        return
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        raise FilesystemFailureError(f"cannot create directory {path}: {e}") from e

def _walk_error(err: OSError):
    raise FilesystemFailureError(f"cannot list directory {err.filename}: {err.strerror}") from err

def list_images(folder: str, recursive: bool = False) -> List[str]:
    """
    List supported images in a folder.
    Non-recursive keeps the directory listing order; recursive follows os.walk.
    """
    out: List[str] = []
    if not recursive:
        try:
            with os.scandir(folder) as it:
                for entry in it:
                    if entry.is_file() and is_supported(entry.name):
                        out.append(entry.path)
        except OSError as e:
            raise FilesystemFailureError(f"cannot list directory {folder}: {e}") from e
        return out

    for root, _, files in os.walk(folder, onerror=_walk_error):
        for n in files:
            p = os.path.join(root, n)
            if is_supported(n) and os.path.isfile(p):
                out.append(p)
    return out

def plan_directory(input_dir: str, output_dir: str, recursive: bool) -> List[Tuple[str, str]]:
    """Pair every image under input_dir with its mirrored path under output_dir."""
    pairs: List[Tuple[str, str]] = []
    for src in list_images(input_dir, recursive):
        dst = os.path.join(output_dir, os.path.relpath(src, input_dir))
        _ensure_dir(os.path.dirname(dst))
        pairs.append((src, dst))
    logger.debug("planned %d image(s) under %s (recursive=%s)", len(pairs), input_dir, recursive)
    return pairs

def plan_jobs(input_path: str, output_path: str, size: SizeSpec, recursive: bool = False) -> List[ResizeJob]:
    """Decide between single-file and batch mode and build the job list."""
    if os.path.isfile(input_path):
        _ensure_dir(os.path.dirname(output_path))
        return [ResizeJob(input_path, output_path, size, 1, 1)]

    if os.path.isdir(input_path):
        _ensure_dir(output_path)
        pairs = plan_directory(input_path, output_path, recursive)
        total = len(pairs)
        return [ResizeJob(src, dst, size, i, total) for i, (src, dst) in enumerate(pairs, 1)]

    raise InvalidInputPathError(f"input path is neither a file nor a directory: {input_path}")
