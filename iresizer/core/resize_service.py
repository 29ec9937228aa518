import logging
import math
import os
import re
from typing import Callable, Iterable, Iterator, Optional, Tuple

from PIL import Image, UnidentifiedImageError

from .errors import (
    DecodeFailureError,
    EncodeFailureError,
    FilesystemFailureError,
    InvalidDimensionError,
    InvalidSizeFormatError,
)
from .models import Absolute, Percentage, ResizeJob, ResizeOptions, ResizeResult, SizeSpec

logger = logging.getLogger(__name__)

EXT_TO_PIL = {"jpg":"JPEG","jpeg":"JPEG","png":"PNG","bmp":"BMP","webp":"WEBP","tif":"TIFF","tiff":"TIFF"}
MAX_DIMENSION = 2**32 - 1
_DIGITS = re.compile(r"[0-9]+")
_PERCENT = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")

ProgressCb = Callable[[int, int, str], None]
LogCb = Callable[[str], None]

# ---------------- #
# ---Size specs--- #
# ---------------- #

def _parse_dimension(text: str, what: str) -> int:
    if not _DIGITS.fullmatch(text):
        raise InvalidDimensionError(f"invalid {what}: {text!r}")
    value = int(text)
    if value > MAX_DIMENSION:
        raise InvalidDimensionError(f"{what} out of range: {text}")
    return value

def parse_size(text: str) -> SizeSpec:
    """
    Parse a --size value.
    'PERCENT%' gives a Percentage, 'WIDTHxHEIGHT' an Absolute size.
    """
    s = text.strip()
    if s.endswith("%"):
        prefix = s.rstrip("%")
        if not _PERCENT.fullmatch(prefix):
            raise InvalidSizeFormatError(f"invalid percentage: {text!r}")
        pct = float(prefix)
        if not math.isfinite(pct):
            raise InvalidSizeFormatError(f"invalid percentage: {text!r}")
        return Percentage(pct)

    if s.count("x") == 1:
        w, h = s.split("x")
        return Absolute(_parse_dimension(w, "width"), _parse_dimension(h, "height"))

    raise InvalidSizeFormatError(f"invalid size format {text!r}, use WIDTHxHEIGHT or PERCENT%")

def calc_target_size(sw: int, sh: int, spec: SizeSpec, keep_aspect: bool = False) -> Tuple[int, int]:
    """Decide target width/height for an image of sw x sh."""
    if isinstance(spec, Percentage):
        p = spec.percent
        return max(0, int(sw*p/100)), max(0, int(sh*p/100))
    w, h = spec.width, spec.height
    if keep_aspect and sw and sh:
        s = min(w/sw, h/sh)
        return max(1, round(sw*s)), max(1, round(sh*s))
    return w, h

def resolve(text: str, sw: int, sh: int) -> Tuple[int, int]:
    return calc_target_size(sw, sh, parse_size(text))

# -------------- #
# ---Resizing--- #
# -------------- #

def _file_size(path: str) -> int:
    try:
        return os.path.getsize(path)
    except OSError as e:
        raise FilesystemFailureError(f"cannot stat {path}: {e}") from e

def _save(im: Image.Image, dst: str, jpg_quality: int) -> None:
    out_ext = os.path.splitext(dst)[1].lstrip(".").lower()
    pil_fmt = EXT_TO_PIL.get(out_ext)
    if not pil_fmt:
        raise EncodeFailureError(f"{os.path.basename(dst)} -> unknown file extension: .{out_ext}")
    if pil_fmt == "JPEG" and im.mode in ("RGBA", "LA", "P"):
        im = im.convert("RGB")
    kw = {"quality": int(jpg_quality), "optimize": True} if pil_fmt == "JPEG" else {}
    try:
        im.save(dst, format=pil_fmt, **kw)
    except (OSError, ValueError) as e:
        raise EncodeFailureError(f"{os.path.basename(dst)} -> {e}") from e

def resize_one(job: ResizeJob, opts: ResizeOptions) -> ResizeResult:
    """Decode, resample and encode a single job. Any failure is raised."""
    in_bytes = _file_size(job.src_path)
    try:
        with Image.open(job.src_path) as im:
            im.load()
            sw, sh = im.size
            tw, th = calc_target_size(sw, sh, job.size, opts.keep_aspect)
            if tw < 1 or th < 1:
                raise InvalidDimensionError(f"{os.path.basename(job.src_path)} -> empty target size {tw}x{th}")
            logger.debug("%s: %dx%d -> %dx%d", job.src_path, sw, sh, tw, th)
            try:
                resized = im.resize((tw, th), resample=Image.Resampling.LANCZOS)
            except (OverflowError, ValueError, MemoryError) as e:
                raise InvalidDimensionError(
                    f"{os.path.basename(job.src_path)} -> cannot resample to {tw}x{th}: {e}") from e
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise DecodeFailureError(f"{os.path.basename(job.src_path)} -> {e}") from e

    _save(resized, job.dst_path, opts.jpg_quality)
    return ResizeResult(job.src_path, job.dst_path, (sw, sh), resized.size, in_bytes, _file_size(job.dst_path))

def resize_many(jobs: Iterable[ResizeJob], opts: ResizeOptions,
                progress: Optional[ProgressCb] = None, log: Optional[LogCb] = None) -> Iterator[ResizeResult]:
    for job in jobs:
        if progress: progress(job.index, job.total, job.src_path)
        try:
            res = resize_one(job, opts)
        except Exception as e:
            if log: log(f"[Error] {e}")
            raise
        yield res
