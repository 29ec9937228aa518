from .errors import (
    ResizerError,
    InvalidInputPathError,
    InvalidSizeFormatError,
    InvalidDimensionError,
    DecodeFailureError,
    EncodeFailureError,
    FilesystemFailureError,
)
from .models import Percentage, Absolute, SizeSpec, ResizeOptions, ResizeJob, ResizeResult
from .io_utils import SUPPORTED_EXTS, is_supported, list_images, plan_directory, plan_jobs
from .resize_service import parse_size, calc_target_size, resolve, resize_one, resize_many

__all__ = [
    "ResizerError",
    "InvalidInputPathError",
    "InvalidSizeFormatError",
    "InvalidDimensionError",
    "DecodeFailureError",
    "EncodeFailureError",
    "FilesystemFailureError",
    "Percentage",
    "Absolute",
    "SizeSpec",
    "ResizeOptions",
    "ResizeJob",
    "ResizeResult",
    "SUPPORTED_EXTS",
    "is_supported",
    "list_images",
    "plan_directory",
    "plan_jobs",
    "parse_size",
    "calc_target_size",
    "resolve",
    "resize_one",
    "resize_many",
]
