from dataclasses import dataclass
from typing import Optional, Tuple, Union

@dataclass(frozen=True)
class Percentage:
    percent: float

@dataclass(frozen=True)
class Absolute:
    width: int
    height: int

SizeSpec = Union[Percentage, Absolute]

@dataclass(frozen=True)
class ResizeOptions:
    input_path: str
    output_path: str
    size: SizeSpec
    recursive: bool=False
    keep_aspect: bool=False
    jpg_quality: int=85

@dataclass(frozen=True)
class ResizeJob:
    src_path: str
    dst_path: str
    size: SizeSpec
    index: int=1
    total: int=1

@dataclass
class ResizeResult:
    src_path: str
    dst_path: str
    in_size: Optional[Tuple[int, int]] = None
    out_size: Optional[Tuple[int, int]] = None
    in_bytes: int = 0
    out_bytes: int = 0
