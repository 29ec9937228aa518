import argparse
import logging
import os
import sys
from typing import List, Optional

from .. import __version__
from ..core.errors import ResizerError
from ..core.io_utils import plan_jobs
from ..core.models import ResizeOptions, ResizeResult
from ..core.resize_service import parse_size, resize_many

logger = logging.getLogger("iresizer")

DESCRIPTION = """\
iResizer (Image Resizer)

Resize a single image or batch process a directory of images.
Supports JPG, PNG, BMP, and JPEG formats.
Resize using fixed dimensions (e.g., 800x600) or percentage (e.g., 50%).
"""

def _quality(v: str) -> int:
    q = int(v)
    if not 1 <= q <= 95:
        raise argparse.ArgumentTypeError("quality must be between 1 and 95")
    return q

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="iresizer",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-i", "--input", required=True,
                        help="Input image file or directory containing images")
    parser.add_argument("-o", "--output", required=True,
                        help="Output image file or directory to save resized images")
    parser.add_argument("-s", "--size", required=True,
                        help="Resize target: WIDTHxHEIGHT (e.g., 800x600) or percentage (e.g., 50%%)")
    parser.add_argument("-r", "--recursive", action="store_true",
                        help="Process directories recursively")
    parser.add_argument("--keep-aspect", action="store_true",
                        help="Treat WIDTHxHEIGHT as a bounding box and keep the aspect ratio")
    parser.add_argument("-q", "--quality", type=_quality, default=85,
                        help="JPEG quality, 1-95 (default: 85)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser

def setup_logging(verbose: bool) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(name)s: %(message)s",
                                          datefmt="%Y-%m-%d %H:%M:%S"))
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)

def _on_progress(index: int, total: int, src: str) -> None:
    print(f"Processing {index}/{total}: {src}")

def _report(res: ResizeResult) -> None:
    print(f"Done: {os.path.basename(res.src_path)} -> {os.path.basename(res.dst_path)} "
          f"({res.in_bytes // 1024} KB -> {res.out_bytes // 1024} KB)\n")

def run(opts: ResizeOptions) -> int:
    """Plan and execute every job; the first failure aborts the run."""
    jobs = plan_jobs(opts.input_path, opts.output_path, opts.size, opts.recursive)
    if not jobs:
        logger.info("No images found in %s", opts.input_path)
        return 0

    count = 0
    for res in resize_many(jobs, opts, progress=_on_progress):
        _report(res)
        count += 1
    logger.info("Resized %d image(s) into %s", count, opts.output_path)
    return count

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        opts = ResizeOptions(
            input_path=args.input,
            output_path=args.output,
            size=parse_size(args.size),
            recursive=args.recursive,
            keep_aspect=args.keep_aspect,
            jpg_quality=args.quality,
        )
        run(opts)
    except ResizerError as e:
        logger.error("error: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
