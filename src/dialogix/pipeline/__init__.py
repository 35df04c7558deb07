"""Pipeline orchestration: one uploaded file in, one immutable PipelineResult out."""

from .run import build_descriptor, process_file, process_upload

__all__ = ["build_descriptor", "process_file", "process_upload"]
