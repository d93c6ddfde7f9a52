"""Local event buffer and batch upload."""

from .buffer import EventBuffer, IEventBuffer
from .uploader import BatchUploader, IBatchUploader

__all__ = ["EventBuffer", "IEventBuffer", "BatchUploader", "IBatchUploader"]
