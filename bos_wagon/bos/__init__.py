"""BOS模块 - 百度云对象存储访问"""

from .bos_client import connect_bos
from .key_resolver import resolve
from .progress import ProgressReader, ProgressWriter, open_progress_reader, open_progress_writer
from .storage_repo import BosStorageRepo

__all__ = [
    "connect_bos",
    "resolve",
    "ProgressReader",
    "ProgressWriter",
    "open_progress_reader",
    "open_progress_writer",
    "BosStorageRepo",
]
