from core.dedup import CorruptStateError, DeduplicationStore, DedupStoreError, StorageError
from core.engine import run_cycle
from core.scheduler import Scheduler

__all__ = [
    "CorruptStateError",
    "DeduplicationStore",
    "DedupStoreError",
    "Scheduler",
    "StorageError",
    "run_cycle",
]
