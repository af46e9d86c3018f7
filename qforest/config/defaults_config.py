#!filepath: qforest/config/defaults_config.py
import os
from typing import Optional

from pydantic import BaseModel, Field


class RunDefaults(BaseModel):
    """
    Process-level defaults applied before any option is scanned.

    num_threads=None means "number of CPUs available".
    """

    num_trees: int = Field(500, ge=1)
    num_threads: Optional[int] = Field(None, ge=1)

    def resolve_num_threads(self) -> int:
        if self.num_threads is not None:
            return self.num_threads
        return os.cpu_count() or 1
