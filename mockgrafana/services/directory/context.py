from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from mockgrafana.core.config import Settings
from mockgrafana.services.identity import IdAllocator


@dataclass(frozen=True)
class DirectoryContext:
    # Shared collaborators handed to every registry of one directory.
    settings: Settings
    ids: IdAllocator
    rng: random.Random
    time_provider: Callable[[], datetime]
