"""Generation bounds and cancellation checkpoints shared by the builders."""
from __future__ import annotations

import asyncio


def clamp_generations(requested: int | None, default: int, cap: int) -> int:
    """Resolve a requested depth: non-positive means default, never above cap."""
    if requested is None or requested <= 0:
        requested = default
    return min(requested, cap)


async def checkpoint() -> None:
    """Yield to the event loop so a pending cancellation is raised here."""
    await asyncio.sleep(0)
