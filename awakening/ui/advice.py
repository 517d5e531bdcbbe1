"""Advisory text for a computed plan.

``pro_tip`` is the fixed advice shown under every plan. ``AdvisorClient`` asks
an optional remote service for a free-text tip; it retries with exponential
backoff and falls back to a static apology, so callers never see an error.
"""
from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional

import aiohttp

from awakening.engine.logger import ChannelLogger
from awakening.planner.optimizer import AllocationResult

NO_TARGET_TIP = "Set a target level first."
FUNDED_TIP = "Perfect resource management. Your superhuman will shine brightest in the ring!"
FALLBACK_TIP = "The strategist is unavailable right now. Trust the route above and try again later."


def pro_tip(result: Optional[AllocationResult]) -> str:
    if result is None:
        return NO_TARGET_TIP
    if not result.fully_funded:
        return (
            f"Collect {result.universal_shortfall} more universal stones to reach your target. "
            "Head to the exchange now!"
        )
    return FUNDED_TIP


class AdvisorError(RuntimeError):
    """Raised internally when the tip service returns an unusable reply."""


class AdvisorClient:
    """Fetch a short strategy tip from a remote service."""

    def __init__(
        self,
        endpoint: Optional[str],
        *,
        timeout: float = 5.0,
        max_attempts: int = 3,
        base_delay: float = 0.5,
        logger: Optional[ChannelLogger] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.endpoint = endpoint
        self.timeout = timeout
        self.max_attempts = max(1, max_attempts)
        self.base_delay = base_delay
        self.logger = logger
        self._sleep = sleep

    def backoff_delay(self, attempt: int) -> float:
        """Delay before retry number ``attempt + 1`` (0-based attempt)."""

        return self.base_delay * (2 ** attempt)

    async def fetch_tip(self, character: str, current_level: int, target_level: int, shortfall: int) -> str:
        if not self.endpoint:
            return FALLBACK_TIP
        payload = {
            "character": character,
            "current_level": current_level,
            "target_level": target_level,
            "shortfall": shortfall,
        }
        for attempt in range(self.max_attempts):
            try:
                return await self._request(payload)
            except (aiohttp.ClientError, asyncio.TimeoutError, AdvisorError) as exc:
                if self.logger and self.logger.enabled:
                    self.logger.warning(
                        "Advisor attempt %d/%d failed: %s",
                        attempt + 1,
                        self.max_attempts,
                        exc,
                    )
                if attempt + 1 < self.max_attempts:
                    await self._sleep(self.backoff_delay(attempt))
        if self.logger and self.logger.enabled:
            self.logger.error("Advisor unavailable; using fallback tip")
        return FALLBACK_TIP

    async def _request(self, payload: dict) -> str:
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.post(self.endpoint, json=payload) as response:
                if response.status != 200:
                    raise AdvisorError(f"HTTP {response.status}")
                try:
                    data = await response.json(content_type=None)
                except ValueError as exc:
                    raise AdvisorError("reply was not JSON") from exc
        tip = data.get("tip") if isinstance(data, dict) else None
        if not isinstance(tip, str) or not tip.strip():
            raise AdvisorError("reply has no tip")
        return tip.strip()


__all__ = [
    "AdvisorClient",
    "AdvisorError",
    "FALLBACK_TIP",
    "FUNDED_TIP",
    "NO_TARGET_TIP",
    "pro_tip",
]
