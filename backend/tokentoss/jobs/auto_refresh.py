# Periodic odds refresh. The task belongs to whoever starts it (the app
# lifespan); the cache policy still decides whether the API is actually hit.
import asyncio
import logging
from tokentoss.core.config import settings
from tokentoss.db.base import utcnow
from tokentoss.services.odds_cache import OddsCache

logger = logging.getLogger(__name__)


class AutoRefresher:
    def __init__(
        self,
        cache: OddsCache,
        interval_seconds: float = settings.AUTO_REFRESH_SECONDS,
        clock=utcnow,
    ):
        self.cache = cache
        self.interval_seconds = interval_seconds
        self.clock = clock
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        if not self.running:
            self._task = asyncio.create_task(self._run(), name="odds-auto-refresh")
        return self._task

    async def stop(self):
        if self._task is None:
            return
        task, self._task = self._task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run(self):
        while True:
            try:
                result = await self.cache.sync(self.clock())
                if result.partial_failure:
                    logger.warning(f"Auto refresh incomplete: {result.partial_failure}")
            except Exception as e:
                # keep the loop alive, next tick tries again
                logger.exception(f"Auto refresh failed: {e}")
            await asyncio.sleep(self.interval_seconds)
