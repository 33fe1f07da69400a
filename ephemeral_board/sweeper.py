import asyncio
import logging

from .storage import MessageStorage

logger = logging.getLogger("uvicorn")


class ExpirySweeper:
    """
    Periodically evicts expired messages, independent of client traffic.
    """

    DEFAULT_INTERVAL = 60

    def __init__(self, storage: MessageStorage, interval: float = DEFAULT_INTERVAL):
        """
        Args:
            storage (MessageStorage): The store to sweep.
            interval (float): Seconds between two sweeps.
        """
        self.storage = storage
        self.interval = interval

        self._background_tasks: list[asyncio.Task] = []

    @property
    def running(self) -> bool:
        return any(not task.done() for task in self._background_tasks)

    async def start(self):
        """
        Starts the sweep loop as a background task.
        """
        logger.info(f"[Sweeper] Starting, interval={self.interval}s")
        task = asyncio.create_task(self._sweep_loop())
        self._background_tasks.append(task)

    async def stop(self):
        """
        Stops all background tasks gracefully.
        """
        logger.info("[Sweeper] Stopping background tasks...")
        for task in self._background_tasks:
            task.cancel()

        await asyncio.gather(*self._background_tasks, return_exceptions=True)
        self._background_tasks.clear()

    def sweep_tick(self) -> int:
        """
        Runs a single sweep.
        """
        evicted = self.storage.sweep()
        logger.info(f"[Sweeper] Expired messages cleared ({evicted} evicted)")
        return evicted

    async def _sweep_loop(self):
        while True:
            await asyncio.sleep(self.interval)
            self.sweep_tick()
