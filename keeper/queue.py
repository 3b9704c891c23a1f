# keeper/queue.py

import random
import asyncio
from collections import deque

from config import MINTS_QUEUE_NAME, RETRIES_PER_ACTION, DELAY_BETWEEN_RETRIES
from keeper.jobs import Job
from keeper.processor import InvalidJobError


class JobQueue:
    """
    In-process flow queue. A job runs only after all of its children have
    completed; a child that keeps failing leaves its parent failed and unrun.
    Retries live here, the processor never retries on its own.
    """

    def __init__(self, name: str = MINTS_QUEUE_NAME, attempts: int = RETRIES_PER_ACTION,
                 retry_delay: tuple = DELAY_BETWEEN_RETRIES):
        self.name = name
        self.attempts = attempts
        self.retry_delay = retry_delay
        self.pending = deque()
        self.completed = []
        self.failed = []

    def add(self, job: Job) -> Job:
        self.pending.append(job)
        return job

    async def _attempt(self, job: Job, process_job):
        for attempt in range(1, self.attempts + 1):
            try:
                return True, await process_job(job)
            except InvalidJobError:
                raise
            except Exception as e:
                print(f"[Job ❌] {job!r} → {e} (attempt {attempt}/{self.attempts})")
                if attempt < self.attempts:
                    delay = random.randint(*self.retry_delay)
                    print(f"⏳ Retrying in {delay}s")
                    await asyncio.sleep(delay)
                    continue
                return False, e

    async def _run_flow(self, job: Job, process_job) -> bool:
        children_ok = True
        for child in job.children:
            if not await self._run_flow(child, process_job):
                children_ok = False

        if not children_ok:
            self.failed.append((job, "children failed"))
            print(f"[Job ❌] {job!r} → skipped, children failed")
            return False

        ok, outcome = await self._attempt(job, process_job)
        if ok:
            self.completed.append((job, outcome))
        else:
            self.failed.append((job, outcome))
        return ok

    async def run(self, process_job) -> int:
        """Drain the queue, including jobs added while draining. Returns jobs processed."""
        processed = 0
        while self.pending:
            job = self.pending.popleft()
            await self._run_flow(job, process_job)
            processed += 1
        return processed
