"""A simulation of a concurrent cake shop with a three-stage pipeline."""

from __future__ import annotations

import queue
import random
import threading
import time
from dataclasses import dataclass, field

_CLOSED = object()
_print_lock = threading.Lock()


def _say(message: str) -> None:
    with _print_lock:
        print(message)


@dataclass
class CakeShop:
    """Parameters of the shop; times are in seconds."""

    verbose: bool = False
    cakes: int = 0
    bake_time: float = 0.0
    bake_stddev: float = 0.0
    bake_buf: int = 0
    num_icers: int = 0
    ice_time: float = 0.0
    ice_stddev: float = 0.0
    ice_buf: int = 0
    inscribe_time: float = 0.0
    inscribe_stddev: float = 0.0
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    def _work(self, duration: float, stddev: float) -> None:
        """Sleep for a time normally distributed around duration."""
        delay = duration + self.rng.gauss(0.0, 1.0) * stddev
        if delay > 0:
            time.sleep(delay)

    def _baker(self, baked: queue.Queue) -> None:
        for cake in range(self.cakes):
            if self.verbose:
                _say(f"baking {cake}")
            self._work(self.bake_time, self.bake_stddev)
            baked.put(cake)
        for _ in range(self.num_icers):
            baked.put(_CLOSED)

    def _icer(self, iced: queue.Queue, baked: queue.Queue) -> None:
        while (cake := baked.get()) is not _CLOSED:
            if self.verbose:
                _say(f"icing {cake}")
            self._work(self.ice_time, self.ice_stddev)
            iced.put(cake)

    def _inscriber(self, iced: queue.Queue) -> None:
        for _ in range(self.cakes):
            cake = iced.get()
            if self.verbose:
                _say(f"inscribing {cake}")
            self._work(self.inscribe_time, self.inscribe_stddev)
            if self.verbose:
                _say(f"finished {cake}")

    def work(self, runs: int) -> None:
        """Run the simulation runs times."""
        if self.cakes > 0 and self.num_icers < 1:
            raise ValueError("a shop that bakes cakes needs at least one icer")
        for _ in range(runs):
            # A queue cannot be unbuffered; a single slot is the closest to a hand-off.
            baked: queue.Queue = queue.Queue(maxsize=max(self.bake_buf, 1))
            iced: queue.Queue = queue.Queue(maxsize=max(self.ice_buf, 1))
            workers = [threading.Thread(target=self._baker, args=(baked,))]
            workers.extend(
                threading.Thread(target=self._icer, args=(iced, baked))
                for _ in range(self.num_icers)
            )
            for worker in workers:
                worker.start()
            self._inscriber(iced)
            for worker in workers:
                worker.join()