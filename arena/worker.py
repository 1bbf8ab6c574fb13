"""Background move computation with a single-slot handoff to the game loop."""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

import chess

from arena.core.algorithm import ChessAlgorithm

logger = logging.getLogger(__name__)


class MoveWorker:
    """
    Runs one algorithm's searches off the caller's thread.

    The algorithm only ever executes on the worker's single thread, so it
    is never used by two searches at once. The pending Future is the result
    slot: it is filled once by the worker and drained once by poll() or
    wait(). Starting a new search while a result is still unread drops that
    result. A running search cannot be cancelled; a later search queues
    behind it.
    """

    def __init__(self, algorithm: ChessAlgorithm, name: str = "arena-worker"):
        self.algorithm = algorithm
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=name)
        self._lock = threading.Lock()
        self._future: Optional[Future] = None

    @property
    def thinking(self) -> bool:
        with self._lock:
            return self._future is not None and not self._future.done()

    def start(self, board: chess.Board) -> None:
        """Submit a search on a snapshot of ``board``."""
        snapshot = board.copy()
        with self._lock:
            if self._future is not None:
                logger.debug("Discarding unread result of %r", self.algorithm)
            self._future = self._executor.submit(self.algorithm.select_move, snapshot)

    def poll(self) -> Optional[chess.Move]:
        """Return the computed move if it is ready, else None."""
        with self._lock:
            if self._future is None or not self._future.done():
                return None
            future, self._future = self._future, None
        return future.result()

    def wait(self, timeout: Optional[float] = None) -> chess.Move:
        """Block until the pending search finishes and drain its move."""
        with self._lock:
            future, self._future = self._future, None
        if future is None:
            raise RuntimeError("wait() called with no search in flight")
        return future.result(timeout=timeout)

    def commit(self, board: chess.Board, move: chess.Move) -> None:
        """Forward a played move to the algorithm, on the worker thread."""
        self._executor.submit(self.algorithm.notify_committed, board.copy(), move).result()

    def shutdown(self) -> None:
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "MoveWorker":
        return self

    def __exit__(self, *exc) -> None:
        self.shutdown()
