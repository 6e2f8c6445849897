"""Воркер: отдельный поток, читающий/пишущий назначенные файлы"""

import logging
import os
import threading
from enum import Enum
from typing import List, Optional, Sequence

from .config import BenchmarkConfig, WorkMode, WorkloadConfig
from .throughput import ThroughputEstimator

logger = logging.getLogger(__name__)


class WorkerStatus(Enum):
    INIT = 'init'
    RUNNING = 'running'
    STOPPING = 'stopping'
    FINISHED = 'finished'


class Worker:
    """
    Выполняет план (список индексов файлов) в своем потоке.

    Остановка кооперативная: флаг проверяется перед каждым файлом,
    поэтому stop() ждет окончания текущей операции ввода-вывода.
    Счетчики читаются из потока монитора без блокировок.
    """

    def __init__(self, worker_id: int, indices: Sequence[int], config: BenchmarkConfig,
                 estimator: Optional[ThroughputEstimator] = None):
        self.worker_id = worker_id
        self.indices: List[int] = list(indices)
        self.config = config
        self.mode: WorkMode = config.mode
        self.estimator = estimator or ThroughputEstimator()

        self._status = WorkerStatus.INIT
        self._status_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._finished = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._done = 0
        self._errors = 0
        self._payload: Optional[bytes] = None

    @property
    def status(self) -> WorkerStatus:
        return self._status

    def start(self):
        with self._status_lock:
            if self._status is WorkerStatus.RUNNING:
                return
            self._status = WorkerStatus.RUNNING
            self._stop_event.clear()
            self._finished.clear()

        if self.mode is WorkMode.WRITE and self._payload is None:
            self._payload = os.urandom(self.config.write_size)

        self._thread = threading.Thread(
            target=self._loop, name=f"iobench-worker-{self.worker_id}", daemon=True
        )
        self._thread.start()
        logger.debug("Worker %d started with %d files", self.worker_id, len(self.indices))

    def stop(self):
        """Попросить остановиться и дождаться выхода потока"""
        with self._status_lock:
            if self._status is not WorkerStatus.FINISHED:
                self._status = WorkerStatus.STOPPING
        self._stop_event.set()
        if self._thread is not None and self._thread.is_alive():
            self._thread.join()
        with self._status_lock:
            if self._status is WorkerStatus.STOPPING:
                # поток так и не запускался
                self._status = WorkerStatus.FINISHED
                self._finished.set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._finished.wait(timeout)

    def _loop(self):
        try:
            for index in self.indices:
                if self._stop_event.is_set():
                    break
                self._done += 1
                transferred = self._process(index)
                if transferred is not None:
                    self.estimator.add_sample(transferred)
        finally:
            with self._status_lock:
                self._status = WorkerStatus.FINISHED
            self._finished.set()
            logger.debug("Worker %d finished: %d done, %d errors",
                         self.worker_id, self._done, self._errors)

    def _process(self, index: int) -> Optional[int]:
        """Одна операция; None если файл пропущен"""
        try:
            if self.mode is WorkMode.READ:
                return len(self._read(index))
            if self.mode is WorkMode.WRITE:
                return self._write(index, self._payload)
            # в скорость идут только прочитанные байты, как и в проверке кэша
            content = self._read(index)
            self._write(index, content)
            return len(content)
        except (OSError, IndexError) as e:
            self._errors += 1
            logger.warning("Bad file (worker %d, index %d): %s", self.worker_id, index, e)
            return None

    def _read(self, index: int) -> bytes:
        path = self._path(self.config.infiles, index, 'input')
        with open(path, 'rb') as f:
            return f.read()

    def _write(self, index: int, data: bytes) -> int:
        path = self._path(self.config.outfiles, index, 'output')
        with open(path, 'wb') as f:
            f.write(data)
        return len(data)

    @staticmethod
    def _path(paths: Sequence[str], index: int, what: str) -> str:
        if index >= len(paths):
            raise IndexError(f"no {what} file listed for index {index}")
        return paths[index]

    def get_done_count(self) -> int:
        return self._done

    def get_error_count(self) -> int:
        return self._errors

    def get_throughput(self, window: float = WorkloadConfig.THROUGHPUT_WINDOW_SEC) -> float:
        return self.estimator.rate(window)

    def get_total_bytes(self) -> int:
        return self.estimator.total_bytes

    def is_done(self) -> bool:
        return self._finished.is_set()
