"""Loader service -- delivers registered rate documents to listeners.

Providers register a listener for a data id and ask for an asynchronous load.
Documents come from local sources registered up front: a file path or a
zero-argument callable returning the raw bytes. Loads run on a small thread
pool so a provider's constructor never waits on parsing.
"""

import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

from fxrates.exceptions import UnknownResourceError
from fxrates.logging import get_logger

logger = get_logger(__name__)

ResourceSource = Path | str | Callable[[], bytes]
LoaderListener = Callable[[str, bytes], object]


class LoaderService:
    """Registry of rate resources and the listeners interested in them.

    Args:
        max_workers: Size of the thread pool used by load_data_async.
    """

    def __init__(self, max_workers: int = 2) -> None:
        self._resources: dict[str, ResourceSource] = {}
        self._listeners: dict[str, list[LoaderListener]] = {}
        self._lock = threading.Lock()
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="fxrates-loader",
        )

    def register_resource(self, data_id: str, source: ResourceSource) -> None:
        """Make ``source`` the document behind ``data_id``, replacing any earlier one."""
        with self._lock:
            self._resources[data_id] = source
        logger.debug("loader_resource_registered", data_id=data_id)

    def add_listener(self, data_id: str, listener: LoaderListener) -> None:
        """Call ``listener(data_id, document)`` whenever ``data_id`` is loaded."""
        with self._lock:
            self._listeners.setdefault(data_id, []).append(listener)

    def remove_listener(self, data_id: str, listener: LoaderListener) -> None:
        with self._lock:
            listeners = self._listeners.get(data_id, [])
            if listener in listeners:
                listeners.remove(listener)

    def is_resource_registered(self, data_id: str) -> bool:
        return data_id in self._resources

    def load_data(self, data_id: str) -> int:
        """Read ``data_id`` and hand it to every listener on the calling thread.

        A failing listener is logged and does not stop the others.

        Returns:
            The number of listeners notified.

        Raises:
            UnknownResourceError: If nothing is registered under ``data_id``.
        """
        with self._lock:
            source = self._resources.get(data_id)
            listeners = list(self._listeners.get(data_id, ()))
        if source is None:
            raise UnknownResourceError(data_id)

        document = self._read(source)
        logger.info(
            "loader_resource_loaded",
            data_id=data_id,
            size=len(document),
            listeners=len(listeners),
        )

        for listener in listeners:
            try:
                listener(data_id, document)
            except Exception:
                logger.error("loader_listener_failed", data_id=data_id, exc_info=True)
        return len(listeners)

    def load_data_async(self, data_id: str) -> "Future[int]":
        """Run load_data on the loader's thread pool."""
        future = self._executor.submit(self.load_data, data_id)
        future.add_done_callback(lambda f: self._log_async_failure(data_id, f))
        return future

    def shutdown(self, wait: bool = True) -> None:
        """Stop the thread pool; pending loads finish first when ``wait`` is True."""
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "LoaderService":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    @staticmethod
    def _read(source: ResourceSource) -> bytes:
        if callable(source):
            return source()
        return Path(source).read_bytes()

    @staticmethod
    def _log_async_failure(data_id: str, future: "Future[int]") -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.warning(
                "loader_async_load_failed",
                data_id=data_id,
                error=str(exc),
            )
