"""
Fetch task interface.

A fetch task wraps one upstream capability. The coordinator runs all tasks
concurrently and stores each task's return value in a slot only that task
writes; a task signals failure by raising `QueryError`.
"""

from __future__ import annotations

import abc
import logging
from typing import Any, Protocol, Union, runtime_checkable

from cosmos_exporter.infrastructure.lcd_client import LcdClient

TaskLogger = Union[logging.Logger, logging.LoggerAdapter]


@runtime_checkable
class FetchTask(Protocol):
    """
    Common interface all fetch tasks implement.

    Attributes
    ----------
    name : str
        Capability name; also the result slot name.
    description : str
        Human-friendly summary used in log messages.
    """

    name: str
    description: str

    async def fetch(self, client: LcdClient, limit: int, log: TaskLogger) -> Any:
        """
        Query the capability and return its typed result.

        Parameters
        ----------
        client : LcdClient
            Shared query client for this request.
        limit : int
            Page-size limit for list queries.
        log : logging.Logger | logging.LoggerAdapter
            Request-bound logger.

        Raises
        ------
        QueryError
            If the capability could not be fetched at all.
        """
        ...


class AbstractFetchTask(abc.ABC):
    """
    Optional ABC helper for class-based implementations.

    Subclasses set `name` and `description` and implement `fetch`.
    """

    name: str
    description: str

    @abc.abstractmethod
    async def fetch(self, client: LcdClient, limit: int, log: TaskLogger) -> Any:  # pragma: no cover - interface only
        """Fetch the capability."""
        raise NotImplementedError


__all__ = ["FetchTask", "AbstractFetchTask", "TaskLogger"]
