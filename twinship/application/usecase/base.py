"""Use case base class."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")


class BaseUseCase(ABC, Generic[RequestT, ResponseT]):
    """One request-scoped operation over the invitation engine.

    Use cases translate transport-level requests into domain service calls
    and shape the result for the caller; domain errors propagate unchanged.
    """

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT: ...
