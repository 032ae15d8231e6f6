"""Explicit, hand-maintained operation registry."""

from typing import Iterable, List, Sequence

from ..entities import OperationMetadata


class StaticOperationRegistry:
    """OperationRegistry backed by a fixed table of operations."""

    def __init__(self, operations: Iterable[OperationMetadata] = ()):
        self._operations: List[OperationMetadata] = list(operations)

    def register(self, operation: OperationMetadata) -> None:
        self._operations.append(operation)

    def list_operations(self) -> Sequence[OperationMetadata]:
        return tuple(self._operations)

    def __len__(self) -> int:
        return len(self._operations)
