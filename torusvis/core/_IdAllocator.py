import heapq

from .exceptions import AllocatorError


class IdAllocator:
    """Self-contained namespace of small, dense, non-negative integer ids.

    Once allocated, an id is never handed out again by the same allocator
    until it is freed. Freed ids are reused (lowest first) before the counter
    grows, keeping ids usable as list indexes.
    """

    def __init__(self):
        self.free_all()

    def alloc(self) -> int:
        """Allocate a new id."""
        if self._free_heap:
            id_ = heapq.heappop(self._free_heap)
            self._free_set.discard(id_)
        else:
            id_ = self._counter
            self._counter += 1
        self._size += 1
        return id_

    def is_allocated(self, id_) -> bool:
        return 0 <= id_ < self._counter and id_ not in self._free_set

    def free(self, id_):
        """Release an allocated id so it may be allocated again.

        Raises
        --
        AllocatorError
            If ``id_`` is not currently allocated.

        """
        if not self.is_allocated(id_):
            raise AllocatorError(f"id {id_} not allocated")
        self._free_set.add(id_)
        heapq.heappush(self._free_heap, id_)
        self._size -= 1

    def free_all(self):
        """Release every allocated id."""
        self._free_set = set()
        self._free_heap = []
        self._counter = 0
        self._size = 0

    def size(self) -> int:
        """Number of currently allocated ids."""
        return self._size

    def __len__(self):
        return self._size

    def __repr__(self):
        return f"IdAllocator(size={self._size}, high_water={self._counter})"
