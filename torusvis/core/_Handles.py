from ._IdAllocator import IdAllocator
from ._IterationGuard import IterationGuard
from .exceptions import InvalidHandleError


class Handle:
    """Generation-checked reference to an object owned by a HandleAllocator.

    A handle stays bound to the slot (``id``) and the generation
    (``checksum``) it was issued for. Once freed, or once its slot has been
    reused by a later allocation, the handle is invalid and dereferencing it
    raises.
    """

    __slots__ = ("_allocator", "id", "checksum")

    def __init__(self, allocator, id_, checksum):
        self._allocator = allocator
        self.id = id_
        self.checksum = checksum

    def is_valid(self) -> bool:
        alloc = self._allocator
        return (
            alloc._ids.is_allocated(self.id)
            and alloc._generations[self.id] == self.checksum
        )

    def _check(self):
        if not self.is_valid():
            raise InvalidHandleError(f"invalid handle (id={self.id}, checksum={self.checksum})")

    def dereference(self):
        self._check()
        return self._allocator._objects[self.id]

    __call__ = dereference

    def free(self):
        self._check()
        self._allocator._release(self.id)

    def __eq__(self, other):
        if not isinstance(other, Handle):
            return NotImplemented
        return (
            self._allocator is other._allocator
            and self.id == other.id
            and self.checksum == other.checksum
        )

    def __hash__(self):
        return hash((id(self._allocator), self.id, self.checksum))

    def __repr__(self):
        state = "valid" if self.is_valid() else "stale"
        return f"Handle(id={self.id}, checksum={self.checksum}, {state})"


class HandleAllocator:
    """Issues :class:`Handle` objects wrapping arbitrary payload objects."""

    def __init__(self):
        self._ids = IdAllocator()
        self._objects = []
        self._generations = []
        self._handles = []
        self._iter_guard = IterationGuard("cannot allocate or free handles while iterating")

    def alloc(self, obj=None) -> Handle:
        self._iter_guard.check()
        if obj is None:
            obj = {}
        id_ = self._ids.alloc()
        if id_ == len(self._objects):
            self._objects.append(None)
            self._generations.append(0)
            self._handles.append(None)
        self._generations[id_] += 1
        self._objects[id_] = obj
        handle = Handle(self, id_, self._generations[id_])
        self._handles[id_] = handle
        return handle

    __call__ = alloc

    def _release(self, id_):
        self._iter_guard.check()
        self._objects[id_] = None
        self._handles[id_] = None
        self._ids.free(id_)

    def get_handle(self, id_):
        """Handle currently issued for slot ``id_``, or None."""
        if not self._ids.is_allocated(id_):
            return None
        return self._handles[id_]

    def iter_handles(self, callback) -> bool:
        """Call ``callback(handle)`` for each live handle; truthy return stops."""
        with self._iter_guard.guarding():
            for handle in list(self._handles):
                if handle is not None and callback(handle):
                    return True
        return False

    def size(self) -> int:
        return self._ids.size()

    def __len__(self):
        return self._ids.size()

    def free_all(self):
        """Invalidate every handle issued so far."""
        self._iter_guard.check()
        self._objects = [None] * len(self._objects)
        self._handles = [None] * len(self._handles)
        # generations are kept so that re-issued slots never match old handles
        self._ids.free_all()
