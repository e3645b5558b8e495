"""
# Arena

All nodes of one tree live in one `Arena` and refer to each other through
`Handle`s. An arena is filled by a single thread, then frozen and possibly
shared for reading, and finally destroyed as a whole:

    with Arena() as arena:
        b = ast.Builder(arena)
        x = b.Name("x")
        ...
        arena.freeze()
        print(printer.print(arena.root))

Nodes are immutable, so a frozen arena can be read from any number of
threads without locking.
"""

import threading


class TreeConstructionError(Exception):
    pass


class Handle(object):
    """
    Reference to a node allocated in an `Arena`.
    """
    __slots__ = ("_arena", "_index")

    def __init__(self, arena, index):
        self._arena = arena
        self._index = index

    @property
    def arena(self):
        return self._arena

    @property
    def index(self):
        return self._index

    @property
    def node(self):
        return self._arena[self]

    def __eq__(self, other):
        return (isinstance(other, Handle) and self._arena is other._arena
            and self._index == other._index)

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash((id(self._arena), self._index))

    def __repr__(self):
        return "Handle(%d)" % self._index


class Arena(object):

    def __init__(self):
        self._nodes = []
        self._frozen = False
        self._destroyed = False
        self._owner = threading.get_ident()

    @property
    def frozen(self):
        return self._frozen

    @property
    def destroyed(self):
        return self._destroyed

    def _check_alive(self):
        if self._destroyed:
            raise TreeConstructionError("The arena has been destroyed")

    def allocate(self, cls, *args, **kwargs):
        """
        Creates a node of the constructor class `cls` and returns its handle.

        Every handle stored in the new node must belong to this arena and
        point to a node of the declared type.
        """
        self._check_alive()
        if self._frozen:
            raise TreeConstructionError("Cannot allocate %s in a frozen arena"
                % cls.__name__)
        if threading.get_ident() != self._owner:
            raise TreeConstructionError("Arena used for construction by a "
                "thread other than its owner")
        if not (isinstance(cls, type) and getattr(cls, "_allocatable", False)
                and cls.ntype is not None):
            raise TreeConstructionError("%r is not a node constructor" % (cls,))
        node = cls(*args, **kwargs)
        node._check_refs(self)
        self._nodes.append(node)
        return Handle(self, len(self._nodes) - 1)

    def check_ref(self, h, types, name):
        """
        Checks that `h` is a handle of this arena pointing to an instance of
        `types` (any node if `types` is None).
        """
        if not isinstance(h, Handle):
            raise TreeConstructionError("Field %r must hold a handle, got %r"
                % (name, h))
        if h._arena is not self:
            raise TreeConstructionError("Field %r refers to a node of "
                "another arena" % name)
        node = self._nodes[h._index]
        if types is not None and not isinstance(node, types):
            raise TreeConstructionError("Field %r expects %s, got %s"
                % (name, types.__name__, node.__class__.__name__))

    def __getitem__(self, h):
        self._check_alive()
        if not isinstance(h, Handle) or h._arena is not self:
            raise TreeConstructionError("%r does not belong to this arena"
                % (h,))
        return self._nodes[h._index]

    def __len__(self):
        self._check_alive()
        return len(self._nodes)

    def handles(self):
        self._check_alive()
        for i in range(len(self._nodes)):
            yield Handle(self, i)

    @property
    def root(self):
        """
        The most recently allocated node; children are always allocated
        before their parent, so for a tree built bottom-up this is its root.
        """
        self._check_alive()
        if not self._nodes:
            return None
        return Handle(self, len(self._nodes) - 1)

    def freeze(self):
        self._check_alive()
        self._frozen = True
        return self

    def destroy(self):
        self._nodes = None
        self._frozen = True
        self._destroyed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.destroy()
        return False

    def __repr__(self):
        if self._destroyed:
            return "<Arena destroyed>"
        return "<Arena %d nodes%s>" % (len(self._nodes),
            ", frozen" if self._frozen else "")
