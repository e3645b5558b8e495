"""
# Node runtime

Base classes of the generated node classes and the checks their constructors
call. A generated module contains:

* one `SumBase` subclass per sum type and one subclass of it per constructor;
  constructor instances are the nodes stored in an `Arena`,
* one `ProductBase` subclass per product type; products are plain values
  stored inline in the fields of their owner,
* one `SimpleSumBase` subclass per simple sum (an enumeration) and one
  subclass of it per constructor.

All of them are immutable once `__init__` returns.
"""

from collections import namedtuple

from .arena import Handle, TreeConstructionError

REQUIRED = "required"
OPTIONAL = "optional"
SEQUENCE = "sequence"

Position = namedtuple("Position", ["line", "column"])

class Location(namedtuple("Location", ["first", "last"])):
    """
    Source span of a node: `first` and `last` are `Position`s.
    """

    def __str__(self):
        return "%d:%d-%d:%d" % (self.first.line, self.first.column,
            self.last.line, self.last.column)


def checkinstance(a, b, opt=False, name=None):
    if opt and a is None:
        return
    # bool is a subclass of int, but an int field does not take a bool
    if not isinstance(a, b) or (isinstance(a, bool) and b in (int, float)):
        if isinstance(b, tuple):
            expected = " or ".join(t.__name__ for t in b)
        else:
            expected = b.__name__
        raise TreeConstructionError("Wrong instance for field %r: %r, "
            "expected %s" % (name, a, expected))

def checkseq(seq, b, name=None):
    """
    Checks a sequence field and returns it as a tuple.
    """
    if not isinstance(seq, (list, tuple)):
        raise TreeConstructionError("Field %r must be a list, got %r"
            % (name, seq))
    for x in seq:
        checkinstance(x, b, False, name)
    return tuple(seq)


class AST(object):
    ntype = None
    _fields = ()
    _multiplicity = ()
    _attributes = ()
    _trivia_field = None
    _allocatable = False
    _sealed = False
    loc = None

    def __init__(self, loc=None):
        checkinstance(loc, Location, True, "loc")
        object.__setattr__(self, "loc", loc)
        object.__setattr__(self, "_sealed", True)

    def __setattr__(self, name, value):
        if self._sealed:
            raise TreeConstructionError("Cannot set %r: %s nodes are "
                "immutable" % (name, self.__class__.__name__))
        object.__setattr__(self, name, value)

    def __delattr__(self, name):
        raise TreeConstructionError("Cannot delete %r: %s nodes are "
            "immutable" % (name, self.__class__.__name__))

    @property
    def trivia_value(self):
        if self._trivia_field is None:
            return None
        return getattr(self, self._trivia_field)

    def walkabout(self, visitor):
        raise AssertionError("walkabout() implementation not provided")

    def _check_refs(self, arena):
        pass

    def __repr__(self):
        return "%s(%s)" % (self.__class__.__name__, ", ".join(
            "%s=%r" % (f, getattr(self, f)) for f in self._fields))


class SumBase(AST):
    # Constructors of non-simple sums are the only arena nodes
    _allocatable = True


class ProductBase(AST):
    pass


class SimpleSumBase(AST):

    def __eq__(self, other):
        return type(self) is type(other)

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash(type(self))


def _multiplicity(node, field):
    for f, m in zip(node._fields + node._attributes, node._multiplicity):
        if f == field:
            return m
    raise AttributeError("%s has no field %r" % (node.__class__.__name__,
        field))

def is_present(node, field):
    """
    Returns True if the optional `field` of `node` holds a value.
    """
    if isinstance(node, Handle):
        node = node.node
    if _multiplicity(node, field) != OPTIONAL:
        raise TypeError("%s.%s is not an optional field"
            % (node.__class__.__name__, field))
    return getattr(node, field) is not None

def sequence_length(node, field):
    """
    Returns the number of elements of the sequence `field` of `node`.
    """
    if isinstance(node, Handle):
        node = node.node
    if _multiplicity(node, field) != SEQUENCE:
        raise TypeError("%s.%s is not a sequence field"
            % (node.__class__.__name__, field))
    return len(getattr(node, field))
