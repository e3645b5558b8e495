"""
# Trivia

Source text that is not part of the abstract syntax but has to survive a
print/parse round trip: comments, blank lines and statement separators.

A statement carries at most one `TriviaNode`. Its `after` items close the
last line of the statement, its `inside` items close the header line of a
statement with a block (`IF (x) THEN ! comment`). Each non-empty item list
starts with the terminator of the line:

* `EndOfLine()`: a plain newline,
* `EOLComment(text)`: the comment on the end of the line, then a newline,
* `Semicolon()`: `; `, the next statement continues on the same line.

After the terminator any number of full-line `Comment`s and blank lines
(`EndOfLine()`) may follow. A `Semicolon` is always the only item.
"""

from .arena import TreeConstructionError


class TriviaError(TreeConstructionError):
    pass


class TriviaItem(object):
    __slots__ = ()
    _fields = ()

    def __eq__(self, other):
        return type(self) is type(other) and all(getattr(self, f) ==
            getattr(other, f) for f in self._fields)

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash((type(self),) + tuple(getattr(self, f)
            for f in self._fields))

    def __repr__(self):
        return "%s(%s)" % (self.__class__.__name__, ", ".join(
            "%s=%r" % (f, getattr(self, f)) for f in self._fields))


class _CommentItem(TriviaItem):
    __slots__ = ("comment",)
    _fields = ("comment",)

    def __init__(self, comment):
        if not isinstance(comment, str):
            raise TriviaError("Comment text must be a string, got %r"
                % (comment,))
        if "\n" in comment or "\r" in comment:
            raise TriviaError("Comment text cannot span lines: %r" % comment)
        self.comment = comment


class Comment(_CommentItem):
    """
    A comment on a line of its own.
    """
    __slots__ = ()


class EOLComment(_CommentItem):
    """
    A comment at the end of a line with code.
    """
    __slots__ = ()


class EndOfLine(TriviaItem):
    __slots__ = ()


class Semicolon(TriviaItem):
    __slots__ = ()


terminators = (EndOfLine, EOLComment, Semicolon)


def check_trivia_sequence(items, name):
    if not isinstance(items, (list, tuple)):
        raise TriviaError("Trivia %r must be a list, got %r" % (name, items))
    for i, item in enumerate(items):
        if not isinstance(item, TriviaItem):
            raise TriviaError("Trivia %r contains %r, which is not a trivia "
                "item" % (name, item))
        if i == 0:
            if not isinstance(item, terminators):
                raise TriviaError("Trivia %r must start with a line "
                    "terminator, got %r" % (name, item))
            if isinstance(item, Semicolon) and len(items) > 1:
                raise TriviaError("A semicolon must be the only item of "
                    "trivia %r" % name)
        elif isinstance(item, Semicolon):
            raise TriviaError("A semicolon must be the only item of trivia %r"
                % name)
        elif isinstance(item, EOLComment):
            raise TriviaError("An end of line comment must be the first item "
                "of trivia %r" % name)
    return tuple(items)


class TriviaNode(object):
    """
    Trivia attached to a statement. Both lists are immutable tuples; a node
    with both lists empty is not allowed, use None instead.
    """
    __slots__ = ("inside", "after")

    def __init__(self, inside=(), after=()):
        inside = check_trivia_sequence(inside, "inside")
        after = check_trivia_sequence(after, "after")
        if not inside and not after:
            raise TriviaError("Empty TriviaNode, use None for no trivia")
        object.__setattr__(self, "inside", inside)
        object.__setattr__(self, "after", after)

    def __setattr__(self, name, value):
        raise TreeConstructionError("TriviaNode is immutable")

    def __eq__(self, other):
        return (isinstance(other, TriviaNode) and self.inside == other.inside
            and self.after == other.after)

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash((self.inside, self.after))

    def __repr__(self):
        return "TriviaNode(inside=%r, after=%r)" % (list(self.inside),
            list(self.after))


def make_trivia(inside=(), after=()):
    """
    Returns a `TriviaNode`, or None if there is nothing to attach. A lone
    `EndOfLine()` is the default terminator and is dropped.
    """
    inside = list(inside)
    after = list(after)
    if inside == [EndOfLine()]:
        inside = []
    if after == [EndOfLine()]:
        after = []
    if not inside and not after:
        return None
    return TriviaNode(inside, after)
