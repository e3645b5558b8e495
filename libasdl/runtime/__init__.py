from .arena import Arena, Handle, TreeConstructionError
from .node import (Position, Location, REQUIRED, OPTIONAL, SEQUENCE,
        is_present, sequence_length)
from .trivia import (TriviaNode, TriviaError, Comment, EOLComment, EndOfLine,
        Semicolon, make_trivia)
from .visitor import NonExhaustiveVisitorError
