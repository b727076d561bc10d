"""
Environments are the canonical list-structured search: each frame binds exactly one name and points at its parent.

Frames are immutable once built. A closure keeps a reference to the frame that was current when its Function was
evaluated, so many closures may share one chain, but nothing ever points from a frame to its descendants.
"""

from arith.lang.error import UnboundName


class Environment:
    """The empty (root) environment: no bindings at all."""

    def lookup(self, name, position=None):
        raise UnboundName(name, position)

    def bind(self, name, value):
        """Returns a new frame binding name to value in front of this environment."""
        return Frame(name, value, self)

    def __repr__(self):
        return "Environment()"


class Frame(Environment):

    def __init__(self, name, value, parent):
        self.name = name
        self.value = value
        self.parent = parent

    def lookup(self, name, position=None):
        env = self
        while isinstance(env, Frame):
            if env.name == name:
                return env.value
            env = env.parent
        return env.lookup(name, position)

    def __repr__(self):
        return f"Frame({self.name!r}, parent={self.parent!r})"


EMPTY = Environment()
