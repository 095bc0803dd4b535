"""Binding scopes. One Environment is created per session (the global scope) and one per function or macro call,
whose outer is the Environment the function or macro was defined in.
"""


class Environment:
    """Chain of mutable name: Object frames. Lookups walk outward, bindings always go into this frame."""

    def __init__(self, outer=None):
        self.store = {}
        self.outer = outer

    @classmethod
    def enclosed(cls, outer, names, values):
        """Returns a new frame over outer with each name bound to the value at the same position."""
        env = cls(outer)
        for name, value in zip(names, values):
            env.set(name, value)
        return env

    def get(self, name):
        """Returns the Object bound to name in this frame or the closest enclosing one, or None if it is unbound."""
        if name in self.store:
            return self.store[name]
        if self.outer is not None:
            return self.outer.get(name)
        return None

    def set(self, name, value):
        self.store[name] = value
        return value

    def __contains__(self, name):
        return self.get(name) is not None

    def __repr__(self):
        return f"Environment({sorted(self.store)}, outer={self.outer!r})"
