"""Typed errors raised by the rules engine and the serialization boundary."""


class IllegalActionError(ValueError):
    """Action is not legal in the current state. The state is left unchanged."""


class MalformedInputError(ValueError):
    """A serialized state or action could not be parsed."""
