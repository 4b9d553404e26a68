"""
Sockets and the hints that describe them.

A socket holds a single value flowing into or out of an operation.
Everything the editor needs to know about the socket (label, default,
legal values) comes from its hint.
"""

import logging
import numbers

import numpy as np

from .constants import C

logger = logging.getLogger(__name__)

_UNSET = object()


class SocketError(RuntimeError):
    """Base class for socket errors"""

class UnsetSocketError(SocketError):
    """A socket was read before a value was given to it"""

class InvalidValueError(SocketError, ValueError):
    """A value is not legal for the socket's hint"""


class SocketHint:
    """Label, type, default and (optionally) the domain of legal values of a socket."""
    def __init__(self, label, type_, *, default_value=None, domain=None, view=C.VIEW_NONE):
        self.label = label
        self.type = type_
        self.default_value = default_value
        self.domain = tuple(domain) if domain is not None else None
        self.view = view
        if self.domain is not None and default_value not in self.domain:
            raise InvalidValueError(f"default {default_value!r} for '{label}' is not one of {self.domain}")

    def __repr__(self):
        return f"<SocketHint {self.label} type={self.type.__name__} default={self.default_value!r}>"

    def __eq__(self, b):
        return isinstance(b, SocketHint) and self.__dict__ == b.__dict__

    def __hash__(self):
        return hash((self.label, self.type))

    def is_compatible_with(self, other):
        """True if a value described by other can be stored in a socket described by self"""
        return issubclass(other.type, self.type)

    def check(self, value):
        """Raise InvalidValueError if value cannot be stored in a socket with this hint."""
        # bool is an int subclass, but a checkbox is not a spinner
        if isinstance(value, bool) and self.type is not bool:
            raise InvalidValueError(f"'{self.label}': {value!r} is not a {self.type.__name__}")
        if not isinstance(value, self.type):
            raise InvalidValueError(f"'{self.label}': {value!r} is not a {self.type.__name__}")
        if self.domain is not None and value not in self.domain:
            raise InvalidValueError(f"'{self.label}': {value!r} must be one of "
                                    + ", ".join(str(v) for v in self.domain))


def create_image_hint(label):
    return SocketHint(label, np.ndarray)

def create_number_hint(label, default_value):
    """A number that the editor shows with a spinner."""
    return SocketHint(label, numbers.Real, default_value=default_value, view=C.VIEW_SPINNER)

def create_enum_hint(label, default_value):
    """Every member of default_value's enumeration is legal."""
    enum_class = type(default_value)
    return SocketHint(label, enum_class, default_value=default_value,
                      domain=list(enum_class), view=C.VIEW_SELECT)


class Socket:
    """A typed slot for a value. Abstract over direction."""
    direction = None

    def __init__(self, hint:SocketHint):
        if not isinstance(hint, SocketHint):
            raise TypeError(f"a socket needs a SocketHint, not {hint!r}")
        self._hint = hint
        self._value = _UNSET

    @property
    def hint(self):
        return self._hint

    @property
    def label(self):
        return self._hint.label

    def has_value(self):
        return self._value is not _UNSET

    @property
    def value(self):
        if self._value is _UNSET:
            raise UnsetSocketError(f"{self.direction} socket '{self.label}' has no value")
        return self._value

    def __repr__(self):
        state = "set" if self.has_value() else "unset"
        return f"<{self.__class__.__name__} {self.label} {state}>"


class InputSocket(Socket):
    """Written by the user or a connected OutputSocket; only read by its operation."""
    direction = "input"

    def set_value(self, value):
        """Set the value. A rejected value leaves the previous value in place."""
        self._hint.check(value)
        self._value = value


class OutputSocket(Socket):
    """Written only by the owning operation's perform()."""
    direction = "output"

    def set_value(self, value):
        self._hint.check(value)
        self._value = value

    def restore(self, saved):
        """Put back a value previously obtained with snapshot()."""
        self._value = saved

    def snapshot(self):
        return self._value


class InputSocketFactory:
    """Creates input sockets. They are unset unless defaults=True, in which case
    sockets whose hint has a default start with it.
    """
    def __init__(self, defaults=False):
        self.defaults = defaults

    def create(self, hint:SocketHint):
        logger.debug("create input socket %s", hint)
        socket = InputSocket(hint)
        if self.defaults and hint.default_value is not None:
            socket.set_value(hint.default_value)
        return socket


class OutputSocketFactory:
    """Creates output sockets that start at the hint's default (unset if there is none)."""
    def create(self, hint:SocketHint):
        logger.debug("create output socket %s", hint)
        socket = OutputSocket(hint)
        if hint.default_value is not None:
            socket.set_value(hint.default_value)
        return socket
