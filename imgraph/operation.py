"""
Operation base class and the metadata the editor shows for it.
"""

import collections
import enum
import logging
from abc import ABC,abstractmethod

from .sockets import InputSocketFactory,OutputSocketFactory,UnsetSocketError

logger = logging.getLogger(__name__)


class Category(enum.Enum):
    """The closed set of categories the editor groups operations by."""
    IMAGE_PROCESSING  = "Image Processing"
    FEATURE_DETECTION = "Feature Detection"
    NETWORK           = "Network"
    LOGICAL           = "Logical"
    OPENCV            = "OpenCV"
    MISCELLANEOUS     = "Miscellaneous"


OperationDescription = collections.namedtuple('OperationDescription',
                                              ['name', 'summary', 'category', 'icon_name'])


def description(*, name, summary, category=Category.MISCELLANEOUS, icon_name=None):
    """Class decorator that attaches an OperationDescription to an Operation subclass."""
    if not isinstance(category, Category):
        raise ValueError(f"{category!r} is not a Category")
    def decorate(cls):
        cls.description = OperationDescription(name=name, summary=summary,
                                               category=category, icon_name=icon_name)
        return cls
    return decorate


class OperationError(RuntimeError):
    """perform() failed. The operation's outputs were left as they were."""
    def __init__(self, operation, cause):
        super().__init__(f"{operation.name}: {cause}")
        self.operation = operation
        self.cause = cause


class Operation(ABC):
    """Abstract base class for the nodes of a pipeline.

    Subclasses create their sockets in __init__ with the factories they are given
    and return them, in display order, from input_sockets() and output_sockets().
    """
    description = None

    def __init__(self, input_socket_factory=None, output_socket_factory=None):
        self.input_socket_factory  = input_socket_factory or InputSocketFactory()
        self.output_socket_factory = output_socket_factory or OutputSocketFactory()

    @property
    def name(self):
        if self.description is not None:
            return self.description.name
        return self.__class__.__name__

    @abstractmethod
    def input_sockets(self):
        """Returns the input sockets in display order."""

    @abstractmethod
    def output_sockets(self):
        """Returns the output sockets in display order."""

    @abstractmethod
    def perform(self):
        """Read every input socket and write every output socket."""

    def run(self):
        """Call perform(). If it fails, put every output back the way it was.
        Unset inputs are a scheduling bug and are re-raised as they are;
        anything else is raised as OperationError.
        """
        saved = [(s, s.snapshot()) for s in self.output_sockets()]
        try:
            self.perform()
        except Exception as e:
            for (s, value) in saved:
                s.restore(value)
            if isinstance(e, UnsetSocketError):
                raise
            logger.debug("%s failed: %s", self.name, e)
            raise OperationError(self, e) from e

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.name}>"
