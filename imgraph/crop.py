"""
Crop an image to a rectangle whose position is given relative to an anchor point.
"""

import enum
import logging

import numpy as np

from .constants import C
from .operation import Operation,Category,description
from .sockets import (InvalidValueError,create_image_hint,create_number_hint,
                      create_enum_hint)

logger = logging.getLogger(__name__)


class InvalidDimensionsError(ValueError):
    """The region has a zero or negative width or height"""

class OutOfBoundsRegionError(ValueError):
    """The region is not entirely inside the image"""


class Origin(enum.Enum):
    """The anchor point that X and Y refer to.
    The multipliers are the fraction of the region's width and height to add
    to get from the anchor to the top left corner.
    """
    TOP_LEFT     = ("Top Left", 0, 0)
    TOP_RIGHT    = ("Top Right", -1, 0)
    BOTTOM_LEFT  = ("Bottom Left", 0, -1)
    BOTTOM_RIGHT = ("Bottom Right", -1, -1)
    CENTER       = ("Center", -.5, -.5)

    def __init__(self, label, x_offset_multiplier, y_offset_multiplier):
        self.label = label
        self.x_offset_multiplier = x_offset_multiplier
        self.y_offset_multiplier = y_offset_multiplier

    def __str__(self):
        return self.label

    @classmethod
    def from_label(cls, label):
        for origin in cls:
            if origin.label == label:
                return origin
        raise InvalidValueError(f"unknown origin {label!r}; must be one of "
                                + ", ".join(o.label for o in cls))


def region_of_interest(x, y, width, height, origin:Origin):
    """Return the (x0, y0, w, h) of the region whose anchor point is at (x,y).
    Inputs are truncated to ints, and so is the anchor offset.
    """
    assert isinstance(origin, Origin), f"not an Origin: {origin!r}"
    w = int(width)
    h = int(height)
    if w <= 0 or h <= 0:
        raise InvalidDimensionsError(f"region must have a positive size, not {w}x{h}")
    x0 = int(x) + int(origin.x_offset_multiplier * w)
    y0 = int(y) + int(origin.y_offset_multiplier * h)
    return (x0, y0, w, h)


def crop_image(img, x0, y0, w, h):
    """Return a copy of the region. Raises OutOfBoundsRegionError rather than clipping."""
    (img_h, img_w) = img.shape[:2]
    if x0 < 0 or y0 < 0 or x0 + w > img_w or y0 + h > img_h:
        raise OutOfBoundsRegionError(f"region at ({x0},{y0}) size {w}x{h} "
                                     f"does not fit in a {img_w}x{img_h} image")
    return np.copy(img[y0:y0+h, x0:x0+w])


@description(name="Crop Image",
             summary="Crop an image to an exact size",
             category=Category.IMAGE_PROCESSING,
             icon_name="crop")
class CropOperation(Operation):
    """Crop an image to a width and height, positioned at X,Y relative to the chosen origin."""

    def __init__(self, input_socket_factory=None, output_socket_factory=None):
        super().__init__(input_socket_factory, output_socket_factory)
        isf = self.input_socket_factory
        self.input_socket  = isf.create(create_image_hint("Input"))
        self.x_socket      = isf.create(create_number_hint("X", C.DEFAULT_CROP_X))
        self.y_socket      = isf.create(create_number_hint("Y", C.DEFAULT_CROP_Y))
        self.width_socket  = isf.create(create_number_hint("Width", C.DEFAULT_CROP_WIDTH))
        self.height_socket = isf.create(create_number_hint("Height", C.DEFAULT_CROP_HEIGHT))
        self.origin_socket = isf.create(create_enum_hint("Origin", Origin.CENTER))

        self.output_socket = self.output_socket_factory.create(create_image_hint("Output"))

        self._inputs  = [self.input_socket, self.x_socket, self.y_socket,
                         self.width_socket, self.height_socket, self.origin_socket]
        self._outputs = [self.output_socket]

    def input_sockets(self):
        return self._inputs

    def output_sockets(self):
        return self._outputs

    def perform(self):
        img    = self.input_socket.value
        origin = self.origin_socket.value
        (x0, y0, w, h) = region_of_interest(self.x_socket.value, self.y_socket.value,
                                            self.width_socket.value, self.height_socket.value,
                                            origin)
        logger.debug("crop %s origin=%s roi=(%s,%s,%s,%s)", img.shape, origin, x0, y0, w, h)
        self.output_socket.set_value(crop_image(img, x0, y0, w, h))
