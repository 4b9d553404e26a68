"""
Tests for sockets and hints
"""

import sys
import enum
import numbers
from os.path import dirname,abspath

import numpy as np
import pytest

sys.path.append( dirname(dirname(dirname(abspath(__file__)))))

from imgraph.constants import C
from imgraph.sockets import (SocketHint,InputSocket,OutputSocket,InputSocketFactory,
                             OutputSocketFactory,UnsetSocketError,InvalidValueError,
                             create_image_hint,create_number_hint,create_enum_hint)

class Color(enum.Enum):
    RED = 1
    GREEN = 2

def test_hint_default_must_be_in_domain():
    with pytest.raises(InvalidValueError):
        SocketHint("bad", int, default_value=3, domain=[1,2])
    h = SocketHint("good", int, default_value=2, domain=[1,2])
    assert h.domain == (1,2)

def test_hint_helpers():
    h = create_number_hint("X", 100)
    assert h.label == "X"
    assert h.type is numbers.Real
    assert h.default_value == 100
    assert h.domain is None
    assert h.view == C.VIEW_SPINNER

    h = create_enum_hint("Color", Color.GREEN)
    assert h.domain == (Color.RED, Color.GREEN)
    assert h.view == C.VIEW_SELECT

    h = create_image_hint("Input")
    assert h.type is np.ndarray
    assert h.default_value is None

def test_unset_socket():
    s = InputSocket(create_number_hint("X", 100))
    assert not s.has_value()
    with pytest.raises(UnsetSocketError):
        s.value

def test_socket_needs_hint():
    with pytest.raises(TypeError):
        InputSocket("X")

def test_input_rejects_bad_values():
    s = InputSocket(create_number_hint("X", 100))
    s.set_value(3.5)
    with pytest.raises(InvalidValueError):
        s.set_value("4")
    with pytest.raises(InvalidValueError):
        s.set_value(True)
    with pytest.raises(InvalidValueError):
        s.set_value(1+2j)
    assert s.value == 3.5

    e = InputSocket(create_enum_hint("Color", Color.RED))
    e.set_value(Color.GREEN)
    with pytest.raises(InvalidValueError):
        e.set_value(2)
    with pytest.raises(InvalidValueError):
        e.set_value("GREEN")
    assert e.value is Color.GREEN

def test_invalid_value_is_a_value_error():
    s = InputSocket(create_number_hint("X", 100))
    with pytest.raises(ValueError):
        s.set_value(None)

def test_factories():
    h = create_number_hint("Width", 50)
    assert not InputSocketFactory().create(h).has_value()
    assert InputSocketFactory(defaults=True).create(h).value == 50

    out = OutputSocketFactory().create(h)
    assert isinstance(out, OutputSocket)
    assert out.hint == h
    assert out.value == 50

    img_out = OutputSocketFactory().create(create_image_hint("Output"))
    assert not img_out.has_value()

def test_factory_makes_new_sockets():
    f = InputSocketFactory()
    h = create_number_hint("X", 1)
    assert f.create(h) is not f.create(h)

def test_output_snapshot_restore():
    out = OutputSocketFactory().create(create_image_hint("Output"))
    saved = out.snapshot()
    out.set_value(np.zeros((2,2), np.uint8))
    assert out.has_value()
    out.restore(saved)
    assert not out.has_value()

def test_compatible():
    image = create_image_hint("img")
    number = create_number_hint("n", 1)
    integer = SocketHint("i", int, default_value=1)
    assert number.is_compatible_with(integer)
    assert not integer.is_compatible_with(number)
    assert not image.is_compatible_with(number)
