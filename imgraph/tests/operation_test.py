"""
Tests for the Operation base class
"""

import sys
from os.path import dirname,abspath

import pytest

sys.path.append( dirname(dirname(dirname(abspath(__file__)))))

from imgraph.operation import Operation,OperationError,Category,description
from imgraph.sockets import SocketHint,create_number_hint,UnsetSocketError


@description(name="Divide", summary="Divide two numbers", category=Category.LOGICAL, icon_name="divide")
class DivideOperation(Operation):
    """Writes the quotient, then the remainder."""
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.a = self.input_socket_factory.create(create_number_hint("A", 1))
        self.b = self.input_socket_factory.create(create_number_hint("B", 1))
        self.quotient  = self.output_socket_factory.create(SocketHint("Quotient", float, default_value=0.0))
        self.remainder = self.output_socket_factory.create(SocketHint("Remainder", float, default_value=0.0))

    def input_sockets(self):
        return [self.a, self.b]

    def output_sockets(self):
        return [self.quotient, self.remainder]

    def perform(self):
        self.quotient.set_value(float(self.a.value / self.b.value))
        self.remainder.set_value(float(self.a.value % self.b.value))


class Unnamed(Operation):
    def input_sockets(self):
        return []
    def output_sockets(self):
        return []
    def perform(self):
        pass


def test_description():
    d = DivideOperation.description
    assert d.name == "Divide"
    assert d.summary == "Divide two numbers"
    assert d.category == Category.LOGICAL
    assert d.icon_name == "divide"
    assert DivideOperation().name == "Divide"
    assert Unnamed().name == "Unnamed"

def test_description_needs_category():
    with pytest.raises(ValueError):
        description(name="x", summary="y", category="IMAGE_PROCESSING")

def test_run():
    op = DivideOperation()
    op.a.set_value(7)
    op.b.set_value(2)
    op.run()
    assert op.quotient.value == 3.5
    assert op.remainder.value == 1.0

def test_failure_restores_outputs():
    op = DivideOperation()
    op.a.set_value(7)
    op.b.set_value(2)
    op.run()
    op.b.set_value(0)
    with pytest.raises(OperationError) as e:
        op.run()
    assert e.value.operation is op
    assert isinstance(e.value.cause, ZeroDivisionError)
    assert isinstance(e.value.__cause__, ZeroDivisionError)
    assert op.quotient.value == 3.5
    assert op.remainder.value == 1.0

class QuotientOnly(DivideOperation):
    def perform(self):
        self.quotient.set_value(float(self.a.value / self.b.value))
        raise ArithmeticError("no remainder")

def test_half_written_outputs_restored():
    """If perform() fails after writing one output, that output is put back too."""
    op = QuotientOnly()
    op.a.set_value(5)
    op.b.set_value(2)
    with pytest.raises(OperationError):
        op.run()
    assert op.quotient.value == 0.0
    assert op.remainder.value == 0.0

def test_unset_input_is_not_wrapped():
    op = DivideOperation()
    op.a.set_value(1)
    with pytest.raises(UnsetSocketError):
        op.run()

def test_sockets_are_stable():
    op = DivideOperation()
    assert op.input_sockets() == [op.a, op.b]
    assert op.output_sockets() == [op.quotient, op.remainder]
    assert DivideOperation().a is not op.a
