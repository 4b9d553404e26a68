"""
Pipeline: holds the steps and the connections between them, and re-runs
steps when their inputs change.
"""

import collections
import logging
import math
import sys
import time

from .operation import Operation,OperationError
from .sockets import InvalidValueError

logger = logging.getLogger(__name__)


class Step:
    """One node of the pipeline. Wraps an Operation and keeps its error and timing."""
    def __init__(self, operation:Operation):
        self.operation = operation
        self.error   = None     # last OperationError, or None if the last run succeeded
        self.rejected = set()   # input sockets whose connected value was not accepted
        self.sum_t   = 0
        self.sum_t2  = 0
        self.count   = 0

    def __repr__(self):
        return f"<Step {self.operation.name}>"

    def ready(self):
        if self.rejected:
            return False
        return all(s.has_value() for s in self.operation.input_sockets())

    def receive(self, input_socket, value):
        """Store a value coming from a connection. Returns False, and records the
        error against this step, if the socket does not accept it.
        """
        try:
            input_socket.set_value(value)
        except InvalidValueError as e:
            self.rejected.add(input_socket)
            self.error = OperationError(self.operation, e)
            return False
        self.rejected.discard(input_socket)
        return True

    def run(self):
        """Run the operation. Returns True on success; on failure records the error."""
        t0 = time.time()
        try:
            self.operation.run()
            self.error = None
        except OperationError as e:
            self.error = e
        t = time.time() - t0
        self.sum_t  += t
        self.sum_t2 += (t*t)
        self.count  += 1
        return self.error is None

    @property
    def t_mean(self):
        return self.sum_t / self.count if self.count>0 else float("nan")

    @property
    def t2_mean(self):
        return self.sum_t2 / self.count if self.count>0 else float("nan")

    @property
    def t_variance(self):
        # can be a hair below zero from rounding
        return max(self.t2_mean - self.t_mean * self.t_mean, 0)

    @property
    def t_stddev(self):
        return math.sqrt(self.t_variance)


class SingleThreadedPipeline:
    """Runs the steps in the caller's thread. Print stats on exit"""
    def __init__(self, verbose=False, debug=False, out=sys.stdout):
        self.queued_steps = collections.deque()
        self.steps   = []
        self.connections = {}   # input socket -> output socket
        self.owners  = {}       # socket -> step
        self.running = False
        self.verbose = verbose
        self.debug   = debug
        self.out     = out
        if debug:
            logger.setLevel(logging.DEBUG)
        elif verbose:
            logger.setLevel(logging.INFO)
        else:
            logger.setLevel(logging.WARNING)

    def add_step(self, operation:Operation):
        step = Step(operation)
        for s in operation.input_sockets() + operation.output_sockets():
            if s in self.owners:
                raise ValueError(f"{s} already belongs to {self.owners[s]}")
        for s in operation.input_sockets() + operation.output_sockets():
            self.owners[s] = step
        self.steps.append(step)
        logger.info("added %s", step)
        return step

    def remove_step(self, step:Step):
        sockets = step.operation.input_sockets() + step.operation.output_sockets()
        for (inp, outp) in list(self.connections.items()):
            if inp in sockets or outp in sockets:
                del self.connections[inp]
                self.owners[inp].rejected.discard(inp)
        for s in sockets:
            del self.owners[s]
        self.steps.remove(step)
        if step in self.queued_steps:
            self.queued_steps.remove(step)
        logger.info("removed %s", step)

    def connect(self, output_socket, input_socket):
        """Make the value of output_socket flow into input_socket."""
        if output_socket not in self.owners or input_socket not in self.owners:
            raise ValueError("both sockets must belong to steps in this pipeline")
        if output_socket.direction != "output" or input_socket.direction != "input":
            raise ValueError(f"cannot connect {output_socket} to {input_socket}")
        if self.owners[output_socket] is self.owners[input_socket]:
            raise ValueError(f"cannot connect {self.owners[input_socket]} to itself")
        if input_socket in self.connections:
            raise ValueError(f"{input_socket} is already connected")
        if self.reaches(self.owners[input_socket], self.owners[output_socket]):
            raise ValueError(f"connecting {output_socket} to {input_socket} would make a cycle")
        if not input_socket.hint.is_compatible_with(output_socket.hint):
            raise ValueError(f"{output_socket.hint} cannot flow into {input_socket.hint}")
        if output_socket.has_value():
            input_socket.hint.check(output_socket.value)
        self.connections[input_socket] = output_socket
        logger.info("connected %s -> %s", output_socket, input_socket)
        if output_socket.has_value():
            self.owners[input_socket].receive(input_socket, output_socket.value)
            self.queue_step(self.owners[input_socket])

    def disconnect(self, input_socket):
        del self.connections[input_socket]
        self.owners[input_socket].rejected.discard(input_socket)

    def downstream(self, output_socket):
        return [inp for (inp, outp) in self.connections.items() if outp is output_socket]

    def reaches(self, start:Step, goal:Step):
        """True if values from start flow, directly or not, into goal."""
        seen = set()
        todo = [start]
        while todo:
            step = todo.pop()
            if step is goal:
                return True
            if step in seen:
                continue
            seen.add(step)
            for outp in step.operation.output_sockets():
                todo.extend(self.owners[inp] for inp in self.downstream(outp))
        return False

    def queue_step(self, step:Step):
        if step not in self.queued_steps:
            self.queued_steps.append(step)

    def set_value(self, input_socket, value):
        """A user edit. Invalid values raise and leave the socket as it was."""
        if not self.running:
            raise RuntimeError("pipeline not running")
        input_socket.set_value(value)
        self.owners[input_socket].rejected.discard(input_socket)
        self.queue_step(self.owners[input_socket])
        self.run_queue()

    def process(self):
        """Run every step."""
        if not self.running:
            raise RuntimeError("pipeline not running")
        for step in self.steps:
            self.queue_step(step)
        self.run_queue()

    def run_queue(self):
        while True:
            try:
                step = self.queued_steps.popleft()
            except IndexError:
                break
            if not step.ready():
                logger.debug("<%s> waiting for inputs", step)
                continue
            logger.debug("<%s> running", step)
            if not step.run():
                logger.error("%s failed: %s", step, step.error)
                continue
            for outp in step.operation.output_sockets():
                if not outp.has_value():
                    continue
                for inp in self.downstream(outp):
                    target = self.owners[inp]
                    if target.receive(inp, outp.value):
                        self.queue_step(target)
                    else:
                        logger.error("%s rejected %s: %s", target, inp, target.error)

    def errors(self):
        return {step:step.error for step in self.steps if step.error is not None}

    def print_stats(self, out=sys.stdout):
        for step in self.steps:
            name = step.operation.name
            print(f"{name}: calls: {step.count}  mean: {step.t_mean:.2}s  stddev: {step.t_stddev:.2}",
                  file=out)

    def __enter__(self):
        self.running = True
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.print_stats(out=self.out)
        self.running = False
        return False
