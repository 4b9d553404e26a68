"""Design document.

Abstractions related to values:

SocketHint - Describes what a socket holds: a label for the editor, the
             Python type of the value, a default, and (for enumerations)
             the finite set of legal values.

Socket -     A typed slot holding one value. InputSockets are written by
             the user or by a connected OutputSocket and are only read by
             their operation. OutputSockets are written only by their
             operation, once per perform().

Abstractions related to image processing:

Operation -  The nodes of the pipeline. Each instance creates its own
             sockets in its constructor, using the socket factories that
             it is given. perform() reads the inputs and writes the
             outputs. run() wraps perform() so that a failure leaves the
             outputs as they were.

             "Operation" is a class that is subclassed. Each node is an
             instance. Descriptive metadata for the editor is attached
             to the class with @description().

Step -       One node in a pipeline. Holds the operation, the last error
             and timing statistics.

Pipeline -   Holds the steps and the connections between output and
             input sockets. When an input changes, the step is re-run and
             its outputs are copied downstream.

"""
