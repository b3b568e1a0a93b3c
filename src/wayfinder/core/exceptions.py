"""
Custom exceptions for the route planning system.

This module defines the hierarchy of custom exceptions used throughout the system
to handle error conditions in a structured way. Each exception type corresponds
to a category of errors that may occur while building graphs or searching them.
"""


class ConfigurationError(Exception):
    """
    Raised when configuration is invalid.

    Examples:
        * Graph definition that does not match the expected schema
        * Invalid option values passed on the command line
    """


class ResourceNotFoundError(Exception):
    """
    Raised when a requested resource is not found.

    This exception is raised when attempting to access or operate on a
    resource that does not exist in the graph.
    """


class NodeNotFoundError(ResourceNotFoundError):
    """
    Raised when a requested node is not found.

    Examples:
        * Search origin or destination unknown to the graph
        * Internal node handle issued by a different graph
    """


class EdgeNotFoundError(ResourceNotFoundError):
    """
    Raised when a requested edge is not found.

    Examples:
        * Weight lookup for a pair of nodes with no connecting edge
    """


class DuplicateResourceError(Exception):
    """
    Raised when attempting to create a duplicate resource.

    Examples:
        * Two nodes in a graph definition sharing one name
    """


class InvalidOperationError(Exception):
    """
    Raised when an operation is invalid in the current context.

    This exception is raised when attempting to perform an operation that
    is not valid given the current state of a data structure. It signals a
    programming error rather than bad input data.
    """


class EmptyQueueError(InvalidOperationError):
    """
    Raised when removing or peeking at the minimum of an empty queue.

    Callers are expected to check ``is_empty()`` first.
    """


class QueueConsistencyError(InvalidOperationError):
    """
    Raised when a priority queue operation would break its invariants.

    Examples:
        * Decrease-key for a node that is not on the frontier
        * Decrease-key with a key larger than the current one
        * Adding a node that is already on the frontier
        * Using a heap handle whose entry was already removed
    """
