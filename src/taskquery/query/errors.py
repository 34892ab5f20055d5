"""Exceptions raised by the query engine."""


class TaskQueryError(Exception):
    """Base class for errors raised by taskquery."""

    pass


class SearchError(TaskQueryError):
    """Raised while evaluating a valid query against a task.

    For example, a ``filter by function`` expression that fails at runtime.
    The query itself compiled, but this particular search could not complete.
    """

    pass
