# stepsearch/errors.py
"""Load/construction failures of the graph store. Stepping never raises."""

class GraphError(ValueError):
    """Malformed graph record or invalid store operation."""

class InvalidDimensions(GraphError):
    pass

class InvalidClassification(GraphError):
    pass

class InvalidPosition(GraphError):
    pass

class DuplicateDesignation(GraphError):
    pass
