class CubeError(Exception):
    """Base class of all errors raised by the cubebot package."""

class IntegrityError(CubeError):
    """The facelet colors do not describe a complete cube (unknown facelets or wrong color counts)."""

class UnsolvableScrambleError(CubeError):
    """The last layer is in a state which can not be reached by legal moves."""

class SolverError(CubeError):
    """An internal invariant of the solver was violated."""

class LocatorError(SolverError): pass
class StageIterationError(SolverError): pass
class TraceCapacityError(SolverError): pass
