"""Error taxonomy and result values returned by the mapping math."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, NoReturn, Optional, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    INVALID_DIMENSIONS = "invalid_dimensions"
    INVALID_QUAD = "invalid_quad"
    SINGULAR_SYSTEM = "singular_system"
    DEGENERATE_PROJECTION = "degenerate_projection"


class QuadDefect(str, Enum):
    """Geometric invariant a quad failed, in the order the validator checks them."""

    DUPLICATE_POINT = "duplicate_point"
    COLLINEAR_POINTS = "collinear_points"
    DEGENERATE_AREA = "degenerate_area"
    WRONG_ORIENTATION = "wrong_orientation"
    SELF_INTERSECTING = "self_intersecting"

    @property
    def message(self) -> str:
        return _DEFECT_MESSAGES[self]


_DEFECT_MESSAGES = {
    QuadDefect.DUPLICATE_POINT: "Quad contains duplicate points.",
    QuadDefect.COLLINEAR_POINTS: "Quad has collinear points.",
    QuadDefect.DEGENERATE_AREA: "Quad area is too small.",
    QuadDefect.WRONG_ORIENTATION: "Quad must be clockwise.",
    QuadDefect.SELF_INTERSECTING: "Quad is self-intersecting.",
}


@dataclass(frozen=True, slots=True)
class MappingError:
    """A recoverable failure reported to the immediate caller."""

    kind: ErrorKind
    message: str
    defect: Optional[QuadDefect] = None

    @classmethod
    def invalid_quad(cls, defect: QuadDefect) -> "MappingError":
        return cls(kind=ErrorKind.INVALID_QUAD, message=defect.message, defect=defect)

    def to_exception(self) -> "MappingException":
        exc_type = _EXCEPTIONS[self.kind]
        return exc_type(self)


class MappingException(ValueError):
    """Raised by ``Err.unwrap`` so callers that prefer exceptions can opt in."""

    def __init__(self, error: MappingError) -> None:
        super().__init__(error.message)
        self.error = error

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind


class InvalidDimensionsError(MappingException):
    pass


class InvalidQuadError(MappingException):
    @property
    def defect(self) -> Optional[QuadDefect]:
        return self.error.defect


class SingularSystemError(MappingException):
    pass


class DegenerateProjectionError(MappingException):
    pass


class InternalConsistencyError(AssertionError):
    """A freshly solved homography does not reproduce its own correspondences.

    This signals a defect in the solver, not bad input, so it is raised
    instead of being returned as an ``Err``.
    """


_EXCEPTIONS = {
    ErrorKind.INVALID_DIMENSIONS: InvalidDimensionsError,
    ErrorKind.INVALID_QUAD: InvalidQuadError,
    ErrorKind.SINGULAR_SYSTEM: SingularSystemError,
    ErrorKind.DEGENERATE_PROJECTION: DegenerateProjectionError,
}


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err:
    error: MappingError

    @property
    def ok(self) -> bool:
        return False

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    def unwrap(self) -> NoReturn:
        raise self.error.to_exception()


Result = Union[Ok[T], Err]
