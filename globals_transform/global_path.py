"""Data models for addresses under the shared global namespace."""

from dataclasses import dataclass

from globals_transform import nodes
from globals_transform.errors import ConfigurationError

ROOT_REFERENCE = "this"


@dataclass(frozen=True)
class GlobalPath:
    """A dotted address below the root reference, e.g. ``this.myGlobal.foo.bar``.

    ``segments`` starts with the namespace root name and never includes the
    root reference itself.
    """

    segments: tuple[str, ...]

    def __post_init__(self) -> None:
        """Reject empty paths and empty segments."""
        if not self.segments or any(not s for s in self.segments):
            msg = f"Invalid global path segments: {self.segments!r}"
            raise ConfigurationError(msg)

    @classmethod
    def from_dotted(cls, dotted: str) -> "GlobalPath":
        """Parse ``a.b.c`` (an optional leading ``this.`` is dropped)."""
        parts = dotted.split(".")
        if parts and parts[0] == ROOT_REFERENCE:
            parts = parts[1:]
        return cls(tuple(parts))

    @property
    def dotted(self) -> str:
        return ".".join((ROOT_REFERENCE, *self.segments))

    def child(self, name: str) -> "GlobalPath":
        return GlobalPath((*self.segments, name))

    def prefixes(self, *, fully_qualified: bool = False) -> list[tuple[str, ...]]:
        """Return every prefix that must exist before this path is assigned.

        The namespace root itself is never included; it is provided by whoever
        loads the transformed scripts. The leaf is included only when
        ``fully_qualified`` is set, i.e. when the path itself must hold an
        object.
        """
        stop = len(self.segments) if fully_qualified else len(self.segments) - 1
        return [self.segments[: i + 1] for i in range(1, stop)]

    def to_expression(self) -> nodes.Node:
        return segments_expression(self.segments)

    def __str__(self) -> str:
        return self.dotted


@dataclass(frozen=True)
class ExternalRead:
    """A read from a global provided outside of the transformed sources."""

    global_name: str
    export_name: str | None = None

    def to_expression(self) -> nodes.Node:
        """Build the read.

        A whole-module read prefers the global's ``default`` property so both
        default-export shaped bundles and plain globals work unchanged.
        """
        segments = tuple(self.global_name.split("."))
        if self.export_name:
            return nodes.member(segments_expression(segments), self.export_name)
        return nodes.logical_or(
            nodes.member(segments_expression(segments), "default"),
            segments_expression(segments),
        )


def segments_expression(segments: tuple[str, ...]) -> nodes.Node:
    """Render segments as member access off the root reference."""
    expr = nodes.this_expression()
    for segment in segments:
        expr = nodes.member(expr, segment)
    return expr
