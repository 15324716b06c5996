"""
Diagnostics and debug tracing for elbow routing.

Routing never raises for degenerate geometry. Instead, recoverable anomalies
(an anchor with no exit side, a ray that misses the perimeter graph, a search
that cannot reach its goal) are reported as Diagnostic records to an
injectable sink. The host decides whether to surface, log or ignore them.

When debug mode is enabled, the router additionally records a RouteTrace of
the intermediate state of each pipeline stage:

Usage:
    >>> router = ElbowRouter(debug=True)
    >>> path = router.route((0, 0), (100, 50))
    >>> trace = router.get_trace()
    >>> print(trace.summary())

Stages recorded:
- local_space - Endpoints and pivot in the arrow-aligned frame
- exit_rays - Resolved start/end rays
- strategy - Which routing case was taken
- graph - Perimeter graph size (graph-based cases only)
- search - Node path found by Dijkstra (graph-based cases only)
- simplified - Local-space path after simplification
- world_path - Final world-space path
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger("elbowroute")

# Diagnostic codes
NO_EXIT_DIRECTION = "no_exit_direction"
GRAPH_INSERTION_FAILED = "graph_insertion_failed"
NO_PATH_FOUND = "no_path_found"


class DiagnosticLevel(Enum):
    """Severity of a diagnostic."""

    INFO = "info"
    WARNING = "warning"


@dataclass
class Diagnostic:
    """
    A non-fatal anomaly encountered while routing.

    Attributes:
        level: Severity
        code: Stable machine-readable identifier (e.g. "no_path_found")
        message: Human-readable description
        source: The function that reported it
        data: Geometry involved, for debugging
    """

    level: DiagnosticLevel
    code: str
    message: str
    source: str
    data: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"[{self.level.value}] {self.code}: {self.message} (from {self.source})"


DiagnosticSink = Callable[[Diagnostic], None]


def logging_sink(diagnostic: Diagnostic) -> None:
    """Default sink: forward diagnostics to the "elbowroute" logger."""
    level = (
        logging.WARNING
        if diagnostic.level == DiagnosticLevel.WARNING
        else logging.INFO
    )
    logger.log(
        level,
        "%s: %s",
        diagnostic.code,
        diagnostic.message,
        extra={"source": diagnostic.source, "data": diagnostic.data},
    )


def null_sink(diagnostic: Diagnostic) -> None:
    """Sink that discards every diagnostic."""


def warn(sink: DiagnosticSink, code: str, message: str, source: str, **data) -> None:
    sink(Diagnostic(DiagnosticLevel.WARNING, code, message, source, data))


@dataclass
class RouteStage:
    """
    Snapshot of state at one routing stage.

    Attributes:
        name: Name of this stage
        data: Dictionary of relevant data at this stage
    """

    name: str
    data: Dict[str, Any]

    def __str__(self) -> str:
        lines = [f"=== Stage: {self.name} ==="]
        for key, value in self.data.items():
            str_val = str(value)
            if len(str_val) > 100:
                str_val = str_val[:100] + "..."
            lines.append(f"  {key}: {str_val}")
        return "\n".join(lines)


@dataclass
class RouteTrace:
    """
    Complete trace of one routing call.

    Attributes:
        stages: Routing stages with their data, in pipeline order
        diagnostics: Every diagnostic reported during the call
    """

    stages: List[RouteStage] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def add_stage(self, name: str, data: Dict[str, Any]) -> None:
        self.stages.append(RouteStage(name, data.copy()))

    def record(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def get_stage(self, name: str) -> Optional[RouteStage]:
        """Get a specific stage by name."""
        for stage in self.stages:
            if stage.name == name:
                return stage
        return None

    @property
    def stage_names(self) -> List[str]:
        return [stage.name for stage in self.stages]

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.level == DiagnosticLevel.WARNING]

    def summary(self) -> str:
        lines = ["=== Route Trace Summary ==="]
        lines.append(f"Stages: {len(self.stages)}")
        lines.append(f"Diagnostics: {len(self.diagnostics)}")
        for stage in self.stages:
            lines.append(str(stage))
        for diagnostic in self.diagnostics:
            lines.append(str(diagnostic))
        return "\n".join(lines)
