"""Id pair generation and trace analysis."""

from .traces import DomainPipeline, IdPair, IdPairGenerator, agent_seed, generate_id_trace
from .trace_analyzer import AxisStatistics, TraceStatistics, summarise_trace

__all__ = [
    "DomainPipeline",
    "IdPair",
    "IdPairGenerator",
    "agent_seed",
    "generate_id_trace",
    "AxisStatistics",
    "TraceStatistics",
    "summarise_trace",
]
