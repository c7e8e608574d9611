# src/nodeflow/core/engine/__init__.py
"""
Engine de execução do NodeFlow.

    - planner      → ordem topológica determinística (Kahn)
    - aggregation  → coleta das entradas de um nó a partir dos artefatos
    - runner       → máquina de estados de uma run
"""

from .planner import compute_order
from .aggregation import NodeInputs, gather_inputs
from .runner import PipelineRunner, RunResult

__all__ = ["compute_order", "NodeInputs", "gather_inputs", "PipelineRunner", "RunResult"]
