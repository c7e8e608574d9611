# src/nodeflow/core/engine/planner.py
"""
Planejador de execução do workflow (DAG).

Este módulo produz a ordem de execução topológica determinística dos nós
de um Graph.

Decisões arquiteturais:
    - Algoritmo de Kahn com fila FIFO
    - A fila inicial contém os nós de grau de entrada zero na ordem
      declarada do grafo (desempate estável)
    - Nós liberados entram na fila na ordem em que são descobertos
    - Arestas com extremidade inexistente são ignoradas
    - Arestas repetidas contam uma vez cada no grau de entrada

Invariantes:
    - Nenhum nó aparece antes de seus predecessores
    - O mesmo grafo (mesma ordem de nós, mesmas arestas) sempre produz a
      mesma ordem
    - Em caso de erro, o conjunto reportado é exatamente o dos nós que
      ficaram fora da ordem (em ciclo ou alcançáveis apenas a partir de um)

Limites explícitos:
    - Não executa nós
    - Não interage com ExecutionContext
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Dict, Hashable, List

from nodeflow.core.exceptions import CycleDetectedError
from nodeflow.core.graph.model import Graph, Node


def compute_order(graph: Graph) -> List[Node]:
    """
    Valida e produz a ordem de execução do grafo.

    Args:
        graph (Graph): Grafo do workflow.

    Returns:
        List[Node]: Nós em ordem topológica determinística.

    Raises:
        CycleDetectedError: Se algum nó não puder ser ordenado; `node_names`
            lista exatamente esses nós, na ordem declarada.
    """
    adjacency: Dict[Hashable, List[Hashable]] = {n.id: [] for n in graph.nodes}
    in_degree: Dict[Hashable, int] = {n.id: 0 for n in graph.nodes}

    for edge in graph.edges:
        if graph.is_dangling(edge):
            continue
        adjacency[edge.source].append(edge.target)
        in_degree[edge.target] += 1

    queue: Deque[Node] = deque(n for n in graph.nodes if in_degree[n.id] == 0)
    order: List[Node] = []

    while queue:
        node = queue.popleft()
        order.append(node)
        for target in adjacency[node.id]:
            in_degree[target] -= 1
            if in_degree[target] == 0:
                queue.append(graph.node(target))

    if len(order) < len(graph.nodes):
        ordered = {n.id for n in order}
        excluded = [n for n in graph.nodes if n.id not in ordered]
        names = [n.name for n in excluded]
        raise CycleDetectedError(
            message=(
                "Cycle detected or nodes are unreachable. "
                f"The following nodes will not be executed: {', '.join(names)}"
            ),
            details={"node_ids": [n.id for n in excluded], "node_names": names},
            hint="Remova a aresta que fecha o ciclo antes de reexecutar o workflow.",
        )

    return order
