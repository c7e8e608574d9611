# src/nodeflow/__init__.py
"""
NodeFlow — engine de execução para workflows de nós generativos.

Este pacote raiz define o namespace público do NodeFlow: um grafo dirigido
de nós tipados (input, prompt, process, output, iteration) ligados por
arestas de fluxo de dados, executado de forma sequencial e determinística.

Princípios centrais:
    - O workflow é um DAG explícito de nós tipados
    - A ordem de execução é determinística para o mesmo grafo
    - A primeira falha de um nó aborta a run inteira
    - Toda observação da run acontece via eventos e status final

Arquitetura em alto nível:
    - core.graph     → modelo de nós/arestas e política de conexão do editor
    - core.engine    → planejamento (Kahn), agregação de entradas e runner
    - core.pipeline  → contexto de execução, eventos e sink
    - core.config    → carregamento e merge de configuração
    - nodes          → handlers por tipo de nó
    - providers      → clientes de provedores generativos e credenciais
    - export         → materialização de arquivos (PDF, data URIs, fala)

Limites explícitos:
    - Não contém o editor visual nem a persistência de workflows
    - Não executa ramos em paralelo
    - Não retoma runs interrompidas
"""
# src/nodeflow/__init__.py
from .core.engine.runner import PipelineRunner, RunResult
from .core.graph.model import Edge, Graph, Node

__all__ = ["PipelineRunner", "RunResult", "Graph", "Node", "Edge"]
