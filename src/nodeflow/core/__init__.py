# src/nodeflow/core/__init__.py
"""
Core do NodeFlow.

Este pacote contém a implementação canônica do engine de workflows,
independente do editor visual que produz os grafos e da camada que
apresenta os arquivos gerados.

Componentes principais:
    - graph    → modelo validado de nós e arestas
    - engine   → planner topológico, agregação de entradas e PipelineRunner
    - pipeline → ExecutionContext, tipos de evento/status e EventSink
    - config   → resolução de configuração (defaults + overrides)

Princípios fundamentais:
    - Nenhuma decisão silenciosa: falhas viram eventos e status explícitos
    - Estado mutável existe apenas dentro de uma run
    - O grafo de entrada nunca é mutado pelo engine

Limites explícitos:
    - Não define a interação com provedores externos (ver `nodeflow.providers`)
    - Não persiste workflows nem resultados
"""
