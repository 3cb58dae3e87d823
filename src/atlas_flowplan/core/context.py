# src/atlas_flowplan/core/context.py
"""
Contexto de uma sessão de planejamento.

Este módulo define o `PlanningContext`, a estrutura explícita compartilhada
entre o planner de reducers e a sessão de planejamento (`Planner`).

O contexto é o único meio de:
    - registrar eventos estruturados de log (decisões por estágio)
    - coletar warnings não fatais (ex.: fallback para o default)
    - carregar a configuração efetiva e metadados da sessão

Logs são eventos estruturados (dicionários), não strings livres. Cada evento
inclui `session_id`, `step_id` (o estágio ou a fase da sessão), `level`,
`message` e `timestamp` UTC, além de campos extras livres.

Limites explícitos:
    - Não executa planejamento
    - Não persiste eventos
    - Não é thread-safe: uma sessão, uma thread
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List


@dataclass
class PlanningContext:
    """
    Contexto explícito de uma sessão de planejamento.

    Campos:
        - session_id: identificador da sessão
        - created_at: timestamp de criação
        - config: configuração efetiva (defaults + local deep-merge)
        - meta: metadados livres da sessão (ex.: nome do job)
        - events: log estruturado de eventos, em ordem de emissão
        - warnings: warnings agrupados por `step_id`
    """

    session_id: str
    created_at: datetime
    config: Dict[str, Any]
    meta: Dict[str, Any] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    def log(self, *, step_id: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "session_id": self.session_id,
            "step_id": step_id,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, step_id: str, message: str) -> None:
        self.warnings.setdefault(step_id, []).append(message)

    def events_for(self, step_id: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e.get("step_id") == step_id]
