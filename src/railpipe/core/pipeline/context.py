# src/railpipe/core/pipeline/context.py
"""
Contexto de execução de uma run do pipeline.

Este módulo define o `RunContext`, a estrutura que acompanha uma única
chamada de execução e concentra sua observabilidade: identidade da run,
opções congeladas e o log estruturado de eventos emitidos pelo engine.

O RunContext é o único destino de logs do engine:
    - Steps invocados e seu desfecho
    - invocação do error handler e seu retorno
    - lançamento e conclusão de hooks (síncronos e assíncronos)
    - warnings não fatais

Princípios fundamentais:
    - Isolamento por execução (cada run possui seu próprio contexto)
    - Logs são eventos estruturados, não texto livre
    - Ausência de estado global compartilhado

Invariantes:
    - Todo evento inclui `run_id`, `pipeline`, `ref`, `level` e `timestamp`
    - A ordem de `events` reflete a ordem de registro
    - Registros concorrentes (hooks assíncronos) são serializados por lock

Limites explícitos:
    - Não executa Steps nem hooks
    - Não persiste eventos
    - Não altera o PipelineState
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, List, Optional


def freeze_options(options: Any) -> Any:
    """
    Opções compartilhadas por toda a run.

    Apenas `dict` mutáveis são copiados para uma visão somente leitura;
    qualquer outro objeto (Mapping próprio, namespace, dataclass) segue
    inalterado até Steps, hooks e error handler. `None` vira um mapping vazio.
    """
    if options is None:
        return MappingProxyType({})
    if isinstance(options, dict):
        return MappingProxyType(dict(options))
    return options


@dataclass
class RunContext:
    """
    Contexto de uma run do pipeline.

    Criado pelo engine no início de cada execução e devolvido no
    `RunResult`. Hooks assíncronos continuam registrando eventos depois
    que a execução já retornou ao chamador.
    """
    run_id: str
    created_at: datetime
    pipeline: Optional[str] = None
    options: Any = field(default_factory=lambda: MappingProxyType({}))
    meta: Dict[str, Any] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    @classmethod
    def start(
        cls,
        *,
        pipeline: Optional[str] = None,
        options: Any = None,
        meta: Optional[Dict[str, Any]] = None,
    ) -> "RunContext":
        return cls(
            run_id=uuid.uuid4().hex,
            created_at=datetime.now(timezone.utc),
            pipeline=pipeline,
            options=freeze_options(options),
            meta=dict(meta or {}),
        )

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, ref: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "pipeline": self.pipeline,
            "ref": ref,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        with self._lock:
            self.events.append(event)

    def add_warning(self, *, ref: str, message: str) -> None:
        with self._lock:
            self.warnings.setdefault(ref, []).append(message)

    def events_for(self, ref: str) -> List[Dict[str, Any]]:
        with self._lock:
            return [e for e in self.events if e["ref"] == ref]
