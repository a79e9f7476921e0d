# tests/conftest.py
"""
Fixtures compartilhados para testes do railpipe.

Este módulo define fixtures reutilizáveis que fornecem:
- um `Recorder` thread-safe para observar a ordem de chamadas
- um `HookSupervisor` isolado por teste (drenado e encerrado ao final)
- um `RunContext` determinístico
- configurações YAML mínimas (defaults + override local)

Decisões arquiteturais:
    - Steps e hooks de teste são funções simples, sem herança
    - Nenhum teste usa o supervisor padrão de processo, exceto quando
      esse é o comportamento validado
    - Imports do core são lazy para melhorar mensagens de erro

Invariantes:
    - Nenhuma fixture executa pipeline real
    - Todas as fixtures são seguras para execução em paralelo
"""

import threading
from datetime import datetime, timezone

import pytest


class Recorder:
    """Registro thread-safe de chamadas `(label, payload)`."""

    def __init__(self):
        self._lock = threading.Lock()
        self.calls = []
        self.done = threading.Event()

    def __call__(self, label, payload=None):
        with self._lock:
            self.calls.append((label, payload))

    @property
    def labels(self):
        with self._lock:
            return [label for label, _ in self.calls]

    def payloads(self, label):
        with self._lock:
            return [p for lbl, p in self.calls if lbl == label]


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def supervisor():
    """
    HookSupervisor isolado.

    Drenado e encerrado ao final do teste, para que nenhum hook
    assíncrono vaze entre testes.
    """
    from railpipe.core.engine.supervisor import HookSupervisor

    sup = HookSupervisor(max_workers=4, thread_name_prefix="railpipe-test")
    yield sup
    sup.drain(timeout=5)
    sup.shutdown(wait=True)


@pytest.fixture
def dummy_ctx():
    from railpipe.core.pipeline.context import RunContext, freeze_options

    return RunContext(
        run_id="run-test-001",
        created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
        pipeline="string_to_number",
        options=freeze_options({"opt": True}),
        meta={"source": "pytest"},
    )


@pytest.fixture
def pipeline_defaults_yaml() -> str:
    """Defaults semelhantes ao uso real: engine + uma definição completa."""
    return """\
engine:
  async_hooks:
    max_workers: 2
    thread_name_prefix: railpipe-cfg
pipelines:
  string_to_number:
    steps:
      - tests.fixtures.steps.numbers:ensure_string
      - tests.fixtures.steps.numbers:cleanup
      - tests.fixtures.steps.numbers:parse
    hooks:
      - tests.fixtures.steps.numbers:audit_hook
    async_hooks:
      - tests.fixtures.steps.numbers:notify_async_hook
    error_handler: tests.fixtures.steps.numbers:on_error
"""


@pytest.fixture
def pipeline_local_yaml() -> str:
    """Override local: reduz workers e substitui a lista de hooks."""
    return """\
engine:
  async_hooks:
    max_workers: 1
pipelines:
  string_to_number:
    hooks: []
"""
