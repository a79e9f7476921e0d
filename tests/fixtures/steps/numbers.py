"""
Steps e hooks de exemplo: pipeline "string_to_number".

Referenciados por configuração (`tests.fixtures.steps.numbers:<nome>`)
nos testes de definições declarativas. Hooks registram chamadas em
`CALLS`, que os testes limpam antes de usar.
"""

from __future__ import annotations

import threading

from railpipe.core.pipeline.types import Err, Ok

CALLS = []
_lock = threading.Lock()


def _record(label, payload):
    with _lock:
        CALLS.append((label, payload))


def ensure_string(value, options):
    if isinstance(value, str):
        return Ok(value)
    return Err("Not a string")


def cleanup(value, options):
    return Ok(value.strip())


def parse(value, options):
    try:
        return Ok(float(value))
    except ValueError:
        return Err("Invalid number")


def audit_hook(state, options):
    _record("audit", state)


def notify_async_hook(state, options):
    _record("notify", state)


def on_error(state, options):
    _record("on_error", state.error)
    return "handled"


def three_args(value, options, extra):
    return Ok(value)


NOT_CALLABLE = 42
