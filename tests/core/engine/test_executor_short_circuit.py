"""
Testes do short-circuit do executor.

Este módulo valida que a primeira falha interrompe a sequência:
- o Step que falha é registrado em `executed_steps`
- nenhum Step posterior é invocado (observado via efeito colateral)
- o erro retido é exatamente o do Step que falhou
- falha genérica (`FAILURE`) resulta em GENERIC_ERROR e em evento próprio

Decisões arquiteturais:
    - Falha de Step é dado (`Err`), não exceção
    - Não há retry nem execução parcial posterior
"""

from types import MappingProxyType

import pytest

from railpipe.core.engine.executor import run_steps
from railpipe.core.errors import GENERIC_ERROR
from railpipe.core.pipeline.state import PipelineState
from railpipe.core.pipeline.types import FAILURE, Err, Ok

OPTIONS = MappingProxyType({})


def make_steps(n, fail_at, recorder, outcome=None):
    """Gera `n` Steps que somam 1; o Step `fail_at` (1-indexed) falha."""
    steps = []
    for i in range(1, n + 1):
        def step(value, options, i=i):
            recorder("step", i)
            if i == fail_at:
                return outcome if outcome is not None else Err(f"failed at {i}")
            return Ok(value + 1)
        steps.append(step)
    return steps


@pytest.mark.parametrize("n,fail_at", [(1, 1), (3, 1), (3, 2), (3, 3), (6, 4)])
def test_first_failure_short_circuits(recorder, n, fail_at):
    steps = make_steps(n, fail_at, recorder)

    final = run_steps(PipelineState.new(0), steps, OPTIONS)

    assert final.valid is False
    assert final.error == f"failed at {fail_at}"
    assert final.executed_steps == tuple(steps[:fail_at])
    assert recorder.payloads("step") == list(range(1, fail_at + 1))
    assert final.value == fail_at - 1


def test_bad_step_scenario(recorder):
    def plus_one(value, options):
        return Ok(value + 1)

    def bad(value, options):
        return Err("bad")

    def times_hundred(value, options):
        recorder("times_hundred", value)
        return Ok(value * 100)

    final = run_steps(PipelineState.new(3), [plus_one, bad, times_hundred], OPTIONS)

    assert final.valid is False
    assert final.error == "bad"
    assert final.value == 4
    assert final.executed_steps == (plus_one, bad)
    assert recorder.calls == []


def test_generic_failure_marker(recorder):
    steps = make_steps(3, 2, recorder, outcome=FAILURE)

    final = run_steps(PipelineState.new(0), steps, OPTIONS)

    assert final.valid is False
    assert final.error == GENERIC_ERROR
    assert final.executed_steps == tuple(steps[:2])


def test_only_last_error_is_kept():
    final = run_steps(
        PipelineState.new(0),
        [lambda v, o: Err({"code": 1}), lambda v, o: Err({"code": 2})],
        OPTIONS,
    )

    assert final.error == {"code": 1}


def test_already_invalid_state_runs_nothing(recorder):
    state = PipelineState.new(0).invalidate("earlier")

    final = run_steps(state, make_steps(3, 0, recorder), OPTIONS)

    assert final is state
    assert recorder.calls == []


def test_step_exception_propagates(recorder):
    def boom(value, options):
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        run_steps(PipelineState.new(0), [boom] + make_steps(2, 0, recorder), OPTIONS)

    assert recorder.calls == []


def test_failure_is_logged(dummy_ctx):
    run_steps(PipelineState.new(0), [lambda v, o: Err("bad")], dummy_ctx.options, dummy_ctx)

    ev = dummy_ctx.events[-1]
    assert ev["message"] == "step failed"
    assert ev["error"] == repr("bad")


def test_generic_failure_is_logged_apart(dummy_ctx):
    final = run_steps(PipelineState.new(0), [lambda v, o: FAILURE], dummy_ctx.options, dummy_ctx)

    ev = dummy_ctx.events[-1]
    assert ev["message"] == "step failed (generic)"
    assert ev["error"] == repr(GENERIC_ERROR)
    assert final.error == GENERIC_ERROR


def test_step_events_follow_outcomes(dummy_ctx):
    run_steps(
        PipelineState.new(0),
        [lambda v, o: Ok(v + 1), lambda v, o: Err(None)],
        dummy_ctx.options,
        dummy_ctx,
    )

    assert [e["message"] for e in dummy_ctx.events] == ["step ok", "step failed"]
