"""
Testes do executor em cenários de sucesso.

Os testes asseguram que:
- todos os Steps são executados em ordem de declaração
- o valor final é a dobra dos Steps sobre o valor inicial
- `executed_steps` contém todos os Steps, na ordem
- opções são repassadas sem alteração a cada Step
"""

from types import MappingProxyType

from railpipe.core.engine.executor import run_steps
from railpipe.core.pipeline.state import PipelineState
from railpipe.core.pipeline.types import Ok


def add_one(value, options):
    return Ok(value + 1)


def double(value, options):
    return Ok(value * 2)


def test_fold_over_all_steps():
    final = run_steps(PipelineState.new(3), [add_one, double], MappingProxyType({}))

    assert final.valid is True
    assert final.value == 8
    assert final.initial_value == 3
    assert final.executed_steps == (add_one, double)


def test_empty_step_list_keeps_initial_value():
    final = run_steps(PipelineState.new(5), [], MappingProxyType({}))

    assert final.valid is True
    assert final.value == 5
    assert final.executed_steps == ()


def test_options_are_passed_to_every_step(recorder):
    options = MappingProxyType({"opt": True})

    def first(value, opts):
        recorder("first", (value, opts))
        return Ok(value + 1)

    def second(value, opts):
        recorder("second", (value, opts))
        return Ok(value + 1)

    final = run_steps(PipelineState.new(0), [first, second], options)

    assert final.value == 2
    assert recorder.calls == [("first", (0, options)), ("second", (1, options))]
    assert recorder.payloads("first")[0][1] is options


def test_same_step_can_appear_twice():
    final = run_steps(PipelineState.new(1), [double, double, double], MappingProxyType({}))

    assert final.value == 8
    assert final.executed_steps == (double, double, double)


def test_step_events_are_logged(dummy_ctx):
    run_steps(PipelineState.new(1), [add_one, double], dummy_ctx.options, dummy_ctx)

    messages = [e["message"] for e in dummy_ctx.events]
    assert messages == ["step ok", "step ok"]
    assert dummy_ctx.events[0]["ref"].endswith("add_one")
