"""
Testes do PipelineState.

Valida criação, atualização por Step, invalidação e conversão para o
resultado público.

Invariantes verificados:
    - `valid is False` ⇔ `error is not None`
    - `executed_steps` registra o Step que falhou e nunca é truncado
    - estado inválido não invoca Steps
    - retornos fora do contrato levantam TransformContractError
"""

import dataclasses

import pytest

from railpipe.core.errors import GENERIC_ERROR
from railpipe.core.exceptions import TransformContractError
from railpipe.core.pipeline.state import PipelineState
from railpipe.core.pipeline.types import FAILURE, Err, Ok


def good(value, options):
    return Ok([value, dict(options)])


def error_message(value, options):
    return Err("Something is not good")


def generic_failure(value, options):
    return FAILURE


def bad_return(value, options):
    return value


def test_new_creates_valid_state():
    state = PipelineState.new([1, 2, 3])

    assert state.initial_value == [1, 2, 3]
    assert state.value == [1, 2, 3]
    assert state.valid is True
    assert state.error is None
    assert state.executed_steps == ()
    assert state.pipeline is None


def test_update_with_lambda_step():
    state = PipelineState(initial_value=0, value=10)

    updated = state.update(lambda value, options: Ok(value + options["n"]), {"n": 2})

    assert updated.value == 12
    assert updated.initial_value == 0
    assert updated.valid is True
    assert updated.error is None
    assert len(updated.executed_steps) == 1


def test_update_does_not_mutate_previous_state():
    state = PipelineState.new(10)

    updated = state.update(good, {"k": 1})

    assert state.value == 10
    assert state.executed_steps == ()
    assert updated.value == [10, {"k": 1}]
    assert updated.executed_steps == (good,)


def test_err_invalidates_and_keeps_value():
    state = PipelineState(initial_value=0, value=10)

    updated = state.update(error_message, {})

    assert updated.valid is False
    assert updated.error == "Something is not good"
    assert updated.value == 10
    assert updated.executed_steps == (error_message,)


def test_generic_failure_substitutes_fixed_error():
    state = PipelineState(initial_value=0, value=10)

    updated = state.update(generic_failure, {})

    assert updated.valid is False
    assert updated.error == GENERIC_ERROR
    assert updated.executed_steps == (generic_failure,)


def test_err_with_none_payload_uses_generic_error():
    updated = PipelineState.new(1).update(lambda v, o: Err(None), {})

    assert updated.valid is False
    assert updated.error == GENERIC_ERROR


def test_invalid_state_skips_step(recorder):
    state = PipelineState(initial_value=0, value=10, valid=False, error="Some error")

    def spy(value, options):
        recorder("spy", value)
        return Ok(value + 1)

    updated = state.update(spy, {})

    assert updated is state
    assert recorder.calls == []


def test_invalidate_is_idempotent():
    state = PipelineState.new(1).invalidate("first")

    assert state.invalidate("second").error == "first"


@pytest.mark.parametrize("bad", [123, None, ("ok", 1), "ok"])
def test_contract_violation_raises(bad):
    state = PipelineState(initial_value=0, value=10)

    with pytest.raises(TransformContractError) as exc_info:
        state.update(lambda value, options: bad, {})

    assert exc_info.value.value == bad
    assert repr(bad) in str(exc_info.value)


def test_contract_violation_message_names_received_value():
    with pytest.raises(TransformContractError, match="expected Ok, Err or FAILURE, got 10"):
        PipelineState.new(10).update(bad_return, {})


def test_state_is_frozen():
    state = PipelineState.new(1)

    with pytest.raises(dataclasses.FrozenInstanceError):
        state.value = 2


def test_to_result():
    assert PipelineState.new(5).to_result() == Ok(5)
    assert PipelineState.new(5).invalidate("bad").to_result() == Err("bad")
