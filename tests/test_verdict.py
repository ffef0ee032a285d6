"""Tests for callback verdicts."""

import pytest

from cdwalk import Action, Verdict, CONTINUE, SKIP_SUBTREE


def test_none_means_continue():
    assert Verdict.coerce(None) is CONTINUE
    assert CONTINUE.is_continue


def test_verdicts_pass_through():
    assert Verdict.coerce(SKIP_SUBTREE) is SKIP_SUBTREE
    stop = Verdict.stop()
    assert Verdict.coerce(stop) is stop


def test_exception_becomes_failure():
    error = ValueError("bad entry")
    verdict = Verdict.coerce(error)

    assert verdict.action is Action.FAIL
    assert verdict.error is error
    assert not verdict.is_continue


def test_stop_may_carry_error():
    error = RuntimeError("halt")
    assert Verdict.stop(error).error is error
    assert Verdict.stop().error is None
    assert Verdict.stop().is_stop


def test_fail_requires_error():
    with pytest.raises(ValueError):
        Verdict.fail(None)


@pytest.mark.parametrize("value", [True, 0, "skip", ValueError])
def test_unknown_values_rejected(value):
    with pytest.raises(TypeError):
        Verdict.coerce(value)


def test_verdicts_are_immutable():
    with pytest.raises(AttributeError):
        CONTINUE.action = Action.STOP
