import pytest

from pipetally.login import LoginGate, LoginLockedError, LoginResult

password = "password"


def make_gate(max_attempts=3):
    return LoginGate("user", password, max_attempts)


def test_correct_credentials_succeed():
    gate = make_gate()
    assert gate.attempt("user", password) is LoginResult.SUCCESS
    assert gate.failures == 0
    assert not gate.locked()


@pytest.mark.parametrize("name, passwd", [("", "secret"), ("user", ""), ("", "")])
def test_empty_fields_count_as_failure(name, passwd):
    gate = make_gate()
    assert gate.attempt(name, passwd) is LoginResult.EMPTY
    assert gate.failures == 1


def test_wrong_credentials_are_rejected():
    gate = make_gate()
    assert gate.attempt("user", "secret") is LoginResult.REJECTED
    assert gate.failures == 1


def test_locks_after_limit():
    gate = make_gate()
    for _ in range(3):
        gate.attempt("user", "secret")
    assert gate.locked()
    with pytest.raises(LoginLockedError):
        gate.attempt("user", password)


def test_not_locked_before_limit():
    gate = make_gate()
    gate.attempt("user", "secret")
    gate.attempt("", "")
    assert not gate.locked()
    assert gate.attempt("user", password) is LoginResult.SUCCESS


def test_custom_limit():
    gate = make_gate(max_attempts=1)
    gate.attempt("nobody", "secret")
    assert gate.locked()


def test_invalid_limit():
    with pytest.raises(ValueError):
        make_gate(max_attempts=0)