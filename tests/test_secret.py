"""Tests for the secret holder."""

from __future__ import annotations

import copy
import json
import logging
import pickle

import pytest

from tomlguard.secret import REDACTED, Secret


def test_reveal_returns_wrapped_value() -> None:
    assert Secret("hunter2").reveal() == "hunter2"
    assert Secret(0).reveal() == 0


def test_representations_are_redacted() -> None:
    holder = Secret("hunter2")
    for rendered in (str(holder), repr(holder), f"{holder}", f"{holder:>20}", "%s" % holder):
        assert "hunter2" not in rendered
    assert str(holder) == REDACTED
    assert str(holder) == str(Secret("other"))


def test_logging_does_not_leak(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO):
        logging.getLogger("tomlguard.tests").info("password=%s", Secret("hunter2"))
    assert "hunter2" not in caplog.text
    assert REDACTED in caplog.text


def test_json_serialization_is_refused() -> None:
    with pytest.raises(TypeError):
        json.dumps({"password": Secret("hunter2")})


def test_no_instance_dict() -> None:
    holder = Secret("hunter2")
    assert not hasattr(holder, "__dict__")
    with pytest.raises(AttributeError):
        holder.value = "other"  # type: ignore[attr-defined]


def test_secrets_cannot_nest() -> None:
    with pytest.raises(TypeError):
        Secret(Secret("hunter2"))  # type: ignore[arg-type]


def test_equality_compares_payloads() -> None:
    assert Secret(1) == Secret(1)
    assert Secret(1) != Secret(2)
    assert Secret("a") != "a"
    assert len({Secret("a"), Secret("a")}) == 1


def test_pickling_is_refused() -> None:
    with pytest.raises(TypeError):
        pickle.dumps(Secret("hunter2"))


def test_copies_share_the_holder() -> None:
    holder = Secret("hunter2")
    assert copy.copy(holder) is holder
    assert copy.deepcopy({"password": holder})["password"] is holder
