# tests/unit/core/test_errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest

from nestfsm.core.errors import ChannelClosedError, FSMError, InactiveStateError, StateNotFoundError, ValidationError


def test_error_hierarchy():
    assert issubclass(ValidationError, FSMError)
    assert issubclass(StateNotFoundError, ValidationError)
    assert issubclass(InactiveStateError, FSMError)
    assert issubclass(ChannelClosedError, FSMError)


def test_inactive_state_is_not_a_precondition_violation():
    assert not issubclass(InactiveStateError, ValidationError)


@pytest.mark.parametrize(
    "error_class", [FSMError, ValidationError, StateNotFoundError, InactiveStateError, ChannelClosedError]
)
def test_exceptions_instantiation(error_class):
    e = error_class("Something broke")
    assert str(e) == "Something broke"
