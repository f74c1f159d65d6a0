from __future__ import annotations

import os
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from core.fields import FieldSpec
from core.form_state import FormState


def test_initial_values_one_entry_per_field():
    state = FormState([
        FieldSpec(name='name'),
        FieldSpec(name='subscribe', kind='checkbox'),
        FieldSpec(name='age', kind='number', default_value=30),
    ])
    assert state.values == {'name': '', 'subscribe': False, 'age': 30}
    assert state.errors == {}


def test_set_value_clears_error_and_calls_on_change():
    seen = []
    state = FormState([FieldSpec(name='email', on_change=seen.append)])
    state.set_errors({'email': 'invalid'})
    assert state.set_value('email', 'a@b') is True
    assert state.values['email'] == 'a@b'
    assert 'email' not in state.errors
    assert seen == ['a@b']


def test_set_value_is_idempotent():
    state = FormState([FieldSpec(name='x')])
    state.set_value('x', 'same')
    first = dict(state.values)
    state.set_value('x', 'same')
    assert state.values == first
    assert 'x' not in state.errors


def test_on_change_failure_does_not_corrupt_state():
    failures = []

    def explode(value):
        raise RuntimeError('listener broke')

    state = FormState([FieldSpec(name='x', on_change=explode)])
    state.set_errors({'x': 'old'})
    assert state.set_value('x', 'new', on_callback_error=lambda f, e: failures.append((f.name, str(e))))
    assert state.values == {'x': 'new'}
    assert state.errors == {}
    assert failures == [('x', 'listener broke')]


def test_unknown_field_is_ignored_and_errors_filtered():
    state = FormState([FieldSpec(name='x')])
    assert state.set_value('ghost', 1) is False
    assert state.values == {'x': ''}
    state.set_errors({'x': 'bad', 'ghost': 'nope', 'empty': ''})
    assert state.errors == {'x': 'bad'}
    snap = state.snapshot()
    snap['x'] = 'changed'
    assert state.values['x'] == ''
