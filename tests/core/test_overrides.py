from __future__ import annotations

import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from core.overrides import SLOTS, RendererSet, merge, resolve, with_slot


def widget(name):
    def factory(*args, **kwargs):
        return name
    factory.__name__ = name
    return factory


DEFAULTS = RendererSet(**{slot: widget(f'default_{slot}') for slot in SLOTS})
A = widget('A')
B = widget('B')


def test_per_call_wins_over_global():
    effective = resolve(RendererSet(button=A), RendererSet(button=B), DEFAULTS)
    assert effective.button is B


def test_empty_per_call_falls_back_to_global():
    effective = resolve(RendererSet(button=A), {}, DEFAULTS)
    assert effective.button is A


def test_unset_slots_fall_back_to_defaults_and_result_is_complete():
    effective = resolve(None, None, DEFAULTS)
    assert effective == DEFAULTS
    partial = resolve({'Select': A}, {'checkbox': B}, DEFAULTS)
    assert partial.select is A
    assert partial.checkbox is B
    assert partial.text_input is DEFAULTS.text_input
    assert partial.is_complete()


def test_merge_left_to_right_and_pascal_case_aliases():
    merged = merge({'Button': A, 'TextInput': A}, RendererSet(button=B), None)
    assert merged.button is B
    assert merged.text_input is A
    assert merged.select is None
    with pytest.raises(KeyError):
        RendererSet.from_mapping({'Slider': A})


def test_with_slot_and_get():
    updated = with_slot(DEFAULTS, 'confirmation', A)
    assert updated.get('confirmation') is A
    assert with_slot(DEFAULTS, 'button', None) is DEFAULTS
    with pytest.raises(KeyError):
        DEFAULTS.get('nope')


def test_builtin_defaults_are_complete():
    effective = resolve()
    assert effective.is_complete()
