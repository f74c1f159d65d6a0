from __future__ import annotations

import asyncio
import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from base_classes import DialogScopeError
from core.overrides import SLOTS, RendererSet
from core.provider import (
    ComponentContextProvider,
    DialogProvider,
    InputProvider,
    RendererScope,
    use_confirm,
    use_confirm_modal,
    use_dialog,
    use_input_dialog,
    use_renderer_overrides,
)
from ui.null import NullHost


def widget(name):
    def factory(*args, **kwargs):
        return name
    factory.__name__ = name
    return factory


BASE = RendererSet(**{slot: widget(f'default_{slot}') for slot in SLOTS})


def test_accessors_fail_outside_a_scope():
    for accessor, provider in (
        (use_confirm, 'DialogProvider'),
        (use_confirm_modal, 'DialogProvider'),
        (use_dialog, 'DialogProvider'),
        (use_input_dialog, 'InputProvider'),
    ):
        with pytest.raises(DialogScopeError) as info:
            accessor()
        assert provider in str(info.value)
        assert info.value.accessor == accessor.__name__


def test_dialog_provider_binds_and_restores():
    host = NullHost()
    with DialogProvider(host, base_renderers=BASE) as outer:
        assert use_dialog() is outer
        with DialogProvider(host, base_renderers=BASE) as inner:
            assert use_dialog() is inner
        assert use_dialog() is outer
        handle = use_confirm()(message='Save changes?')
        assert host.current.props.variant == 'dialog'
        host.current.props.on_confirm()
        assert handle.result() is True
        use_confirm_modal()(message='Really?')
        assert host.current.props.variant == 'modal'
    with pytest.raises(DialogScopeError):
        use_dialog()


def test_input_provider_does_not_provide_confirmation():
    with InputProvider(NullHost(), base_renderers=BASE) as forms:
        assert use_input_dialog() is forms
        with pytest.raises(DialogScopeError):
            use_confirm()


def test_component_context_provider_shares_the_host():
    host = NullHost()
    with ComponentContextProvider(host, base_renderers=BASE) as ctx:
        assert use_dialog() is ctx.dialogs.orchestrator
        assert use_input_dialog() is ctx.inputs.orchestrator
        use_confirm()(message='m')
        use_input_dialog().collect(fields=[{'name': 'x'}])
        assert len(host.shown) == 2
    with pytest.raises(DialogScopeError):
        use_input_dialog()


def test_renderer_scopes_layer_and_reach_requests():
    host = NullHost()
    outer_button = widget('outer_button')
    inner_select = widget('inner_select')
    assert use_renderer_overrides() == RendererSet()
    with RendererScope({'Button': outer_button}):
        with RendererScope(RendererSet(select=inner_select)) as effective:
            assert effective.button is outer_button
            assert effective.select is inner_select
            with DialogProvider(host, base_renderers=BASE):
                use_confirm()(message='m')
                renderers = host.current.props.renderers
                assert renderers.button is outer_button
                assert renderers.select is inner_select
                assert renderers.checkbox is BASE.checkbox
        assert use_renderer_overrides().select is None
    assert use_renderer_overrides() == RendererSet()


def test_provider_renderers_beat_scope_and_lose_to_call_site():
    host = NullHost()
    scope_button = widget('scope_button')
    provider_button = widget('provider_button')
    call_button = widget('call_button')
    with RendererScope({'button': scope_button}):
        with DialogProvider(host, renderers={'button': provider_button}, base_renderers=BASE):
            use_confirm()(message='m')
            assert host.current.props.renderers.button is provider_button
            use_dialog().cancel()
            use_confirm()(message='m', renderer_override={'button': call_button})
            assert host.current.props.renderers.button is call_button


def test_scope_is_visible_inside_tasks_started_within_it():
    async def scenario():
        host = NullHost()
        with DialogProvider(host, base_renderers=BASE):
            async def ask():
                return await use_confirm()(message='From a task')
            task = asyncio.ensure_future(ask())
            await asyncio.sleep(0)
            host.current.props.on_cancel()
            return await task

    assert asyncio.run(scenario()) is False
