from __future__ import annotations

import asyncio
import os
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from textual.app import App, ComposeResult
from textual.widgets import Static

from core.confirmation import ConfirmationOrchestrator
from core.input_form import InputFormOrchestrator
from core.provider import ComponentContextProvider
from tui.app import DialogDemoApp
from tui.host import TextualHost
from tui.screens.confirmation_modal import ConfirmationModal
from tui.screens.input_form_modal import InputFormModal


class HostApp(App):
    def compose(self) -> ComposeResult:
        yield Static("host")


class EventRecorder:
    def __init__(self):
        self.events = []

    def tui_event(self, kind, details, component=None):
        self.events.append((kind, details))


def test_confirm_button_settles_true_and_closes_screen():
    async def scenario():
        app = HostApp()
        async with app.run_test() as pilot:
            orch = ConfirmationOrchestrator(TextualHost(app))
            handle = orch.ask(message='Delete this item?', title='Delete')
            await pilot.pause()
            assert isinstance(app.screen, ConfirmationModal)
            await pilot.click('#confirm')
            await pilot.pause()
            assert handle.result() is True
            assert not isinstance(app.screen, ConfirmationModal)
            assert orch.pending is None

    asyncio.run(scenario())


def test_escape_only_cancels_closable_variant():
    async def scenario():
        app = HostApp()
        async with app.run_test() as pilot:
            orch = ConfirmationOrchestrator(TextualHost(app))
            modal = orch.ask_modal(message='Discard changes?')
            await pilot.pause()
            assert app.screen.has_class('-blur')
            await pilot.press('escape')
            await pilot.pause()
            assert not modal.done()
            assert isinstance(app.screen, ConfirmationModal)
            await pilot.click('#cancel')
            await pilot.pause()
            assert modal.result() is False

            dialog = orch.ask(message='Leave?')
            await pilot.pause()
            await pilot.press('escape')
            await pilot.pause()
            assert dialog.result() is False
            assert not isinstance(app.screen, ConfirmationModal)

    asyncio.run(scenario())


def test_input_form_shows_errors_then_submits():
    async def scenario():
        app = HostApp()
        async with app.run_test() as pilot:
            orch = InputFormOrchestrator(TextualHost(app))
            handle = orch.collect(
                title='Profile',
                fields=[
                    {'name': 'name', 'label': 'Name', 'required': True},
                    {'name': 'age', 'label': 'Age', 'type': 'number'},
                ],
            )
            await pilot.pause()
            screen = app.screen
            assert isinstance(screen, InputFormModal)
            assert not screen.query_one('#error_0').has_class('-visible')

            await pilot.press('enter')
            await pilot.pause()
            assert not handle.done()
            assert screen.query_one('#error_0').has_class('-visible')
            assert orch.state.errors == {'name': 'Name is required'}

            await pilot.press('A', 'd', 'a')
            await pilot.pause()
            assert orch.state.values['name'] == 'Ada'
            assert not screen.query_one('#error_0').has_class('-visible')

            await pilot.press('enter')
            await pilot.pause()
            result = handle.result()
            assert result.submitted is True
            assert result.values['name'] == 'Ada'
            assert not isinstance(app.screen, InputFormModal)

    asyncio.run(scenario())


def test_demo_app_runs_confirmation_through_provider():
    async def scenario():
        recorder = EventRecorder()
        app = DialogDemoApp(logger=recorder)
        with ComponentContextProvider(TextualHost(app)):
            async with app.run_test() as pilot:
                await pilot.click('#open_confirm')
                await pilot.pause()
                assert isinstance(app.screen, ConfirmationModal)
                await pilot.click('#confirm')
                await app.workers.wait_for_complete()
                await pilot.pause()
        assert recorder.events == [('demo_result', {'kind': 'dialog', 'ok': True})]

    asyncio.run(scenario())


def test_demo_app_starts_without_event_logger():
    async def scenario():
        app = DialogDemoApp()
        with ComponentContextProvider(TextualHost(app)):
            async with app.run_test() as pilot:
                await pilot.press('m')
                await pilot.pause()
                assert isinstance(app.screen, ConfirmationModal)
                assert app.screen.has_class('-blur')
                await pilot.click('#cancel')
                await app.workers.wait_for_complete()
                await pilot.pause()
                assert not isinstance(app.screen, ConfirmationModal)

    asyncio.run(scenario())
