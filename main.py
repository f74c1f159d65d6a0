import json
import sys

import click

from config_manager import ConfigManager
from core.fields import FieldKind, FieldSpec
from core.provider import ComponentContextProvider
from core.requests import ConfirmOptions, DialogDefaults, InputFormOptions
from utils.logging_utils import LoggingHandler


def parse_field(raw: str) -> FieldSpec:
    """Parse NAME[:KIND][:required] as given to --field."""
    parts = [p.strip() for p in raw.split(':')]
    name = parts[0]
    if not name:
        raise click.BadParameter(f'Field is missing a name: {raw!r}')
    kind = FieldKind.TEXT
    required = False
    for part in parts[1:]:
        if not part:
            continue
        if part.lower() == 'required':
            required = True
            continue
        try:
            kind = FieldKind(part.lower())
        except ValueError:
            choices = ', '.join(k.value for k in FieldKind)
            raise click.BadParameter(f'Unknown field kind {part!r} (choose from {choices})')
    return FieldSpec(name=name, label=name.replace('_', ' ').capitalize(), kind=kind, required=required)


def _run_prompt(ctx, request: tuple):
    from tui.app import PromptApp
    from tui.host import TextualHost

    config = ctx.obj['CONFIG_MANAGER']
    app = PromptApp(request, title=config.get_option('TUI', 'title', fallback=None))
    with ComponentContextProvider(TextualHost(app), defaults=ctx.obj['DEFAULTS'], logger=ctx.obj['LOGGER']):
        return app.run()


@click.group()
@click.option('-c', '--conf', default=None, help='Path to a custom configuration file')
@click.pass_context
def cli(ctx, conf):
    """
    Confirmation and input dialogs in the terminal
    """
    ctx.ensure_object(dict)
    config_manager = ConfigManager(conf)
    logger = LoggingHandler(config_manager)
    logger.settings({'dialogs': config_manager.get_section('DIALOGS')})
    ctx.obj['CONFIG_MANAGER'] = config_manager
    ctx.obj['DEFAULTS'] = DialogDefaults.from_config(config_manager)
    ctx.obj['LOGGER'] = logger


@cli.command()
@click.argument('message')
@click.option('-t', '--title', default=None, help='Dialog title')
@click.option('--modal', is_flag=True, default=False, help='Use the modal variant (no backdrop dismissal)')
@click.option('--confirm-label', default=None, help='Label of the confirm button')
@click.option('--cancel-label', default=None, help='Label of the cancel button')
@click.pass_context
def confirm(ctx, message, title, modal, confirm_label, cancel_label):
    """Ask a yes/no question; exit code 0 when confirmed, 1 otherwise."""
    options = ConfirmOptions(message=message, title=title, confirm_label=confirm_label, cancel_label=cancel_label)
    answer = _run_prompt(ctx, ('modal' if modal else 'confirm', options))
    sys.exit(0 if answer else 1)


@cli.command(name='input')
@click.option('-f', '--field', 'fields', multiple=True, required=True, help='NAME[:KIND][:required], repeatable')
@click.option('-t', '--title', default=None, help='Form title')
@click.option('-d', '--description', default=None, help='Text shown under the title')
@click.option('--submit-label', default=None, help='Label of the submit button')
@click.pass_context
def input_form(ctx, fields, title, description, submit_label):
    """Collect values for the given fields and print them as JSON."""
    specs = [parse_field(raw) for raw in fields]
    options = InputFormOptions(fields=specs, title=title, description=description, confirm_label=submit_label)
    result = _run_prompt(ctx, ('input', options))
    if result is None or not result.submitted:
        sys.exit(1)
    click.echo(json.dumps(result.values))


@cli.command()
@click.pass_context
def demo(ctx):
    """Open the demo app with one button per dialog flavour."""
    from tui.app import DialogDemoApp
    from tui.host import TextualHost

    config = ctx.obj['CONFIG_MANAGER']
    app = DialogDemoApp(title=config.get_option('TUI', 'title', fallback=None), logger=ctx.obj['LOGGER'])
    with ComponentContextProvider(TextualHost(app), defaults=ctx.obj['DEFAULTS'], logger=ctx.obj['LOGGER']):
        app.run()


@cli.group()
def logs():
    """Inspect the dialog event logs."""


@logs.command(name='show')
@click.option('-e', '--event', default=None, help='Only events with this name (ask, settle, invalid, ...)')
@click.option('-a', '--aspect', default=None, help='Only this aspect (dialogs, forms, tui, errors, settings)')
@click.option('--component', default=None, help='Only this component (core.confirmation, ...)')
@click.option('-n', '--limit', default=200, show_default=True, type=int, help='Show only the most recent N matching events')
@click.option('--json', 'json_output', is_flag=True, default=False, help='Print the raw JSON lines')
@click.pass_context
def logs_show(ctx, event, aspect, component, limit, json_output):
    """Print logged dialog events, oldest first."""
    from utils.log_viewer import list_log_files, show_events

    where = {k: v for k, v in (('event', event), ('aspect', aspect), ('component', component)) if v}
    paths = list_log_files(ctx.obj['CONFIG_MANAGER'])
    if not paths:
        click.echo('No log files found', err=True)
        return
    for line in show_events(paths, limit=limit, where=where, json_output=json_output):
        click.echo(line)


if __name__ == '__main__':
    cli()
