from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from config_manager import ConfigManager
from core.requests import DialogDefaults


def test_fix_values_normalises_strings():
    assert ConfigManager.fix_values('true') is True
    assert ConfigManager.fix_values(' off ') is False
    assert ConfigManager.fix_values('2000') == 2000
    assert ConfigManager.fix_values('"quoted"') == 'quoted'
    assert ConfigManager.fix_values('[a, b]') == ['a', 'b']
    assert ConfigManager.fix_values('{label} is required') == '{label} is required'


def test_shipped_defaults_match_dialog_defaults():
    config = ConfigManager()
    assert config.get_option('DIALOGS', 'modal_closable') is False
    assert config.get_option('DIALOGS', 'missing', fallback='x') == 'x'
    assert config.get_option('NOPE', 'missing') is None
    assert DialogDefaults.from_config(config) == DialogDefaults()


def test_custom_file_overrides_labels_and_flags(tmp_path: Path):
    cfg_path = tmp_path / "custom.ini"
    cfg_path.write_text(
        "[DIALOGS]\n"
        "confirm_label = Yes\n"
        "cancel_label = No\n"
        "submit_label = \"Off\"\n"
        "modal_closable = yes\n"
        "required_message = Please fill in {label}\n",
        encoding="utf-8",
    )
    config = ConfigManager(str(cfg_path))
    defaults = DialogDefaults.from_config(config)
    assert defaults.confirm_label == 'Yes'
    assert defaults.modal_closable is True
    assert defaults.required_message == 'Please fill in {label}'
    assert defaults.cancel_label == 'No'
    assert defaults.submit_label == 'Off'
    assert config.get_raw('DIALOGS', 'confirm_label') == 'Yes'
    assert config.get_option('DIALOGS', 'confirm_label') is True
    assert config.get_raw('DIALOGS', 'missing', fallback='x') == 'x'


def test_missing_custom_file_raises(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        ConfigManager(str(tmp_path / "absent.ini"))


def test_from_config_without_config():
    assert DialogDefaults.from_config(None) == DialogDefaults()
