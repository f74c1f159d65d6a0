from __future__ import annotations

import json
import os
import traceback
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


def _now_iso() -> str:
    return datetime.now(timezone.utc).strftime('%Y-%m-%dT%H:%M:%S.%fZ')


def _safe_str(x: Any) -> str:
    try:
        return str(x)
    except Exception:
        return '<unprintable>'


class LoggingHandler:
    """
    Event log for the dialog layer, gated per aspect.

    - Aspects: settings, dialogs, forms, tui, errors
    - Levels: off < basic (alias minimal) < detail < trace, set with
      [LOG].log_<aspect> or for every aspect at once with [LOG].verbosity
    - Output: one JSON object or one text line per event, appended to a
      per-run file (dialogs-<run_id>.log) or to [LOG].file
    - Payload data is redacted by key and long strings are truncated
    """

    _LEVELS = {
        'off': 0,
        'minimal': 1,
        'basic': 1,
        'detail': 2,
        'trace': 3,
    }

    _DEFAULTS = {
        'settings': 'basic',
        'dialogs': 'basic',
        'forms': 'basic',
        'tui': 'off',
        'errors': 'basic',
    }

    _REDACT_KEYS = ('password', 'secret', 'token', 'api_key')

    def __init__(self, config, output_handler=None) -> None:
        self._config = config
        self._output = output_handler
        self._active: bool = bool(self._get('active', False))
        fmt = str(self._get('format', 'json') or 'json').strip().lower()
        self._text: bool = fmt == 'text'
        self._mirror: bool = bool(self._get('mirror_to_console', False))
        self._redact: bool = bool(self._get('redact', True))
        self._redact_keys: List[str] = self._parse_redact_keys(self._get('redact_keys', None))
        self._truncate: int = int(self._get('truncate_chars', 2000) or 2000)

        verbosity = self._get('verbosity', None)
        self._aspects: Dict[str, int] = {}
        for aspect, default in self._DEFAULTS.items():
            raw = self._get(f'log_{aspect}', None)
            name = raw if isinstance(raw, str) and raw.strip() else verbosity if isinstance(verbosity, str) else default
            self._aspects[aspect] = self._LEVELS.get(name.strip().lower(), 0)

        self._run_id = datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')
        self._log_path: Optional[str] = self._open_logfile() if self._active else None

    # --- Public helpers -------------------------------------------------
    def active(self) -> bool:
        return bool(self._active and self._log_path)

    @property
    def path(self) -> Optional[str]:
        return self._log_path

    def settings(self, effective: dict) -> None:
        self._emit('settings', 'basic', 'settings', 'config', 'info', effective)

    def dialog_event(self, kind: str, details: dict, component: str = 'core.confirmation'):
        self._emit('dialogs', 'basic', kind, component, 'info', details)

    def dialog_warning(self, kind: str, details: dict, component: str = 'core.confirmation'):
        self._emit('dialogs', 'minimal', kind, component, 'warning', details)

    def form_event(self, kind: str, details: dict, component: str = 'core.input_form'):
        self._emit('forms', 'basic', kind, component, 'info', details)

    def form_detail(self, kind: str, details: dict, component: str = 'core.input_form'):
        """Per-keystroke traffic; emits only when [LOG].log_forms >= detail."""
        self._emit('forms', 'detail', kind, component, 'info', details)

    def tui_event(self, kind: str, details: dict, component: str = 'tui'):
        self._emit('tui', 'basic', kind, component, 'info', details)

    def error(self, where: str, exc: BaseException, *, stack: Optional[str] = None):
        stack = stack or ''.join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        self._emit('errors', 'basic', 'error', where, 'error', {'message': _safe_str(exc), 'stack': stack})

    # --- Internals ------------------------------------------------------
    def _get(self, key: str, fallback: Any = None) -> Any:
        try:
            return self._config.get_option('LOG', key, fallback)
        except Exception:
            return fallback

    def _parse_redact_keys(self, raw: Any) -> List[str]:
        if isinstance(raw, str) and raw.strip():
            raw = raw.split(',')
        if isinstance(raw, list):
            keys = [str(k).strip().lower() for k in raw if str(k).strip()]
            if keys:
                return keys
        return list(self._REDACT_KEYS)

    def _open_logfile(self) -> Optional[str]:
        # Relative dirs resolve against the project root, like ConfigManager's files
        root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        log_dir = os.path.expanduser(str(self._get('dir', 'logs') or 'logs'))
        if not os.path.isabs(log_dir):
            log_dir = os.path.join(root, log_dir)
        explicit = os.path.expanduser(str(self._get('file', '') or '').strip())
        if explicit:
            path = explicit if os.path.isabs(explicit) else os.path.join(log_dir, explicit)
        elif self._get('per_run', True):
            path = os.path.join(log_dir, f'dialogs-{self._run_id}.log')
        else:
            path = os.path.join(log_dir, 'dialogs.log')
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, 'a', encoding='utf-8'):
                pass
        except OSError:
            return None
        return path

    def _enabled(self, aspect: str, min_level: str) -> bool:
        if not self.active():
            return False
        return self._aspects.get(aspect, 0) >= self._LEVELS.get(min_level, 1)

    def _scrub(self, obj: Any) -> Any:
        if isinstance(obj, str):
            if self._truncate and len(obj) > self._truncate:
                return obj[: self._truncate] + '…'
            return obj
        if isinstance(obj, dict):
            return {
                _safe_str(k): '***redacted***' if self._redact and _safe_str(k).lower() in self._redact_keys else self._scrub(v)
                for k, v in obj.items()
            }
        if isinstance(obj, (list, tuple)):
            return [self._scrub(x) for x in obj]
        return obj

    def _emit(self, aspect: str, min_level: str, event: str, component: str, severity: str, data: Optional[dict]) -> None:
        if not self._enabled(aspect, min_level):
            return
        payload = {
            'ts': _now_iso(),
            'run_id': self._run_id,
            'event': event,
            'component': component,
            'aspect': aspect,
            'severity': severity,
            'data': self._scrub(data or {}),
        }
        line = self._as_text(payload) if self._text else self._as_json(payload)
        try:
            with open(self._log_path, 'a', encoding='utf-8') as f:
                f.write(line + '\n')
        except OSError:
            pass
        if self._mirror and self._output is not None:
            try:
                (self._output.write if self._text else self._output.debug)(line)
            except Exception:
                pass

    @staticmethod
    def _as_json(payload: Dict[str, Any]) -> str:
        try:
            return json.dumps(payload, ensure_ascii=False)
        except (TypeError, ValueError):
            return json.dumps(dict(payload, data=_safe_str(payload['data'])), ensure_ascii=False)

    @staticmethod
    def _as_text(payload: Dict[str, Any]) -> str:
        pairs = []
        for key, value in payload['data'].items():
            if isinstance(value, (dict, list)):
                try:
                    value = json.dumps(value, ensure_ascii=False)
                except (TypeError, ValueError):
                    value = _safe_str(value)
            pairs.append(f'{key}={value}')
        head = f"[{payload['ts']}] {payload['component']} {payload['aspect']}:{payload['event']}"
        return head + ' ' + ' '.join(pairs)
