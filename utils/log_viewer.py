from __future__ import annotations

import json
import os
from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Dict, Iterable, Iterator, List, Optional


def _app_root() -> str:
    # Same root LoggingHandler resolves relative log dirs against
    return os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def resolve_log_dir(config) -> str:
    raw = config.get_option('LOG', 'dir', fallback='logs') or 'logs'
    raw = os.path.expanduser(str(raw))
    return raw if os.path.isabs(raw) else os.path.join(_app_root(), raw)


def list_log_files(config) -> List[str]:
    """Dialog log files, oldest first; an explicit [LOG].file wins over the per-run files."""
    log_dir = resolve_log_dir(config)
    explicit = str(config.get_option('LOG', 'file', fallback='') or '').strip()
    if explicit:
        explicit = os.path.expanduser(explicit)
        return [explicit if os.path.isabs(explicit) else os.path.join(log_dir, explicit)]
    try:
        names = [n for n in os.listdir(log_dir) if n.startswith('dialogs') and n.endswith('.log')]
    except OSError:
        return []
    paths = [os.path.join(log_dir, n) for n in names]
    return sorted(paths, key=lambda p: (os.path.getmtime(p), p))


@dataclass
class ParsedLine:
    raw: str
    payload: Optional[Dict[str, Any]]


def _parse_jsonl_line(line: str) -> ParsedLine:
    raw = line.rstrip('\n')
    try:
        obj = json.loads(raw)
    except ValueError:
        return ParsedLine(raw=raw, payload=None)
    return ParsedLine(raw=raw, payload=obj if isinstance(obj, dict) else None)


def iter_log_lines(paths: Iterable[str]) -> Iterator[ParsedLine]:
    for path in paths:
        try:
            with open(path, 'r', encoding='utf-8', errors='replace') as f:
                for line in f:
                    if line.strip():
                        yield _parse_jsonl_line(line)
        except FileNotFoundError:
            continue


def _match(payload: Dict[str, Any], where: Dict[str, str]) -> bool:
    for key, expected in where.items():
        if str(payload.get(key) or '') != expected:
            return False
    return True


def format_line(payload: Dict[str, Any]) -> str:
    ts = payload.get('ts') or ''
    sev = payload.get('severity') or ''
    asp = payload.get('aspect') or ''
    event = payload.get('event') or ''
    comp = payload.get('component') or ''
    data = payload.get('data') if isinstance(payload.get('data'), dict) else {}
    extras = [f'{k}={data[k]}' for k in ('variant', 'how', 'value', 'submitted', 'title') if data.get(k) is not None]
    return f'{ts} {sev} {asp}:{event} {comp}' + ((' ' + ' '.join(extras)) if extras else '')


def show_events(
    paths: Iterable[str],
    *,
    limit: int = 200,
    where: Optional[Dict[str, str]] = None,
    json_output: bool = False,
) -> List[str]:
    """The newest ``limit`` matching events, oldest first; plain-text lines are skipped."""
    out: Deque[str] = deque(maxlen=limit if limit and limit > 0 else None)
    for parsed in iter_log_lines(paths):
        if parsed.payload is None or not _match(parsed.payload, where or {}):
            continue
        out.append(parsed.raw if json_output else format_line(parsed.payload))
    return list(out)
