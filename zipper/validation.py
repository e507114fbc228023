"""Lightweight request payload validation utilities.

Checks the shape of inbound JSON bodies before they reach the board core;
numeric range rules stay in ``zipper.board.config.validate_config``.

Schema Mini-Language (Python dict):
{
  'field_name': ('type', required: bool, extras: dict)
}
Supported types: 'int', 'str', 'list', 'seed' (int or str)
Extras:
  min_len / max_len (list length)
  item_type (list element type; 'pair' means a 2-item list of ints)

If invalid: (False, {'field': 'size', 'error': 'expected int', 'code': 'type'})
If valid: (True, normalized_data)
"""
from __future__ import annotations
from typing import Any, Dict, Tuple


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_pair(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and len(value) == 2 and all(_is_int(v) for v in value)


CHECKS = {
    'int': _is_int,
    'str': lambda v: isinstance(v, str),
    'list': lambda v: isinstance(v, list),
    'seed': lambda v: _is_int(v) or isinstance(v, str),
}
ITEM_CHECKS = {
    'int': _is_int,
    'pair': _is_pair,
}


def _fail(field: str, message: str, code: str) -> Tuple[bool, Dict[str, Any]]:
    return False, {'field': field, 'error': message, 'code': code}


def validate(payload: Any, schema: Dict[str, tuple]) -> Tuple[bool, Dict[str, Any]]:
    if not isinstance(payload, dict):
        return _fail('__root__', 'payload must be an object', 'type')
    out = {}
    for name, spec in schema.items():
        type_name, required = spec[0], spec[1]
        extras = spec[2] if len(spec) > 2 else {}
        if name not in payload or payload[name] is None:
            if required:
                return _fail(name, 'missing required field', 'required')
            continue
        value = payload[name]
        if not CHECKS[type_name](value):
            return _fail(name, f'expected {type_name}', 'type')
        if type_name == 'list':
            if 'min_len' in extras and len(value) < extras['min_len']:
                return _fail(name, 'too short', 'min_len')
            if 'max_len' in extras and len(value) > extras['max_len']:
                return _fail(name, 'too long', 'max_len')
            item_type = extras.get('item_type')
            if item_type:
                check = ITEM_CHECKS[item_type]
                for idx, elem in enumerate(value):
                    if not check(elem):
                        return _fail(name, f'element {idx} not {item_type}', 'item_type')
                if item_type == 'pair':
                    value = [(int(a), int(b)) for a, b in value]
        out[name] = value
    return True, out


# Predefined schemas used by handlers
GENERATE_REQUEST = {
    'size': ('int', True),
    'nodes': ('int', True),
    'walls': ('int', True),
    'seed': ('seed', False),
}
CHECK_SOLUTION = {
    'size': ('int', True),
    'nodes': ('int', True),
    'walls': ('int', True),
    'seed': ('seed', True),
    # 20x20 is the largest board, so 400 moves is the longest real path
    'path': ('list', True, {'min_len': 1, 'max_len': 400, 'item_type': 'pair'}),
}
