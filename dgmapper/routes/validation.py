"""Lightweight request payload validation for the map API.

Provides minimal schema-like checking with clear, consistent error responses
instead of a full JSON Schema implementation.

Schema Mini-Language (Python dict):
{
  'field_name': ('type', required: bool, extras: dict)
}
Supported types: 'str', 'int', 'list'
Extras:
  max_len / min_len (str; strings are stripped and must not be empty)
  item_type (list element primitive type), max_items (list)
  min / max (int)

Example:
 ok, data_or_err = validate(request.get_json(silent=True), MAP_PAYLOAD)

If invalid: (False, {'field': 'map', 'error': 'too long', 'code': 'max_len'})
If valid: (True, normalized_data)
"""
from __future__ import annotations
from typing import Any, Dict, Tuple

PRIMITIVES = {
    'str': str,
    'int': int,
    'list': list,
}


def _fail(field: str, message: str, code: str) -> Tuple[bool, Dict[str, Any]]:
    return False, {'field': field, 'error': message, 'code': code}


def _check_str(name: str, value: str, extras: dict):
    s = value.strip()
    if not s:
        return _fail(name, 'must not be empty', 'empty')
    if 'max_len' in extras and len(value) > extras['max_len']:
        return _fail(name, 'too long', 'max_len')
    if 'min_len' in extras and len(s) < extras['min_len']:
        return _fail(name, 'too short', 'min_len')
    return True, s


def validate(payload: Any, schema: Dict[str, tuple]) -> Tuple[bool, Dict[str, Any]]:
    if not isinstance(payload, dict):
        return _fail('__root__', 'payload must be an object', 'type')
    out = {}
    for name, spec in schema.items():
        if not isinstance(spec, tuple) or len(spec) < 2:
            return _fail('__schema__', f'invalid spec for {name}', 'schema')
        type_name, required = spec[0], spec[1]
        extras = spec[2] if len(spec) > 2 else {}
        if type_name not in PRIMITIVES:
            return _fail('__schema__', f'unsupported type {type_name}', 'schema')
        if name not in payload or payload[name] is None:
            if required:
                return _fail(name, 'missing required field', 'required')
            continue
        value = payload[name]
        py_type = PRIMITIVES[type_name]
        # bool is an int subclass; reject it for int fields
        if not isinstance(value, py_type) or (type_name == 'int' and isinstance(value, bool)):
            return _fail(name, f'expected {type_name}', 'type')
        if type_name == 'str':
            ok, res = _check_str(name, value, extras)
            if not ok:
                return ok, res
            out[name] = res
        elif type_name == 'int':
            if 'min' in extras and value < extras['min']:
                return _fail(name, 'too small', 'min')
            if 'max' in extras and value > extras['max']:
                return _fail(name, 'too large', 'max')
            out[name] = value
        elif type_name == 'list':
            if 'max_items' in extras and len(value) > extras['max_items']:
                return _fail(name, 'too many items', 'max_items')
            item_type = extras.get('item_type')
            if item_type:
                it = PRIMITIVES.get(item_type)
                if not it:
                    return _fail('__schema__', f'unsupported item_type {item_type}', 'schema')
                for idx, elem in enumerate(value):
                    if not isinstance(elem, it):
                        return _fail(name, f'element {idx} not {item_type}', 'item_type')
            out[name] = value
    return True, out


# Predefined schemas used by the map API
MAP_PAYLOAD = {
    'map': ('str', True, {'min_len': 9, 'max_len': 8192}),
}
MAP_POINT_PAYLOAD = {
    'map': ('str', True, {'min_len': 9, 'max_len': 8192}),
    'point': ('str', True, {'min_len': 2, 'max_len': 4}),
}
MAP_POINTS_PAYLOAD = {
    'map': ('str', True, {'min_len': 9, 'max_len': 8192}),
    'points': ('list', True, {'item_type': 'str', 'max_items': 1024}),
}
SAMPLE_QUERY = {
    'seed': ('int', False, {'min': 0}),
    'rooms': ('int', False, {'min': 1, 'max': 4096}),
}
