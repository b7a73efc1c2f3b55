"""Lightweight request payload validation utilities.

Provides minimal schema-like checking with clear, consistent error responses
for the generation endpoint and CLI. Not a general JSON Schema implementation.

Schema Mini-Language (Python dict):
{
  'field_name': ('type', required: bool, extras: dict)
}
Supported types: 'str', 'int', 'number', 'list', 'dict'
Extras examples:
  max_len (for str), allow_empty (str), nullable (any)
  min / max (int, number)
  item_type (list element primitive type), min_items (list)

Example:
 ok, data_or_err = validate(data, GENERATE_REQUEST)

If invalid: (False, {'field': 'hexagonCount', 'error': 'expected int', 'code': 'type'})
If valid: (True, normalized_data)
"""
from __future__ import annotations
from typing import Any, Dict, Tuple

PRIMITIVES = {
    'str': (str,),
    'int': (int,),
    'number': (int, float),
    'list': (list,),
    'dict': (dict,),
}


class ValidationError(ValueError):
    def __init__(self, field: str, message: str, code: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message
        self.code = code

    def to_dict(self):
        return {'field': self.field, 'error': self.message, 'code': self.code}


def _fail(field: str, message: str, code: str) -> Tuple[bool, Dict[str, Any]]:
    return False, {'field': field, 'error': message, 'code': code}


def _is_type(value, type_name: str) -> bool:
    # bool is an int subclass; never accept it for numeric fields
    if isinstance(value, bool) and type_name in ('int', 'number'):
        return False
    return isinstance(value, PRIMITIVES[type_name])


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
        if name not in payload:
            if required:
                return _fail(name, 'missing required field', 'required')
            continue
        value = payload[name]
        if value is None and extras.get('nullable'):
            out[name] = None
            continue
        if not _is_type(value, type_name):
            return _fail(name, f'expected {type_name}', 'type')
        if type_name == 'str':
            s = value.strip()
            if not extras.get('allow_empty') and len(s) == 0:
                return _fail(name, 'must not be empty', 'empty')
            if 'max_len' in extras and len(s) > extras['max_len']:
                return _fail(name, 'too long', 'max_len')
            out[name] = s
        elif type_name in ('int', 'number'):
            if 'min' in extras and value < extras['min']:
                return _fail(name, f'must be >= {extras["min"]}', 'min')
            if 'max' in extras and value > extras['max']:
                return _fail(name, f'must be <= {extras["max"]}', 'max')
            out[name] = value
        elif type_name == 'list':
            if len(value) < extras.get('min_items', 0):
                return _fail(name, 'too few items', 'min_items')
            item_type = extras.get('item_type')
            if item_type:
                if item_type not in PRIMITIVES:
                    return _fail('__schema__', f'unsupported item_type {item_type}', 'schema')
                for idx, elem in enumerate(value):
                    if not _is_type(elem, item_type):
                        return _fail(name, f'element {idx} not {item_type}', 'item_type')
            out[name] = value
        elif type_name == 'dict':
            out[name] = value
    return True, out


def validate_or_raise(payload: Any, schema: Dict[str, tuple]) -> Dict[str, Any]:
    ok, data = validate(payload, schema)
    if not ok:
        raise ValidationError(data['field'], data['error'], data['code'])
    return data


# Predefined schemas used by the generation endpoint
GENERATE_REQUEST = {
    'seed': ('str', False, {'nullable': True, 'allow_empty': True, 'max_len': 128}),
    'hexagonCount': ('int', False, {'nullable': True}),
    'options': ('dict', False, {'nullable': True}),
}
GENERATE_OPTIONS = {
    'corridorRatio': ('number', False, {'min': 0.0, 'max': 1.0}),
    'roomSizeMin': ('int', False, {'min': 1, 'max': 20}),
    'roomSizeMax': ('int', False, {'min': 1, 'max': 20}),
    'corridorWidth': ('list', False, {'item_type': 'int', 'min_items': 1}),
    'corridorWidths': ('list', False, {'item_type': 'int', 'min_items': 1}),
}
