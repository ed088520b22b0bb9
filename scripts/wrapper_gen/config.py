"""
Generator configuration

Holds the target vocabulary (safe handle types, sys crate, prefix) and the
deny-list. A configuration is built once per Generator; target profiles in
`bindings/` or a JSON file supply the values.
"""

import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import jsonschema

from .errors import CodegenError
from .types import DEFAULT_OBJECT_TYPES, DEFAULT_STYLE_TYPES

logger = logging.getLogger(__name__)

SCHEMA_DIR = Path(__file__).resolve().parent / 'schemas'


@dataclass
class GeneratorConfig:
    """Target vocabulary and deny-list for one generation run"""
    prefix: str = 'lv_'
    sys_crate: str = 'lightvgl_sys'
    widget_type: str = 'crate::widgets::Wdg'
    widget_short: str = 'Wdg'
    style_type: str = 'crate::styles::Style'
    cstr_type: str = 'CStr'
    cstring_type: str = '::alloc::ffi::CString'
    object_types: list[str] = field(default_factory=lambda: list(DEFAULT_OBJECT_TYPES))
    style_types: list[str] = field(default_factory=lambda: list(DEFAULT_STYLE_TYPES))
    object_widget: str = 'obj'
    reserved_widgets: list[str] = field(default_factory=lambda: ['obj', 'style'])
    blacklist: set[str] = field(default_factory=set)
    guard_str_returns: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'GeneratorConfig':
        """Create a config from a (schema-validated) dictionary"""
        validate_payload('config', data)
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        if 'blacklist' in values:
            values['blacklist'] = set(values['blacklist'])
        return cls(**values)

    def is_blacklisted(self, func_name: str) -> bool:
        return func_name in self.blacklist


def load_json(path: Path) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding='utf-8'))
    except OSError as exc:
        raise CodegenError(f"Unable to read JSON file '{path}': {exc}") from exc
    except json.JSONDecodeError as exc:
        raise CodegenError(f"Invalid JSON in '{path}': {exc}") from exc


def get_schema_path(kind: str) -> Path:
    mapping = {
        'config': SCHEMA_DIR / 'config.schema.json',
        'ir': SCHEMA_DIR / 'ir.schema.json',
    }
    if kind not in mapping:
        raise CodegenError(f'Unknown schema kind: {kind}')
    return mapping[kind]


def validate_payload(kind: str, payload: Any):
    """Validate a JSON payload against one of the bundled schemas"""
    schema = load_json(get_schema_path(kind))
    try:
        jsonschema.validate(payload, schema)
    except jsonschema.ValidationError as exc:
        raise CodegenError(f'{kind} failed JSON schema validation: {exc.message}') from exc


def load_config(path: Path) -> GeneratorConfig:
    """Load a GeneratorConfig from a JSON file"""
    logger.info(f'Loading generator config from {path}')
    data = load_json(path)
    return GeneratorConfig.from_dict(data)
