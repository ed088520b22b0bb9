"""
IR (Intermediate Representation) module

Represents the raw foreign-function signatures the generator consumes,
either read from bindgen Rust output or from a JSON IR file.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import logging

from .config import load_json, validate_payload
from .errors import CodegenError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParamInfo:
    """Function parameter information"""
    name: str
    type: str


@dataclass(frozen=True)
class FuncInfo:
    """Function declaration information"""
    name: str
    params: tuple[ParamInfo, ...]
    ret: Optional[str] = None  # None for functions returning nothing
    comment: str = ''


@dataclass
class IR:
    """Intermediate representation of a bindgen module"""
    module: str
    prefix: str
    funcs: dict[str, FuncInfo] = field(default_factory=dict)

    @classmethod
    def load(cls, path: str, prefix: str) -> 'IR':
        """Load IR from a bindgen .rs file or a JSON IR file"""
        path = Path(path)
        if path.suffix == '.json':
            data = load_json(path)
            if not isinstance(data, dict):
                raise CodegenError(f"IR '{path}' must be a JSON object")
            data.setdefault('module', path.stem)
            data.setdefault('prefix', prefix)
            return cls.from_dict(data)
        try:
            source = path.read_text(encoding='utf-8')
        except OSError as exc:
            raise CodegenError(f"Unable to read bindgen source '{path}': {exc}") from exc
        return cls.from_bindgen(source, prefix, module=path.stem)

    @classmethod
    def from_bindgen(cls, source: str, prefix: str, module: str = '') -> 'IR':
        """Create IR from bindgen-generated Rust source"""
        from .bindgen import load_func_defs
        return cls._from_funcs(module, prefix, load_func_defs(source, prefix))

    @classmethod
    def from_dict(cls, data: dict) -> 'IR':
        """Create IR from a dictionary in the JSON IR layout"""
        validate_payload('ir', data)
        prefix = data.get('prefix', '')
        funcs = []
        for decl in data.get('decls', []):
            if decl.get('kind') != 'func':
                continue
            if not decl['name'].startswith(prefix):
                continue
            funcs.append(cls._parse_func(decl))
        return cls._from_funcs(data.get('module', ''), prefix, funcs)

    @classmethod
    def _from_funcs(cls, module: str, prefix: str, funcs: list[FuncInfo]) -> 'IR':
        ir = cls(module=module, prefix=prefix)
        for func in funcs:
            if func.name in ir.funcs:
                logger.warning(f'Duplicate declaration of {func.name}, keeping the first one')
                continue
            ir.funcs[func.name] = func
        return ir

    @staticmethod
    def _parse_func(decl: dict) -> FuncInfo:
        """Parse function declaration"""
        params = tuple(
            ParamInfo(name=p['name'], type=p['type'])
            for p in decl.get('params', [])
        )
        return FuncInfo(
            name=decl['name'],
            params=params,
            ret=decl.get('ret'),
            comment=decl.get('comment', ''),
        )

    def function_names(self) -> list[str]:
        """Names of all loaded functions, in declaration order"""
        return list(self.funcs)
