"""
Argument model

Produces the four code fragments a single wrapped parameter contributes:
its declaration in the safe signature, the statements run before the raw
call, the expression passed to the raw call, and the statements run after.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .codegen import render_type, rust_ident
from .errors import ArrayArgument, VoidPtrArgument
from .types import ClassifiedType

if TYPE_CHECKING:
    from .config import GeneratorConfig


@dataclass(frozen=True)
class Arg:
    """A function parameter with its classified type"""
    name: str
    typ: ClassifiedType

    @property
    def ident(self) -> str:
        """Parameter name as a valid Rust identifier"""
        return rust_ident(self.name)

    @property
    def raw_ident(self) -> str:
        """Name of the temporary holding a surrendered raw buffer"""
        return f'{self.name}_raw'

    def type_code(self, config: 'GeneratorConfig') -> str:
        """Safe Rust type for this parameter

        Raises ArrayArgument or VoidPtrArgument for shapes that have no safe
        representation.
        """
        typ = self.typ
        if typ.is_array:
            raise ArrayArgument(typ.literal)
        elif typ.is_const_str:
            return f'&{config.cstr_type}'
        elif typ.is_mut_str:
            return f'&mut {config.cstring_type}'
        elif typ.is_const_native_object:
            return f'&{config.widget_type}'
        elif typ.is_mut_native_object:
            return f'&mut {config.widget_type}'
        elif typ.is_const_style:
            return f'&{config.style_type}'
        elif typ.is_mut_style:
            return f'&mut {config.style_type}'
        elif typ.is_void_pointer:
            raise VoidPtrArgument(typ.literal)
        raw = render_type(typ.raw_name)
        if typ.is_mut_pointer:
            return f'&mut {raw}'
        elif typ.is_pointer:
            return f'&{raw}'
        return raw

    def declaration(self, config: 'GeneratorConfig') -> str:
        """Parameter binding in the wrapper signature"""
        return f'{self.ident}: {self.type_code(config)}'

    def pre_call(self, config: 'GeneratorConfig') -> list[str]:
        """Statements run before the raw call"""
        if self.typ.is_mut_str:
            # Hand a raw buffer to the callee; post_call takes ownership back
            return [f'let {self.raw_ident} = {self.ident}.clone().into_raw();']
        return []

    def call_expression(self) -> str:
        """Expression passed to the raw foreign function"""
        typ = self.typ
        if typ.is_const_str:
            return f'{self.ident}.as_ptr()'
        elif typ.is_mut_str:
            return self.raw_ident
        elif typ.is_const_native_object or typ.is_const_style:
            return f'{self.ident}.raw()'
        elif typ.is_mut_native_object or typ.is_mut_style:
            return f'{self.ident}.raw_mut()'
        return self.ident

    def post_call(self, config: 'GeneratorConfig') -> list[str]:
        """Statements run after the raw call"""
        if self.typ.is_mut_str:
            return [f'*{self.ident} = {config.cstring_type}::from_raw({self.raw_ident});']
        return []
