"""
Function wrapper generation module

Generates a safe Rust wrapper for one foreign function, or raises the
SkipReason explaining why it cannot be wrapped. A wrapper is built from four
independent phases (declarations, pre-call statements, call arguments,
post-call statements) which `code()` assembles.
"""

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from .arg import Arg
from .codegen import CodeGen, render_type
from .errors import Blacklisted, Constructor, ReturnArray
from .types import ClassifiedType, TypeClassifier

if TYPE_CHECKING:
    from .config import GeneratorConfig
    from .ir import FuncInfo
    from .widget import Widget


@dataclass(frozen=True)
class ReturnShape:
    """How the raw result is bound and converted"""
    type_code: str = ''        # wrapper return type, '' for none
    binding: str = ''          # name the raw result is bound to, '' for tail call
    expr: tuple[str, ...] = ()  # lines of the final expression


@dataclass(frozen=True)
class Func:
    """A foreign function and its safe wrapper"""
    name: str
    args: tuple[Arg, ...]
    ret: Optional[ClassifiedType] = None
    comment: str = ''

    @classmethod
    def from_info(cls, info: 'FuncInfo', classifier: TypeClassifier) -> 'Func':
        """Classify a raw signature"""
        args = tuple(Arg(p.name, classifier.classify(p.type)) for p in info.params)
        ret = classifier.classify(info.ret) if info.ret is not None else None
        return cls(name=info.name, args=args, ret=ret, comment=info.comment)

    def is_method(self) -> bool:
        """First argument is an object or style handle"""
        return bool(self.args) and self.args[0].typ.is_handle

    def declarations(self, config: 'GeneratorConfig') -> list[str]:
        """Parameter list, receiver first"""
        return [arg.declaration(config) for arg in self.args]

    def pre_call(self, config: 'GeneratorConfig') -> list[str]:
        """Statements before the raw call (receiver excluded)"""
        return [line for arg in self.args[1:] for line in arg.pre_call(config)]

    def call_args(self) -> list[str]:
        """Expressions passed to the raw call"""
        return [arg.call_expression() for arg in self.args]

    def post_call(self, config: 'GeneratorConfig') -> list[str]:
        """Statements after the raw call (receiver excluded)"""
        return [line for arg in self.args[1:] for line in arg.post_call(config)]

    def return_shape(self, config: 'GeneratorConfig', has_post: bool = False) -> ReturnShape:
        """Decide the wrapper return type and conversion of the raw result"""
        ret = self.ret
        if ret is None:
            return ReturnShape()

        if not ret.is_pointer:
            if ret.is_array:
                raise ReturnArray(ret.literal)
            if has_post:
                return ReturnShape(render_type(ret.literal), 'rust_result', ('rust_result',))
            return ReturnShape(render_type(ret.literal))

        if ret.is_mut_native_object:
            return ReturnShape(f'Option<{config.widget_short}>', 'pointer',
                               (f'{config.widget_short}::try_from_ptr(pointer)',))
        elif ret.is_str:
            if config.guard_str_returns:
                return ReturnShape(
                    f'Option<&{config.cstr_type}>', 'pointer',
                    ('if pointer.is_null() {',
                     '    None',
                     '} else {',
                     f'    Some({config.cstr_type}::from_ptr(pointer))',
                     '}'))
            return ReturnShape(f'&{config.cstr_type}', 'pointer',
                               (f'{config.cstr_type}::from_ptr(pointer)',))
        elif ret.is_array:
            raise ReturnArray(ret.literal)
        elif ret.is_mut_pointer:
            return ReturnShape(f'Option<NonNull<{render_type(ret.raw_name)}>>', 'pointer',
                               ('NonNull::new(pointer)',))
        # Const pointers, object handles included, become borrowed references
        return ReturnShape(f'Option<&{render_type(ret.raw_name)}>', 'pointer',
                           ('if !pointer.is_null() {',
                            '    Some(&*pointer)',
                            '} else {',
                            '    None',
                            '}'))

    def code(self, widget: 'Widget', config: 'GeneratorConfig') -> str:
        """Generate the wrapper, or raise a SkipReason"""
        if config.is_blacklisted(self.name):
            raise Blacklisted(self.name)
        if self.name == widget.constructor_name(config) and widget.name != config.object_widget:
            raise Constructor(self.name)

        pre = self.pre_call(config)
        post = self.post_call(config)
        shape = self.return_shape(config, has_post=bool(post))
        # Every argument must be representable before anything is emitted
        decls = ', '.join(self.declarations(config))
        call = f'{config.sys_crate}::{self.name}({", ".join(self.call_args())})'

        gen = CodeGen()
        for doc in self.comment.splitlines():
            gen.line(f'/// {doc}'.rstrip())
        signature = f'pub fn {self.name}({decls})'
        if shape.type_code:
            signature += f' -> {shape.type_code}'
        with gen.block(f'{signature} {{'):
            with gen.block('unsafe {'):
                with gen.scope(pre, post):
                    if shape.binding:
                        gen.line(f'let {shape.binding} = {call};')
                    elif post:
                        gen.line(f'{call};')
                    else:
                        gen.line(call)
                gen.lines(*shape.expr)
        return gen.output()
