"""
Code generation utilities

Provides the indentation-aware line builder used for Rust output, plus the
spelling helpers shared by the classifier and the emitters.
"""

import re
from typing import Iterable

TYPE_TOKEN_RE = re.compile(r'r#[A-Za-z_]\w*|::|->|\.\.\.|[A-Za-z_]\w*|\d\w*|"[^"]*"|\S')

# Strict and reserved Rust keywords (2021 edition, plus `gen`)
RUST_KEYWORDS = {
    'as', 'break', 'const', 'continue', 'crate', 'else', 'enum', 'extern',
    'false', 'fn', 'for', 'if', 'impl', 'in', 'let', 'loop', 'match', 'mod',
    'move', 'mut', 'pub', 'ref', 'return', 'self', 'Self', 'static', 'struct',
    'super', 'trait', 'true', 'type', 'unsafe', 'use', 'where', 'while',
    'async', 'await', 'dyn', 'abstract', 'become', 'box', 'do', 'final',
    'macro', 'override', 'priv', 'typeof', 'unsized', 'virtual', 'yield',
    'try', 'gen',
}

# Keywords that cannot be written as raw identifiers
NON_RAW_KEYWORDS = {'self', 'Self', 'super', 'crate'}


class CodeGen:
    """Code generation helper with indentation support"""

    def __init__(self):
        self._lines: list[str] = []
        self._indent: int = 0
        self._indent_str: str = '    '  # 4 spaces

    def line(self, text: str = ''):
        """Add a line with current indentation"""
        if text:
            self._lines.append(self._indent_str * self._indent + text)
        else:
            self._lines.append('')

    def lines(self, *texts: str):
        """Add multiple lines"""
        for text in texts:
            self.line(text)

    def raw(self, text: str):
        """Add raw text without indentation processing"""
        self._lines.append(text)

    def indent(self):
        """Increase indentation"""
        self._indent += 1

    def dedent(self):
        """Decrease indentation"""
        if self._indent > 0:
            self._indent -= 1

    def block(self, header: str, footer: str = '}'):
        """Context manager for code blocks"""
        return _BlockContext(self, header, footer)

    def scope(self, acquire: Iterable[str], release: Iterable[str]):
        """Context manager pairing acquire lines with release lines

        The release lines are written when the context exits, however it
        exits, so a temporarily surrendered resource is always reclaimed
        in the emitted code.
        """
        return _ScopeContext(self, list(acquire), list(release))

    def output(self) -> str:
        """Get generated code as string"""
        return '\n'.join(self._lines)


class _BlockContext:
    """Context manager for indented code blocks"""

    def __init__(self, gen: CodeGen, header: str, footer: str):
        self._gen = gen
        self._header = header
        self._footer = footer

    def __enter__(self):
        self._gen.line(self._header)
        self._gen.indent()
        return self

    def __exit__(self, *args):
        self._gen.dedent()
        self._gen.line(self._footer)


class _ScopeContext:
    """Context manager for acquire/release line pairs"""

    def __init__(self, gen: CodeGen, acquire: list[str], release: list[str]):
        self._gen = gen
        self._acquire = acquire
        self._release = release

    def __enter__(self):
        self._gen.lines(*self._acquire)
        return self

    def __exit__(self, *args):
        self._gen.lines(*self._release)


def as_pascal_case(name: str) -> str:
    """Convert a snake_case name to PascalCase

    Examples:
        arc -> Arc
        button_matrix -> ButtonMatrix
    """
    return ''.join(part[:1].upper() + part[1:] for part in name.split('_') if part)


def rust_ident(name: str) -> str:
    """Escape a parameter name that collides with a Rust keyword

    Examples:
        type -> r#type
        self -> self_
    """
    if name in NON_RAW_KEYWORDS:
        return f'{name}_'
    if name in RUST_KEYWORDS:
        return f'r#{name}'
    return name


def tokenize_type(type_str: str) -> list[str]:
    """Split a Rust type spelling into tokens"""
    return TYPE_TOKEN_RE.findall(type_str)


def normalize_type(type_str: str) -> str:
    """Normalize a Rust type to token-spaced form

    Examples:
        *const lv_obj_t -> * const lv_obj_t
        *mut ::core::ffi::c_char -> * mut :: core :: ffi :: c_char
    """
    return ' '.join(tokenize_type(type_str))


_NO_SPACE_BEFORE = {',', ';', ':', ')', ']', '>', '<'}
_NO_SPACE_AFTER = {'(', '[', '<', '&', '*', '::', '#', '!'}
_SPACE_BEFORE_PATH = {'const', 'mut', 'dyn', 'as', '->', ',', ':', '=', 'in'}


def render_type(type_str: str) -> str:
    """Render a type in compact rustfmt-like spelling

    Examples:
        * const lv_obj_t -> *const lv_obj_t
        Option < unsafe extern "C" fn (e : * mut lv_event_t) > -> Option<unsafe extern "C" fn(e: *mut lv_event_t)>
    """
    out = ''
    prev = ''
    for tok in tokenize_type(type_str):
        if not out:
            space = False
        elif prev in _NO_SPACE_AFTER:
            space = False
        elif tok == '::':
            space = prev in _SPACE_BEFORE_PATH
        elif tok == '(':
            space = prev in ('->', ',', '=')
        elif tok in _NO_SPACE_BEFORE:
            space = False
        else:
            space = True
        out += (' ' if space else '') + tok
        prev = tok
    return out


def strip_pointers(type_str: str) -> str:
    """Strip every leading pointer qualifier

    Examples:
        * const lv_area_t -> lv_area_t
        * mut * mut :: core :: ffi :: c_char -> :: core :: ffi :: c_char
    """
    tokens = tokenize_type(type_str)
    while len(tokens) >= 2 and tokens[0] == '*' and tokens[1] in ('const', 'mut'):
        tokens = tokens[2:]
    return ' '.join(tokens)


def last_path_segment(type_str: str) -> str:
    """Get the final path segment of a type

    Examples:
        :: core :: ffi :: c_char -> c_char
        lv_obj_t -> lv_obj_t
    """
    tokens = tokenize_type(type_str)
    return tokens[-1] if tokens else ''
