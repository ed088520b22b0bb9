"""
Bindgen reader

Enumerates the functions declared in the `extern "C"` blocks of a Rust
module produced by bindgen, using the tree-sitter Rust grammar. Only foreign
blocks are visited; structs, impls and consts elsewhere in the module are
ignored.
"""

import logging
import re
from typing import Iterator, Optional

import tree_sitter_rust
from tree_sitter import Language, Node, Parser

from .codegen import normalize_type
from .errors import CodegenError
from .ir import FuncInfo, ParamInfo

logger = logging.getLogger(__name__)

RUST_LANGUAGE = Language(tree_sitter_rust.language())

# ABIs whose declarations are wrapped; a bare `extern` block is "C"
C_ABIS = {'C', 'C-unwind'}

ESCAPE_RE = re.compile(r'\\(?:u\{([0-9A-Fa-f_]+)\}|x([0-9A-Fa-f]{2})|\n\s*|(.))', re.DOTALL)
SIMPLE_ESCAPES = {
    'n': '\n', 'r': '\r', 't': '\t', '0': '\0',
    '\\': '\\', "'": "'", '"': '"',
}

# Extras the grammar may place between any two tokens
COMMENTS = {'line_comment', 'block_comment'}


def _text(node: Node) -> str:
    return node.text.decode('utf-8')


def _line(node: Node) -> int:
    return node.start_point[0] + 1


def decode_string(literal: str) -> str:
    """Value of a Rust string literal, escapes decoded

    Examples:
        " a\\n b" -> ' a', ' b' on two lines
        "\\u{1}lv_d" -> '\\x01lv_d'
    """
    if literal.startswith(('r', 'br')):
        return literal[literal.index('"') + 1:literal.rindex('"')]
    body = literal[literal.index('"') + 1:-1]

    def replace(match):
        if match.group(1) is not None:
            return chr(int(match.group(1).replace('_', ''), 16))
        if match.group(2) is not None:
            return chr(int(match.group(2), 16))
        if match.group(3) is None:
            # Line continuation
            return ''
        return SIMPLE_ESCAPES.get(match.group(3), match.group(0))

    return ESCAPE_RE.sub(replace, body)


def parse_module(source: str) -> Node:
    """Parse bindgen output, failing on any syntax error"""
    tree = Parser(RUST_LANGUAGE).parse(source.encode('utf-8'))
    root = tree.root_node
    if root.has_error:
        bad = _first_error(root)
        raise CodegenError(f'Syntax error in bindgen source at line {_line(bad)}: {_text(bad)[:40]!r}')
    return root


def _first_error(node: Node) -> Node:
    if node.type == 'ERROR' or node.is_missing:
        return node
    for child in node.children:
        if child.has_error:
            return _first_error(child)
    return node


def _abi(block: Node) -> str:
    for child in block.children:
        if child.type == 'extern_modifier':
            for part in child.named_children:
                if part.type in ('string_literal', 'raw_string_literal'):
                    return decode_string(_text(part))
    return 'C'


def iter_foreign_blocks(node: Node) -> Iterator[Node]:
    """Yield the body of every `extern "C" { ... }` block, nested modules included"""
    for child in node.named_children:
        if child.type == 'foreign_mod_item':
            body = child.child_by_field_name('body')
            abi = _abi(child)
            if body is None:
                continue
            if abi not in C_ABIS:
                logger.debug(f'Skipping extern "{abi}" block at line {_line(child)}')
                continue
            yield body
        elif child.type == 'mod_item':
            yield from iter_foreign_blocks(child)
        elif child.type == 'declaration_list':
            yield from iter_foreign_blocks(child)


def _doc_lines(attribute_item: Node) -> Optional[list[str]]:
    """Lines of a `#[doc = "..."]` attribute, None for other attributes"""
    attr = attribute_item.named_children[0]
    value = attr.child_by_field_name('value')
    if not attr.named_children or _text(attr.named_children[0]) != 'doc' or value is None:
        return None
    if value.type not in ('string_literal', 'raw_string_literal'):
        return None
    lines = []
    for line in decode_string(_text(value)).splitlines():
        # `/// text` is lowered to `#[doc = " text"]`
        lines.append((line[1:] if line.startswith(' ') else line).rstrip())
    return lines


def parse_foreign_block(body: Node) -> Iterator[FuncInfo]:
    """Yield functions declared in one foreign block body"""
    docs: list[str] = []
    for item in body.named_children:
        if item.type in COMMENTS:
            continue
        if item.type == 'attribute_item':
            lines = _doc_lines(item)
            if lines is not None:
                docs.extend(lines)
            continue
        if item.type == 'function_signature_item':
            yield _parse_signature(item, docs)
        # statics and type aliases drop the docs collected for them
        docs = []


def _parse_signature(item: Node, docs: list[str]) -> FuncInfo:
    name = _text(item.child_by_field_name('name'))

    params = []
    entries = [c for c in item.child_by_field_name('parameters').children
               if c.type not in ('(', ')', ',', 'attribute_item') and c.type not in COMMENTS]
    for idx, entry in enumerate(entries):
        if entry.type == 'variadic_parameter':
            # Variadic tail; the fixed arguments are still wrapped
            logger.debug(f'{name}: ignoring variadic arguments')
            continue
        if entry.type != 'parameter':
            raise CodegenError(f'Malformed parameter in {name}: {_text(entry)}')
        pname = _text(entry.child_by_field_name('pattern'))
        if pname == '_':
            pname = f'arg{idx}'
        params.append(ParamInfo(name=pname, type=normalize_type(_text(entry.child_by_field_name('type')))))

    ret = None
    ret_node = item.child_by_field_name('return_type')
    if ret_node is not None and ret_node.type != 'unit_type':
        ret = normalize_type(_text(ret_node))

    return FuncInfo(name=name, params=tuple(params), ret=ret, comment='\n'.join(docs))


def load_func_defs(source: str, prefix: str = '') -> list[FuncInfo]:
    """Collect functions from every extern block, keeping those with `prefix`"""
    funcs = []
    for body in iter_foreign_blocks(parse_module(source)):
        for func in parse_foreign_block(body):
            if func.name.startswith(prefix):
                funcs.append(func)
    logger.debug(f'Found {len(funcs)} foreign functions with prefix {prefix!r}')
    return funcs
