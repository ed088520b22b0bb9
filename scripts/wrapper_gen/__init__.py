"""
wrapper_gen - safe Rust wrapper generation for LVGL-style C libraries

This package reads the raw foreign-function declarations bindgen produces
for a C header and generates memory-safe wrapper functions grouped by
widget. Signatures it cannot represent safely are rejected with a typed
SkipReason instead of being wrapped partially.
"""

from .ir import IR, FuncInfo, ParamInfo
from .types import ClassifiedType, TypeClassifier, classify
from .codegen import CodeGen
from .arg import Arg
from .func import Func
from .widget import Widget, WidgetCode, get_widget_names, extract_widgets
from .config import GeneratorConfig, load_config
from .errors import (
    CodegenError, SkipReason,
    ReturnArray, ArrayArgument, VoidPtrArgument,
    CustomStruct, Constructor, Blacklisted,
)
from .generator import Generator, GenerationResult

__all__ = [
    'IR', 'FuncInfo', 'ParamInfo',
    'ClassifiedType', 'TypeClassifier', 'classify',
    'CodeGen',
    'Arg',
    'Func',
    'Widget', 'WidgetCode', 'get_widget_names', 'extract_widgets',
    'GeneratorConfig', 'load_config',
    'CodegenError', 'SkipReason',
    'ReturnArray', 'ArrayArgument', 'VoidPtrArgument',
    'CustomStruct', 'Constructor', 'Blacklisted',
    'Generator', 'GenerationResult',
]
