"""
Widget extraction module

Derives widget names from constructor-shaped functions and buckets every
method into the widget its name belongs to.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .codegen import as_pascal_case
from .errors import CustomStruct, SkipReason

if TYPE_CHECKING:
    from .config import GeneratorConfig
    from .func import Func

logger = logging.getLogger(__name__)


@dataclass
class WidgetCode:
    """Generated wrappers for one widget plus the functions it skipped"""
    widget: str
    code: str
    wrapped: list[str] = field(default_factory=list)
    skipped: list[tuple[str, SkipReason]] = field(default_factory=list)

    @property
    def reportable(self) -> list[tuple[str, SkipReason]]:
        """Skips that point at a missing generator capability"""
        return [(name, reason) for name, reason in self.skipped if reason.reportable]

    @property
    def silent(self) -> list[tuple[str, SkipReason]]:
        """Expected skips (deny-list, constructors)"""
        return [(name, reason) for name, reason in self.skipped if not reason.reportable]


@dataclass
class Widget:
    """A group of methods sharing the `<prefix><name>_` prefix"""
    name: str
    methods: list['Func'] = field(default_factory=list)

    @property
    def pascal_name(self) -> str:
        return as_pascal_case(self.name)

    def code(self, config: 'GeneratorConfig') -> WidgetCode:
        """Generate every method wrapper that can be generated"""
        wrappers = []
        wrapped = []
        skipped = []
        for method in self.methods:
            try:
                wrappers.append(method.code(self, config))
                wrapped.append(method.name)
            except SkipReason as reason:
                skipped.append((method.name, reason))
                if reason.reportable:
                    logger.warning(f'{method.name} - {reason}')
                else:
                    logger.debug(f'{method.name} - {reason}')
        return WidgetCode(self.name, '\n\n'.join(wrappers), wrapped, skipped)

    def constructor_name(self, config: 'GeneratorConfig') -> str:
        return f'{config.prefix}{self.name}_create'

    def has_constructor(self, config: 'GeneratorConfig') -> bool:
        create = self.constructor_name(config)
        return any(m.name == create for m in self.methods)

    def gen_impl(self, config: 'GeneratorConfig') -> str:
        """Generate the widget constructor macro invocation"""
        if self.name in config.reserved_widgets:
            raise CustomStruct(self.name)
        return f'impl_widget!({self.pascal_name}, {config.sys_crate}::{self.constructor_name(config)});'


def get_widget_names(functions: list['Func'], prefix: str) -> list[str]:
    """Widget names from one-argument `<prefix><name>_create|init` functions"""
    create_func = re.compile(f'^{re.escape(prefix)}([^_]+)_(create|init)$')
    names = []
    for func in functions:
        match = create_func.match(func.name)
        if match and len(func.args) == 1 and match.group(1) not in names:
            names.append(match.group(1))
    return names


def extract_widgets(functions: list['Func'], prefix: str) -> list[Widget]:
    """Group methods by widget, in order of widget discovery"""
    widgets = {name: Widget(name) for name in get_widget_names(functions, prefix)}
    # Longest name first so the most specific widget wins
    by_length = sorted(widgets, key=len, reverse=True)

    for func in functions:
        if not func.is_method():
            continue
        matches = [name for name in by_length if func.name.startswith(f'{prefix}{name}_')]
        if not matches:
            continue
        widgets[matches[0]].methods.append(func)

    # Widgets without any method are dropped
    return [w for w in widgets.values() if w.methods]
