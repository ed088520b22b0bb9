"""
Main generator module

Orchestrates all components to generate the safe wrapper sources:
load the raw declarations, extract widgets, emit every widget's methods and
constructor macros, and report what had to be skipped.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from .codegen import CodeGen
from .config import GeneratorConfig
from .errors import SkipReason
from .func import Func
from .ir import IR
from .types import TypeClassifier
from .widget import Widget, WidgetCode, extract_widgets

logger = logging.getLogger(__name__)

BANNER = '// machine generated, do not edit'

# Output file names, included by the runtime crate
FUNCTIONS_FILE = 'generated.rs'
WIDGETS_FILE = 'widgets.rs'


@dataclass
class GenerationResult:
    """Everything produced by one generation pass"""
    functions: list[Func] = field(default_factory=list)
    widgets: list[Widget] = field(default_factory=list)
    widget_code: list[WidgetCode] = field(default_factory=list)
    impl_skipped: list[tuple[str, SkipReason]] = field(default_factory=list)
    functions_source: str = ''
    widgets_source: str = ''

    @property
    def skipped(self) -> list[tuple[str, SkipReason]]:
        return [s for wc in self.widget_code for s in wc.skipped]

    @property
    def reportable(self) -> list[tuple[str, SkipReason]]:
        return [s for wc in self.widget_code for s in wc.reportable]

    def function_names(self) -> list[str]:
        return [f.name for f in self.functions]


class Generator:
    """Main wrapper generator"""

    def __init__(self, output_root: str, config: Optional[GeneratorConfig] = None):
        self.output_root = output_root
        self.config = config if config is not None else GeneratorConfig()
        self.classifier = TypeClassifier(self.config.object_types, self.config.style_types)

    def ignore(self, *names: str):
        """Add functions to the deny-list"""
        self.config.blacklist.update(names)

    def load(self, input_path: str) -> IR:
        """Load raw declarations from bindgen output or JSON IR"""
        logger.info(f'Loading declarations from {input_path}')
        return IR.load(input_path, self.config.prefix)

    def build(self, ir: IR) -> GenerationResult:
        """Generate sources for an IR without touching the filesystem"""
        functions = [Func.from_info(info, self.classifier) for info in ir.funcs.values()]
        widgets = extract_widgets(functions, self.config.prefix)
        result = GenerationResult(functions=functions, widgets=widgets)

        functions_gen = CodeGen()
        functions_gen.line(BANNER)
        for widget in widgets:
            widget_code = widget.code(self.config)
            result.widget_code.append(widget_code)
            if widget_code.code:
                functions_gen.line()
                functions_gen.raw(widget_code.code)

        widgets_gen = CodeGen()
        widgets_gen.line(BANNER)
        widgets_gen.line()
        for widget in widgets:
            if not widget.has_constructor(self.config):
                logger.debug(f'{widget.name}: no {widget.constructor_name(self.config)}, no constructor macro')
                continue
            try:
                widgets_gen.line(widget.gen_impl(self.config))
            except SkipReason as reason:
                result.impl_skipped.append((widget.name, reason))
                logger.debug(f'{widget.name} - {reason}')

        result.functions_source = functions_gen.output() + '\n'
        result.widgets_source = widgets_gen.output() + '\n'
        wrapped = sum(len(wc.wrapped) for wc in result.widget_code)
        logger.info(f'{len(functions)} functions, {len(widgets)} widgets, {wrapped} wrapped, '
                    f'{len(result.skipped)} skipped ({len(result.reportable)} reportable)')
        return result

    def generate(self, input_path: str) -> GenerationResult:
        """Load, build and write both output files"""
        input_name = os.path.basename(input_path)
        logger.info(f'=== Generating wrappers: {input_name} => {self.output_root}')
        result = self.build(self.load(input_path))
        os.makedirs(self.output_root, exist_ok=True)
        self._write(FUNCTIONS_FILE, result.functions_source)
        self._write(WIDGETS_FILE, result.widgets_source)
        return result

    def _write(self, file_name: str, text: str):
        path = os.path.join(self.output_root, file_name)
        with open(path, 'w', newline='\n') as f:
            f.write(text)
        logger.info(f'  wrote {path}')
