"""
Error types

SkipReason and its subclasses describe why a single function (or argument,
or widget constructor) cannot be wrapped. They are raised by the code
emitters and recorded per function by the widget layer; they never abort a
generation run.

CodegenError is reserved for broken input or broken invariants and is meant
to stop the run.
"""


class CodegenError(Exception):
    """Fatal generator error (bad input, violated invariant)"""


class SkipReason(Exception):
    """Base class for typed rejections"""

    message = 'Skipped'
    # Reportable reasons point at signatures the generator cannot express yet
    reportable = False

    def __init__(self, construct: str):
        super().__init__(construct)
        self.construct = construct

    def __str__(self) -> str:
        return f'{self.message} ({self.construct})'

    def __eq__(self, other) -> bool:
        return type(self) is type(other) and self.construct == other.construct

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.construct))


class ReturnArray(SkipReason):
    message = 'Return value is array'
    reportable = True


class ArrayArgument(SkipReason):
    message = 'Array as argument'
    reportable = True


class VoidPtrArgument(SkipReason):
    message = 'Void pointer as argument'
    reportable = True


class CustomStruct(SkipReason):
    message = 'Already implemented'


class Constructor(SkipReason):
    message = 'Constructor function'


class Blacklisted(SkipReason):
    message = 'Blacklisted function'
