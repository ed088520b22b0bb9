"""
Type classification module

Turns a raw Rust type spelling from bindgen output into a ClassifiedType:
a set of boolean facets every later stage relies on to pick a wrapper shape.
"""

from dataclasses import dataclass
from typing import Iterable

from .codegen import normalize_type, strip_pointers, last_path_segment, tokenize_type

DEFAULT_OBJECT_TYPES = ('lv_obj_t', '_lv_obj_t')
DEFAULT_STYLE_TYPES = ('lv_style_t', '_lv_style_t')


@dataclass(frozen=True)
class ClassifiedType:
    """Classified view of a single type literal"""
    literal: str
    is_pointer: bool = False
    is_const_pointer: bool = False
    is_mut_pointer: bool = False
    is_array: bool = False
    is_const_native_object: bool = False
    is_mut_native_object: bool = False
    is_const_style: bool = False
    is_mut_style: bool = False
    is_const_str: bool = False
    is_mut_str: bool = False
    is_void_pointer: bool = False

    @property
    def is_native_object(self) -> bool:
        return self.is_const_native_object or self.is_mut_native_object

    @property
    def is_style(self) -> bool:
        return self.is_const_style or self.is_mut_style

    @property
    def is_str(self) -> bool:
        return self.is_const_str or self.is_mut_str

    @property
    def is_handle(self) -> bool:
        """Object or style handle, i.e. a valid method receiver"""
        return self.is_native_object or self.is_style

    @property
    def raw_name(self) -> str:
        """Pointed-to type with one level of indirection removed"""
        tokens = tokenize_type(self.literal)
        if len(tokens) >= 2 and tokens[0] == '*' and tokens[1] in ('const', 'mut'):
            tokens = tokens[2:]
        return ' '.join(tokens)


class TypeClassifier:
    """Classifies type literals, caching results per spelling"""

    def __init__(self, object_types: Iterable[str] = DEFAULT_OBJECT_TYPES,
                 style_types: Iterable[str] = DEFAULT_STYLE_TYPES):
        self.object_types = frozenset(object_types)
        self.style_types = frozenset(style_types)
        self._cache: dict[str, ClassifiedType] = {}

    def classify(self, type_str: str) -> ClassifiedType:
        """Classify a type literal; never fails"""
        literal = normalize_type(type_str)
        cached = self._cache.get(literal)
        if cached is None:
            cached = self._classify(literal)
            self._cache[literal] = cached
        return cached

    def _classify(self, literal: str) -> ClassifiedType:
        tokens = literal.split()
        is_pointer = literal.startswith('*')
        is_const_pointer = literal.startswith('* const')
        is_mut_pointer = literal.startswith('* mut')

        if not is_pointer:
            # Fixed-size arrays: [T ; N]
            return ClassifiedType(literal, is_array=literal.startswith('['))

        pointee = tokens[2:]
        facets = dict(
            is_pointer=True,
            is_const_pointer=is_const_pointer,
            is_mut_pointer=is_mut_pointer,
        )
        # One level of indirection only; '* const * mut T' is an array of pointers
        single = len(pointee) > 0 and pointee[0] != '*'
        name = ' '.join(pointee)

        if single and name in self.object_types:
            facets['is_const_native_object'] = is_const_pointer
            facets['is_mut_native_object'] = is_mut_pointer
        elif single and name in self.style_types:
            facets['is_const_style'] = is_const_pointer
            facets['is_mut_style'] = is_mut_pointer
        elif not single:
            facets['is_array'] = True
        elif last_path_segment(strip_pointers(literal)) == 'c_char':
            facets['is_const_str'] = is_const_pointer
            facets['is_mut_str'] = is_mut_pointer
        elif last_path_segment(strip_pointers(literal)) == 'c_void':
            facets['is_void_pointer'] = True

        return ClassifiedType(literal, **facets)


_default_classifier = TypeClassifier()


def classify(type_str: str) -> ClassifiedType:
    """Classify with the default LVGL handle spellings"""
    return _default_classifier.classify(type_str)
