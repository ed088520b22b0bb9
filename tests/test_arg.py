"""Tests for the per-parameter code fragments."""

import pytest

from wrapper_gen.arg import Arg
from wrapper_gen.config import GeneratorConfig
from wrapper_gen.errors import ArrayArgument, VoidPtrArgument
from wrapper_gen.types import classify


@pytest.fixture
def config():
    return GeneratorConfig()


def make_arg(name, type_str):
    return Arg(name, classify(type_str))


class TestDeclaration:
    @pytest.mark.parametrize("type_str, expected", [
        ("*const ::core::ffi::c_char", "text: &CStr"),
        ("*mut ::core::ffi::c_char", "text: &mut ::alloc::ffi::CString"),
        ("*const lv_obj_t", "text: &crate::widgets::Wdg"),
        ("*mut lv_obj_t", "text: &mut crate::widgets::Wdg"),
        ("*const lv_style_t", "text: &crate::styles::Style"),
        ("*mut lv_style_t", "text: &mut crate::styles::Style"),
        ("*mut lv_area_t", "text: &mut lv_area_t"),
        ("*const lv_point_t", "text: &lv_point_t"),
        ("u16", "text: u16"),
        ("lv_event_cb_t", "text: lv_event_cb_t"),
    ])
    def test_declaration_by_category(self, config, type_str, expected):
        assert make_arg("text", type_str).declaration(config) == expected

    def test_keyword_name_is_escaped(self, config):
        arg = make_arg("type", "lv_obj_class_type_t")

        assert arg.declaration(config) == "r#type: lv_obj_class_type_t"
        assert arg.call_expression() == "r#type"

    def test_declaration_uses_configured_vocabulary(self):
        config = GeneratorConfig(widget_type="crate::Obj", cstr_type="core::ffi::CStr")

        assert make_arg("obj", "*mut lv_obj_t").declaration(config) == "obj: &mut crate::Obj"
        assert make_arg("s", "*const c_char").declaration(config) == "s: &core::ffi::CStr"

    def test_array_argument_is_rejected(self, config):
        arg = make_arg("map", "*const *const ::core::ffi::c_char")

        with pytest.raises(ArrayArgument) as exc_info:
            arg.declaration(config)

        assert exc_info.value.reportable
        assert "* const * const" in str(exc_info.value)

    def test_void_pointer_argument_is_rejected(self, config):
        arg = make_arg("user_data", "*mut ::core::ffi::c_void")

        with pytest.raises(VoidPtrArgument):
            arg.declaration(config)


class TestCallPhases:
    @pytest.mark.parametrize("type_str, expected", [
        ("*const ::core::ffi::c_char", "text.as_ptr()"),
        ("*mut ::core::ffi::c_char", "text_raw"),
        ("*const lv_obj_t", "text.raw()"),
        ("*mut lv_obj_t", "text.raw_mut()"),
        ("*const lv_style_t", "text.raw()"),
        ("*mut lv_style_t", "text.raw_mut()"),
        ("*mut lv_area_t", "text"),
        ("u32", "text"),
    ])
    def test_call_expression(self, type_str, expected):
        assert make_arg("text", type_str).call_expression() == expected

    def test_mut_string_round_trip(self, config):
        arg = make_arg("buf", "*mut ::core::ffi::c_char")

        assert arg.pre_call(config) == ["let buf_raw = buf.clone().into_raw();"]
        assert arg.post_call(config) == ["*buf = ::alloc::ffi::CString::from_raw(buf_raw);"]

    @pytest.mark.parametrize("type_str", [
        "*const ::core::ffi::c_char",
        "*mut lv_obj_t",
        "u32",
    ])
    def test_other_types_need_no_conversion(self, config, type_str):
        arg = make_arg("value", type_str)

        assert arg.pre_call(config) == []
        assert arg.post_call(config) == []
