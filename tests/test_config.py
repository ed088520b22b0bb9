"""Tests for generator configuration and IR loading."""

import json
import logging
from pathlib import Path

import pytest

from wrapper_gen.config import GeneratorConfig, get_schema_path, load_config, validate_payload
from wrapper_gen.errors import CodegenError
from wrapper_gen.ir import IR, FuncInfo, ParamInfo


@pytest.fixture
def fixtures_path():
    """Path to test fixtures."""
    return Path(__file__).parent / "fixtures"


class TestGeneratorConfig:
    def test_defaults(self):
        config = GeneratorConfig()

        assert config.prefix == "lv_"
        assert config.sys_crate == "lightvgl_sys"
        assert config.object_types == ["lv_obj_t", "_lv_obj_t"]
        assert config.blacklist == set()
        assert not config.guard_str_returns

    def test_load_config(self, fixtures_path):
        config = load_config(fixtures_path / "config.json")

        assert config.sys_crate == "lvgl_sys"
        assert config.widget_type == "crate::Obj"
        assert config.widget_short == "Obj"
        assert config.blacklist == {"lv_obj_get_screen"}
        assert config.guard_str_returns
        assert config.style_type == "crate::styles::Style"

    def test_is_blacklisted(self):
        config = GeneratorConfig.from_dict({"blacklist": ["lv_obj_set_parent"]})

        assert config.is_blacklisted("lv_obj_set_parent")
        assert not config.is_blacklisted("lv_obj_clean")

    def test_unknown_key_is_rejected(self):
        with pytest.raises(CodegenError, match="config failed JSON schema validation"):
            GeneratorConfig.from_dict({"prefixx": "lv_"})

    def test_wrong_type_is_rejected(self):
        with pytest.raises(CodegenError, match="config failed JSON schema validation"):
            GeneratorConfig.from_dict({"guard_str_returns": "yes"})

    def test_duplicate_blacklist_entries_are_rejected(self):
        with pytest.raises(CodegenError):
            GeneratorConfig.from_dict({"blacklist": ["lv_a", "lv_a"]})

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(CodegenError, match="Invalid JSON"):
            load_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(CodegenError, match="Unable to read JSON file"):
            load_config(tmp_path / "missing.json")

    def test_unknown_schema_kind(self):
        with pytest.raises(CodegenError, match="Unknown schema kind"):
            get_schema_path("widgets")

    def test_bundled_schemas_exist(self):
        assert get_schema_path("config").is_file()
        assert get_schema_path("ir").is_file()


class TestIR:
    def test_load_json_ir(self, fixtures_path):
        ir = IR.load(fixtures_path / "lvgl_ir.json", "lv_")

        assert ir.module == "lvgl"
        assert ir.function_names() == [
            "lv_obj_create",
            "lv_obj_get_screen",
            "lv_switch_create",
            "lv_switch_set_orientation",
        ]

    def test_json_ir_signature(self, fixtures_path):
        ir = IR.load(fixtures_path / "lvgl_ir.json", "lv_")

        assert ir.funcs["lv_switch_set_orientation"] == FuncInfo(
            name="lv_switch_set_orientation",
            params=(
                ParamInfo("obj", "*mut lv_obj_t"),
                ParamInfo("orientation", "lv_switch_orientation_t"),
            ),
            ret=None,
        )

    def test_load_bindgen_source(self, fixtures_path):
        ir = IR.load(fixtures_path / "lvgl_bindings.rs", "lv_")

        assert ir.module == "lvgl_bindings"
        assert ir.prefix == "lv_"
        assert len(ir.funcs) == 29

    def test_module_defaults_to_file_stem(self, tmp_path):
        path = tmp_path / "widgets.json"
        path.write_text(json.dumps({"decls": [{"kind": "func", "name": "lv_tick_inc"}]}))

        ir = IR.load(path, "lv_")

        assert ir.module == "widgets"
        assert ir.funcs["lv_tick_inc"].params == ()

    def test_missing_decls(self):
        with pytest.raises(CodegenError, match="ir failed JSON schema validation"):
            IR.from_dict({"module": "lvgl"})

    def test_param_without_type(self):
        data = {"decls": [{"kind": "func", "name": "lv_a", "params": [{"name": "x"}]}]}

        with pytest.raises(CodegenError):
            IR.from_dict(data)

    def test_non_object_json(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[]")

        with pytest.raises(CodegenError, match="must be a JSON object"):
            IR.load(path, "lv_")

    def test_missing_bindgen_source(self, tmp_path):
        with pytest.raises(CodegenError, match="Unable to read bindgen source"):
            IR.load(tmp_path / "bindings.rs", "lv_")

    def test_duplicates_keep_first(self, caplog):
        data = {
            "prefix": "lv_",
            "decls": [
                {"kind": "func", "name": "lv_a", "ret": "u8"},
                {"kind": "func", "name": "lv_a", "ret": "u16"},
            ],
        }

        with caplog.at_level(logging.WARNING):
            ir = IR.from_dict(data)

        assert ir.funcs["lv_a"].ret == "u8"
        assert "Duplicate declaration of lv_a" in caplog.text

    def test_validate_payload_accepts_ir(self, fixtures_path):
        payload = json.loads((fixtures_path / "lvgl_ir.json").read_text())

        validate_payload("ir", payload)
