"""
LVGL wrapper configuration

Configures the wrapper generator for the LVGL runtime crate:
- functions replaced by hand-written wrappers
- functions that would break handle invariants if wrapped automatically
- ECS and no-ECS deny-list profiles
"""

from wrapper_gen import Generator


# ==============================================================================
# Deny-lists
# ==============================================================================

# Shared by both profiles
COMMON_BLACKLIST = [
    'lv_style_init',                    # use Style::default() instead
    'lv_obj_null_on_delete',            # can invalidate NonNull<>
    'lv_obj_add_event_cb',              # implemented manually
    'lv_event_get_target',              # use functions::lv_event_get_target() instead
    'lv_event_get_target_obj',          # use functions::lv_event_get_target_obj() instead
    'lv_event_get_current_target_obj',  # use functions::lv_event_get_current_target_obj() instead
    'lv_list_get_button_text',          # lifetime can't be elided
]

# Styles and parents are components when widgets live in an ECS world
ECS_BLACKLIST = COMMON_BLACKLIST + [
    'lv_obj_add_style',                 # add component instead
    'lv_obj_replace_style',             # replace component instead
    'lv_obj_remove_style',              # remove component instead
    'lv_obj_remove_style_all',          # remove components instead
    'lv_obj_set_parent',                # use EntityWorldMut::add_child() instead
]

NO_ECS_BLACKLIST = COMMON_BLACKLIST + [
    'lv_obj_add_style',                 # use functions::lv_obj_add_style() instead
    'lv_obj_set_parent',                # use functions::lv_obj_set_parent() instead
]


# ==============================================================================
# Configuration
# ==============================================================================

def configure(gen: Generator, no_ecs: bool = False):
    """Configure generator with LVGL-specific settings"""
    config = gen.config
    config.prefix = 'lv_'
    config.sys_crate = 'lightvgl_sys'
    config.widget_type = 'crate::widgets::Wdg'
    config.widget_short = 'Wdg'
    config.style_type = 'crate::styles::Style'

    gen.ignore(*(NO_ECS_BLACKLIST if no_ecs else ECS_BLACKLIST))
