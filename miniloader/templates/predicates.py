"""Named predicates that gate loader variants.

Every predicate is a pure function of the template context: mode flags plus
startup settings. Settings are compared against literals; a missing setting
behaves like ``False``.
"""

from collections.abc import Callable

from .context import TemplateContext

Predicate = Callable[[TemplateContext], bool]

# Startup setting names read by predicates and templates
CHUTE_SETTING = "miniloader-enable-chute"
BOB_BELT_OVERHAUL_SETTING = "bobmods-logistics-beltoverhaul"
BOB_INSERTER_OVERHAUL_SETTING = "bobmods-logistics-inserteroverhaul"
ADV_FURNACE_LOGISTICS_SETTING = "logist"


def any_of(*predicates: Predicate) -> Predicate:
    def _any(ctx: TemplateContext) -> bool:
        return any(predicate(ctx) for predicate in predicates)

    return _any


def check_base(ctx: TemplateContext) -> bool:
    return ctx.flags.enabled("base")


def check_space_age(ctx: TemplateContext) -> bool:
    return ctx.flags.enabled("space_age")


def check_turbo_belt(ctx: TemplateContext) -> bool:
    return ctx.flags.enabled("turbo_belt")


# Turbo tier exists with Space Age or the standalone TurboBelt add-on
check_turbo: Predicate = any_of(check_space_age, check_turbo_belt)


def check_chute(ctx: TemplateContext) -> bool:
    return ctx.settings.is_true(CHUTE_SETTING)


def check_matt(ctx: TemplateContext) -> bool:
    return ctx.flags.enabled("matt")


def check_krastorio(ctx: TemplateContext) -> bool:
    return ctx.flags.enabled("krastorio")


def check_bob(ctx: TemplateContext) -> bool:
    """Bob's tiers only exist when its belt overhaul is switched on."""
    return ctx.flags.enabled("bob") and ctx.settings.is_true(BOB_BELT_OVERHAUL_SETTING)


def check_adv_furnace_2(ctx: TemplateContext) -> bool:
    return ctx.flags.enabled("adv_furnace_2") and bool(
        ctx.settings.value(ADV_FURNACE_LOGISTICS_SETTING) or False
    )


def check_space_exploration(ctx: TemplateContext) -> bool:
    return ctx.flags.enabled("space_exploration")
