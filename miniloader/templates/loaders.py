"""Loader catalogue.

Declares every loader variant: the base game tiers, Space Age, the chute,
and the families added by supported add-ons. Each builder returns a
LoaderDraft whose ingredients and prerequisites are Pending producers that
pick their fragment with :func:`select_fragment` when realised.

Builders receive the template context, the scope (dash prefix naming the
matching belt prototypes, e.g. ``"fast-"``) and the resolved predecessor key.
"""

from ..core.models import EnergySource, Ingredient, ResearchTrigger, SpeedConfig, Tint
from .context import TemplateContext
from .deferred import Pending
from .draft import LoaderDraft
from .naming import name_from_key
from .predicates import (
    BOB_INSERTER_OVERHAUL_SETTING,
    check_adv_furnace_2,
    check_base,
    check_bob,
    check_chute,
    check_krastorio,
    check_matt,
    check_space_age,
    check_space_exploration,
    check_turbo,
    check_turbo_belt,
)
from .processors import allow_in_space, copy_belt_animation
from .registry import VariantRegistry, VariantSpec
from .selector import select_fragment


def _item(name: str, amount: float) -> Ingredient:
    return Ingredient(type="item", name=name, amount=amount)


def _energy_void() -> EnergySource:
    return EnergySource(source={"type": "void"}, consumption=0, drain=0)


# =============================================================================
# Base game
# =============================================================================


def _baseline(ctx: TemplateContext, scope: str, previous: str | None) -> LoaderDraft:
    return LoaderDraft(
        order="d[a]-m",
        tint=Tint.from_hex("ffc340d9"),
        speed=ctx.tables.belt_speed("transport-belt"),
        ingredients=Pending(
            lambda: select_fragment(
                {
                    "base": [
                        _item("underground-belt", 1),
                        _item("steel-plate", 4),
                        _item("inserter", 2),
                    ]
                },
                ctx.flags,
            )
        ),
        prerequisites=Pending(
            lambda: select_fragment(
                {"base": ["logistics", "steel-processing", "electronics"]}, ctx.flags
            )
        ),
        speed_config=SpeedConfig(items_per_second=15, rotation_speed=0.075),
    )


def _fast(ctx: TemplateContext, scope: str, previous: str | None) -> LoaderDraft:
    return LoaderDraft(
        order="d[a]-n",
        tint=Tint.from_hex("e31717d9"),
        speed=ctx.tables.belt_speed(scope + "transport-belt"),
        ingredients=Pending(
            lambda: select_fragment(
                {
                    "base": [
                        _item(name_from_key(previous), 1),
                        _item(scope + "underground-belt", 1),
                        _item(scope + "inserter", 2),
                    ],
                    "bob": [
                        _item(name_from_key(previous), 1),
                        _item(scope + "underground-belt", 1),
                        _item("long-handed-inserter", 2),
                    ],
                },
                ctx.flags,
            )
        ),
        prerequisites=Pending(
            lambda: select_fragment({"base": ["logistics-2", name_from_key("")]}, ctx.flags)
        ),
        speed_config=SpeedConfig(items_per_second=30, rotation_speed=0.125),
    )


def _express(ctx: TemplateContext, scope: str, previous: str | None) -> LoaderDraft:
    return LoaderDraft(
        order="d[a]-o",
        tint=Tint.from_hex("43c0fad9"),
        speed=ctx.tables.belt_speed(scope + "transport-belt"),
        ingredients=Pending(
            lambda: select_fragment(
                {
                    "base": [
                        _item(name_from_key(previous), 1),
                        _item(scope + "underground-belt", 1),
                        _item("bulk-inserter", 2),
                    ],
                    "bob": [
                        _item(name_from_key(previous), 1),
                        _item(scope + "underground-belt", 1),
                        _item("fast-inserter", 2),
                    ],
                },
                ctx.flags,
            )
        ),
        prerequisites=Pending(
            lambda: select_fragment(
                {"base": ["logistics-3", name_from_key("fast")]}, ctx.flags
            )
        ),
        speed_config=SpeedConfig(
            items_per_second=45, rotation_speed=0.125, stack_size_bonus=1
        ),
    )


def _turbo(ctx: TemplateContext, scope: str, previous: str | None) -> LoaderDraft:
    def prerequisites() -> list[str]:
        # TurboBelt takes over the turbo research when both are present
        if check_turbo_belt(ctx):
            fragments = {
                "turbo_belt": ["turbo-transport-belt", name_from_key("express")]
            }
        else:
            fragments = {
                "space_age": [
                    "turbo-transport-belt",
                    "metallurgic-science-pack",
                    name_from_key("express"),
                ]
            }
        return select_fragment(fragments, ctx.flags)

    return LoaderDraft(
        order="d[a]-p",
        tint=Tint.from_hex("A8D550d9"),
        speed=ctx.tables.belt_speed(scope + "transport-belt"),
        ingredients=Pending(
            lambda: select_fragment(
                {
                    "base": [
                        _item(name_from_key(previous), 1),
                        _item(scope + "underground-belt", 1),
                        _item("bulk-inserter", 2),
                    ]
                },
                ctx.flags,
            )
        ),
        prerequisites=Pending(prerequisites),
        speed_config=SpeedConfig(items_per_second=60, rotation_speed=0.25),
    )


def _stack(ctx: TemplateContext, scope: str, previous: str | None) -> LoaderDraft:
    return LoaderDraft(
        order="d[a]-t",
        tint=Tint.from_hex("ffffffd9"),
        speed=ctx.tables.belt_speed("turbo-transport-belt"),
        bulk=True,
        corpse_gfx="turbo",  # turbo animations, explosion etc.
        belt_gfx="turbo",
        ingredients=Pending(
            lambda: select_fragment(
                {
                    "space_age": [
                        _item(name_from_key(previous), 1),
                        _item("turbo-underground-belt", 1),
                        _item("stack-inserter", 2),
                    ]
                },
                ctx.flags,
            )
        ),
        prerequisites=Pending(
            lambda: select_fragment(
                {"space_age": ["logistics-3", "stack-inserter", name_from_key("turbo")]},
                ctx.flags,
            )
        ),
        speed_config=SpeedConfig(items_per_second=60, rotation_speed=0.25),
    )


def _chute(ctx: TemplateContext, scope: str, previous: str | None) -> LoaderDraft:
    bob = ctx.flags.enabled("bob")

    return LoaderDraft(
        order="d[a]-h",
        tint=Tint.from_hex("b7410e"),
        speed=ctx.tables.belt_speed("transport-belt") / 4,
        energy_source=Pending(_energy_void),
        research_trigger=ResearchTrigger(type="craft-item", item="iron-gear-wheel", count=100),
        corpse_gfx="",
        belt_gfx="bob-basic" if bob else "",
        nerf_mode=True,
        ingredients=Pending(
            lambda: select_fragment(
                {
                    "base": [
                        _item("transport-belt", 1),
                        _item("iron-plate", 4),
                        _item("burner-inserter", 2),
                    ]
                },
                ctx.flags,
            )
        ),
        prerequisites=Pending(
            lambda: select_fragment(
                {"base": ["logistics-0" if bob else "logistics"]}, ctx.flags
            )
        ),
        speed_config=SpeedConfig(items_per_second=3.75, rotation_speed=0.01875),
    )


# =============================================================================
# Matt's logistics
# =============================================================================


def _matt_tier(
    order: str,
    tint: str,
    first_amount: int,
    inserter_amount: int,
    technology: str,
    speed_config: SpeedConfig,
):
    def build(ctx: TemplateContext, scope: str, previous: str | None) -> LoaderDraft:
        return LoaderDraft(
            order=order,
            tint=Tint.from_hex(tint),
            speed=ctx.tables.belt_speed(scope + "transport-belt"),
            corpse_gfx=ctx.flags.max_loader,  # animations, explosion etc.
            entity_gfx="matt",
            ingredients=Pending(
                lambda: select_fragment(
                    {
                        "matt": [
                            _item(name_from_key(previous), first_amount),
                            _item(scope + "underground-belt", 1),
                            _item("bulk-inserter", inserter_amount),
                        ]
                    },
                    ctx.flags,
                )
            ),
            prerequisites=Pending(
                lambda: select_fragment(
                    {"matt": [technology, name_from_key(previous)]}, ctx.flags
                )
            ),
            speed_config=speed_config,
        )

    return build


# =============================================================================
# Krastorio 2
# =============================================================================


def _krastorio_tier(
    order: str, tint: str, material: str, technology: str, speed_config: SpeedConfig
):
    def build(ctx: TemplateContext, scope: str, previous: str | None) -> LoaderDraft:
        return LoaderDraft(
            order=order,
            tint=Tint.from_hex(tint),
            speed=ctx.tables.belt_speed(scope + "transport-belt"),
            explosion_gfx="",
            ingredients=Pending(
                lambda: select_fragment(
                    {
                        "krastorio": [
                            _item(name_from_key(previous), 1),
                            _item(scope + "underground-belt", 1),
                            _item(material, 10),
                        ]
                    },
                    ctx.flags,
                )
            ),
            prerequisites=Pending(
                lambda: select_fragment(
                    {"krastorio": [technology, name_from_key(previous)]}, ctx.flags
                )
            ),
            speed_config=speed_config,
        )

    return build


# =============================================================================
# Bob's logistics
# =============================================================================


def _bob_basic(ctx: TemplateContext, scope: str, previous: str | None) -> LoaderDraft:
    # slower than standard, faster than the chute
    def ingredients() -> list[Ingredient]:
        result = [
            _item(scope + "underground-belt", 1),
            _item("bob-steam-inserter", 2),
        ]
        if check_chute(ctx):
            result.append(_item(name_from_key(previous), 1))
        else:
            result.append(_item("iron-plate", 4))
        return result

    def prerequisites() -> list[str]:
        result = ["logistics-0"]
        if check_chute(ctx):
            result.append(name_from_key(previous))
        return result

    return LoaderDraft(
        order="d[a]-l",
        tint=Tint.from_hex("c3c3c3"),
        speed=ctx.tables.belt_speed(scope + "transport-belt"),
        corpse_gfx="",  # basic graphics for explosion and remnants
        ingredients=Pending(ingredients),
        prerequisites=Pending(prerequisites),
        research_trigger=ResearchTrigger(type="craft-item", item="iron-gear-wheel", count=200),
        # TODO: switch to a steam energy source copied from bob-steam-inserter once
        # the fluid box input can be wired up for loaders
        energy_source=Pending(_energy_void),
        speed_config=SpeedConfig(items_per_second=7.5, rotation_speed=0.046875),
    )


def _bob_tier(
    order: str,
    tint: str,
    inserters: tuple[str, str],
    technology: str,
    speed_config: SpeedConfig,
):
    """Bob tier; ``inserters`` is (with inserter overhaul, without)."""

    def build(ctx: TemplateContext, scope: str, previous: str | None) -> LoaderDraft:
        def ingredients() -> list[Ingredient]:
            overhaul = ctx.settings.is_true(BOB_INSERTER_OVERHAUL_SETTING)
            inserter = inserters[0] if overhaul else inserters[1]
            return select_fragment(
                {
                    "bob": [
                        _item(name_from_key(previous), 1),
                        _item(scope + "underground-belt", 1),
                        _item(inserter, 2),
                    ]
                },
                ctx.flags,
            )

        return LoaderDraft(
            order=order,
            tint=Tint.from_hex(tint),
            speed=ctx.tables.belt_speed(scope + "transport-belt"),
            corpse_gfx="",
            ingredients=Pending(ingredients),
            prerequisites=Pending(
                lambda: select_fragment(
                    {"bob": [technology, name_from_key(previous)]}, ctx.flags
                )
            ),
            speed_config=speed_config,
        )

    return build


# =============================================================================
# Advanced Furnace 2
# =============================================================================


def _adv_furnace_tier(
    order: str,
    tint: str,
    belt: str,
    underground: str,
    loader: str,
    speed_config: SpeedConfig,
):
    def build(ctx: TemplateContext, scope: str, previous: str | None) -> LoaderDraft:
        return LoaderDraft(
            order=order,
            tint=Tint.from_hex(tint),
            speed=ctx.tables.belt_speed(belt),
            corpse_gfx="",
            ingredients=Pending(
                lambda: select_fragment(
                    {
                        "adv_furnace_2": [
                            _item(name_from_key(previous), 1),
                            _item(underground, 1),
                            _item(loader, 2),
                        ]
                    },
                    ctx.flags,
                )
            ),
            prerequisites=Pending(
                lambda: select_fragment(
                    {"adv_furnace_2": ["logistics-3", name_from_key(previous)]}, ctx.flags
                )
            ),
            processors=[copy_belt_animation(ctx.tables, underground)],
            speed_config=speed_config,
        )

    return build


# =============================================================================
# Space Exploration
# =============================================================================


def _se_space(ctx: TemplateContext, scope: str, previous: str | None) -> LoaderDraft:
    return LoaderDraft(
        order="d[e]-a",
        tint=Tint.from_bytes(240, 240, 240, 125),
        speed=ctx.tables.belt_speed(scope + "transport-belt"),
        corpse_gfx="express",
        ingredients=Pending(
            lambda: select_fragment(
                {
                    "space_exploration": [
                        _item(scope + "transport-belt", 1),
                        _item(scope + "underground-belt", 1),
                        _item("bulk-inserter", 2),
                    ]
                },
                ctx.flags,
            )
        ),
        prerequisites=Pending(
            lambda: select_fragment({"space_exploration": ["se-space-belt"]}, ctx.flags)
        ),
        processors=[allow_in_space],
        speed_config=SpeedConfig(
            items_per_second=45, rotation_speed=0.125, stack_size_bonus=1
        ),
    )


def _se_deep_space(ctx: TemplateContext, scope: str, previous: str | None) -> LoaderDraft:
    color = "-black"

    return LoaderDraft(
        order="d[e]-b",
        tint=Tint.from_bytes(25, 25, 25, 200),
        speed=ctx.tables.belt_speed(scope + "transport-belt" + color),
        corpse_gfx="express",
        ingredients=Pending(
            lambda: select_fragment(
                {
                    "space_exploration": [
                        _item(name_from_key(previous), 2),
                        _item(scope + "underground-belt" + color, 1),
                        _item("se-nanomaterial", 2),
                    ]
                },
                ctx.flags,
            )
        ),
        prerequisites=Pending(
            lambda: select_fragment(
                {
                    "space_exploration": [
                        "se-deep-space-transport-belt",
                        name_from_key(previous),
                    ]
                },
                ctx.flags,
            )
        ),
        processors=[
            copy_belt_animation(ctx.tables, scope + "underground-belt" + color),
            allow_in_space,
        ],
        speed_config=SpeedConfig(
            items_per_second=90, rotation_speed=0.25, stack_size_bonus=3
        ),
    )


# =============================================================================
# Catalogue
# =============================================================================

LOADER_SPECS: tuple[VariantSpec, ...] = (
    # base game
    VariantSpec(
        key="",
        predicate=check_base,
        builder=_baseline,
        # bob adds a tier between the chute and the regular loader
        previous={"base": "chute", "bob": "bob-basic"},
    ),
    VariantSpec(key="fast", predicate=check_base, builder=_fast, previous=""),
    VariantSpec(key="express", predicate=check_base, builder=_express, previous="fast"),
    VariantSpec(key="turbo", predicate=check_turbo, builder=_turbo, previous="express"),
    VariantSpec(key="stack", predicate=check_space_age, builder=_stack, previous="turbo"),
    # gravity assisted, no power
    VariantSpec(key="chute", predicate=check_chute, builder=_chute),
    # Matt's logistics
    VariantSpec(
        key="ultra-fast",
        predicate=check_matt,
        builder=_matt_tier(
            "d[b]-a", "2ac217", 1, 4, "logistics-4",
            SpeedConfig(items_per_second=90, rotation_speed=0.25, stack_size_bonus=3),
        ),
        previous={"base": "express", "space_age": "turbo"},
    ),
    VariantSpec(
        key="extreme-fast",
        predicate=check_matt,
        builder=_matt_tier(
            "d[b]-b", "c34722", 2, 2, "logistics-5",
            SpeedConfig(items_per_second=180, rotation_speed=0.5, inserter_pairs=2, stack_size_bonus=2),
        ),
        previous="ultra-fast",
    ),
    VariantSpec(
        key="ultra-express",
        predicate=check_matt,
        builder=_matt_tier(
            "d[b]-c", "5a17c2", 2, 2, "logistics-6",
            SpeedConfig(items_per_second=270, rotation_speed=0.5, inserter_pairs=3, stack_size_bonus=2),
        ),
        previous="extreme-fast",
    ),
    VariantSpec(
        key="extreme-express",
        predicate=check_matt,
        builder=_matt_tier(
            "d[b]-d", "1146d4", 2, 2, "logistics-7",
            SpeedConfig(items_per_second=360, rotation_speed=0.5, inserter_pairs=4, stack_size_bonus=2),
        ),
        previous="ultra-express",
    ),
    VariantSpec(
        key="ultimate",
        predicate=check_matt,
        builder=_matt_tier(
            "d[b]-e", "a6a6a6", 2, 2, "logistics-8",
            SpeedConfig(items_per_second=450, rotation_speed=0.5, inserter_pairs=4, stack_size_bonus=7),
        ),
        previous="extreme-express",
    ),
    # Krastorio 2
    VariantSpec(
        key="kr-advanced",
        predicate=check_krastorio,
        builder=_krastorio_tier(
            "d[c]-a", "22ec17", "kr-rare-metals", "kr-logistic-4",
            SpeedConfig(items_per_second=60, rotation_speed=0.25),
        ),
        previous="express",
    ),
    VariantSpec(
        key="kr-superior",
        predicate=check_krastorio,
        builder=_krastorio_tier(
            "d[c]-b", "d201f7", "kr-imersium-gear-wheel", "kr-logistic-5",
            SpeedConfig(items_per_second=90, rotation_speed=0.25, stack_size_bonus=3),
        ),
        previous="kr-advanced",
    ),
    # Bob's logistics
    VariantSpec(key="bob-basic", predicate=check_bob, builder=_bob_basic, previous="chute"),
    VariantSpec(
        key="bob-turbo",
        predicate=check_bob,
        builder=_bob_tier(
            "d[a]-q", "b700ff", ("bob-turbo-inserter", "bob-express-inserter"), "logistics-4",
            SpeedConfig(items_per_second=60, rotation_speed=0.25),
        ),
        previous="express",
    ),
    VariantSpec(
        key="bob-ultimate",
        predicate=check_bob,
        builder=_bob_tier(
            "d[a]-r", "1aeb2e", ("bob-express-inserter", "bob-express-bulk-inserter"), "logistics-5",
            SpeedConfig(items_per_second=75, rotation_speed=0.1875, stack_size_bonus=3),
        ),
        previous="bob-turbo",
    ),
    # Advanced Furnace 2
    VariantSpec(
        key="af2-pro-1",
        predicate=check_adv_furnace_2,
        builder=_adv_furnace_tier(
            "d[d]-a", "eea500", "transport-belt-pro", "underground-belt-pro", "loader-pro-02",
            SpeedConfig(items_per_second=75, rotation_speed=0.1875, stack_size_bonus=3),
        ),
        previous="express",
    ),
    VariantSpec(
        key="af2-pro-2",
        predicate=check_adv_furnace_2,
        builder=_adv_furnace_tier(
            "d[d]-b", "00fd53", "transport-belt-pro2", "underground-belt-pro2", "loader-pro-03",
            SpeedConfig(items_per_second=105, rotation_speed=0.25, stack_size_bonus=5),
        ),
        previous="af2-pro-1",
    ),
    # Space Exploration
    VariantSpec(key="se-space", predicate=check_space_exploration, builder=_se_space),
    VariantSpec(
        key="se-deep-space",
        predicate=check_space_exploration,
        builder=_se_deep_space,
        previous="se-space",
    ),
)


def build_registry(context: TemplateContext) -> VariantRegistry:
    """Registry of the full loader catalogue bound to ``context``."""
    return VariantRegistry(LOADER_SPECS, context)
