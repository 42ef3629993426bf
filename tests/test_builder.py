"""End-to-end tests: catalogue resolved and realised under different mod sets."""

import pytest

from miniloader.core.models import SpeedConfig, Tint, records_from_yaml, records_to_yaml
from miniloader.templates import (
    MissingBaseFragmentError,
    MissingExternalRecordError,
    PrototypeTables,
    LoaderDraft,
    Pending,
    VariantRegistry,
    VariantSpec,
    build_all,
    build_record,
    build_registry,
    compute_mode_flags,
    select_fragment,
)
from miniloader.templates.predicates import (
    ADV_FURNACE_LOGISTICS_SETTING,
    BOB_BELT_OVERHAUL_SETTING,
    BOB_INSERTER_OVERHAUL_SETTING,
    CHUTE_SETTING,
)

from conftest import make_context


def _build(mods=(), settings=None, tables=None):
    records = build_all(build_registry(make_context(mods, settings, tables)))
    return {record.key: record for record in records}


def _ingredient_names(record):
    return [ingredient.name for ingredient in record.ingredients]


class TestBaseGame:
    def test_only_base_tiers_without_addons(self):
        records = _build()
        assert list(records) == ["", "fast", "express"]
        assert [r.name for r in records.values()] == [
            "miniloader",
            "fast-miniloader",
            "express-miniloader",
        ]

    def test_speeds_copied_from_belts(self):
        records = _build()
        assert records[""].speed == 0.03125
        assert records["fast"].speed == 0.0625
        assert records["express"].speed == 0.09375

    def test_upgrade_chain_names(self):
        records = _build()
        # the chute is off, so the baseline has nothing to upgrade from
        assert records[""].upgrade_from is None
        assert records["fast"].upgrade_from == "miniloader"
        assert records["express"].upgrade_from == "fast-miniloader"

    def test_fast_recipe(self):
        record = _build()["fast"]
        assert _ingredient_names(record) == [
            "miniloader",
            "fast-underground-belt",
            "fast-inserter",
        ]
        assert record.prerequisites == ["logistics-2", "miniloader"]

    def test_defaults(self):
        record = _build()[""]
        assert record.subgroup == "belt"
        assert record.stack_size == 50
        assert record.order == "d[a]-m"
        assert record.energy_source is None
        assert record.extras == {}

    def test_tint_from_hex(self):
        tint = _build()[""].tint
        assert tint.r == pytest.approx(1.0)
        assert tint.a == pytest.approx(0xD9 / 255)


class TestSpaceAge:
    def test_turbo_and_stack_added(self):
        records = _build(["space-age"])
        assert list(records) == ["", "fast", "express", "turbo", "stack"]

    def test_stack_loader(self):
        record = _build(["space-age"])["stack"]
        assert record.bulk is True
        assert record.speed == 0.125
        assert record.corpse_gfx == "turbo"
        assert record.prerequisites == ["logistics-3", "stack-inserter", "turbo-miniloader"]
        assert record.upgrade_from == "turbo-miniloader"

    def test_turbo_prerequisites_need_metallurgy(self):
        record = _build(["space-age"])["turbo"]
        assert "metallurgic-science-pack" in record.prerequisites

    def test_turbo_belt_without_space_age(self):
        records = _build(["TurboBelt"])
        assert "turbo" in records
        assert "stack" not in records
        assert records["turbo"].prerequisites == ["turbo-transport-belt", "express-miniloader"]

    def test_turbo_belt_takes_over_turbo_research(self):
        records = _build(["TurboBelt", "space-age"])
        assert records["turbo"].prerequisites == ["turbo-transport-belt", "express-miniloader"]


class TestFragmentErrors:
    def test_mode_only_fragment_without_mode(self):
        with pytest.raises(MissingBaseFragmentError):
            select_fragment({"matt": ["logistics-4"]}, compute_mode_flags(set()))

    def test_missing_table_entry_is_fatal(self):
        with pytest.raises(MissingExternalRecordError):
            _build(["matts-logistics"], tables=PrototypeTables.vanilla())


class TestChute:
    def test_chute_enabled_by_setting(self):
        records = _build(settings={CHUTE_SETTING: True})
        assert list(records) == ["", "fast", "express", "chute"]
        chute = records["chute"]
        assert chute.speed == pytest.approx(0.03125 / 4)
        assert chute.nerf_mode is True
        assert chute.energy_source.source == {"type": "void"}
        assert chute.research_trigger.count == 100
        assert chute.prerequisites == ["logistics"]
        assert chute.upgrade_from is None
        assert records[""].upgrade_from == "chute-miniloader"

    def test_string_true_does_not_enable_chute(self):
        assert "chute" not in _build(settings={CHUTE_SETTING: "true"})


class TestBob:
    def test_bob_without_belt_overhaul(self):
        records = _build(["boblogistics"])
        assert not any(key.startswith("bob-") for key in records)
        # bob fragment still applies to the base tiers
        assert "long-handed-inserter" in _ingredient_names(records["fast"])
        assert records[""].upgrade_from is None

    def test_bob_tiers(self):
        records = _build(["boblogistics"], {BOB_BELT_OVERHAUL_SETTING: True})
        assert list(records) == [
            "",
            "fast",
            "express",
            "bob-basic",
            "bob-turbo",
            "bob-ultimate",
        ]
        assert records[""].upgrade_from == "bob-basic-miniloader"
        assert records["bob-turbo"].upgrade_from == "express-miniloader"

    def test_bob_basic_without_chute(self):
        record = _build(["boblogistics"], {BOB_BELT_OVERHAUL_SETTING: True})["bob-basic"]
        assert _ingredient_names(record) == [
            "bob-basic-underground-belt",
            "bob-steam-inserter",
            "iron-plate",
        ]
        assert record.prerequisites == ["logistics-0"]
        assert record.upgrade_from is None

    def test_bob_basic_with_chute(self):
        records = _build(
            ["boblogistics"], {BOB_BELT_OVERHAUL_SETTING: True, CHUTE_SETTING: True}
        )
        assert records["bob-basic"].prerequisites == ["logistics-0", "chute-miniloader"]
        assert records["bob-basic"].upgrade_from == "chute-miniloader"
        assert records["chute"].belt_gfx == "bob-basic"
        assert records["chute"].prerequisites == ["logistics-0"]

    @pytest.mark.parametrize(
        "overhaul,inserter",
        [(True, "bob-turbo-inserter"), (False, "bob-express-inserter")],
    )
    def test_inserter_overhaul(self, overhaul, inserter):
        settings = {BOB_BELT_OVERHAUL_SETTING: True, BOB_INSERTER_OVERHAUL_SETTING: overhaul}
        record = _build(["boblogistics"], settings)["bob-turbo"]
        assert inserter in _ingredient_names(record)


class TestMatt:
    def test_chain_starts_at_express(self):
        records = _build(["matts-logistics"])
        assert records["ultra-fast"].upgrade_from == "express-miniloader"
        assert records["ultra-fast"].corpse_gfx == "express"
        assert records["ultimate"].upgrade_from == "extreme-express-miniloader"

    def test_chain_starts_at_turbo_with_space_age(self):
        records = _build(["matts-logistics", "space-age"])
        assert records["ultra-fast"].upgrade_from == "turbo-miniloader"
        assert records["ultra-fast"].corpse_gfx == "turbo"
        assert _ingredient_names(records["ultra-fast"])[0] == "turbo-miniloader"

    def test_speed_config(self):
        record = _build(["matts-logistics"])["extreme-express"]
        assert record.speed_config.items_per_second == 360
        assert record.speed_config.inserter_pairs == 4


class TestKrastorio:
    def test_tiers(self):
        records = _build(["Krastorio2"])
        assert records["kr-advanced"].upgrade_from == "express-miniloader"
        assert records["kr-superior"].prerequisites == ["kr-logistic-5", "kr-advanced-miniloader"]
        assert records["kr-advanced"].explosion_gfx == ""


class TestSpaceExploration:
    def test_space_flags(self):
        records = _build(["space-exploration"])
        # mode processor first, then the variant's own processors
        assert records[""].extras["se_allow_in_space"] is False
        assert records["se-space"].extras["se_allow_in_space"] is True
        assert records["se-deep-space"].extras["se_allow_in_space"] is True

    def test_deep_space_belt_animation(self, mod_tables):
        records = _build(["space-exploration"])
        expected = mod_tables.field(
            "underground-belt", "se-deep-space-underground-belt-black", "belt_animation_set"
        )
        assert records["se-deep-space"].belt_animation_set == expected
        assert records["se-deep-space"].upgrade_from == "se-space-miniloader"
        assert records["se-space"].upgrade_from is None


class TestAdvancedFurnace:
    SETTINGS = {ADV_FURNACE_LOGISTICS_SETTING: True}

    def test_needs_logistics_setting(self):
        records = _build(["Load-Furn-2-SpaceAgeFix"])
        assert "af2-pro-1" not in records

    def test_belt_animation_copied(self, mod_tables):
        context = make_context(["Load-Furn-2-SpaceAgeFix"], self.SETTINGS, mod_tables)
        record = build_record(build_registry(context), "af2-pro-1")
        assert record.speed == 0.15625
        assert record.belt_animation_set == {
            "animation_set": {"filename": "__mod__/graphics/pro.png"}
        }
        record.belt_animation_set["animation_set"]["filename"] = "changed"
        assert mod_tables.field(
            "underground-belt", "underground-belt-pro", "belt_animation_set"
        )["animation_set"]["filename"] == "__mod__/graphics/pro.png"

    def test_missing_underground_belt_raises_on_realisation(self, mod_tables):
        data = mod_tables.to_dict()
        del data["underground-belt"]["underground-belt-pro"]
        context = make_context(
            ["Load-Furn-2-SpaceAgeFix"], self.SETTINGS, PrototypeTables(data)
        )
        registry = build_registry(context)
        # draft resolution only reads belt speeds
        assert registry.resolve("af2-pro-1") is not None
        with pytest.raises(MissingExternalRecordError):
            build_record(registry, "af2-pro-1")


def test_build_record_inactive_returns_none():
    assert build_record(build_registry(make_context()), "stack") is None


def test_records_yaml_round_trip(tmp_path):
    records = list(_build(["space-age"]).values())
    path = tmp_path / "loaders.yaml"
    records_to_yaml(records, path)
    assert records_from_yaml(path) == records


def test_build_all_resolves_every_draft_before_deferred_fields():
    events = []

    def recording_builder(ctx, scope, previous):
        events.append(("build", scope))

        def produce(field):
            def _produce():
                events.append((field, scope))
                return []

            return _produce

        return LoaderDraft(
            order=scope,
            tint=Tint(r=0, g=0, b=0),
            speed=0.1,
            speed_config=SpeedConfig(items_per_second=1, rotation_speed=0.1),
            ingredients=Pending(produce("ingredients")),
            prerequisites=Pending(produce("prerequisites")),
        )

    registry = VariantRegistry(
        [
            VariantSpec(key="a", predicate=lambda ctx: True, builder=recording_builder),
            VariantSpec(key="b", predicate=lambda ctx: True, builder=recording_builder),
        ],
        make_context(),
    )
    records = build_all(registry)

    assert [r.key for r in records] == ["a", "b"]
    assert events[:2] == [("build", "a-"), ("build", "b-")]
    assert all(kind != "build" for kind, _ in events[2:])
    assert len(events) == 6
