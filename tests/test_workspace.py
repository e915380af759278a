import asyncio

import pytest

from conftest import FakeGenerator, make_response, raw_part
from plantbuilder import (
    Environment,
    GenerationFailed,
    GenerationInProgress,
    OutOfRange,
    PlantWorkspace,
)


def test_first_manual_part_creates_custom_plant(seeded_rng):
    workspace = PlantWorkspace(rng=seeded_rng, environment=Environment(sunlight=70))

    part = workspace.add_part("trunk", "#22c55e")

    assert workspace.plant.name == "Custom Plant"
    assert workspace.plant.description == "A manually built plant"
    assert workspace.plant.parts == (part,)
    assert workspace.plant.environment.sunlight == 70


def test_manual_parts_accumulate(seeded_rng):
    workspace = PlantWorkspace(rng=seeded_rng)
    workspace.add_part("trunk", "#22c55e")
    plant_id = workspace.plant.id

    workspace.add_part("leaf", "#84cc16", "fast", "drooping", {"x": 200, "y": 110})

    assert workspace.plant.id == plant_id
    assert [part.type.value for part in workspace.plant.parts] == ["trunk", "leaf"]


def test_environment_updates_plant_and_defaults(seeded_rng):
    workspace = PlantWorkspace(rng=seeded_rng)
    workspace.add_part("leaf", "#fff")

    workspace.set_environment("water", 70)

    assert workspace.environment.water == 70
    assert workspace.plant.environment.water == 70


def test_rejected_environment_update_leaves_state_unchanged(seeded_rng):
    workspace = PlantWorkspace(rng=seeded_rng)
    workspace.add_part("leaf", "#fff")
    before = workspace.plant

    with pytest.raises(OutOfRange):
        workspace.set_environment("water", 150)

    assert workspace.plant is before
    assert workspace.environment.water == 50


def test_simulate_without_plant_is_noop():
    assert PlantWorkspace().simulate() is None


def test_simulate_uses_configured_ceiling(seeded_rng):
    workspace = PlantWorkspace(size_ceiling=50, rng=seeded_rng)
    workspace.add_part("leaf", "#fff", "rapid")

    workspace.simulate(3)

    assert workspace.plant.parts[0].size == 50


@pytest.mark.asyncio
async def test_generate_replaces_prior_plant(fake_generator, seeded_rng):
    workspace = PlantWorkspace(fake_generator, rng=seeded_rng)
    workspace.add_part("trunk", "#fff")

    plant = await workspace.generate("an ivy")

    assert workspace.plant is plant
    assert plant.name == "Ivy"
    assert len(plant.parts) == 1
    assert not workspace.is_generating


@pytest.mark.asyncio
async def test_failed_generation_keeps_prior_plant(seeded_rng):
    workspace = PlantWorkspace(FakeGenerator(response=make_response([raw_part(type="shrub")])), rng=seeded_rng)
    workspace.add_part("trunk", "#fff")
    before = workspace.plant

    with pytest.raises(GenerationFailed):
        await workspace.generate("a shrub")

    assert workspace.plant is before
    assert not workspace.is_generating


class SlowGenerator:
    def __init__(self, response):
        self.response = response
        self.release = asyncio.Event()
        self.started = asyncio.Event()

    async def generate_object(self, prompt, schema):
        self.started.set()
        await self.release.wait()
        return self.response


@pytest.mark.asyncio
async def test_second_generation_while_in_flight_is_refused(leaf_response):
    generator = SlowGenerator(leaf_response)
    workspace = PlantWorkspace(generator)

    first = asyncio.create_task(workspace.generate("an ivy"))
    await generator.started.wait()
    assert workspace.is_generating

    with pytest.raises(GenerationInProgress):
        await workspace.generate("an oak")

    generator.release.set()
    plant = await first
    assert workspace.plant is plant


@pytest.mark.asyncio
async def test_response_arriving_after_reset_is_discarded(leaf_response):
    generator = SlowGenerator(leaf_response)
    workspace = PlantWorkspace(generator)

    pending = asyncio.create_task(workspace.generate("an ivy"))
    await generator.started.wait()
    workspace.reset()
    generator.release.set()

    with pytest.raises(GenerationFailed):
        await pending
    assert workspace.plant is None
    assert not workspace.is_generating


@pytest.mark.asyncio
async def test_environment_changed_mid_flight_reaches_generated_plant(leaf_response):
    generator = SlowGenerator(leaf_response)
    workspace = PlantWorkspace(generator)

    pending = asyncio.create_task(workspace.generate("an ivy"))
    await generator.started.wait()
    workspace.set_environment("water", 90)
    generator.release.set()
    plant = await pending

    assert plant.environment.water == 90
    assert workspace.plant.environment == workspace.environment
