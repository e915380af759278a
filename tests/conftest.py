"""Pytest configuration and fixtures for plant builder tests."""

import random

import pytest


class FakeGenerator:
    """Structured generator that replays a canned response or raises."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    async def generate_object(self, prompt, schema):
        self.calls.append({"prompt": prompt, "schema": schema})
        if self.error is not None:
            raise self.error
        return self.response


def make_response(parts, name="Ivy", description="A climbing ivy"):
    return {"object": {"plant": {"name": name, "description": description, "parts": parts}}}


def raw_part(**overrides):
    part = {
        "id": "1",
        "type": "leaf",
        "color": "#22c55e",
        "size": 20,
        "position": {"x": 120, "y": 140},
        "growthRate": "rapid",
        "special": "drooping",
    }
    part.update(overrides)
    return part


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def leaf_response():
    return make_response([raw_part()])


@pytest.fixture
def fake_generator(leaf_response):
    return FakeGenerator(response=leaf_response)
