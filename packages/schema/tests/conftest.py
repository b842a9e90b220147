"""Shared fixtures for dataknobs_schema tests."""

import pytest

import dataknobs_schema as s
from dataknobs_schema import steps


@pytest.fixture
def user_schema():
    """A small object schema used across composite and algebra tests."""
    return s.obj({
        "id": s.number(),
        "name": s.string(),
    })


@pytest.fixture
def signup_schema():
    """A realistic nested schema mixing every kind of combinator."""
    return s.obj({
        "username": s.pipe(s.string(), steps.trim(), steps.min_len(3), steps.max_len(20)),
        "email": s.pipe(s.string(), steps.email()),
        "age": s.pipe(s.coerce(s.number()), steps.integer(), steps.in_range(13, 120)),
        "newsletter": s.default(s.coerce(s.boolean()), False),
        "tags": s.opt(s.list_of(s.pipe(s.string(), steps.lowcase()))),
        "address": s.opt(s.obj({
            "street": s.string(),
            "zip": s.pipe(s.string(), steps.pattern(r"^\d{5}$")),
        })),
    })
