import json
from pathlib import Path

import pytest

from heratio.keys import Keychain
from heratio.params import PL_BFV_32, PL_HERATIO_16, Parameters
from heratio.randomness import Oracle

DATA_DIR = Path(__file__).parent / "data"


def load_vectors(name):
    with open(DATA_DIR / name) as f:
        return json.load(f)


def with_overrides(params, **overrides):
    """Build a validated copy of `params` with some literal values replaced."""
    values = params.model_dump()
    values.update(overrides)
    return Parameters(**values)


@pytest.fixture(scope="session")
def heratio16_vectors():
    return load_vectors("heratio16_vectors.json")


@pytest.fixture(scope="session")
def heratio16_keychain(heratio16_vectors):
    return Keychain.from_keys(
        PL_HERATIO_16,
        heratio16_vectors["secret_key"],
        heratio16_vectors["public_key"],
        heratio16_vectors["evaluation_key"],
    )


@pytest.fixture(scope="module")
def bfv32_keychain():
    return Keychain(Oracle.from_params(PL_BFV_32, seed=32), PL_BFV_32)


@pytest.fixture(scope="module")
def heratio16_fresh_keychain():
    return Keychain(Oracle.from_params(PL_HERATIO_16, seed=16), PL_HERATIO_16)
