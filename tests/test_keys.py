import json

import pytest

from heratio.errors import OutOfSamplesError
from heratio.keys import Keychain, KeyStorage, setup
from heratio.params import PL_BFV_32, PL_HERATIO_16
from heratio.randomness import Oracle, OracleDouble

from conftest import with_overrides

TINY_BFV = with_overrides(PL_BFV_32, degree=2)


def tiny_double():
    """Samples for sk, pk and the five evaluation key levels of TINY_BFV."""
    random_integers = [
        [1, -1],  # sk
        [5, -3],  # pk a
        [1, 1],   # ek level 0
        [0, 0],
        [0, 0],
        [0, 0],
        [0, 0],
    ]
    normal_distribution = [
        [1, 0],  # pk e
        [0, 0],  # ek level 0
        [0, 1],
        [0, 0],
        [0, 0],
        [0, 0],
    ]
    return OracleDouble(random_integers, normal_distribution)


@pytest.fixture
def tiny_keychain():
    return Keychain(tiny_double(), TINY_BFV)


def test_secret_key(tiny_keychain):
    assert list(tiny_keychain.sk) == [1, -1]


def test_public_key(tiny_keychain):
    b, a = tiny_keychain.pk
    assert list(b) == [-1, 8]
    assert list(a) == [5, -3]


def test_evaluation_key(tiny_keychain):
    ek = tiny_keychain.ek
    assert len(ek) == TINY_BFV.coeff_exp_len == 5
    assert [list(c) for c in ek[0]] == [[-2, -2], [1, 1]]
    assert [list(c) for c in ek[1]] == [[0, -255], [0, 0]]
    assert [list(level[0]) for level in ek[2:]] == [
        [0, -32_768],
        [0, -4_194_304],
        [0, -536_870_912],
    ]


def test_keys_are_read_only(tiny_keychain):
    with pytest.raises(ValueError):
        tiny_keychain.sk[0] = 0
    with pytest.raises(ValueError):
        tiny_keychain.pk[0][0] = 0
    with pytest.raises(ValueError):
        tiny_keychain.ek[0][1][0] = 0


def test_exhausted_samples_propagate():
    double = OracleDouble([[1, -1], [5, -3]], [[1, 0]])
    with pytest.raises(OutOfSamplesError):
        Keychain(double, TINY_BFV)


def test_given_keys_skip_generation():
    keychain = Keychain(OracleDouble([], []), TINY_BFV, secret_key=[1, -1],
                        public_key=([-1, 8], [5, -3]),
                        evaluation_key=[([0, 0], [0, 0])] * 5)
    assert list(keychain.pk[0]) == [-1, 8]


def test_random_keys_are_centred(bfv32_keychain):
    q = PL_BFV_32.coefficient_modulus
    assert set(bfv32_keychain.sk) <= {-1, 0, 1}
    for component in bfv32_keychain.pk:
        assert len(component) == PL_BFV_32.size
        assert all(-q <= 2 * v < q for v in component)
    assert len(bfv32_keychain.ek) == PL_BFV_32.coeff_exp_len


def test_storage_round_trip(tiny_keychain):
    storage = KeyStorage.model_validate_json(tiny_keychain.to_storage().model_dump_json())
    restored = Keychain.from_storage(storage)
    assert storage.parameters == TINY_BFV
    assert list(restored.sk) == list(tiny_keychain.sk)
    assert [list(c) for c in restored.pk] == [list(c) for c in tiny_keychain.pk]
    assert storage.evaluation_key == [[list(c) for c in level] for level in tiny_keychain.ek]


def test_setup_creates_then_restores(tmp_path):
    created = setup("tiny.json", tiny_double(), TINY_BFV, directory=tmp_path / "keys")
    assert (tmp_path / "keys" / "tiny.json").exists()

    # An empty double proves nothing is generated on the second call.
    restored = setup("tiny.json", OracleDouble([], []), TINY_BFV, directory=tmp_path / "keys")
    assert list(restored.sk) == list(created.sk)
    assert [list(c) for c in restored.pk] == [list(c) for c in created.pk]


def test_setup_replaces_corrupt_file(tmp_path):
    (tmp_path / "tiny.json").write_text("{not json")
    keychain = setup("tiny.json", tiny_double(), TINY_BFV, directory=tmp_path)
    assert list(keychain.pk[0]) == [-1, 8]
    stored = json.loads((tmp_path / "tiny.json").read_text())
    assert stored["secret_key"] == [1, -1]


def test_setup_replaces_keys_for_other_parameters(tmp_path):
    setup("keys.json", Oracle.from_params(PL_HERATIO_16, seed=3), PL_HERATIO_16,
          directory=tmp_path)
    keychain = setup("keys.json", tiny_double(), TINY_BFV, directory=tmp_path)
    assert keychain.params == TINY_BFV
    stored = KeyStorage.model_validate_json((tmp_path / "keys.json").read_text())
    assert stored.parameters == TINY_BFV
