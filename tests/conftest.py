"""Shared key fixtures for the ecjws test suite."""

from __future__ import annotations

import pytest
from cryptography.hazmat.primitives.asymmetric import ec

from ecjws.services.algorithms import ALGORITHMS
from ecjws.services.keys import public_key_to_jwk


@pytest.fixture(scope="session")
def private_keys():
    """One private key per supported algorithm, keyed by algorithm name."""
    return {name: ec.generate_private_key(alg.new_curve()) for name, alg in ALGORITHMS.items()}


@pytest.fixture(params=sorted(ALGORITHMS))
def alg_name(request):
    return request.param


@pytest.fixture
def private_key(private_keys, alg_name):
    return private_keys[alg_name]


@pytest.fixture
def public_jwk(private_key):
    return public_key_to_jwk(private_key.public_key(), kid="test-key")
