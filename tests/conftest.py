"""Pytest configuration and shared fixtures for all tests."""

import os
import sys
from pathlib import Path

# Tests must not pick up a developer's layout overrides
for key in list(os.environ):
    if key.startswith("NETWORK_TREE_"):
        del os.environ[key]

# Make the package importable without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest

from network_tree import ExpansionState, load_snapshot


@pytest.fixture
def sample_payload() -> dict:
    """
    Small network used across tests.

    Shape:
        R
        ├── A          (leaf)
        └── B          (no investments)
            ├── B1
            └── B2     (reports 3 referrals, none loaded)
    """
    return {
        "id": "R",
        "displayName": "Ravi Kumar",
        "email": "ravi@example.com",
        "referralCode": "ROOT01",
        "investedAmount": "1000",
        "earnedAmount": "100",
        "investmentCount": 1,
        "directChildCount": 2,
        "children": [
            {
                "id": "A",
                "displayName": "Anita Shah",
                "email": "anita@example.com",
                "referralCode": "ANI002",
                "investedAmount": "2,500.50",
                "earnedAmount": "250",
                "investmentCount": 2,
                "directChildCount": 0,
                "children": [],
            },
            {
                "id": "B",
                "displayName": "Bala Menon",
                "email": "bala@example.com",
                "referralCode": "BAL003",
                "investedAmount": None,
                "earnedAmount": None,
                "investmentCount": 0,
                "directChildCount": 2,
                "children": [
                    {
                        "id": "B1",
                        "displayName": "Chitra Rao",
                        "email": "chitra@example.com",
                        "referralCode": "CHI004",
                        "investedAmount": "500",
                        "earnedAmount": "0",
                        "investmentCount": 1,
                        "children": [],
                    },
                    {
                        "id": "B2",
                        "displayName": "Deepak Iyer",
                        "email": "deepak@example.com",
                        "referralCode": "DEE005",
                        "investedAmount": 750,
                        "earnedAmount": 75.25,
                        "investmentCount": 1,
                        "directChildCount": 3,
                        "children": [],
                    },
                ],
            },
        ],
    }


@pytest.fixture
def sample_snapshot(sample_payload):
    """Loaded snapshot of the sample network."""
    return load_snapshot(sample_payload)


@pytest.fixture
def sample_root(sample_snapshot):
    """Root node of the sample network."""
    return sample_snapshot.root


@pytest.fixture
def collapsed_state(sample_root) -> ExpansionState:
    """Expansion state right after load: root only."""
    return ExpansionState.for_root(sample_root)


def make_chain_payload(length: int) -> dict:
    """Build a single referral chain of the given number of members."""
    payload = {"id": f"n{length - 1}", "investedAmount": "1", "children": []}
    for i in range(length - 2, -1, -1):
        payload = {"id": f"n{i}", "investedAmount": "1", "children": [payload]}
    return payload


@pytest.fixture
def chain_payload_factory():
    """Factory for deep single-chain payloads."""
    return make_chain_payload
