"""
Consensus address derivation.

A validator's signing info is keyed by its consensus address, the bech32
encoding (hrp ``<prefix>valcons``) of the address bytes of its consensus
public key. Only the key types validators actually use are supported.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
from typing import Optional

import bech32

from cosmos_exporter.domain.models import ConsensusPubKey
from cosmos_exporter.errors import ConsensusAddressError

ED25519_TYPE_URL = "/cosmos.crypto.ed25519.PubKey"
SECP256K1_TYPE_URL = "/cosmos.crypto.secp256k1.PubKey"
_ADDRESS_LENGTH = 20


def _ed25519_address(key: bytes) -> bytes:
    return hashlib.sha256(key).digest()[:_ADDRESS_LENGTH]


def _secp256k1_address(key: bytes) -> bytes:
    try:
        ripemd = hashlib.new("ripemd160")
    except ValueError as exc:
        raise ConsensusAddressError("ripemd160 is unavailable in this interpreter") from exc
    ripemd.update(hashlib.sha256(key).digest())
    return ripemd.digest()


def address_bytes(pubkey: ConsensusPubKey) -> bytes:
    """Return the 20 address bytes for a consensus public key."""
    try:
        key = base64.b64decode(pubkey.key, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ConsensusAddressError(f"invalid base64 key: {exc}") from exc
    if not key:
        raise ConsensusAddressError("empty consensus public key")

    if pubkey.type_url == ED25519_TYPE_URL:
        return _ed25519_address(key)
    if pubkey.type_url == SECP256K1_TYPE_URL:
        return _secp256k1_address(key)
    raise ConsensusAddressError(f"unsupported consensus key type {pubkey.type_url!r}")


def consensus_address(pubkey: Optional[ConsensusPubKey], prefix: str) -> str:
    """
    Derive the bech32 consensus address (e.g. ``cosmosvalcons1...``).

    Raises
    ------
    ConsensusAddressError
        If the key is missing, undecodable or of an unsupported type.
    """
    if pubkey is None:
        raise ConsensusAddressError("validator has no consensus public key")
    data = bech32.convertbits(address_bytes(pubkey), 8, 5)
    encoded = bech32.bech32_encode(f"{prefix}valcons", data) if data is not None else None
    if not encoded:
        raise ConsensusAddressError("bech32 encoding failed")
    return encoded


__all__ = ["ED25519_TYPE_URL", "SECP256K1_TYPE_URL", "address_bytes", "consensus_address"]
