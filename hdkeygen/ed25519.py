import nacl.bindings


SEED_LENGTH = nacl.bindings.crypto_sign_SEEDBYTES


def keypair_from_seed(seed):
    """Returns (secret, public) for a 32-byte ed25519 seed.
    secret is the 32-byte seed itself, public the 32-byte encoded point A."""
    if len(seed) != SEED_LENGTH:
        raise ValueError(f"ed25519 seed must be {SEED_LENGTH} bytes, got {len(seed)}")
    public, _ = nacl.bindings.crypto_sign_seed_keypair(seed)
    return bytes(seed), public
