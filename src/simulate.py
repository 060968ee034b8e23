import argparse
import logging
import random
from typing import List, Optional

from clenc.keys import generate_key_pair
from clenc.setup import DEFAULT_PRIME_BITS, setup


def main(argv: Optional[List[str]] = None):
    """
    Runs the CL scheme end to end: group setup, key generation, encryption of
    two random exponents a and b, homomorphic a*b and a+b, and decryption.
    Every decrypted element is printed next to the one it should equal.
    """
    parser = argparse.ArgumentParser(
        description="Castagnos-Laguillaumie linearly homomorphic encryption demo"
    )
    parser.add_argument(
        "--bits", type=int, default=DEFAULT_PRIME_BITS, help="bit length of each prime factor of N"
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="seed a deterministic (insecure) PRNG"
    )
    parser.add_argument("--verbose", action="store_true", help="enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    rng = random.Random(args.seed) if args.seed is not None else None

    print("--- Group Setup ---")
    ctx = setup(bits=args.bits, rng=rng)
    print(f"Composite order N: {ctx.n.bit_length()}-bit")
    print(f"f  = {ctx.f}")
    print(f"gq = {ctx.gq}\n")

    print("--- Key Generation ---")
    private_key, public_key = generate_key_pair(ctx, rng)
    print(f"pk = {public_key.h}\n")

    ec = ctx.ec
    a = ec.random_scalar(rng)
    b = ec.random_scalar(rng)

    # Encrypt values a and b
    enc_a = public_key.encrypt(a, rng)
    enc_b = public_key.encrypt(b, rng)

    # Encrypted product a*b and sum a+b
    enc_prod = public_key.homo_mult(a, enc_b)
    enc_sum = public_key.homo_add(enc_a, enc_b)

    checks = [
        ("f^a", ec.scalar_mult(a, ctx.f), private_key.decrypt(enc_a)),
        ("f^b", ec.scalar_mult(b, ctx.f), private_key.decrypt(enc_b)),
        ("f^(a*b)", ec.scalar_mult(a * b % ctx.n, ctx.f), private_key.decrypt(enc_prod)),
        ("f^(a+b)", ec.scalar_mult((a + b) % ctx.n, ctx.f), private_key.decrypt(enc_sum)),
    ]

    print("--- Decryption ---")
    ok = True
    for label, expected, decrypted in checks:
        match = expected == decrypted
        print(f"{label:8} expected  {expected}")
        print(f"{'':8} decrypted {decrypted} {'OK' if match else 'MISMATCH'}")
        ok = ok and match

    if not ok:
        raise SystemExit(1)
    print("\n✅ Encryption, homomorphic product and sum all verified.")


if __name__ == "__main__":
    main()
