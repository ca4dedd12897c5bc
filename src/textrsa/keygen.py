"""Number-theoretic collaborators for key generation, mainly focusing on random primes within a range.

Primality is decided by trial division against a cached table of small primes, followed by a Miller-Rabin probable
prime test with iteration counts taken from FIPS 186-5 Appendix C.1. All randomness comes from an injectable
generator, anything exposing `randrange` like `random.Random`, so that generation is reproducible under a fixed seed.
When none is given the process-wide `secrets.SystemRandom` instance is used.

Typical usage example:

    p = random_prime(2**511, 2**512)
    q = random_prime_distinct_from(2**511, 2**512, p)
    e = select_exponent((p - 1) * (q - 1))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import math
import random
import secrets

from textrsa.errors import KeyGenerationError

logger = logging.getLogger(__name__)

DEFAULT_EXPONENT: int = 65537
FALLBACK_EXPONENT: int = 3

_SMALL_PRIMES: list[int] = []
_SMALL_PRIMES_CAP: int = 0
# Ranges at most this wide are enumerated instead of sampled.
_EXHAUSTIVE_SPAN: int = 1 << 12
_SYSTEM_RANDOM = secrets.SystemRandom()


def _sieve(n: int = 10000) -> list[int]:
    """Implements the Sieve of Eratosthenes.

    Uses the textbook Sieve of Eratosthenes to generate a set of primes up to `n`.
    Includes memory space optimization and sieving until root.

    Args:
        n: The number up to which to generate primes. Defaults to 10000. Must be >= 0.

    Returns:
        A list of primes up to `n`.
    """
    if n < 2:
        return []
    i_size = (n - 1) // 2
    candidate: list[bool] = [True] * i_size
    for i in range(int(n**0.5) // 2):
        if candidate[i]:
            r = 2 * i + 3
            for j in range((r * r - 3) // 2, i_size, r):
                candidate[j] = False
    result = [2] + [(no * 2 + 3) for no, ele in enumerate(candidate) if ele]
    return result


def get_pre_primes(n: int = 10000, change: bool = False) -> list[int]:
    """Get the small primes, automatically generating if necessary.

    Uses `_SMALL_PRIMES` as a cache, regenerating when the requested bound is greater, when forced by `change` or when
    the cache is empty. The cached list is replaced wholesale, never mutated in place.

    Args:
        n: The number up to which to generate primes. Defaults to 10000. Must be >= 0.
        change: Whether to force a recomputation of primes. Defaults to False.

    Returns:
        List of primes in ascending order. All primes at least to `n` or more unless `change` is True.

    Raises:
        ValueError: If `n` is negative.
    """
    if n < 0:
        raise ValueError("n must be >= 0")
    global _SMALL_PRIMES
    global _SMALL_PRIMES_CAP
    if n > _SMALL_PRIMES_CAP or change or not _SMALL_PRIMES:
        _SMALL_PRIMES = _sieve(n)
        _SMALL_PRIMES_CAP = n
    return _SMALL_PRIMES


def _trial_division(no: int, n: int = 10000) -> bool:
    """Check the provided `no` against the known small primes.

    Args:
         no: The number to check. Must be integer and non-negative.
         n: The number up to which to generate primes. Defaults to 10000.

    Returns:
        False if `no` cannot be prime, True otherwise.
    """
    if no < 2:
        return False
    for prime in get_pre_primes(n):
        if prime**2 > no:
            return True
        if no % prime == 0:
            return False
    return True


def _miller_rabin(w: int, iters: int, rng: random.Random) -> bool:
    """Perform Miller-Rabin primality test.

    Args:
        w: Odd integer to be tested.
        iters: Number of Miller-Rabin iterations to perform.
        rng: Source of the random bases.

    Returns:
        True if `w` is probably prime, False otherwise.
    """
    if w <= 3:
        return w in (2, 3)
    tw = w - 1
    a = (tw & -tw).bit_length() - 1
    m = tw >> a
    for _ in range(iters):
        b = rng.randrange(2, w - 1)
        z = pow(b, m, w)
        if z in (1, tw):
            continue
        for _ in range(1, a):
            z = pow(z, 2, w)
            if z == tw:
                break
            if z == 1:
                return False
        else:
            return False
    return True


def check_prime(candidate: int, iters: int | None = None, n: int = 10000, rng: random.Random | None = None) -> bool:
    """Performs a composite Primality test, using a limited amount of trial divisions, before a Miller-Rabin test.

    Args:
        candidate: The candidate prime to test.
        iters: Number of Miller-Rabin iterations to perform.
            If not provided will use defaults as per the FIPS 186-5 Appendix C.1
        n: The number up to which to generate primes for trial division. Defaults to 10000.
        rng: Source of the Miller-Rabin bases. Defaults to the system random source.

    Returns:
        True if `candidate` is probably prime, False otherwise.
    """
    if candidate < 2:
        return False
    if not _trial_division(candidate, n):
        return False
    if candidate < n * n:
        # Trial division up to the root was conclusive.
        return True
    if iters is None:
        if candidate.bit_length() <= 512:
            iters = 40
        elif candidate.bit_length() <= 1024:
            iters = 56
        elif candidate.bit_length() <= 1536:
            iters = 64
        elif candidate.bit_length() <= 2048:
            iters = 70
        else:
            iters = 74
    return _miller_rabin(candidate, iters, rng or _SYSTEM_RANDOM)


def _enumerate_prime(low: int, high: int, excluded: int | None, rng: random.Random) -> int:
    """Picks uniformly among all primes of a narrow range."""
    found = [no for no in range(low, high) if no != excluded and check_prime(no, rng=rng)]
    if not found:
        raise KeyGenerationError(f"No suitable prime in range [{low}, {high}).")
    return rng.choice(found)


def _sample_prime(low: int, high: int, excluded: int | None, rng: random.Random) -> int:
    """Samples odd candidates from a wide range until one is probably prime.

    Raises:
        KeyGenerationError: If an improbable amount of candidates were rejected.
    """
    rep_cap = high.bit_length() * 10
    for attempt in range(rep_cap):
        candidate = rng.randrange(low, high) | 1
        if candidate >= high or candidate == excluded:
            continue
        if check_prime(candidate, rng=rng):
            logger.debug("Found %d-bit prime after %d candidates.", candidate.bit_length(), attempt + 1)
            return candidate
    raise KeyGenerationError(
        f"Ran an improbable {rep_cap} amount of loops with no prime found. Check the random number generator.")


def random_prime(low: int, high: int, rng: random.Random | None = None) -> int:
    """Returns a random probable prime in `[low, high)`.

    Args:
        low: Inclusive lower bound.
        high: Exclusive upper bound.
        rng: Generator exposing `randrange` and `choice`. Defaults to the system random source.

    Returns:
        A probable prime.

    Raises:
        ValueError: If the range is empty.
        KeyGenerationError: If no prime could be found in the range.
    """
    return random_prime_distinct_from(low, high, None, rng)


def random_prime_distinct_from(low: int, high: int, excluded: int | None, rng: random.Random | None = None) -> int:
    """Returns a random probable prime in `[low, high)` that differs from `excluded`.

    Args:
        low: Inclusive lower bound.
        high: Exclusive upper bound.
        excluded: The value that may not be returned, typically the first prime of a pair. None excludes nothing.
        rng: Generator exposing `randrange` and `choice`. Defaults to the system random source.

    Returns:
        A probable prime other than `excluded`.

    Raises:
        ValueError: If the range is empty.
        KeyGenerationError: If no such prime could be found in the range.
    """
    if low >= high:
        raise ValueError(f"Empty range [{low}, {high}).")
    rng = rng or _SYSTEM_RANDOM
    if high - low <= _EXHAUSTIVE_SPAN:
        return _enumerate_prime(low, high, excluded, rng)
    return _sample_prime(low, high, excluded, rng)


def select_exponent(phi: int, hint: int | None = None) -> int:
    """Chooses the public exponent for the given totient.

    Starting from `hint`, or 65537 when it is below `phi` and 3 otherwise, the candidate is increased by two until it
    is coprime to `phi`.

    Args:
        phi: Euler's totient of the modulus.
        hint: Optional starting candidate. Must be greater than 1.

    Returns:
        The first candidate coprime to `phi`.

    Raises:
        ValueError: If `hint` is 1 or smaller.
        KeyGenerationError: If the candidate reaches `phi` before a coprime value is found.
    """
    if hint is None:
        e = DEFAULT_EXPONENT if DEFAULT_EXPONENT < phi else FALLBACK_EXPONENT
    elif hint <= 1:
        raise ValueError("Exponent hint must be greater than 1.")
    else:
        e = hint
    while e < phi:
        if math.gcd(e, phi) == 1:
            return e
        logger.debug("Exponent %d shares a factor with the totient, trying %d.", e, e + 2)
        e += 2
    raise KeyGenerationError("No public exponent coprime to the totient exists below it. Check the supplied primes.")
