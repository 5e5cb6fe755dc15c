from __future__ import annotations


def is_prime(n: int) -> bool:
    # trial division up to sqrt(n) inclusive
    if n < 2:
        return False
    i = 2
    while i * i <= n:
        if n % i == 0:
            return False
        i += 1
    return True
