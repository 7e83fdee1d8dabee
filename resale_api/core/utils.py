def normalize_product_text(text: str) -> str:
    """
    Minimal normalization so seeds are stable:
    - trim whitespace
    - lowercase
    - collapse multiple spaces
    """
    return " ".join(text.strip().lower().split())

def truncate(text: str, limit: int = 500) -> str:
    """Shorten long diagnostic text for log lines."""
    if len(text) <= limit:
        return text
    return text[:limit] + f"... [{len(text) - limit} more chars]"

def fnv1a_32(s: str) -> int:
    """Deterministic, fast hash for seed generation."""
    h = 0x811c9dc5
    for c in s.encode("utf-8"):
        h ^= c
        h = (h * 0x01000193) & 0xFFFFFFFF
    return h

def seeded_rand(seed: int, n: int = 1) -> list[float]:
    """
    Stateless pseudo-random generator (Mulberry32-like) so
    same seed → same outputs without storing PRNG state.
    """
    out = []
    t = (seed + 0x6D2B79F5) & 0xFFFFFFFF
    for _ in range(n):
        t = (t ^ (t >> 15)) * (t | 1) & 0xFFFFFFFF
        t ^= t + ((t ^ (t >> 7)) * (t | 61) & 0xFFFFFFFF)
        r = ((t ^ (t >> 14)) & 0xFFFFFFFF) / 4294967296.0
        out.append(r)
    return out

def money_band(base: int, seed: int) -> tuple[int, int]:
    """Compute +/- spread around base price using seed for variety."""
    spread = 0.05 + seeded_rand(seed+1, 1)[0] * 0.07  # 5–12%
    low = int(round(base * (1 - spread)))
    high = int(round(base * (1 + spread)))
    return low, high

def usd_range(low: int, high: int) -> str:
    """Render a price band the way the model is asked to, e.g. "$250 – $300"."""
    return f"${low:,} – ${high:,}"
