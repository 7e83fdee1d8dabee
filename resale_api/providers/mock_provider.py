import json
from .base import CompletionProvider
from ..core.utils import normalize_product_text, fnv1a_32, seeded_rand, money_band, usd_range

# Share of the A1 price each condition tier typically fetches
TIER_FACTORS = (("A1", 1.0), ("A2", 0.88), ("B1", 0.74), ("B2", 0.58))

class MockProvider(CompletionProvider):
    """
    Deterministic offline stand-in for the completion service. Derives a
    plausible PredictionResult from a hash of the product text so local
    development and demos work without an API key.
    """
    name = "mock"

    def is_configured(self) -> bool:
        return True

    async def complete(self, messages: list[dict]) -> str:
        user = next((m["content"] for m in messages if m.get("role") == "user"), "")
        product = user.split(":", 1)[1].strip() if ":" in user else user.strip()
        seed = fnv1a_32(normalize_product_text(product))

        base = int(40 + seeded_rand(seed, 1)[0] * 1_200)
        low, high = money_band(base, seed)
        demand = int(35 + seeded_rand(seed+2, 1)[0] * 60)      # 35–95
        confidence = int(50 + seeded_rand(seed+3, 1)[0] * 35)  # 50–85

        tiers = []
        for tier, factor in TIER_FACTORS:
            t_low, t_high = money_band(int(high * factor), seed + len(tiers) + 10)
            tiers.append({"tier": tier, "range": usd_range(t_low, t_high)})

        window = (
            "Sell within the next 30 days while demand is strong."
            if demand >= 60 else
            "List within 60–90 days; demand is steady but not urgent."
        )
        prediction = {
            "productTitle": product[:80] or "Unknown product",
            "valueRange": usd_range(low, high),
            "demandScore": demand,
            "confidenceScore": confidence,
            "resaleWindow": window,
            "conditionPricing": tiers,
            "summary": (
                f"Offline estimate for {product or 'this item'}. "
                "Figures are synthetic and only suitable for testing."
            ),
        }
        return json.dumps(prediction, ensure_ascii=False)
