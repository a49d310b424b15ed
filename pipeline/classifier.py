"""
Precision classifier for trace hops.

Assigns each hop a geolocation precision tier and resolves the label shown
next to it on the map, following a per-language fallback chain.
"""

from typing import NamedTuple, Optional, Tuple

from models import HopRecord, Language, PrecisionTier


class HopClassification(NamedTuple):
    """Precision tier and display label of one hop."""
    precision_tier: PrecisionTier
    label: str


HIGH_PRECISION_TIERS = frozenset({PrecisionTier.CITY, PrecisionTier.SUBDIVISION})


def resolve_precision(hop: HopRecord) -> PrecisionTier:
    """
    Resolve the precision tier of a hop.

    An explicit tag always wins. Without one the tier is inferred from the
    most specific location field present; a hop with no location names at
    all is still tagged "country".

    Args:
        hop: Hop record

    Returns:
        Resolved precision tier
    """
    if hop.geo_precision is not None:
        return hop.geo_precision
    if hop.city or hop.city_localized:
        return PrecisionTier.CITY
    if hop.subdivision or hop.subdivision_localized:
        return PrecisionTier.SUBDIVISION
    return PrecisionTier.COUNTRY


def _label_chain(hop: HopRecord, language: Language) -> Tuple[Optional[str], ...]:
    if language == Language.PRIMARY:
        return (hop.city_localized, hop.subdivision_localized, hop.host, hop.ip)
    return (hop.city, hop.subdivision, hop.host, hop.ip)


def resolve_label(hop: HopRecord, language: Language) -> str:
    """
    Resolve the display label of a hop.

    The first non-empty candidate wins:
        primary:  city_localized -> subdivision_localized -> host -> ip
        fallback: city -> subdivision -> host -> ip

    Returns an empty string when the hop carries no usable name.
    """
    for candidate in _label_chain(hop, language):
        if candidate:
            return candidate
    return ""


def classify_hop(hop: HopRecord, language: Language = Language.PRIMARY) -> HopClassification:
    """Classify a hop into its precision tier and display label."""
    return HopClassification(
        precision_tier=resolve_precision(hop),
        label=resolve_label(hop, language)
    )


def is_high_precision(tier: PrecisionTier) -> bool:
    """True for tiers precise enough to draw path lines through."""
    return tier in HIGH_PRECISION_TIERS
