"""
Search Record Models
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

MATCH_EXACT = "exact"
MATCH_ALTERNATIVE = "alternative"


@dataclass
class RawRecord:
    """A single listing as returned by a source adapter."""

    platform: str = ""
    title: str = ""
    price: str = ""
    link: str = ""
    image: str = ""

    def to_dict(self) -> dict:
        """Convert record to dictionary."""
        return {
            'platform': self.platform,
            'title': self.title,
            'price': self.price,
            'link': self.link,
            'image': self.image,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'RawRecord':
        """Create a RawRecord from an adapter dictionary."""
        price = data.get('price')
        return cls(
            platform=data.get('platform') or '',
            title=data.get('title') or '',
            price='' if price is None else str(price),
            link=data.get('link') or '',
            image=data.get('image') or '',
        )


@dataclass
class Attributes:
    """Attributes derived from a record's title and price."""

    weight: Optional[str] = None
    individual_weight: float = 0
    total_weight: float = 0
    weight_unit: str = ""
    pack_size: Optional[int] = None
    price_value: float = 0
    unit_price: float = 0
    unit_price_formatted: Optional[str] = None
    features: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert attributes to the camelCase API shape."""
        return {
            'weight': self.weight,
            'individualWeight': self.individual_weight,
            'totalWeight': self.total_weight,
            'weightUnit': self.weight_unit,
            'packSize': self.pack_size,
            'priceValue': self.price_value,
            'unitPrice': self.unit_price,
            'unitPriceFormatted': self.unit_price_formatted,
            'features': list(self.features),
        }


@dataclass
class CategorizedRecord:
    """A raw record enriched with attributes, match class and price tier."""

    record: RawRecord
    attributes: Attributes
    weight_info: Optional[str] = None
    pack_info: Optional[str] = None
    display_title: Optional[str] = None
    price_category: Optional[str] = None
    match_class: str = MATCH_ALTERNATIVE

    @property
    def title(self) -> str:
        return self.record.title

    @property
    def unit_price(self) -> float:
        return self.attributes.unit_price

    @property
    def features(self) -> List[str]:
        return self.attributes.features

    def to_dict(self) -> Dict[str, Any]:
        """Flatten the record and its attributes for JSON output."""
        data = self.record.to_dict()
        data.update({
            'displayTitle': self.display_title or self.record.title,
            'weightInfo': self.weight_info,
            'packInfo': self.pack_info,
            'features': list(self.attributes.features),
            'unitPrice': self.attributes.unit_price,
            'unitPriceFormatted': self.attributes.unit_price_formatted,
            'attributes': self.attributes.to_dict(),
            'priceCategory': self.price_category,
            'matchClass': self.match_class,
        })
        return data


@dataclass
class SearchContext:
    """Per-query hints used for exact-match classification."""

    query: str = ""
    potential_brands: List[str] = field(default_factory=list)
    search_size: Optional[str] = None


@dataclass
class CategorizedResults:
    """Exact matches and alternatives, each in input order."""

    exact_matches: List[CategorizedRecord] = field(default_factory=list)
    alternatives: List[CategorizedRecord] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'exactMatches': [item.to_dict() for item in self.exact_matches],
            'alternatives': [item.to_dict() for item in self.alternatives],
        }
