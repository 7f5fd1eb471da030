"""Calculator Catalog: read-only registry of calculator descriptors.

Invariants:
    - Names and slugs are unique; duplicates fail at construction
    - Catalog order is stable (prompts built from it are deterministic)
    - Nothing mutates a descriptor after load
"""

from collections.abc import Iterable
from dataclasses import dataclass

from homecalc.core.domain_types import CalculatorCategory


@dataclass(frozen=True, slots=True)
class CalculatorDescriptor:
    name: str
    slug: str
    description: str
    category: CalculatorCategory

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
            "category": self.category.value,
        }


class CalculatorCatalog:
    """Lookup table over an ordered collection of descriptors."""

    def __init__(self, descriptors: Iterable[CalculatorDescriptor]):
        self._descriptors = tuple(descriptors)
        self._by_name: dict[str, CalculatorDescriptor] = {}
        self._by_slug: dict[str, CalculatorDescriptor] = {}
        self._by_folded_name: dict[str, CalculatorDescriptor] = {}
        for d in self._descriptors:
            if d.name in self._by_name:
                raise ValueError(f"Duplicate calculator name: {d.name}")
            if d.slug in self._by_slug:
                raise ValueError(f"Duplicate calculator slug: {d.slug}")
            self._by_name[d.name] = d
            self._by_slug[d.slug] = d
            self._by_folded_name[d.name.casefold()] = d

    def __iter__(self):
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def names(self) -> list[str]:
        return [d.name for d in self._descriptors]

    def by_name(self, name: str) -> CalculatorDescriptor | None:
        """Exact, byte-for-byte name lookup."""
        return self._by_name.get(name)

    def by_slug(self, slug: str) -> CalculatorDescriptor | None:
        return self._by_slug.get(slug)

    def has_name(self, name: str) -> bool:
        return name in self._by_name

    def has_slug(self, slug: str) -> bool:
        return slug in self._by_slug

    def in_category(self, category: CalculatorCategory) -> list[CalculatorDescriptor]:
        return [d for d in self._descriptors if d.category == category]

    def resolve_names(self, names: Iterable[str]) -> list[CalculatorDescriptor]:
        """Resolve recommended names to descriptors, case-insensitively.

        Unmatched names are dropped; each calculator appears at most once.
        """
        resolved: list[CalculatorDescriptor] = []
        for name in names:
            d = self._by_folded_name.get(name.strip().casefold())
            if d is not None and d not in resolved:
                resolved.append(d)
        return resolved


def _calc(name: str, slug: str, description: str, category: CalculatorCategory):
    return CalculatorDescriptor(name, slug, description, category)


_HVAC = CalculatorCategory.HVAC
_HOME = CalculatorCategory.HOME_IMPROVEMENT
_GARDEN = CalculatorCategory.GARDENING
_OTHER = CalculatorCategory.OTHER

DEFAULT_CALCULATORS: tuple[CalculatorDescriptor, ...] = (
    # HVAC
    _calc("HVAC Load Calculator", "hvac-load",
          "Determine the total heating and cooling load for a building (Manual J).", _HVAC),
    _calc("AC Size (BTU) Calculator", "btu-calculator",
          "Estimate the required BTU for cooling a room.", _HVAC),
    _calc("Duct Size Calculator", "duct-size",
          "Calculate the appropriate size for residential HVAC ductwork.", _HVAC),
    _calc("SEER Savings Calculator", "seer-savings-calculator",
          "Estimate savings and payback period by upgrading to a more efficient AC unit.", _HVAC),
    _calc("Mini-Split Cost Estimator", "mini-split-cost",
          "Estimate the cost to install a ductless mini-split system.", _HVAC),
    _calc("Furnace Cost Estimator", "furnace-cost",
          "Estimate the cost of installing a new furnace.", _HVAC),
    _calc("Heat Pump Cost Estimator", "heat-pump-cost",
          "Estimate the cost of installing a new heat pump.", _HVAC),
    _calc("Thermostat Savings Calculator", "thermostat-savings",
          "Estimate savings from setting back your programmable thermostat.", _HVAC),
    _calc("Attic Insulation Calculator", "attic-insulation",
          "Determine the R-value and amount of insulation needed for your attic.", _HVAC),
    _calc("Ventilation Fan CFM Calculator", "ventilation-fan-cfm",
          "Calculate required airflow (CFM) for kitchens and bathrooms.", _HVAC),
    _calc("Dehumidifier Size Calculator", "dehumidifier-size",
          "Determine the appropriate dehumidifier size for a room or basement.", _HVAC),

    # Home Improvement
    _calc("Paint Coverage Calculator", "paint-coverage",
          "Calculate how many gallons of paint you need for your project.", _HOME),
    _calc("Flooring Calculator", "flooring-area",
          "Calculate the square footage and waste for your flooring project.", _HOME),
    _calc("Wallpaper Calculator", "wallpaper",
          "Estimate the number of wallpaper rolls needed for a room.", _HOME),
    _calc("Kitchen Remodel Estimator", "kitchen-remodel-cost",
          "Get a ballpark estimate for your kitchen renovation project.", _HOME),
    _calc("Decking Materials Calculator", "decking-calculator",
          "Calculate materials needed for building a deck.", _HOME),
    _calc("Concrete Slab Calculator", "concrete-slab-calculator",
          "Estimate the amount of concrete needed for a slab.", _HOME),
    _calc("Roofing Materials Calculator", "roofing-materials",
          "Estimate shingles or tiles needed, considering roof pitch.", _HOME),
    _calc("Tile Calculator", "tile-calculator",
          "Calculate tiles needed for flooring or walls, including waste.", _HOME),
    _calc("Drywall Calculator", "drywall-calculator",
          "Estimate drywall sheets, screws, and joint compound needed.", _HOME),
    _calc("Fence Materials Calculator", "fence-materials",
          "Estimate posts, rails, and panels needed for your fence project.", _HOME),
    _calc("Driveway Materials Calculator", "driveway-materials",
          "Estimate materials for asphalt, concrete, or paver driveways.", _HOME),

    # Gardening
    _calc("Soil & Mulch Calculator", "soil-volume",
          "Calculate the volume of soil or mulch needed for a garden bed.", _GARDEN),
    _calc("Fertilizer Needs Calculator", "fertilizer-needs",
          "Determine the amount of fertilizer for your garden area.", _GARDEN),

    # Other
    _calc("Mortgage Calculator", "mortgage-calculator",
          "Estimate your monthly mortgage payments including taxes and insurance.", _OTHER),
    _calc("Appliance Energy Cost", "energy-consumption",
          "Calculate the energy usage and cost of a single appliance.", _OTHER),
    _calc("Energy Savings Calculator", "energy-savings-calculator",
          "Compare annual costs of two appliances to see potential savings from an upgrade.", _OTHER),
    _calc("Savings Calculator", "savings-calculator",
          "Estimate the future value of your savings or investments.", _OTHER),
    _calc("Car Loan Calculator", "car-loan-calculator",
          "Calculate your monthly car loan payment.", _OTHER),
    _calc("Water Heater Energy Cost Calculator", "water-heater-energy-cost",
          "Compare energy costs of tank vs. tankless water heaters.", _OTHER),
    _calc("Solar Savings Calculator", "solar-savings",
          "Estimate energy bill savings and ROI for solar panel installation.", _OTHER),
)


def default_catalog() -> CalculatorCatalog:
    return CalculatorCatalog(DEFAULT_CALCULATORS)
