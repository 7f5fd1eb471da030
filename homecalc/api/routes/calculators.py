"""Calculator Catalog: read-only listing of registered calculators."""

from fastapi import APIRouter, Depends

from homecalc.api.dependencies import get_catalog
from homecalc.core.catalog import CalculatorCatalog
from homecalc.core.domain_types import CalculatorCategory

router = APIRouter(prefix="/api/v1/calculators", tags=["calculators"])


@router.get("")
async def list_calculators(
    category: CalculatorCategory | None = None,
    catalog: CalculatorCatalog = Depends(get_catalog),
):
    """All calculators in catalog order, optionally one category."""
    descriptors = catalog.in_category(category) if category else list(catalog)
    return {"calculators": [d.to_dict() for d in descriptors]}
