from fastapi import APIRouter, Depends

from ...models import StyleDefinition
from ...services import StyleCatalog
from ..deps import get_catalog

router = APIRouter(prefix="/styles", tags=["styles"])


@router.get("", response_model=list[StyleDefinition])
async def list_styles(catalog: StyleCatalog = Depends(get_catalog)) -> list[StyleDefinition]:
    """List editing styles in catalog order."""
    return catalog.list_styles()


@router.get("/{style_id}", response_model=StyleDefinition)
async def get_style(style_id: str, catalog: StyleCatalog = Depends(get_catalog)) -> StyleDefinition:
    return catalog.get_style(style_id)
