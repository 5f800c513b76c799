from fastapi import APIRouter, Depends

from ...models import EditingRequest, EditingResult
from ...services import EditingAutomationService
from ..deps import get_editing_service

router = APIRouter(tags=["editing"])


@router.post("/start-editing", response_model=EditingResult)
async def start_editing(
    request: EditingRequest, editing: EditingAutomationService = Depends(get_editing_service)
) -> EditingResult:
    """Run the desktop editor automation once.

    Editor failures are not HTTP errors: the result comes back with
    ``confirmed=false`` and the reason in ``message``.
    """
    return await editing.start_editing(request.style, request.media_folder, request.output_path)
