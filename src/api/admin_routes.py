"""Admin routes for reviewing festival suggestions.

Every route requires a session whose user has the ``admin`` role.

# ─── ADMIN ROUTE MAP ──────────────────────────────────────────────────
#
# /api/admin/suggestions?status=        GET     list (newest first)
# /api/admin/suggestions/{id}/approve   POST    pending → approved | duplicate
# /api/admin/suggestions/{id}/reject    POST    pending → rejected
# /api/admin/suggestions/{id}           DELETE  remove a suggestion
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from src.api.auth import AdminDep, require_admin
from src.api.routes import SuggestionServiceDep
from src.api.schemas import SuccessResponse, SuggestionResponse, SuggestionsResponse
from src.models.suggestion import ApprovalResult, SuggestionStatus
from src.utils.logging import get_logger

_logger = get_logger(__name__)

admin_router = APIRouter(prefix="/api/admin", dependencies=[Depends(require_admin)])


@admin_router.get("/suggestions", response_model=SuggestionsResponse)
async def list_suggestions(
    suggestions: SuggestionServiceDep,
    status: Annotated[SuggestionStatus | None, Query()] = None,
) -> SuggestionsResponse:
    return SuggestionsResponse(suggestions=await suggestions.list_suggestions(status))


@admin_router.post("/suggestions/{suggestion_id}/approve", response_model=ApprovalResult)
async def approve_suggestion(
    suggestion_id: int, admin: AdminDep, suggestions: SuggestionServiceDep
) -> ApprovalResult:
    result = await suggestions.approve(suggestion_id)
    _logger.info(
        "admin_approval",
        admin_id=admin.id,
        suggestion_id=suggestion_id,
        outcome=result.outcome.value,
    )
    return result


@admin_router.post("/suggestions/{suggestion_id}/reject", response_model=SuggestionResponse)
async def reject_suggestion(
    suggestion_id: int, admin: AdminDep, suggestions: SuggestionServiceDep
) -> SuggestionResponse:
    suggestion = await suggestions.reject(suggestion_id)
    _logger.info("admin_rejection", admin_id=admin.id, suggestion_id=suggestion_id)
    return SuggestionResponse(suggestion=suggestion, message="Suggestion rejected")


@admin_router.delete("/suggestions/{suggestion_id}", response_model=SuccessResponse)
async def delete_suggestion(
    suggestion_id: int, admin: AdminDep, suggestions: SuggestionServiceDep
) -> SuccessResponse:
    await suggestions.delete(suggestion_id)
    _logger.info("admin_suggestion_deleted", admin_id=admin.id, suggestion_id=suggestion_id)
    return SuccessResponse()
