"""ASGI application for Galley."""
# mypy: ignore-errors

from __future__ import annotations

import logging
from datetime import date
from time import perf_counter
from typing import Any, Optional
from uuid import uuid4

from fastapi import Body, Depends, FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import BaseModel, ConfigDict, Field

from galley import __version__, metrics
from galley.analysis import KitchenAnalysisService
from galley.config import Settings, get_settings
from galley.logging_utils import configure_logging as configure_app_logging
from galley.models.analysis import AnalysisReport
from galley.models.equipment import Equipment, EquipmentCondition
from galley.models.grocery import GroceryList, ShoppingSyncResult
from galley.models.maintenance import MaintenanceScheduleEntry
from galley.models.recommendation import RecommendationCandidate
from galley.server import deps

logger = logging.getLogger(__name__)


def _json_safe(value: Any) -> Any:
    """Convert non-serializable values into JSON-safe representations."""

    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, (list, tuple)):
        return [_json_safe(entry) for entry in value]
    if isinstance(value, dict):
        return {key: _json_safe(sub_value) for key, sub_value in value.items()}
    return repr(value)


def _configure_logging(settings: Settings) -> None:
    secrets = [settings.api_token or "", settings.advisor_llm_api_key or ""]
    configure_app_logging(settings.log_level, settings.log_format, secrets)


def _owned_ids(provider: deps.EquipmentProvider, user_id: int) -> set[int]:
    return {item.id for item in provider(user_id)}


def create_app() -> FastAPI:
    """Create and configure a FastAPI application instance."""

    settings = get_settings()
    _configure_logging(settings)

    application = FastAPI(title="Galley Kitchen Equipment", version=__version__)
    logger.debug("Application created with log level %s", settings.log_level)

    if settings.log_requests:
        access_logger = logging.getLogger("galley.access")

        @application.middleware("http")
        async def log_request_response(request: Request, call_next):
            """Log request/response details and record request metrics."""

            request_id = request.headers.get("X-Request-ID") or uuid4().hex
            request.state.request_id = request_id
            start = perf_counter()
            path = request.url.path
            method = request.method
            try:
                response: Response = await call_next(request)
            except Exception:
                duration_ms = (perf_counter() - start) * 1000
                access_logger.exception(
                    "HTTP %s %s status=500 duration_ms=%.2f",
                    method,
                    path,
                    duration_ms,
                    extra={"request_id": request_id},
                )
                metrics.REQUEST_COUNT.labels(method=method, path=path, status="500").inc()
                metrics.REQUEST_LATENCY.labels(method=method, path=path).observe(
                    duration_ms / 1000.0
                )
                raise

            duration_ms = (perf_counter() - start) * 1000
            response.headers.setdefault("X-Request-ID", request_id)
            access_logger.info(
                "HTTP %s %s status=%s duration_ms=%.2f",
                method,
                path,
                response.status_code,
                duration_ms,
                extra={"request_id": request_id},
            )
            metrics.REQUEST_COUNT.labels(
                method=method, path=path, status=str(response.status_code)
            ).inc()
            metrics.REQUEST_LATENCY.labels(method=method, path=path).observe(duration_ms / 1000.0)
            return response

    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        log_kwargs: dict[str, Any] = {}
        request_id = getattr(request.state, "request_id", None)
        if request_id:
            log_kwargs["extra"] = {"request_id": request_id}

        logger.warning(
            "Validation error on %s %s: %s",
            request.method,
            request.url.path,
            exc.errors(),
            **log_kwargs,
        )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": [_json_safe(error) for error in exc.errors()]},
        )

    @application.get("/health", include_in_schema=False)
    def health() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    @application.get("/metrics", include_in_schema=False)
    def metrics_endpoint() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @application.get(
        "/equipment",
        response_model=list[Equipment],
        summary="List kitchen equipment",
    )
    def equipment_list(
        user_id: int = Depends(deps.get_user_id),
        provider: deps.EquipmentProvider = Depends(deps.get_equipment_provider),
    ) -> list[Equipment]:
        return provider(user_id)

    @application.post(
        "/equipment",
        response_model=Equipment,
        status_code=status.HTTP_201_CREATED,
        summary="Register kitchen equipment",
    )
    def equipment_create(
        payload: EquipmentCreateRequest = Body(...),
        auth: None = Depends(deps.require_api_token),
        user_id: int = Depends(deps.get_user_id),
        creator: deps.EquipmentCreator = Depends(deps.get_equipment_creator),
    ) -> Equipment:
        create_payload = payload.model_dump()
        logger.debug("Creating equipment payload=%s", create_payload)
        return creator(user_id, create_payload)

    @application.put(
        "/equipment/{equipment_id}",
        response_model=Equipment,
        summary="Update kitchen equipment",
    )
    def equipment_update(
        equipment_id: int,
        payload: EquipmentUpdateRequest = Body(...),
        auth: None = Depends(deps.require_api_token),
        user_id: int = Depends(deps.get_user_id),
        provider: deps.EquipmentProvider = Depends(deps.get_equipment_provider),
        updater: deps.EquipmentUpdater = Depends(deps.get_equipment_updater),
    ) -> Equipment:
        update_payload = payload.model_dump(exclude_unset=True)
        if not update_payload:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="No fields provided for update",
            )
        if equipment_id not in _owned_ids(provider, user_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Equipment {equipment_id} not found",
            )
        try:
            return updater(equipment_id, update_payload)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    @application.delete(
        "/equipment/{equipment_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        summary="Delete kitchen equipment",
    )
    def equipment_delete(
        equipment_id: int,
        auth: None = Depends(deps.require_api_token),
        user_id: int = Depends(deps.get_user_id),
        provider: deps.EquipmentProvider = Depends(deps.get_equipment_provider),
        deleter: deps.EquipmentDeleter = Depends(deps.get_equipment_deleter),
    ) -> None:
        if equipment_id not in _owned_ids(provider, user_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Equipment {equipment_id} not found",
            )
        try:
            deleter(equipment_id)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    @application.post(
        "/analysis",
        response_model=AnalysisReport,
        summary="Run the equipment advisor and reconcile its output",
    )
    def analysis_run(
        payload: Optional[AnalysisRequest] = Body(default=None),
        auth: None = Depends(deps.require_api_token),
        user_id: int = Depends(deps.get_user_id),
        service: KitchenAnalysisService = Depends(deps.get_analysis_service),
    ) -> AnalysisReport:
        request = payload or AnalysisRequest()
        preferences = request.preferences or get_settings().cooking_preferences
        budget = request.budget if request.budget is not None else get_settings().recommendation_budget
        return service.run_analysis(user_id, preferences, budget)

    @application.get(
        "/maintenance-schedule",
        response_model=list[MaintenanceScheduleEntry],
        summary="Latest reconciled maintenance schedule",
    )
    def maintenance_schedule(
        user_id: int = Depends(deps.get_user_id),
        service: KitchenAnalysisService = Depends(deps.get_analysis_service),
    ) -> list[MaintenanceScheduleEntry]:
        return service.maintenance_schedule(user_id)

    @application.post(
        "/maintenance-schedule/{equipment_id}/complete",
        response_model=Equipment,
        summary="Mark maintenance as complete",
    )
    def maintenance_complete(
        equipment_id: int,
        payload: Optional[MaintenanceCompleteRequest] = Body(default=None),
        auth: None = Depends(deps.require_api_token),
        user_id: int = Depends(deps.get_user_id),
        service: KitchenAnalysisService = Depends(deps.get_analysis_service),
    ) -> Equipment:
        when = payload.completed_on if payload else None
        try:
            return service.complete_maintenance(user_id, equipment_id, when)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    @application.get(
        "/recommendations",
        response_model=list[RecommendationCandidate],
        summary="Latest equipment recommendations",
    )
    def recommendations_list(
        user_id: int = Depends(deps.get_user_id),
        service: KitchenAnalysisService = Depends(deps.get_analysis_service),
    ) -> list[RecommendationCandidate]:
        return service.recommendations(user_id)

    @application.post(
        "/recommendations/{rec_id}/dismiss",
        response_model=list[RecommendationCandidate],
        summary="Dismiss a recommendation",
    )
    def recommendations_dismiss(
        rec_id: int,
        auth: None = Depends(deps.require_api_token),
        user_id: int = Depends(deps.get_user_id),
        service: KitchenAnalysisService = Depends(deps.get_analysis_service),
    ) -> list[RecommendationCandidate]:
        try:
            return service.dismiss_recommendation(user_id, rec_id)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    @application.post(
        "/recommendations/{rec_id}/shopping-list",
        response_model=ShoppingSyncResult,
        summary="Add a recommendation to the shopping list",
    )
    def recommendations_add_to_shopping_list(
        rec_id: int,
        auth: None = Depends(deps.require_api_token),
        user_id: int = Depends(deps.get_user_id),
        service: KitchenAnalysisService = Depends(deps.get_analysis_service),
    ) -> ShoppingSyncResult:
        try:
            return service.add_to_shopping_list(user_id, rec_id)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    @application.get(
        "/grocery-lists",
        response_model=list[GroceryList],
        summary="List grocery lists",
    )
    def grocery_lists(
        user_id: int = Depends(deps.get_user_id),
        provider: deps.GroceryListProvider = Depends(deps.get_grocery_list_provider),
    ) -> list[GroceryList]:
        return provider(user_id)

    return application


class EquipmentCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    category: str = Field(default="Appliances", min_length=1, max_length=128)
    condition: EquipmentCondition = Field(default=EquipmentCondition.GOOD)
    purchase_date: Optional[date] = Field(default=None, alias="purchaseDate")
    last_maintenance_date: Optional[date] = Field(default=None, alias="lastMaintenanceDate")
    maintenance_interval: Optional[int] = Field(default=None, ge=1, alias="maintenanceInterval")
    maintenance_notes: Optional[str] = Field(default=None, max_length=1000, alias="maintenanceNotes")
    purchase_price: Optional[int] = Field(default=None, ge=0, alias="purchasePrice")

    model_config = ConfigDict(populate_by_name=True)


class EquipmentUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    category: Optional[str] = Field(default=None, min_length=1, max_length=128)
    condition: Optional[EquipmentCondition] = Field(default=None)
    purchase_date: Optional[date] = Field(default=None, alias="purchaseDate")
    last_maintenance_date: Optional[date] = Field(default=None, alias="lastMaintenanceDate")
    maintenance_interval: Optional[int] = Field(default=None, ge=1, alias="maintenanceInterval")
    maintenance_notes: Optional[str] = Field(default=None, max_length=1000, alias="maintenanceNotes")
    purchase_price: Optional[int] = Field(default=None, ge=0, alias="purchasePrice")

    model_config = ConfigDict(populate_by_name=True)


class AnalysisRequest(BaseModel):
    preferences: list[str] = Field(default_factory=list)
    budget: Optional[float] = Field(default=None, gt=0)


class MaintenanceCompleteRequest(BaseModel):
    completed_on: Optional[date] = Field(default=None, alias="date")

    model_config = ConfigDict(populate_by_name=True)


app = create_app()

__all__ = ["app", "create_app"]
