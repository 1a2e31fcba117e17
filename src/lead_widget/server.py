"""FastAPI server exposing the lead widget state and actions to a browser."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from .analytics import DataLayerSink, build_sink
from .config import WidgetConfig
from .controller import InteractionController
from .errors import InvalidTransitionError, UnknownFieldError, ValidationError
from .models import (
    ContactFormData,
    PreferredContact,
    VehicleContext,
    WidgetSnapshot,
    WidgetState,
)


class FieldUpdatePayload(BaseModel):
    field: str = Field(..., min_length=1)
    value: str


class FormValuesResponse(BaseModel):
    first_name: str
    last_name: str
    email: str
    phone: str
    preferred_contact: str
    message: str


class WidgetResponse(BaseModel):
    state: WidgetState
    dialog_open: bool
    notification: Optional[str] = None
    values: FormValuesResponse
    errors: Dict[str, str]


class SubmissionResponse(BaseModel):
    accepted: bool
    errors: Dict[str, str]
    widget: WidgetResponse


class VehicleSpecsResponse(BaseModel):
    engine: str
    horsepower: str
    transmission: str
    fuel_economy: str
    acceleration: str


class VehicleResponse(BaseModel):
    title: str
    make: str
    model: str
    year: str
    trim: str
    price: str
    specs: VehicleSpecsResponse


class DealerResponse(BaseModel):
    id: str
    name: str


class ContactOptionResponse(BaseModel):
    label: str
    value: str


class BootstrapResponse(BaseModel):
    container_id: str
    vehicle: VehicleResponse
    dealer: DealerResponse
    contact_options: List[ContactOptionResponse]


class DataLayerResponse(BaseModel):
    data_layer: List[Dict[str, Any]]
    gtag_calls: List[List[Any]]
    flushed_at: float


def create_app(
    controller: InteractionController | None = None,
    config: WidgetConfig | None = None,
) -> FastAPI:
    if controller is None:
        config = config or WidgetConfig.from_env()
        controller = InteractionController(config=config, sink=build_sink(config))

    app = FastAPI(
        title="Vehicle Lead Widget API",
        version="1.0.0",
        description="Contact inquiry and test drive capture for a single listing.",
    )
    app.state.controller = controller

    @app.get("/health")
    def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/widget/bootstrap", response_model=BootstrapResponse)
    def bootstrap() -> BootstrapResponse:
        return BootstrapResponse(
            container_id=controller.config.container_id,
            vehicle=_serialize_vehicle(controller.vehicle),
            dealer=DealerResponse(**controller.config.dealer.to_payload()),
            contact_options=[
                ContactOptionResponse(label=option.display_label, value=option.value)
                for option in PreferredContact
            ],
        )

    @app.get("/widget", response_model=WidgetResponse)
    def read_widget() -> WidgetResponse:
        return _serialize_widget(controller.snapshot())

    @app.post("/widget/contact/open", response_model=WidgetResponse)
    def open_contact() -> WidgetResponse:
        _run(controller.open_contact)
        return _serialize_widget(controller.snapshot())

    @app.post("/widget/contact/cancel", response_model=WidgetResponse)
    def cancel_contact() -> WidgetResponse:
        _run(controller.cancel)
        return _serialize_widget(controller.snapshot())

    @app.post("/widget/contact/dismiss", response_model=WidgetResponse)
    def dismiss_acknowledgment() -> WidgetResponse:
        _run(controller.dismiss)
        return _serialize_widget(controller.snapshot())

    @app.patch("/widget/fields", response_model=WidgetResponse)
    def update_field(payload: FieldUpdatePayload) -> WidgetResponse:
        _run(controller.update_field, payload.field, payload.value)
        return _serialize_widget(controller.snapshot())

    @app.post("/widget/submit", response_model=SubmissionResponse)
    def submit() -> SubmissionResponse:
        result = _run(controller.submit)
        return SubmissionResponse(
            accepted=result.accepted,
            errors=result.errors,
            widget=_serialize_widget(controller.snapshot()),
        )

    @app.post("/widget/test-drive")
    def request_test_drive() -> Dict[str, str]:
        controller.request_test_drive()
        return {"status": "dispatched"}

    @app.get("/analytics/data-layer", response_model=DataLayerResponse)
    def flush_data_layer() -> DataLayerResponse:
        sink = controller.sink
        if not isinstance(sink, DataLayerSink):
            raise HTTPException(status_code=404, detail="data layer not available")
        batch = sink.flush()
        return DataLayerResponse(
            data_layer=batch.data_layer,
            gtag_calls=[list(call) for call in batch.gtag_calls],
            flushed_at=batch.flushed_at.timestamp(),
        )

    return app


def _run(action: Callable[..., Any], *args: Any) -> Any:
    try:
        return action(*args)
    except InvalidTransitionError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except UnknownFieldError as exc:
        raise HTTPException(
            status_code=422,
            detail=f"Unknown field: {exc.args[0]}",
        ) from exc
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def _serialize_values(values: ContactFormData) -> FormValuesResponse:
    return FormValuesResponse(
        first_name=values.first_name,
        last_name=values.last_name,
        email=values.email,
        phone=values.phone,
        preferred_contact=values.preferred_contact.value,
        message=values.message,
    )


def _serialize_widget(snapshot: WidgetSnapshot) -> WidgetResponse:
    return WidgetResponse(
        state=snapshot.state,
        dialog_open=snapshot.dialog_open,
        notification=snapshot.notification,
        values=_serialize_values(snapshot.values),
        errors=snapshot.errors,
    )


def _serialize_vehicle(vehicle: VehicleContext) -> VehicleResponse:
    return VehicleResponse(
        title=vehicle.title,
        make=vehicle.make,
        model=vehicle.model,
        year=vehicle.year,
        trim=vehicle.trim,
        price=vehicle.price,
        specs=VehicleSpecsResponse(
            engine=vehicle.specs.engine,
            horsepower=vehicle.specs.horsepower,
            transmission=vehicle.specs.transmission,
            fuel_economy=vehicle.specs.fuel_economy,
            acceleration=vehicle.specs.acceleration,
        ),
    )


app = create_app()
