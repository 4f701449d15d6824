"""API routes for unit lookup, conversion and quantity formatting."""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from recipefinder.logging_config import get_logger
from recipefinder.normalize.units import (
    ConversionError,
    MeasurementSystem,
    UnitType,
    convert,
    convert_volume,
    convert_weight,
    format_quantity,
    get_unit_type,
    scaled_quantity,
    unit_system,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/units", tags=["units"])


class UnitInfoResponse(BaseModel):
    """What kind of unit a symbol is."""

    unit: str
    unit_type: UnitType
    system: MeasurementSystem | None = None


class ConvertRequest(BaseModel):
    """Same-kind conversion between two units."""

    value: float
    from_unit: str
    to_unit: str


class ConvertResponse(BaseModel):
    """Result of a same-kind conversion."""

    value: float
    unit: str
    unit_type: UnitType
    display: str


class SystemConvertRequest(BaseModel):
    """Convert a quantity for display in a measurement system."""

    value: float
    unit: str
    system: MeasurementSystem
    ingredient_name: str | None = None


class FormatRequest(BaseModel):
    """Scale and format a quantity."""

    value: float
    factor: float = Field(default=1.0, ge=0)


class FormatResponse(BaseModel):
    """Formatted quantity."""

    value: float
    display: str


@router.get("/{unit}", response_model=UnitInfoResponse)
async def get_unit(unit: str) -> UnitInfoResponse:
    """Look up the kind and measurement system of a unit symbol."""
    return UnitInfoResponse(unit=unit, unit_type=get_unit_type(unit), system=unit_system(unit))


@router.post("/convert", response_model=ConvertResponse)
async def convert_units(request: ConvertRequest) -> ConvertResponse:
    """
    Convert between two weight units or two volume units.

    Unknown units and mixed weight/volume requests are rejected with 422.
    """
    unit_type = get_unit_type(request.from_unit)
    try:
        if unit_type == "weight":
            result = convert_weight(request.value, request.from_unit, request.to_unit)
        elif unit_type == "volume":
            result = convert_volume(request.value, request.from_unit, request.to_unit)
        else:
            result = None
    except ConversionError as e:
        logger.info(f"Rejected conversion request: {e}")
        raise HTTPException(
            status_code=422,
            detail=str(e),
        )

    if result is None:
        raise HTTPException(
            status_code=422,
            detail=f"Cannot convert {request.from_unit!r} to {request.to_unit!r}",
        )

    return ConvertResponse(
        value=result,
        unit=request.to_unit,
        unit_type=unit_type,
        display=f"{format_quantity(result)} {request.to_unit}",
    )


@router.post("/system", response_model=ConvertResponse)
async def convert_to_system(request: SystemConvertRequest) -> ConvertResponse:
    """Express a quantity in the preferred measurement system."""
    value, unit = convert(request.value, request.unit, request.system, request.ingredient_name)
    display = f"{format_quantity(value)} {unit}" if unit else format_quantity(value)
    return ConvertResponse(value=value, unit=unit, unit_type=get_unit_type(unit), display=display)


@router.post("/format", response_model=FormatResponse)
async def format_value(request: FormatRequest) -> FormatResponse:
    """Scale a quantity by a servings factor and format it for display."""
    value = scaled_quantity(request.value, request.factor)
    return FormatResponse(value=value, display=format_quantity(value))
