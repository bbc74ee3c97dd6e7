"""Context-aware decoding and encoding of Dark Sky forecast documents.

Decoding runs in two stages at every level of the document. The first
stage validates the shape of a level into a raw model whose
context-dependent fields (temperatures, timestamps and nested payloads)
are kept as uninterpreted wire values. The second stage resolves those
values with the ``CodecContext`` derived once from the root ``flags.units``
selector. Encoding mirrors this: plain fields are dumped directly and each
context-dependent field is converted before being spliced into the
enclosing wire object.

The context is always an explicit argument; no level stores it.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, Field, ValidationError
from pydantic.alias_generators import to_camel

from darksky_forecast.exceptions import MalformedForecastError
from darksky_forecast.weather.models import (
    Forecast, ForecastFields, GroupFields, Observation, ObservationFields,
    ObservationGroup, TEMPERATURE_FIELDS, TIME_FIELDS
)
from darksky_forecast.weather.temperature import Temperature
from darksky_forecast.weather.units import CodecContext

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)
Payload = Union[bytes, bytearray, str, Mapping[str, Any]]


class RawObservation(ObservationFields):
    """Observation with context-dependent fields left as raw wire values."""
    time: Any = None
    temperature: Any = None
    apparent_temperature: Any = None
    temperature_low: Any = None
    temperature_low_time: Any = None
    temperature_high: Any = None
    temperature_high_time: Any = None
    dew_point: Any = None


class RawObservationGroup(GroupFields):
    """Observation group whose records are still raw wire objects."""
    data: Optional[List[Any]] = Field(None)


class RawForecast(ForecastFields):
    """Forecast document whose payload slots are still raw wire objects."""
    currently: Any = None
    minutely: Any = None
    hourly: Any = None
    daily: Any = None


def _join(path: str, name: Union[str, int]) -> str:
    return f"{path}.{name}" if path else str(name)


def _wire_name(model: Type[BaseModel], name: str) -> str:
    return model.model_fields[name].alias or to_camel(name)


def _validation_error(exc: ValidationError, path: str) -> MalformedForecastError:
    """Build a MalformedForecastError pointing at the first failing field."""
    error = exc.errors()[0]
    field = path
    for part in error["loc"]:
        field = _join(field, part)
    return MalformedForecastError(error["msg"], field=field or None)


def _stage(model: Type[ModelT], raw: Any, path: str) -> ModelT:
    """First stage: validate the shape of one level of the document."""
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        raise _validation_error(e, path) from e


def decode_temperature(raw: Any, context: CodecContext, field: str = "") -> Optional[Temperature]:
    """Resolve a raw temperature scalar with the context's unit."""
    if raw is None:
        return None
    try:
        return Temperature.decode(raw, context.temperature_unit)
    except MalformedForecastError as e:
        raise MalformedForecastError(e.args[0], field=field or None) from e


def decode_time(raw: Any, field: str = "") -> Optional[datetime]:
    """Resolve a raw Unix timestamp (seconds) to an aware UTC datetime."""
    if raw is None:
        return None
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise MalformedForecastError(
            f"expected Unix seconds, got {type(raw).__name__}", field=field or None
        )
    if isinstance(raw, float) and not raw.is_integer():
        raise MalformedForecastError("expected whole Unix seconds", field=field or None)
    try:
        return datetime.fromtimestamp(int(raw), tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise MalformedForecastError("timestamp out of range", field=field or None) from e


def encode_time(value: datetime) -> int:
    """Encode a datetime as integer Unix seconds; naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp())


def decode_observation(raw: Any, context: CodecContext, path: str = "") -> Observation:
    """Decode one observation record.

    Args:
        raw: Parsed JSON object of the record
        context: Context derived at the document root
        path: Location of the record in the document, used in errors

    Returns:
        Decoded Observation

    Raises:
        MalformedForecastError: If the record or one of its fields is malformed
        UnrecognizedUnitError: If the context carries an unknown unit
    """
    staged = _stage(RawObservation, raw, path)

    values: Dict[str, Any] = {
        name: getattr(staged, name) for name in ObservationFields.model_fields
    }
    for name in TIME_FIELDS:
        field = _join(path, _wire_name(Observation, name))
        values[name] = decode_time(getattr(staged, name), field)
    for name in TEMPERATURE_FIELDS:
        field = _join(path, _wire_name(Observation, name))
        values[name] = decode_temperature(getattr(staged, name), context, field)

    return Observation(**values)


def encode_observation(observation: Observation, context: CodecContext) -> Dict[str, Any]:
    """Encode one observation record to a wire object.

    Unset fields are omitted.

    Raises:
        UnrecognizedUnitError: If the context carries an unknown unit
    """
    wire: Dict[str, Any] = {}
    for name, info in Observation.model_fields.items():
        value = getattr(observation, name)
        if value is None:
            continue
        if name in TEMPERATURE_FIELDS:
            value = value.encode(context.temperature_unit)
        elif name in TIME_FIELDS:
            value = encode_time(value)
        wire[info.alias or to_camel(name)] = value
    return wire


def decode_group(raw: Any, context: CodecContext, path: str = "") -> ObservationGroup:
    """Decode an observation group, one record at a time.

    Record order and count are preserved; a ``null`` record becomes the
    zero-valued ``Observation()``. A missing ``data`` array stays ``None``.
    """
    staged = _stage(RawObservationGroup, raw, path)

    data: Optional[List[Observation]] = None
    if staged.data is not None:
        data = []
        for index, item in enumerate(staged.data):
            if item is None:
                data.append(Observation())
            else:
                data.append(decode_observation(item, context, _join(_join(path, "data"), index)))

    return ObservationGroup(summary=staged.summary, icon=staged.icon, data=data)


def encode_group(group: ObservationGroup, context: CodecContext) -> Dict[str, Any]:
    """Encode an observation group to a wire object."""
    wire = group.model_dump(by_alias=True, exclude_none=True, include=set(GroupFields.model_fields))
    if group.data is not None:
        wire["data"] = [encode_observation(observation, context) for observation in group.data]
    return wire


def decode_forecast(payload: Payload) -> Forecast:
    """Decode a forecast document.

    The unit selector in ``flags`` is read first; the context derived from
    it is then used for every nested record.

    Args:
        payload: Response body (bytes or str) or an already parsed object

    Returns:
        Decoded Forecast

    Raises:
        MalformedForecastError: If the document does not match the expected shape
        UnrecognizedUnitError: If a temperature unit is unknown
    """
    try:
        if isinstance(payload, (bytes, bytearray, str)):
            staged = RawForecast.model_validate_json(payload)
        else:
            staged = RawForecast.model_validate(payload)
    except ValidationError as e:
        raise _validation_error(e, "") from e

    context = staged.flags.context()
    logger.debug(f"Decoding forecast with units={staged.flags.units!r} as {context.temperature_unit.value}")

    values: Dict[str, Any] = {name: getattr(staged, name) for name in ForecastFields.model_fields}
    if staged.currently is not None:
        values["currently"] = decode_observation(staged.currently, context, "currently")
    for slot in ("minutely", "hourly", "daily"):
        raw = getattr(staged, slot)
        if raw is not None:
            values[slot] = decode_group(raw, context, slot)

    return Forecast(**values)


def encode_forecast(forecast: Forecast) -> Dict[str, Any]:
    """Encode a forecast document to a wire object.

    The context is re-derived from the forecast's own ``flags.units``.
    Absent payload slots are omitted.
    """
    context = forecast.flags.context()

    wire = forecast.model_dump(by_alias=True, exclude_none=True, include=set(ForecastFields.model_fields))
    if forecast.currently is not None:
        wire["currently"] = encode_observation(forecast.currently, context)
    for slot in ("minutely", "hourly", "daily"):
        group = getattr(forecast, slot)
        if group is not None:
            wire[slot] = encode_group(group, context)
    return wire


def loads(payload: Payload) -> Forecast:
    """Decode a forecast from JSON text."""
    return decode_forecast(payload)


def dumps(forecast: Forecast) -> bytes:
    """Encode a forecast to JSON bytes."""
    return json.dumps(encode_forecast(forecast)).encode("utf-8")
