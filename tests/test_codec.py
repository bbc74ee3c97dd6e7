from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from darksky_forecast.exceptions import MalformedForecastError
from darksky_forecast.weather.codec import (
    decode_forecast,
    decode_group,
    decode_observation,
    dumps,
    encode_forecast,
    encode_group,
    encode_observation,
    loads,
)
from darksky_forecast.weather.models import Flags, Forecast, Observation, ObservationGroup
from darksky_forecast.weather.temperature import Temperature
from darksky_forecast.weather.units import (
    CodecContext,
    TemperatureUnit,
    from_celsius,
    from_fahrenheit,
)

FAHRENHEIT = CodecContext(temperature_unit=TemperatureUnit.FAHRENHEIT)
CELSIUS = CodecContext(temperature_unit=TemperatureUnit.CELSIUS)


def test_us_document_decodes_temperatures_as_fahrenheit(us_document):
    forecast = decode_forecast(us_document)

    assert forecast.flags.units == "us"
    assert forecast.currently.temperature.kelvin == pytest.approx(from_fahrenheit(72))
    assert forecast.currently.apparent_temperature.kelvin == pytest.approx(from_fahrenheit(70.5))
    assert forecast.currently.dew_point.kelvin == pytest.approx(from_fahrenheit(50))
    assert forecast.hourly.data[1].dew_point.kelvin == pytest.approx(from_fahrenheit(60.1))
    assert forecast.daily.data[0].temperature_low.kelvin == pytest.approx(from_fahrenheit(41.28))


def test_us_document_reencodes_to_same_scalars(us_document):
    wire = encode_forecast(decode_forecast(us_document))

    assert wire["currently"]["temperature"] == pytest.approx(72)
    assert wire["currently"]["apparentTemperature"] == pytest.approx(70.5)
    assert wire["hourly"]["data"][0]["temperature"] == pytest.approx(65.76)
    assert wire["daily"]["data"][0]["temperatureHigh"] == pytest.approx(66.35)
    assert wire["flags"] == us_document["flags"]


def test_ca_document_decodes_and_reencodes_celsius(ca_document):
    forecast = decode_forecast(ca_document)
    assert forecast.currently.temperature.kelvin == pytest.approx(from_celsius(22))

    wire = encode_forecast(forecast)
    assert wire["currently"]["temperature"] == pytest.approx(22)
    assert wire["currently"]["dewPoint"] == pytest.approx(10.5)


def test_missing_units_flag_uses_celsius(ca_document):
    del ca_document["flags"]["units"]
    forecast = decode_forecast(ca_document)
    assert forecast.currently.temperature.kelvin == pytest.approx(from_celsius(22))


def test_missing_flags_block_uses_celsius(ca_document):
    del ca_document["flags"]
    forecast = decode_forecast(ca_document)
    assert forecast.flags.units is None
    assert forecast.currently.temperature.kelvin == pytest.approx(from_celsius(22))


def test_absent_slots_stay_absent(ca_document):
    forecast = decode_forecast(ca_document)

    assert forecast.minutely is None
    assert forecast.hourly is None
    assert forecast.daily is None

    wire = encode_forecast(forecast)
    assert "minutely" not in wire
    assert "hourly" not in wire
    assert "daily" not in wire
    assert "currently" in wire


def assert_records_match(got, expected):
    assert got.keys() == expected.keys()
    for key, value in expected.items():
        if isinstance(value, str):
            assert got[key] == value
        else:
            assert got[key] == pytest.approx(value)


def test_full_round_trip_preserves_every_field(us_document):
    wire = encode_forecast(decode_forecast(us_document))

    assert wire.keys() == us_document.keys()
    assert_records_match(wire["currently"], us_document["currently"])
    for slot in ("hourly", "daily"):
        assert wire[slot]["summary"] == us_document[slot]["summary"]
        assert len(wire[slot]["data"]) == len(us_document[slot]["data"])
        for got, expected in zip(wire[slot]["data"], us_document[slot]["data"]):
            assert_records_match(got, expected)


def test_changing_selector_reencodes_in_new_unit(us_document):
    forecast = decode_forecast(us_document)
    forecast.flags = Flags(sources=forecast.flags.sources, units="si")

    wire = encode_forecast(forecast)
    assert wire["currently"]["temperature"] == pytest.approx(22.2222222)
    assert wire["flags"]["units"] == "si"


def test_timestamps_decode_to_utc():
    observation = decode_observation(
        {"time": 1509993277, "temperatureHighTime": 0}, CELSIUS
    )
    assert observation.time == datetime(2017, 11, 6, 18, 34, 37, tzinfo=timezone.utc)
    assert observation.temperature_high_time == datetime(1970, 1, 1, tzinfo=timezone.utc)
    assert encode_observation(observation, CELSIUS) == {"time": 1509993277, "temperatureHighTime": 0}


def test_context_independent_fields_pass_through():
    raw = {"summary": "Clear", "icon": "clear-day", "humidity": 0.5, "uvIndex": 3, "precipType": "snow"}
    observation = decode_observation(raw, FAHRENHEIT)

    assert observation.summary == "Clear"
    assert observation.uv_index == 3
    assert observation.precip_type == "snow"
    assert encode_observation(observation, FAHRENHEIT) == raw


def test_unit_free_fields_ignore_context():
    raw = {"pressure": 1010.5, "windSpeed": 4.2}
    assert decode_observation(raw, FAHRENHEIT) == decode_observation(raw, CELSIUS)


def test_zero_valued_record_encodes_to_empty_object():
    assert encode_observation(Observation(), CELSIUS) == {}


def test_zero_kelvin_is_emitted():
    observation = Observation(temperature=Temperature(kelvin=0.0))
    wire = encode_observation(observation, CodecContext(temperature_unit=TemperatureUnit.KELVIN))
    assert wire == {"temperature": 0.0}


def test_null_temperature_is_absent():
    observation = decode_observation({"temperature": None}, CELSIUS)
    assert observation.temperature is None


def test_group_preserves_order_and_length():
    raw = {
        "summary": "Cooling down",
        "icon": "cloudy",
        "data": [{"temperature": t} for t in (30, 10, 20)],
    }
    group = decode_group(raw, CELSIUS)

    assert [o.temperature.celsius for o in group.data] == pytest.approx([30, 10, 20])
    assert encode_group(group, CELSIUS)["data"] == [
        {"temperature": pytest.approx(t)} for t in (30, 10, 20)
    ]


def test_null_group_element_decodes_to_zero_record():
    raw = {"summary": "s", "icon": "i", "data": [{"temperature": 50}, None, {"temperature": 60}]}
    group = decode_group(raw, FAHRENHEIT)

    assert len(group.data) == 3
    assert group.data[1] == Observation()
    assert group.data[2].temperature.kelvin == pytest.approx(from_fahrenheit(60))


def test_group_without_data_decodes_without_records():
    group = decode_group({"summary": "nothing"}, CELSIUS)
    assert group == ObservationGroup(summary="nothing")
    assert group.data is None
    assert encode_group(group, CELSIUS) == {"summary": "nothing"}


def test_minutely_group_passes_through(us_document):
    us_document["minutely"] = {"summary": "Light rain", "icon": "rain", "data": [{"time": 1509993240, "precipIntensity": 0.007}]}
    forecast = decode_forecast(us_document)

    assert forecast.minutely.data[0].precip_intensity == pytest.approx(0.007)
    assert encode_forecast(forecast)["minutely"] == us_document["minutely"]


def test_fractional_timestamp_is_rejected():
    with pytest.raises(MalformedForecastError) as exc_info:
        decode_observation({"time": 1509993277.9}, CELSIUS, "currently")
    assert exc_info.value.field == "currently.time"


def test_whole_float_timestamp_is_accepted():
    observation = decode_observation({"temperatureLowTime": 1510056000.0}, CELSIUS)
    assert encode_observation(observation, CELSIUS) == {"temperatureLowTime": 1510056000}


def test_naive_datetime_is_encoded_as_utc():
    observation = Observation(time=datetime(2017, 11, 6, 18, 34, 37))
    assert encode_observation(observation, CELSIUS) == {"time": 1509993277}


def test_oversized_temperature_is_malformed():
    body = b'{"flags":{"units":"us"},"currently":{"temperature":1' + b"0" * 400 + b"}}"

    with pytest.raises(MalformedForecastError) as exc_info:
        loads(body)
    assert exc_info.value.field == "currently.temperature"


def test_missing_sources_and_data_stay_absent():
    document = {
        "latitude": 1.0,
        "longitude": 2.0,
        "flags": {"units": "si"},
        "hourly": {"summary": "Quiet"},
    }
    forecast = decode_forecast(document)

    assert forecast.flags.sources is None
    assert forecast.hourly.data is None

    wire = encode_forecast(forecast)
    assert wire["flags"] == {"units": "si"}
    assert wire["hourly"] == {"summary": "Quiet"}


def test_loads_and_dumps_work_on_json_text(us_document):
    forecast = loads(json.dumps(us_document).encode("utf-8"))
    assert isinstance(forecast, Forecast)

    again = loads(dumps(forecast))
    assert again.currently.temperature.kelvin == pytest.approx(forecast.currently.temperature.kelvin)
    assert again.hourly.data[0].temperature.kelvin == pytest.approx(
        forecast.hourly.data[0].temperature.kelvin
    )
    assert again.daily.data[0].temperature_high_time == forecast.daily.data[0].temperature_high_time


def test_invalid_json_is_malformed():
    with pytest.raises(MalformedForecastError):
        loads(b"{not json")


def test_non_object_document_is_malformed():
    with pytest.raises(MalformedForecastError):
        decode_forecast([1, 2, 3])


def test_malformed_nested_temperature_names_field(us_document):
    us_document["hourly"]["data"][1]["temperature"] = "warm"

    with pytest.raises(MalformedForecastError) as exc_info:
        decode_forecast(us_document)
    assert exc_info.value.field == "hourly.data.1.temperature"


def test_malformed_nested_plain_field_names_field(us_document):
    us_document["daily"]["data"][0]["humidity"] = "damp"

    with pytest.raises(MalformedForecastError) as exc_info:
        decode_forecast(us_document)
    assert exc_info.value.field == "daily.data.0.humidity"


def test_malformed_timestamp_names_field(us_document):
    us_document["currently"]["time"] = "yesterday"

    with pytest.raises(MalformedForecastError) as exc_info:
        decode_forecast(us_document)
    assert exc_info.value.field == "currently.time"


def test_malformed_record_names_field(us_document):
    us_document["hourly"]["data"][0] = 42

    with pytest.raises(MalformedForecastError) as exc_info:
        decode_forecast(us_document)
    assert exc_info.value.field == "hourly.data.0"


def test_malformed_flags_names_field(us_document):
    us_document["flags"]["sources"] = "gfs"

    with pytest.raises(MalformedForecastError) as exc_info:
        decode_forecast(us_document)
    assert exc_info.value.field == "flags.sources"


def test_decode_does_not_mutate_input(us_document):
    snapshot = json.dumps(us_document, sort_keys=True)
    decode_forecast(us_document)
    assert json.dumps(us_document, sort_keys=True) == snapshot
