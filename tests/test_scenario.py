from geoh2.data.scenario import (
    COUNTRIES,
    DEFAULT_SCENARIO,
    WEATHER_YEARS,
    ScenarioConfig,
    TransportConfig,
    serialize_scenario,
)


def test_defaults():
    assert DEFAULT_SCENARIO.country == "NA"
    assert DEFAULT_SCENARIO.country_name == "Namibia"
    assert DEFAULT_SCENARIO.weather_year == 2023
    assert DEFAULT_SCENARIO.generators == ("Solar", "Wind")
    assert DEFAULT_SCENARIO.transport == TransportConfig(True, True)


def test_option_lists():
    assert list(COUNTRIES) == ["NA", "ZA", "AU", "CL"]
    assert WEATHER_YEARS[0] == 2023
    assert WEATHER_YEARS[-1] == 2014
    assert len(WEATHER_YEARS) == 10


def test_with_generator_keeps_canonical_order():
    wind_only = DEFAULT_SCENARIO.with_generator("Solar", False)
    assert wind_only.generators == ("Wind",)
    assert wind_only.with_generator("Solar", True).generators == ("Solar", "Wind")
    assert DEFAULT_SCENARIO.generators == ("Solar", "Wind")


def test_unknown_country_name_falls_back_to_code():
    assert ScenarioConfig(country="XX").country_name == "XX"


def test_serialize_scenario():
    config = ScenarioConfig(
        country="CL",
        weather_year=2019,
        generators=("Wind",),
        transport=TransportConfig(pipeline_construction=False, road_construction=True),
    )
    assert serialize_scenario(config) == {
        "country": "CL",
        "weather_year": 2019,
        "generators": ["Wind"],
        "transport": {"pipeline_construction": False, "road_construction": True},
    }
