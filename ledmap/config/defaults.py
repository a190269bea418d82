"""Default map locations with OpenWeatherMap city ids."""

from ledmap.config.schema import LocationConfig

DEFAULT_LOCATIONS: list[LocationConfig] = [
    LocationConfig(name="Cairns", owm_id="2172797"),
    LocationConfig(name="Chicago", owm_id="4887398"),
    LocationConfig(name="Denver", owm_id="5419384"),
    LocationConfig(name="Seattle", owm_id="5809844"),
    LocationConfig(name="Miami", owm_id="4164138"),
]
