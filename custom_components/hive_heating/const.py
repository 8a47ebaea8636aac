"""Constants for Hive Heating integration.

This module contains all the constants used throughout the integration,
including API endpoints, headers, polling intervals and configuration keys.
"""

from datetime import timedelta

DOMAIN = "hive_heating"

LOGIN_URL = "https://api.hivehome.com/v5/login"
NODES_PATH = "/omnia/nodes"

ENDPOINT_HEADER = "x-governess-endpoint"
ACCESS_TOKEN_HEADER = "X-Omnia-Access-Token"
CLIENT_HEADER = "X-Omnia-Client"
CLIENT_ID = "HiveHeating"
ACCEPT_MEDIA_TYPE = "application/vnd.alertme.zoo-6.1+json"
CONTENT_TYPE_JSON = "application/json"

REQUEST_TIMEOUT = 30.0

DEFAULT_POLL_INTERVAL = timedelta(seconds=60)
MIN_POLL_INTERVAL = timedelta(seconds=10)
DEBOUNCE_INTERVAL = timedelta(seconds=10)
COMMAND_REFRESH_DELAY = 5  # Seconds for the device to apply a command
MAX_PENDING_REFRESHES = 4

DEFAULT_BOOST_DURATION = timedelta(minutes=60)

MIN_TEMP = 1.0
MAX_TEMP = 32.0

# Upstream attribute values
API_ON = "ON"
API_OFF = "OFF"
API_BOOST = "BOOST"
API_HEAT = "HEAT"

CONF_HEATING_BOOST_DURATION = "heating_boost_duration"
CONF_HOT_WATER_BOOST_DURATION = "hot_water_boost_duration"

ERROR_INVALID_AUTH = "invalid_auth"
ERROR_CANNOT_CONNECT = "cannot_connect"
ERROR_UNKNOWN = "unknown_error"
