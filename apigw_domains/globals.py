from typing import Literal

PLUGIN_NAME = "apigw-domains"
ROLE_SESSION_NAME = "apigw-domains"
RECORD_COMMENT = f'Record created by "{PLUGIN_NAME}"'

RoutingPolicy = Literal["simple", "latency", "weighted"]
ROUTING_POLICIES: tuple[RoutingPolicy, ...] = ("simple", "latency", "weighted")

EndpointType = Literal["edge", "regional"]
ENDPOINT_TYPES: tuple[EndpointType, ...] = ("edge", "regional")

# Route53 change actions used for alias records
RecordAction = Literal["UPSERT", "DELETE"]
RECORD_ACTIONS: tuple[RecordAction, ...] = ("UPSERT", "DELETE")

DEFAULT_ROUTING_POLICY: RoutingPolicy = "simple"
DEFAULT_ENDPOINT_TYPE: EndpointType = "edge"
DEFAULT_WEIGHT = 200
MAX_WEIGHT = 255
DEFAULT_SECURITY_POLICY = "TLS_1_2"

HOSTED_ZONE_PREFIX = "/hostedzone/"

# Throttling, in seconds
THROTTLE_MIN_WAIT = 3
THROTTLE_MAX_WAIT = 60
THROTTLE_MAX_TIME = 5 * 60
RETRYABLE_ERROR_CODES = frozenset(
    {"TooManyRequestsException", "Throttling", "ThrottlingException", "PriorRequestNotComplete"}
)
